from .mongo import MongoDatabase

__all__ = ['MongoDatabase']
