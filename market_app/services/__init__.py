from dataclasses import dataclass

from shared.config import AppConfig
from shared.database.mongo import MongoDatabase

from .credential_service import CredentialService
from .media_store import MediaStore
from .account_service import AccountService
from .catalog_service import CatalogService


@dataclass
class MarketServices:
    """The wired service graph for one application instance."""

    config: AppConfig
    database: MongoDatabase
    credentials: CredentialService
    media: MediaStore
    accounts: AccountService
    catalog: CatalogService

    @classmethod
    def build(cls, config: AppConfig, database: MongoDatabase) -> 'MarketServices':
        credentials = CredentialService(config)
        media = MediaStore(config)
        accounts = AccountService(database, credentials, media)
        catalog = CatalogService(database, accounts, media)
        return cls(config, database, credentials, media, accounts, catalog)


__all__ = [
    'MarketServices', 'CredentialService', 'MediaStore', 'AccountService', 'CatalogService',
]
