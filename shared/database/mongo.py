"""
MongoDB access shared by the account and catalog services.
"""
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from shared.config import AppConfig

logger = logging.getLogger(__name__)


class MongoDatabase:
    """Lazily connected handle on the application database."""

    USERS = "users"
    PRODUCTS = "products"

    def __init__(self, config: AppConfig, client: Optional[MongoClient] = None):
        self.config = config
        self._client = client
        self._db = None

    def connect(self):
        if self._client is None:
            self._client = MongoClient(self.config.mongo_uri)
        self._db = self._client[self.config.database]
        return self._db

    def get_db(self):
        """Get database connection (lazy init, reuse)."""
        if self._db is None:
            return self.connect()
        return self._db

    @property
    def users(self):
        return self.get_db()[self.USERS]

    @property
    def products(self):
        return self.get_db()[self.PRODUCTS]

    def ensure_indexes(self):
        """Create the lookup indexes used by the services."""
        try:
            self.users.create_index([("email", ASCENDING)])
            self.products.create_index([("category", ASCENDING)])
            self.products.create_index([("vendor", ASCENDING)])
        except PyMongoError as e:
            logger.warning("Unable to ensure indexes: %s", e)
