"""
Catalog Service - Database operations for product listings (MongoDB)
Thumbnails live in the media store; vendor counters live on the user records.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from shared.database.mongo import MongoDatabase
from shared.errors import Forbidden, InvalidInput, NotFound
from shared.utils.validators import parse_number, validate_non_empty_string, validate_price
from market_app.models import PRODUCT_CATEGORIES, Upload
from market_app.services.account_service import AccountService, to_object_id
from market_app.services.media_store import MediaStore

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 12
THUMBNAIL_TOO_LARGE = "Thumbnail size is too big. File should be less than 2MB"


class CatalogService:
    """Service for product CRUD operations using MongoDB."""

    def __init__(self, database: MongoDatabase, accounts: AccountService, media: MediaStore):
        self.database = database
        self.accounts = accounts
        self.media = media
        self.config = accounts.config

    def _doc_to_dict(self, doc: dict) -> Optional[Dict[str, Any]]:
        """Convert MongoDB document to dictionary with string ids."""
        if doc is None:
            return None

        result = dict(doc)
        for key in ('_id', 'vendor'):
            if key in result and result[key] is not None:
                result[key] = str(result[key])
        for key in ('createdAt', 'updatedAt'):
            if isinstance(result.get(key), datetime):
                result[key] = result[key].isoformat()
        return result

    def _find(self, product_id: Any) -> dict:
        oid = to_object_id(product_id)
        doc = self.database.products.find_one({'_id': oid}) if oid is not None else None
        if doc is None:
            raise NotFound("Product not found.")
        return doc

    @staticmethod
    def _check_owner(product: dict, requester_id: Any, action: str):
        if str(product.get('vendor')) != str(requester_id):
            raise Forbidden(f"Unauthorized to {action} this product.")

    @staticmethod
    def _check_category(category: str):
        if category not in PRODUCT_CATEGORIES:
            raise InvalidInput(f"Category must be one of: {', '.join(PRODUCT_CATEGORIES)}.")

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, vendor_id: Any, product_name: str, category: str, description: str,
               price: Any, thumbnail: Optional[Upload]) -> Dict[str, Any]:
        """
        Create a product for a vendor.

        The thumbnail is written before the vendor lookup and the insert; a
        failure after the write leaves the file behind.
        """
        required = (product_name, category, description)
        if not all(validate_non_empty_string(v) for v in required) or thumbnail is None:
            raise InvalidInput("Fill in all fields and choose thumbnail.")
        self._check_category(category)

        price_value = parse_number(price)
        if not validate_price(price_value):
            raise InvalidInput("Price must be a non-negative number.")

        filename = self.media.save(thumbnail, self.config.thumbnail_max_bytes, THUMBNAIL_TOO_LARGE)

        vendor = self.accounts.get_document(vendor_id)

        now = datetime.utcnow()
        doc = {
            'productName': product_name,
            'category': category,
            'description': description,
            'price': price_value,
            'thumbnail': filename,
            'vendor': vendor['_id'],
            'shopName': vendor.get('shopName'),
            'contact': vendor.get('contact'),
            'createdAt': now,
            'updatedAt': now,
        }
        result = self.database.products.insert_one(doc)
        doc['_id'] = result.inserted_id

        self.accounts.adjust_product_count(vendor['_id'], 1)
        logger.info("Vendor %s created product %s", vendor['_id'], result.inserted_id)
        return self._doc_to_dict(doc)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> List[Dict[str, Any]]:
        """All products, most recently updated first."""
        cursor = self.database.products.find().sort('updatedAt', DESCENDING)
        return [self._doc_to_dict(doc) for doc in cursor]

    def get_by_id(self, product_id: Any) -> Dict[str, Any]:
        return self._doc_to_dict(self._find(product_id))

    def list_by_category(self, category: str) -> List[Dict[str, Any]]:
        """Products with exactly this category, newest first."""
        cursor = self.database.products.find({'category': category}).sort('createdAt', DESCENDING)
        return [self._doc_to_dict(doc) for doc in cursor]

    def list_by_vendor(self, vendor_id: Any) -> List[Dict[str, Any]]:
        """Products owned by a vendor, newest first."""
        oid = to_object_id(vendor_id)
        if oid is None:
            return []
        cursor = self.database.products.find({'vendor': oid}).sort('createdAt', DESCENDING)
        return [self._doc_to_dict(doc) for doc in cursor]

    # ------------------------------------------------------------------
    # Edit / delete
    # ------------------------------------------------------------------

    def edit(self, product_id: Any, requester_id: Any, product_name: str, category: str,
             description: str, thumbnail: Optional[Upload] = None) -> Dict[str, Any]:
        """
        Update a product's text fields and optionally its thumbnail.

        A replaced thumbnail file stays on disk. Ownership is checked before
        the payload, so a non-owner always gets Forbidden.
        """
        product = self._find(product_id)
        self._check_owner(product, requester_id, 'edit')

        if (not validate_non_empty_string(product_name) or not validate_non_empty_string(category)
                or not validate_non_empty_string(description)
                or len(description) < MIN_DESCRIPTION_LENGTH):
            raise InvalidInput("Fill in all fields and provide valid data.")
        self._check_category(category)

        updates = {
            'productName': product_name,
            'category': category,
            'description': description,
            'updatedAt': datetime.utcnow(),
        }
        if thumbnail is not None:
            updates['thumbnail'] = self.media.save(
                thumbnail, self.config.thumbnail_max_bytes, THUMBNAIL_TOO_LARGE
            )

        self.database.products.update_one({'_id': product['_id']}, {'$set': updates})
        logger.info("Product %s edited by %s", product['_id'], requester_id)
        return self.get_by_id(product['_id'])

    def delete(self, product_id: Any, requester_id: Any) -> str:
        """
        Delete a product, its thumbnail file, and one unit of the vendor's count.

        The record is only removed once the thumbnail file has been removed.
        """
        product = self._find(product_id)
        self._check_owner(product, requester_id, 'delete')

        self.media.delete(product['thumbnail'])

        self.database.products.delete_one({'_id': product['_id']})
        self.accounts.adjust_product_count(product['vendor'], -1)
        logger.info("Product %s deleted by %s", product['_id'], requester_id)
        return f"Product {product['_id']} deleted successfully."
