"""
Account Service - Database operations for vendor accounts (MongoDB)
Handles registration, login, profile/avatar changes and product-count bookkeeping.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from shared.database.mongo import MongoDatabase
from shared.errors import Conflict, InvalidCredentials, InvalidInput, NotFound, Unauthorized, StorageError
from shared.utils.validators import parse_number, validate_non_empty_string
from market_app.models import Upload
from market_app.services.credential_service import CredentialService
from market_app.services.media_store import MediaStore

logger = logging.getLogger(__name__)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id string, None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


class AccountService:
    """Service for vendor account operations using MongoDB."""

    def __init__(self, database: MongoDatabase, credentials: CredentialService, media: MediaStore):
        self.database = database
        self.credentials = credentials
        self.media = media
        self.config = credentials.config

    def _doc_to_dict(self, doc: dict) -> Optional[Dict[str, Any]]:
        """Convert a user document to a summary: string _id, no password."""
        if doc is None:
            return None

        result = {k: v for k, v in doc.items() if k != 'password'}
        if '_id' in result:
            result['_id'] = str(result['_id'])
        for key in ('createdAt', 'updatedAt'):
            if isinstance(result.get(key), datetime):
                result[key] = result[key].isoformat()
        return result

    def _find(self, user_id: Any) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.database.users.find_one({'_id': oid})

    def get_document(self, user_id: Any) -> dict:
        """Raw user document (password included), NotFound when missing."""
        doc = self._find(user_id)
        if doc is None:
            raise NotFound("User not found.")
        return doc

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def register(self, name: str, shop_name: str, location: str, contact: Any,
                 email: str, password: str, password2: str) -> Dict[str, Any]:
        """Create a vendor account. The email is stored exactly as given."""
        required = (name, shop_name, location, email, password)
        if not all(validate_non_empty_string(v) for v in required) or contact in (None, ''):
            raise InvalidInput("Fill in all fields")

        contact_number = parse_number(contact)
        if contact_number is None:
            raise InvalidInput("Contact must be a number.")

        if password != password2:
            raise InvalidInput("Passwords do not match")

        if self.database.users.find_one({'email': email}):
            raise Conflict("Email already exists")

        now = datetime.utcnow()
        doc = {
            'name': name,
            'email': email,
            'shopName': shop_name,
            'location': location,
            'contact': contact_number,
            'password': self.credentials.hash_password(password),
            'products': 0,
            'createdAt': now,
            'updatedAt': now,
        }
        result = self.database.users.insert_one(doc)
        logger.info("Registered vendor %s", result.inserted_id)
        doc['_id'] = result.inserted_id
        return self._doc_to_dict(doc)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue a token. Email lookup is lowercased."""
        if not validate_non_empty_string(email) or not validate_non_empty_string(password):
            raise InvalidInput("Fill in all fields")

        user = self.database.users.find_one({'email': email.lower()})
        if not user or not self.credentials.verify_password(password, user.get('password', '')):
            logger.info("Failed login for %s", email.lower())
            raise InvalidCredentials("Invalid Credentials")

        user_id = str(user['_id'])
        token = self.credentials.issue_token(user_id, user['name'])
        logger.info("Vendor %s logged in", user_id)
        return {'token': token, 'id': user_id, 'name': user['name']}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: Any) -> Dict[str, Any]:
        return self._doc_to_dict(self.get_document(user_id))

    def list_all(self) -> List[Dict[str, Any]]:
        """Return all vendors (without password hashes)."""
        return [self._doc_to_dict(doc) for doc in self.database.users.find()]

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def change_avatar(self, user_id: Any, avatar: Optional[Upload]) -> Dict[str, Any]:
        """
        Replace the vendor's avatar.

        The previous file is removed before the new one is written; a failed
        removal is logged and does not stop the new avatar from being saved.
        """
        if avatar is None:
            raise InvalidInput("Please choose an image.")

        user = self.get_document(user_id)

        previous = user.get('avatar')
        if previous:
            try:
                self.media.delete(previous)
            except (NotFound, StorageError) as e:
                logger.warning("Could not remove previous avatar %s: %s", previous, e.message)

        new_filename = self.media.save(
            avatar,
            self.config.avatar_max_bytes,
            "Profile picture too big. Should be less than 500kb",
        )

        self.database.users.update_one(
            {'_id': user['_id']},
            {'$set': {'avatar': new_filename, 'updatedAt': datetime.utcnow()}},
        )
        logger.info("Vendor %s changed avatar to %s", user['_id'], new_filename)
        return self.get_by_id(user['_id'])

    def edit_profile(self, user_id: Any, name: str, email: str, shop_name: str, location: str,
                     contact: Any, current_password: str, new_password: str,
                     new_confirm_password: str) -> Dict[str, Any]:
        """Replace the editable profile fields. Every successful edit rotates the password."""
        required = (name, email, current_password, new_password)
        if not all(validate_non_empty_string(v) for v in required):
            raise InvalidInput("Fill in all fields.")

        user = self.get_document(user_id)

        email_owner = self.database.users.find_one({'email': email})
        if email_owner and email_owner['_id'] != user['_id']:
            raise Conflict("Email already exists.")

        if not self.credentials.verify_password(current_password, user.get('password', '')):
            raise Unauthorized("Invalid current password.")

        if new_password != new_confirm_password:
            raise InvalidInput("New passwords do not match.")

        # absent optional fields keep their stored values
        optional = {}
        for key, value in (('shopName', shop_name), ('location', location)):
            if value is None:
                continue
            if not validate_non_empty_string(value):
                raise InvalidInput(f"{key} must be a non-empty string.")
            optional[key] = value
        if contact not in (None, ''):
            contact_number = parse_number(contact)
            if contact_number is None:
                raise InvalidInput("Contact must be a number.")
            optional['contact'] = contact_number

        updates = {
            'name': name,
            'email': email,
            'password': self.credentials.hash_password(new_password),
            'updatedAt': datetime.utcnow(),
            **optional,
        }

        self.database.users.update_one({'_id': user['_id']}, {'$set': updates})
        logger.info("Vendor %s edited profile", user['_id'])
        return self.get_by_id(user['_id'])

    # ------------------------------------------------------------------
    # Product count
    # ------------------------------------------------------------------

    def adjust_product_count(self, user_id: Any, delta: int) -> Optional[int]:
        """
        Read the vendor's product count and write back count + delta.

        Not atomic: concurrent adjustments for one vendor can lose updates.
        Returns the new count, or None when the vendor no longer exists.
        """
        user = self._find(user_id)
        if user is None:
            return None
        count = user.get('products', 0) + delta
        self.database.users.update_one({'_id': user['_id']}, {'$set': {'products': count}})
        return count
