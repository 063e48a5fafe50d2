"""
Credential Service - password hashing with bcrypt and bearer tokens
Tokens are signed by Flask-JWT-Extended and must be issued/checked inside an app context.
"""
import logging
from typing import Any, Dict, Optional

import bcrypt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from shared.config import AppConfig
from shared.errors import Unauthorized

logger = logging.getLogger(__name__)


class CredentialService:
    """Hashes passwords and issues/validates the one-day access tokens."""

    def __init__(self, config: AppConfig):
        self.config = config

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.config.bcrypt_rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify a password against its bcrypt hash."""
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        except ValueError:
            # stored value is not a bcrypt hash
            return False

    def issue_token(self, user_id: str, name: str) -> str:
        return create_access_token(
            identity=str(user_id),
            additional_claims={"name": name},
            expires_delta=self.config.token_expires,
        )

    def authenticate(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Validate a bearer token.

        Returns:
            {"id": ..., "name": ...} for a valid, unexpired token.

        Raises:
            Unauthorized: when the token is missing, malformed or expired.
        """
        if not token:
            raise Unauthorized("Unauthorized. No token.")
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as e:
            logger.info("Rejected bearer token: %s", e)
            raise Unauthorized("Unauthorized. Invalid token.")
        if claims.get("type") != "access":
            raise Unauthorized("Unauthorized. Invalid token.")
        return {"id": claims["sub"], "name": claims.get("name")}

    @staticmethod
    def token_from_header(header: Optional[str]) -> Optional[str]:
        """Extract the token from an 'Authorization: Bearer <token>' header value."""
        if not header:
            return None
        scheme, _, token = header.partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            return None
        return token.strip()
