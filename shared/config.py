"""
Shared configuration module - reads from environment variables
Built once at process start and handed to every service.
"""
import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import FrozenSet, List

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

THUMBNAIL_MAX_BYTES = 2_000_000
AVATAR_MAX_BYTES = 500_000


@dataclass
class AppConfig:
    """
    Process-wide settings for the vendor market API.
    """
    mongo_uri: str = "mongodb://localhost:27017"
    database: str = "vendor_market"
    jwt_secret: str = ""
    port: int = 5000
    upload_folder: str = os.path.join(BASE_DIR, "uploads")
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    max_upload_mb: int = 16
    log_level: str = "INFO"

    token_expires: timedelta = timedelta(days=1)
    bcrypt_rounds: int = 10
    thumbnail_max_bytes: int = THUMBNAIL_MAX_BYTES
    avatar_max_bytes: int = AVATAR_MAX_BYTES
    allowed_extensions: FrozenSet[str] = frozenset({"png", "jpg", "jpeg", "gif", "webp"})

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build the configuration from the environment (and a .env file if present)."""
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return cls(
            mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
            database=os.getenv("MONGO_DATABASE", "vendor_market"),
            jwt_secret=os.getenv("JWT_SECRET", ""),
            port=int(os.getenv("PORT", "5000")),
            upload_folder=os.getenv("UPLOAD_FOLDER") or os.path.join(BASE_DIR, "uploads"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            max_upload_mb=int(os.getenv("MAX_UPLOAD_SIZE_MB", "16")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def max_content_length(self) -> int:
        """Request body cap enforced by Flask before any handler runs."""
        return self.max_upload_mb * 1024 * 1024
