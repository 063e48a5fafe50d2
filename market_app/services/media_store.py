"""
Media Store - local file storage for product thumbnails and vendor avatars
Each upload is written once under a random name into a flat upload folder.
"""
import logging
import os
from uuid import uuid4

from shared.config import AppConfig
from shared.errors import InvalidInput, NotFound, PayloadTooLarge, StorageError
from market_app.models import Upload

logger = logging.getLogger(__name__)


class MediaStore:
    """Stores and removes uploaded images on the local file system."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.folder = config.upload_folder
        os.makedirs(self.folder, exist_ok=True)

    def _allowed_extension(self, extension: str) -> bool:
        return extension.lstrip('.') in self.config.allowed_extensions

    def path_for(self, filename: str) -> str:
        return os.path.join(self.folder, filename)

    def save(self, upload: Upload, max_bytes: int, too_large_message: str = None) -> str:
        """
        Write an upload to disk under a new unique name.

        Args:
            upload: The uploaded file.
            max_bytes: Largest accepted size in bytes.
            too_large_message: Message used when the upload exceeds max_bytes.

        Returns:
            The generated filename (uuid hex + original extension).
        """
        if upload.size > max_bytes:
            raise PayloadTooLarge(
                too_large_message or f"File is too big. It should be less than {max_bytes} bytes."
            )

        extension = upload.extension
        if not self._allowed_extension(extension):
            allowed = ", ".join(sorted(e.upper() for e in self.config.allowed_extensions))
            raise InvalidInput(f"Unsupported image format. Upload {allowed} files.")

        new_filename = f"{uuid4().hex}{extension}"
        try:
            with open(self.path_for(new_filename), 'wb') as f:
                f.write(upload.content)
        except OSError as e:
            logger.error("Could not store upload %s: %s", new_filename, e)
            raise StorageError("We could not store the uploaded image. Please try again.")

        logger.info("Stored upload %s (%d bytes)", new_filename, upload.size)
        return new_filename

    def delete(self, filename: str):
        """Remove a stored file; NotFound when it is already gone."""
        target = self.path_for(os.path.basename(filename))
        try:
            os.remove(target)
        except FileNotFoundError:
            raise NotFound(f"File {filename} not found.")
        except OSError as e:
            logger.error("Could not remove upload %s: %s", filename, e)
            raise StorageError(f"Could not remove file {filename}.")
        logger.info("Removed upload %s", filename)
