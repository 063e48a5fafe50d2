"""
Value types shared by the market services.
"""
import os
from dataclasses import dataclass
from typing import Optional

PRODUCT_CATEGORIES = (
    'Gadget',
    'Electronic',
    'Stationary',
    'Groceries',
    'Gift',
    'Accessories',
    'Game',
    'Fashion',
)


@dataclass
class Upload:
    """An uploaded file: the client's filename and its raw bytes."""

    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        """Lowercased extension including the dot, '' when there is none."""
        return os.path.splitext(self.filename)[1].lower()

    @classmethod
    def from_file_storage(cls, file_storage) -> Optional['Upload']:
        """Create an Upload from a werkzeug FileStorage, None when no file was chosen."""
        if file_storage is None or not file_storage.filename:
            return None
        return cls(filename=file_storage.filename, content=file_storage.read())

    def __repr__(self):
        return f"<Upload(filename={self.filename}, size={self.size})>"
