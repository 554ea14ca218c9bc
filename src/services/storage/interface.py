"""
Abstract Storage Interface

DESIGN DECISION: The store persists itself through a tiny key-value
interface: named text blobs, read and written whole. This allows us to:
1. Keep the on-disk format identical to the backup format (JSON text)
2. Use in-memory storage for testing
3. Swap the JSON files for another backend later without touching the store

The interface is intentionally simple - the whole dataset is a few hundred
records, rewritten in full after every change.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorageInterface(ABC):
    """
    Abstract interface for durable named text blobs.

    Keys are short identifiers (letters, digits, `-` and `_`).
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read a blob.

        Args:
            key: Blob name

        Returns:
            The stored text, or None if the key was never written

        Raises:
            StorageError: If the blob exists but cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, text: str) -> None:
        """
        Replace a blob with new text.

        Args:
            key: Blob name
            text: Full new contents

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a blob.

        Returns:
            True if the blob existed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored blob names, sorted."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class InvalidKeyError(StorageError):
    """Blob name contains characters the backend does not allow."""
    pass
