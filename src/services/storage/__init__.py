"""
Storage Services Package

Provides the abstract blob interface and its implementations.
JSON files are the default backend; the in-memory backend serves tests.
"""

from src.services.storage.interface import (
    BlobStorageInterface,
    InvalidKeyError,
    StorageError,
)
from src.services.storage.json_files import JsonFileBlobStorage
from src.services.storage.memory import InMemoryBlobStorage

__all__ = [
    # Interfaces
    "BlobStorageInterface",
    # Exceptions
    "InvalidKeyError",
    "StorageError",
    # Implementations
    "InMemoryBlobStorage",
    "JsonFileBlobStorage",
]
