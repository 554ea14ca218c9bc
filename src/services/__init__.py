"""Services package."""

from src.services.storage import (
    BlobStorageInterface,
    InMemoryBlobStorage,
    InvalidKeyError,
    JsonFileBlobStorage,
    StorageError,
)

__all__ = [
    # Storage services
    "BlobStorageInterface",
    "InMemoryBlobStorage",
    "InvalidKeyError",
    "JsonFileBlobStorage",
    "StorageError",
]
