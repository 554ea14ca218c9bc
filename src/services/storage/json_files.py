"""
JSON File Storage Implementation

Each blob lives in its own file, `<data_dir>/<key>.json`, so the three
pieces of state (properties, expenses, settings) can be inspected and
backed up with ordinary file tools.

Writes are atomic per file: the new text goes to a temporary file that
then replaces the old one. There is no atomicity ACROSS files.
"""

import re
from pathlib import Path
from typing import Optional

import structlog

from src.config import get_settings
from src.services.storage.interface import (
    BlobStorageInterface,
    InvalidKeyError,
    StorageError,
)


logger = structlog.get_logger(__name__)

KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileBlobStorage(BlobStorageInterface):
    """Stores blobs as UTF-8 `.json` files in one directory."""

    SUFFIX = ".json"

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Args:
            data_dir: Directory for the files. Defaults to the
                      `data_dir` storage setting. Created on first write.
        """
        self._data_dir = Path(data_dir) if data_dir else get_settings().storage.data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, key: str) -> Path:
        if not KEY_PATTERN.match(key):
            raise InvalidKeyError(f"Invalid blob key: {key!r}")
        return self._data_dir / f"{key}{self.SUFFIX}"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, text: str) -> None:
        path = self._path(key)
        temp_path = path.with_suffix(".tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(text, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            logger.error("blob_write_failed", key=key, path=str(path), error=str(e))
            raise StorageError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
        return True

    def keys(self) -> list[str]:
        if not self._data_dir.is_dir():
            return []
        return sorted(path.stem for path in self._data_dir.glob(f"*{self.SUFFIX}"))
