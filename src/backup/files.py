"""
Backup Files

A backup is the store's export snapshot written as one JSON document:

    {"properties": [...], "expenses": [...], "settings": {...},
     "exportDate": "2024-03-05T10:15:00+00:00"}

saved as `backup_<YYYY-MM-DD>.json`.

Parsing is the only place an import can fail: the text must be valid JSON
whose top level is an object. Record shapes are NOT checked here.
"""

import json
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import structlog

from src.config import get_settings

if TYPE_CHECKING:
    from src.store import Store


logger = structlog.get_logger(__name__)

BACKUP_INDENT = 2


class BackupFormatError(Exception):
    """The import document is not a JSON object."""
    pass


def backup_filename(day: Optional[date] = None) -> str:
    """Name of the backup file for a given day (today by default)."""
    day = day or date.today()
    prefix = get_settings().display.backup_filename_prefix
    return f"{prefix}{day.isoformat()}.json"


def dump_backup(snapshot: dict[str, Any]) -> str:
    """Serialize an export snapshot. Non-ASCII text is kept as-is."""
    return json.dumps(snapshot, indent=BACKUP_INDENT, ensure_ascii=False)


def parse_backup(text: str) -> dict[str, Any]:
    """
    Parse an import document.

    Raises:
        BackupFormatError: If the text is not JSON or not a JSON object.
                           The message is meant to be shown to the user.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackupFormatError(
            f"Backup is not valid JSON (line {e.lineno}, column {e.colno}): {e.msg}"
        ) from e

    if not isinstance(payload, dict):
        raise BackupFormatError(
            f"Backup must be a JSON object, got {type(payload).__name__}"
        )

    return payload


def write_backup(
    store: "Store",
    directory: Path,
    day: Optional[date] = None,
) -> Path:
    """
    Export the store into `directory` and return the written path.

    An existing backup for the same day is overwritten.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / backup_filename(day)
    path.write_text(dump_backup(store.export_data()), encoding="utf-8")
    logger.info("backup_written", path=str(path))
    return path


def read_backup(path: Path) -> dict[str, Any]:
    """
    Read and parse a backup file.

    Raises:
        BackupFormatError: If the file cannot be read or parsed
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BackupFormatError(f"Could not read backup file {path}: {e}") from e
    return parse_backup(text)
