"""Backup export/import package."""

from src.backup.files import (
    BackupFormatError,
    backup_filename,
    dump_backup,
    parse_backup,
    read_backup,
    write_backup,
)

__all__ = [
    "BackupFormatError",
    "backup_filename",
    "dump_backup",
    "parse_backup",
    "read_backup",
    "write_backup",
]
