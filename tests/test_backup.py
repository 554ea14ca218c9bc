"""
Tests for backup files
"""

import json
from datetime import date

import pytest

from src.backup import (
    BackupFormatError,
    backup_filename,
    dump_backup,
    parse_backup,
    read_backup,
    write_backup,
)
from src.services.storage import InMemoryBlobStorage
from src.store import Store


class TestBackupFilename:
    """Tests for backup file names."""

    def test_filename_for_day(self):
        assert backup_filename(date(2024, 3, 5)) == "backup_2024-03-05.json"

    def test_filename_defaults_to_today(self):
        assert backup_filename() == f"backup_{date.today().isoformat()}.json"

    def test_prefix_is_configurable(self, monkeypatch):
        """Test the prefix follows the display settings."""
        monkeypatch.setenv("RENTAL_DISPLAY_BACKUP_FILENAME_PREFIX", "rentals-")
        assert backup_filename(date(2024, 3, 5)) == "rentals-2024-03-05.json"


class TestParseBackup:
    """Tests for parsing import documents."""

    def test_parse_object(self):
        assert parse_backup('{"properties": []}') == {"properties": []}

    def test_invalid_json_reports_position(self):
        """Test the error tells the user where parsing failed."""
        with pytest.raises(BackupFormatError, match="line 1"):
            parse_backup('{"properties": ')

    @pytest.mark.parametrize("text,kind", [
        ("[]", "list"),
        ('"text"', "str"),
        ("42", "int"),
        ("null", "NoneType"),
    ])
    def test_non_object_rejected(self, text, kind):
        """Test only a JSON object is a backup."""
        with pytest.raises(BackupFormatError, match=kind):
            parse_backup(text)


class TestBackupFiles:
    """Tests for writing and reading backup files."""

    def test_dump_is_indented_and_keeps_unicode(self):
        text = dump_backup({"settings": {"businessName": "عقارات"}})
        assert "عقارات" in text
        assert '\n  "settings"' in text

    def test_write_and_read(self, store, property_a, tmp_path):
        """Test a written backup restores into a fresh store."""
        prop = store.add_property(property_a)
        path = write_backup(store, tmp_path / "backups", day=date(2024, 3, 15))

        assert path.name == "backup_2024-03-15.json"
        payload = read_backup(path)
        assert payload["properties"] == [prop]
        assert payload["exportDate"] == "2024-03-15T12:00:00+00:00"

        restored = Store(InMemoryBlobStorage())
        restored.import_data(payload)
        assert restored.get_properties() == [prop]

    def test_write_overwrites_same_day(self, store, make_property, tmp_path):
        """Test a second backup on the same day replaces the first."""
        write_backup(store, tmp_path, day=date(2024, 3, 15))
        store.add_property(make_property())
        path = write_backup(store, tmp_path, day=date(2024, 3, 15))

        assert len(json.loads(path.read_text(encoding="utf-8"))["properties"]) == 1
        assert len(list(tmp_path.iterdir())) == 1

    def test_read_missing_file(self, tmp_path):
        """Test a missing file is a format error for the caller."""
        with pytest.raises(BackupFormatError, match="Could not read"):
            read_backup(tmp_path / "nope.json")
