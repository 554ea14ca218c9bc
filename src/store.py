"""
Rental Store

The single owner of all bookkeeping state:
1. Properties (rental units with tenant, rent and status)
2. Expenses (monthly utility/other costs per property)
3. Settings (currency label and business name)

DESIGN DECISION: Every operation is synchronous and ends with a full write
of all three blobs. The dataset is a few hundred records at most, so
rewriting it is instant and no partially-applied change is ever visible.

The store is constructed explicitly and passed to whoever needs it. There
is no module-level instance, so tests can create as many as they like.

GUARANTEES:
- Ids are unique within each collection for the lifetime of the data
- Callers only ever receive copies; the internal lists cannot be mutated
  from outside
- Deleting a property deletes its expenses (the only cascade)
- Statistics are recomputed on every call
"""

import copy
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

import structlog

from src.backup import BackupFormatError, parse_backup
from src.models.rental import (
    BusinessSettings,
    ExpenseData,
    PropertyData,
    PropertyUpdate,
    Statistics,
    coerce_amount,
    expense_total,
    is_rented,
    record_id,
)
from src.services.storage import (
    BlobStorageInterface,
    JsonFileBlobStorage,
    StorageError,
)


logger = structlog.get_logger(__name__)

PROPERTIES_KEY = "properties"
EXPENSES_KEY = "expenses"
SETTINGS_KEY = "settings"

Record = dict[str, Any]
Clock = Callable[[], datetime]

# JSON type each persisted blob must have
_COLLECTION_TYPES = {PROPERTIES_KEY: list, EXPENSES_KEY: list, SETTINGS_KEY: dict}
_JSON_TYPE_NAMES = {list: "array", dict: "object"}


def _local_now() -> datetime:
    return datetime.now().astimezone()


class Store:
    """
    Property, expense and settings store with write-through persistence.

    Records are JSON objects keyed by their persisted camelCase names.
    """

    def __init__(
        self,
        storage: BlobStorageInterface,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the store and load any persisted state.

        Args:
            storage: Blob backend the state is read from and written to.
            clock: Returns the current time. Drives id assignment, the
                   "current month" of the statistics and export timestamps.
                   Defaults to the local wall clock.
        """
        self._storage = storage
        self._clock = clock or _local_now
        self._properties: list[Any] = []
        self._expenses: list[Any] = []
        self._settings: Any = BusinessSettings.defaults().to_record()
        # Highest id ever issued per collection, so deleted ids are never reused
        self._issued_ids = {PROPERTIES_KEY: 0, EXPENSES_KEY: 0}
        self._load()

    # === Persistence ===

    def _load_blob(self, key: str, expected_type: type) -> Optional[Any]:
        """
        Load one piece of state.

        Returns None when the blob is absent, unreadable, not JSON, or of
        the wrong JSON type; the caller then uses its default.
        """
        try:
            text = self._storage.read(key)
        except StorageError as e:
            logger.warning("state_load_failed", key=key, error=str(e))
            return None

        if text is None:
            return None

        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("state_load_failed", key=key, error=str(e))
            return None

        if not isinstance(value, expected_type):
            logger.warning(
                "state_load_failed",
                key=key,
                error=f"expected {expected_type.__name__}, got {type(value).__name__}",
            )
            return None

        return value

    def _load(self) -> None:
        properties = self._load_blob(PROPERTIES_KEY, _COLLECTION_TYPES[PROPERTIES_KEY])
        expenses = self._load_blob(EXPENSES_KEY, _COLLECTION_TYPES[EXPENSES_KEY])
        settings = self._load_blob(SETTINGS_KEY, _COLLECTION_TYPES[SETTINGS_KEY])

        self._properties = properties if properties is not None else []
        self._expenses = expenses if expenses is not None else []
        if settings is not None:
            self._settings = settings

        logger.info(
            "store_loaded",
            properties=len(self._properties),
            expenses=len(self._expenses),
        )

    def _commit(self, properties: list[Any], expenses: list[Any], settings: Any) -> None:
        """
        Write the new state, then make it current.

        Raises:
            StorageError: If a write fails. The in-memory state is then
                          left exactly as it was.
        """
        self._storage.write(PROPERTIES_KEY, json.dumps(properties, ensure_ascii=False))
        self._storage.write(EXPENSES_KEY, json.dumps(expenses, ensure_ascii=False))
        self._storage.write(SETTINGS_KEY, json.dumps(settings, ensure_ascii=False))

        self._properties = properties
        self._expenses = expenses
        self._settings = settings

    # === Ids ===

    def _next_id(self, key: str, records: list[Any]) -> int:
        """
        Issue a new id for a collection.

        Ids are millisecond timestamps, bumped past the highest id already
        present or issued, so two additions in the same millisecond still
        get distinct ids.
        """
        highest = max(
            (
                rid for rid in map(record_id, records)
                if isinstance(rid, int) and not isinstance(rid, bool)
            ),
            default=0,
        )
        highest = max(highest, self._issued_ids[key])
        now_ms = int(self._clock().timestamp() * 1000)
        new_id = max(now_ms, highest + 1)
        self._issued_ids[key] = new_id
        return new_id

    def _find_property_index(self, property_id: Any) -> Optional[int]:
        for index, record in enumerate(self._properties):
            if record_id(record) == property_id:
                return index
        return None

    # === Properties ===

    def add_property(self, data: Union[PropertyData, dict[str, Any]]) -> Record:
        """
        Add a property.

        Args:
            data: Property fields (camelCase or snake_case names)

        Returns:
            The stored record, including its new id

        Raises:
            pydantic.ValidationError: If the fields are invalid
        """
        if not isinstance(data, PropertyData):
            data = PropertyData.model_validate(data)

        record = data.to_record()
        record["id"] = self._next_id(PROPERTIES_KEY, self._properties)
        self._commit(self._properties + [record], self._expenses, self._settings)

        logger.info("property_added", property_id=record["id"], name=record["name"])
        return copy.deepcopy(record)

    def update_property(
        self,
        property_id: Any,
        changes: Union[PropertyUpdate, dict[str, Any]],
    ) -> Optional[Record]:
        """
        Apply a partial update to a property.

        Fields present in `changes` overwrite the stored ones; everything
        else is kept. The id never changes, even if `changes` carries one.

        Returns:
            The updated record, or None if no property has this id

        Raises:
            pydantic.ValidationError: If a changed field is invalid
        """
        index = self._find_property_index(property_id)
        if index is None:
            logger.info("property_update_missed", property_id=property_id)
            return None

        if not isinstance(changes, PropertyUpdate):
            changes = PropertyUpdate.model_validate(changes)

        existing = self._properties[index]
        updated = {**existing, **changes.to_changes(), "id": existing["id"]}
        properties = list(self._properties)
        properties[index] = updated
        self._commit(properties, self._expenses, self._settings)

        logger.info(
            "property_updated",
            property_id=property_id,
            fields=sorted(changes.model_fields_set),
        )
        return copy.deepcopy(updated)

    def delete_property(self, property_id: Any) -> bool:
        """
        Delete a property and every expense that references it.

        Returns:
            True if a property was removed.
        """
        if property_id is None:
            return False
        remaining = [p for p in self._properties if record_id(p) != property_id]
        removed = len(remaining) != len(self._properties)

        kept_expenses = [
            e for e in self._expenses
            if not (isinstance(e, dict) and e.get("propertyId") == property_id)
        ]
        cascaded = len(self._expenses) - len(kept_expenses)

        self._commit(remaining, kept_expenses, self._settings)

        logger.info(
            "property_deleted",
            property_id=property_id,
            found=removed,
            expenses_removed=cascaded,
        )
        return removed

    def get_properties(self) -> list[Any]:
        return copy.deepcopy(self._properties)

    def get_property_by_id(self, property_id: Any) -> Optional[Record]:
        index = self._find_property_index(property_id)
        if index is None:
            return None
        return copy.deepcopy(self._properties[index])

    # === Expenses ===

    def add_expense(self, data: Union[ExpenseData, dict[str, Any]]) -> Record:
        """
        Record a property's expenses for a month.

        The referenced property is not required to exist, and several
        records may exist for the same property and month.

        Raises:
            pydantic.ValidationError: If the fields are invalid
        """
        if not isinstance(data, ExpenseData):
            data = ExpenseData.model_validate(data)

        record = data.to_record()
        record["id"] = self._next_id(EXPENSES_KEY, self._expenses)
        self._commit(self._properties, self._expenses + [record], self._settings)

        logger.info(
            "expense_added",
            expense_id=record["id"],
            property_id=record["propertyId"],
            month=record["month"],
            total=expense_total(record),
        )
        return copy.deepcopy(record)

    def get_expenses(self, property_id: Any, month: str) -> list[Any]:
        """Every expense of a property for exactly this month, in insertion order."""
        return [
            copy.deepcopy(e) for e in self._expenses
            if isinstance(e, dict)
            and e.get("propertyId") == property_id
            and e.get("month") == month
        ]

    def get_all_expenses(self) -> list[Any]:
        return copy.deepcopy(self._expenses)

    def delete_expense(self, expense_id: Any) -> bool:
        """
        Delete one expense record.

        Returns:
            True if an expense was removed
        """
        if expense_id is None:
            # Records without an id (imported) are not addressable
            return False
        remaining = [e for e in self._expenses if record_id(e) != expense_id]
        removed = len(remaining) != len(self._expenses)
        self._commit(self._properties, remaining, self._settings)

        logger.info("expense_deleted", expense_id=expense_id, found=removed)
        return removed

    # === Settings ===

    def get_settings(self) -> Any:
        """The stored settings object, as-is (it may have been imported)."""
        return copy.deepcopy(self._settings)

    def get_business_settings(self) -> BusinessSettings:
        """Settings with defaults filled in for anything missing."""
        return BusinessSettings.from_record(self._settings)

    def update_settings(
        self,
        currency: Optional[str] = None,
        business_name: Optional[str] = None,
    ) -> Record:
        """
        Change the display settings.

        Arguments left as None keep their current value. An empty string
        resets that field to its built-in default.
        """
        defaults = BusinessSettings.defaults()
        settings = dict(self._settings) if isinstance(self._settings, dict) else defaults.to_record()

        if currency is not None:
            settings["currency"] = currency.strip() or defaults.currency
        if business_name is not None:
            settings["businessName"] = business_name.strip() or defaults.business_name

        self._commit(self._properties, self._expenses, settings)

        logger.info("settings_updated", currency=settings.get("currency"))
        return copy.deepcopy(settings)

    # === Statistics ===

    def current_month(self) -> str:
        return self._clock().strftime("%Y-%m")

    def get_statistics(self) -> Statistics:
        """
        Dashboard figures, computed from the current collections.

        Income counts only rented properties. Expenses count only records
        of the current calendar month, taken from the clock at call time.
        """
        month = self.current_month()

        total = len(self._properties)
        rented = [p for p in self._properties if is_rented(p)]
        monthly_income = sum(coerce_amount(p.get("monthlyRent")) for p in rented)
        monthly_expenses = sum(
            expense_total(e) for e in self._expenses
            if isinstance(e, dict) and e.get("month") == month
        )

        return Statistics(
            month=month,
            total_properties=total,
            rented_properties=len(rented),
            vacant_properties=total - len(rented),
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            net_profit=monthly_income - monthly_expenses,
        )

    # === Export / Import ===

    def export_data(self) -> dict[str, Any]:
        """
        Snapshot of the whole dataset.

        The snapshot is independent of the store: changing it changes
        nothing here.
        """
        return {
            PROPERTIES_KEY: copy.deepcopy(self._properties),
            EXPENSES_KEY: copy.deepcopy(self._expenses),
            SETTINGS_KEY: copy.deepcopy(self._settings),
            "exportDate": self._clock().isoformat(),
        }

    def import_data(self, payload: dict[str, Any]) -> None:
        """
        Replace collections from an export snapshot.

        Each of `properties`, `expenses` and `settings` that is present
        (and not null) replaces the stored one wholesale. Absent keys leave
        the stored data untouched. Records are NOT validated.

        Raises:
            BackupFormatError: If the payload is not a JSON object, or a
                               present collection has the wrong JSON type.
                               Nothing is replaced in that case.
        """
        if not isinstance(payload, dict):
            raise BackupFormatError(
                f"Backup must be a JSON object, got {type(payload).__name__}"
            )

        state = {
            PROPERTIES_KEY: self._properties,
            EXPENSES_KEY: self._expenses,
            SETTINGS_KEY: self._settings,
        }
        replaced = []
        for key, expected_type in _COLLECTION_TYPES.items():
            value = payload.get(key)
            if value is None:
                continue
            if not isinstance(value, expected_type):
                raise BackupFormatError(
                    f"Backup field '{key}' must be a JSON "
                    f"{_JSON_TYPE_NAMES[expected_type]}, got {type(value).__name__}"
                )
            state[key] = copy.deepcopy(value)
            replaced.append(key)

        self._commit(state[PROPERTIES_KEY], state[EXPENSES_KEY], state[SETTINGS_KEY])

        logger.info("data_imported", replaced=replaced)

    def import_json(self, text: str) -> None:
        """
        Parse a backup document and import it.

        Raises:
            BackupFormatError: If the text is not a JSON object. Nothing
                               is replaced in that case.
        """
        self.import_data(parse_backup(text))

    def clear_all_data(self) -> None:
        """Remove every property and expense and restore default settings."""
        self._commit([], [], BusinessSettings.defaults().to_record())

        logger.warning("data_cleared")


def create_store(data_dir: Optional[Path] = None) -> Store:
    """
    Factory for the application's store.

    Args:
        data_dir: Directory for the JSON files. Defaults to the
                  `data_dir` storage setting.
    """
    return Store(JsonFileBlobStorage(data_dir))
