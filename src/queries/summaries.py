"""
Expense Summaries

Builds the rows of the expense list: expenses grouped by month and
property, with the property's name resolved at read time.

An expense only holds a property id. The property may have been deleted
since (deletion cascades, but imported data may still reference missing
ids), so name resolution always has a fallback label.
"""

from typing import Any, Optional

from src.config import get_settings
from src.models.rental import EXPENSE_COMPONENTS, coerce_amount, record_id
from src.models.report import ExpenseSummary
from src.store import Store


def resolve_property_name(
    store: Store,
    property_id: Any,
    fallback: Optional[str] = None,
) -> tuple[str, bool]:
    """
    Look up the display name of a property.

    Returns:
        (name, found). When the property does not exist, or has no usable
        name, `fallback` (default: the deleted-property label) is returned.
    """
    fallback = fallback or get_settings().display.deleted_property_label
    record = store.get_property_by_id(property_id)
    if record is None:
        return fallback, False

    name = record.get("name")
    if isinstance(name, str) and name.strip():
        return name, True
    return fallback, True


class ExpenseSummaryBuilder:
    """
    Groups a store's expenses for display.

    Groups keep the order in which their first record was added.
    """

    def __init__(self, store: Store, deleted_label: Optional[str] = None):
        self._store = store
        self._deleted_label = deleted_label or get_settings().display.deleted_property_label

    def build(self) -> list[ExpenseSummary]:
        """One summary per (month, property) pair."""
        groups: dict[tuple[str, str], list[dict]] = {}

        for expense in self._store.get_all_expenses():
            if not isinstance(expense, dict):
                continue
            # repr() keeps malformed (unhashable) imported values groupable
            key = (repr(expense.get("month")), repr(expense.get("propertyId")))
            groups.setdefault(key, []).append(expense)

        currency = self._store.get_business_settings().currency
        return [self._summarize(records, currency) for records in groups.values()]

    def build_for_month(self, month: str) -> list[ExpenseSummary]:
        return [summary for summary in self.build() if summary.month == month]

    def _summarize(self, records: list[dict], currency: str) -> ExpenseSummary:
        first = records[0]
        property_id = first.get("propertyId")
        name, exists = resolve_property_name(self._store, property_id, self._deleted_label)
        amounts = {key: coerce_amount(first.get(key)) for key in EXPENSE_COMPONENTS}

        return ExpenseSummary(
            month=first.get("month"),
            property_id=property_id,
            property_name=name,
            property_exists=exists,
            expense_id=record_id(first),
            total=sum(amounts.values()),
            record_count=len(records),
            currency=currency,
            **amounts,
        )
