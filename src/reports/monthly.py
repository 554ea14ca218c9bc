"""
Monthly Report Builder

One report per property per month: the property's rent and tenant, the
utility costs recorded for that month and the owner's net income.

When no expense was recorded for the month the costs are zero. When
several were recorded, the first one counts, matching what the expense
list shows.
"""

import calendar
import re
from datetime import date
from typing import Any, Callable, Optional

from src.models.rental import EXPENSE_COMPONENTS, MONTH_PATTERN, coerce_amount, record_id
from src.models.report import MonthlyReport
from src.store import Store


_MONTH_RE = re.compile(MONTH_PATTERN)
_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\s]+")


class ReportError(Exception):
    """A report was requested for a property that does not exist."""
    pass


def month_label(month: str) -> str:
    """
    Human-readable name of a YYYY-MM month, e.g. "March 2024".

    Raises:
        ValueError: If `month` is not YYYY-MM
    """
    if not isinstance(month, str) or not _MONTH_RE.match(month):
        raise ValueError(f"Month must be YYYY-MM, got {month!r}")
    year, month_number = month.split("-")
    return f"{calendar.month_name[int(month_number)]} {year}"


def report_filename(report: MonthlyReport) -> str:
    """`report_<property name>_<YYYY-MM>.pdf`, safe for any file system."""
    name = _UNSAFE_FILENAME_CHARS.sub("_", report.property_name).strip("_") or "property"
    return f"report_{name}_{report.month}.pdf"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class MonthlyReportBuilder:
    """Assembles MonthlyReport objects from a store."""

    def __init__(
        self,
        store: Store,
        today: Optional[Callable[[], date]] = None,
    ):
        self._store = store
        self._today = today or date.today

    def build(self, property_id: Any, month: str) -> MonthlyReport:
        """
        Build the report of one property for one month.

        Raises:
            ValueError: If `month` is not YYYY-MM
            ReportError: If no property has this id
        """
        label = month_label(month)

        record = self._store.get_property_by_id(property_id)
        if record is None:
            raise ReportError(f"Property not found: {property_id}")

        return self._build(record, month, label)

    def build_all(self, month: str) -> list[MonthlyReport]:
        """Reports for every property, in store order."""
        label = month_label(month)
        return [
            self._build(record, month, label)
            for record in self._store.get_properties()
            if isinstance(record, dict)
        ]

    def _build(self, record: dict, month: str, label: str) -> MonthlyReport:
        settings = self._store.get_business_settings()
        expenses = self._store.get_expenses(record_id(record), month)
        expense = expenses[0] if expenses else {}

        return MonthlyReport(
            property_id=record_id(record),
            property_name=_text(record.get("name")),
            tenant=_text(record.get("tenant")),
            status=_text(record.get("status")),
            monthly_rent=coerce_amount(record.get("monthlyRent")),
            payment_day=record.get("paymentDate"),
            month=month,
            month_label=label,
            has_expense_record=bool(expenses),
            currency=settings.currency,
            business_name=settings.business_name,
            generated_on=self._today(),
            **{key: coerce_amount(expense.get(key)) for key in EXPENSE_COMPONENTS},
        )
