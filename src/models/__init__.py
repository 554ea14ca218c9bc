"""
Data Models Package

This package contains all Pydantic models used in the Rental Manager system.
Every record written through the store is validated by one of these schemas.
"""

from src.models.rental import (
    BusinessSettings,
    ExpenseData,
    PropertyData,
    PropertyStatus,
    PropertyUpdate,
    Statistics,
    coerce_amount,
    expense_total,
    is_rented,
    record_id,
)
from src.models.report import (
    ExpenseSummary,
    MonthlyReport,
)

__all__ = [
    # Rental models
    "BusinessSettings",
    "ExpenseData",
    "PropertyData",
    "PropertyStatus",
    "PropertyUpdate",
    "Statistics",
    # Record helpers
    "coerce_amount",
    "expense_total",
    "is_rented",
    "record_id",
    # Report models
    "ExpenseSummary",
    "MonthlyReport",
]
