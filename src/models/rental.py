"""
Core Data Models for Rental Manager

These models define the schemas for everything the store writes.

DESIGN DECISION: The store keeps and persists plain JSON records keyed by
camelCase names (`monthlyRent`, `propertyId`, ...), because that is the
on-disk and backup format. The Pydantic models below sit in front of every
write made through the store's add/update operations: they validate caller
input and dump it to exactly that record shape.

Records that arrive through a backup import are NOT validated. Everything
that reads records back (statistics, summaries, reports) therefore goes
through the lenient helpers at the bottom of this module instead of
assuming well-formed data.
"""

import math
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.config import get_settings


MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

EXPENSE_COMPONENTS = ("electricity", "water", "other")


# =============================================================================
# ENUMS
# =============================================================================

class PropertyStatus(str, Enum):
    """Occupancy status of a property."""
    RENTED = "rented"
    VACANT = "vacant"


# =============================================================================
# PROPERTY MODELS
# =============================================================================

class PropertyData(BaseModel):
    """
    A property as entered by the user, before the store assigns an id.

    Accepts both the persisted camelCase names and snake_case names.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Property name"
    )
    tenant: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Tenant name"
    )
    monthly_rent: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Rent due every month"
    )
    rental_date: date = Field(
        ...,
        description="Lease start date"
    )
    payment_date: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of the month on which rent is due"
    )
    status: PropertyStatus = Field(
        default=PropertyStatus.RENTED,
        description="Occupancy status"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Free-form notes"
    )

    @field_serializer('monthly_rent', when_used='json')
    def serialize_rent(self, v: Decimal) -> float:
        return float(v)

    def to_record(self) -> dict[str, Any]:
        """Dump to the persisted record shape (without id)."""
        return self.model_dump(mode="json", by_alias=True)


class PropertyUpdate(BaseModel):
    """
    A partial property update.

    Only the fields the caller actually sent are applied. `id` is never
    accepted: it is dropped with the other unknown keys.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    tenant: Optional[str] = Field(default=None, min_length=1, max_length=200)
    monthly_rent: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    rental_date: Optional[date] = None
    payment_date: Optional[int] = Field(default=None, ge=1, le=31)
    status: Optional[PropertyStatus] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_serializer('monthly_rent', when_used='json')
    def serialize_rent(self, v: Optional[Decimal]) -> Optional[float]:
        return float(v) if v is not None else None

    @model_validator(mode='after')
    def reject_cleared_required_fields(self) -> 'PropertyUpdate':
        """Only `notes` may be explicitly cleared."""
        for field_name in self.model_fields_set:
            if field_name != "notes" and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be cleared")
        return self

    def to_changes(self) -> dict[str, Any]:
        """Dump only the fields that were set, using persisted names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class ExpenseData(BaseModel):
    """
    Utility and other costs of one property for one month.

    Amounts default to zero when not provided.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    property_id: int = Field(
        ...,
        description="Id of the property these costs belong to"
    )
    month: str = Field(
        ...,
        pattern=MONTH_PATTERN,
        description="Calendar month as YYYY-MM"
    )
    electricity: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    water: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    other: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)

    @field_serializer('electricity', 'water', 'other', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)

    @property
    def total(self) -> Decimal:
        return self.electricity + self.water + self.other

    def to_record(self) -> dict[str, Any]:
        """Dump to the persisted record shape (without id)."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# SETTINGS
# =============================================================================

class BusinessSettings(BaseModel):
    """Display preferences: currency label and business name."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    currency: str = Field(..., min_length=1)
    business_name: str = Field(..., min_length=1)

    @classmethod
    def defaults(cls) -> 'BusinessSettings':
        """The built-in defaults from configuration."""
        display = get_settings().display
        return cls(
            currency=display.default_currency,
            business_name=display.default_business_name,
        )

    @classmethod
    def from_record(cls, record: Any) -> 'BusinessSettings':
        """
        Read a stored settings object leniently.

        Missing, blank or non-text fields fall back to the defaults, so an
        imported settings object of any shape still yields usable labels.
        """
        defaults = cls.defaults()
        if not isinstance(record, dict):
            return defaults

        currency = record.get("currency")
        business_name = record.get("businessName")
        return cls(
            currency=currency if _is_text(currency) else defaults.currency,
            business_name=business_name if _is_text(business_name) else defaults.business_name,
        )

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# STATISTICS
# =============================================================================

class Statistics(BaseModel):
    """
    Point-in-time dashboard figures.

    Recomputed from the collections on every request; never stored.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    month: str = Field(..., description="Month the expense figure covers")
    total_properties: int = Field(..., ge=0)
    rented_properties: int = Field(..., ge=0)
    vacant_properties: int = Field(..., ge=0)
    monthly_income: float
    monthly_expenses: float
    net_profit: float


# =============================================================================
# LENIENT RECORD HELPERS
# =============================================================================

def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def coerce_amount(value: Any) -> float:
    """
    Read an amount from a record that may not have been validated.

    Missing, non-numeric, boolean and non-finite values count as 0.
    Numeric strings ("500", "12.5") are accepted.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def expense_total(record: Any) -> float:
    """Sum of electricity, water and other for one expense record."""
    if not isinstance(record, dict):
        return 0.0
    return sum(coerce_amount(record.get(key)) for key in EXPENSE_COMPONENTS)


def is_rented(record: Any) -> bool:
    return isinstance(record, dict) and record.get("status") == PropertyStatus.RENTED.value


def record_id(record: Any) -> Any:
    """The `id` of a record, or None for records that are not objects."""
    if isinstance(record, dict):
        return record.get("id")
    return None
