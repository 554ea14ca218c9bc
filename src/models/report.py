"""
Report Models

Read-side views assembled from store records for display:
- ExpenseSummary: one row of the expense list
- MonthlyReport: the printable monthly statement of one property
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from src.models.rental import PropertyStatus


class ExpenseSummary(BaseModel):
    """
    Expenses of one property for one month, as shown in the expense list.

    When several expense records exist for the same property and month,
    the first one recorded is the representative shown; `record_count`
    tells the caller duplicates exist.
    """

    month: Any = Field(..., description="Month of the group (YYYY-MM when well-formed)")
    property_id: Any = Field(..., description="Referenced property id")
    property_name: str = Field(
        ...,
        description="Resolved property name, or the deleted-property label"
    )
    property_exists: bool
    expense_id: Any = Field(..., description="Id of the representative expense")
    electricity: float
    water: float
    other: float
    total: float
    record_count: int = Field(..., ge=1)
    currency: str


class MonthlyReport(BaseModel):
    """
    Monthly rent statement for one property.

    Combines the property's fields, its expense record for the month
    (zero-valued when none was recorded) and the business settings.
    """

    property_id: Any
    property_name: str
    tenant: str
    status: str
    monthly_rent: float
    payment_day: Any = Field(
        default=None,
        description="Day of month rent is due, as stored"
    )

    month: str = Field(..., description="YYYY-MM")
    month_label: str = Field(..., description="e.g. 'March 2024'")

    has_expense_record: bool
    electricity: float = 0.0
    water: float = 0.0
    other: float = 0.0

    currency: str
    business_name: str
    generated_on: date

    @property
    def total_expenses(self) -> float:
        return self.electricity + self.water + self.other

    @property
    def rent_income(self) -> float:
        """Rent counts only while the property is rented."""
        return self.monthly_rent if self.status == PropertyStatus.RENTED.value else 0.0

    @property
    def net_income(self) -> float:
        return self.rent_income - self.total_expenses

    def format_amount(self, amount: float) -> str:
        return f"{amount:,.2f} {self.currency}"

    def line_items(self) -> list[tuple[str, str]]:
        """(item, value) rows in the order they are printed."""
        return [
            ("Property name", self.property_name),
            ("Tenant", self.tenant),
            ("Monthly rent", self.format_amount(self.monthly_rent)),
            ("Payment date", f"Day {self.payment_day} of each month"),
            ("Electricity bill", self.format_amount(self.electricity)),
            ("Water bill", self.format_amount(self.water)),
            ("Additional expenses", self.format_amount(self.other)),
            ("Owner net income", self.format_amount(self.net_income)),
        ]
