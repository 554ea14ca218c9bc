"""Read-side queries package."""

from src.queries.summaries import ExpenseSummaryBuilder, resolve_property_name

__all__ = ["ExpenseSummaryBuilder", "resolve_property_name"]
