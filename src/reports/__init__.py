"""Monthly reports package."""

from src.reports.monthly import (
    MonthlyReportBuilder,
    ReportError,
    month_label,
    report_filename,
)
from src.reports.html import render_report_card
from src.reports.pdf import render_report_pdf

__all__ = [
    "MonthlyReportBuilder",
    "ReportError",
    "month_label",
    "render_report_card",
    "render_report_pdf",
    "report_filename",
]
