"""HTML snippets for showing a report in the browser."""

from html import escape

from src.models.report import MonthlyReport


def render_report_card(report: MonthlyReport) -> str:
    """Header card of a report. All report text is escaped."""
    return (
        '<div class="report-card"><h4>Monthly Rent Report</h4>'
        f"<p>Property: {escape(report.property_name)} | "
        f"Month: {escape(report.month_label)}</p></div>"
    )
