"""
PDF rendering of monthly reports.

Layout: title and property/month header, an item/value table, a summary
block with the report date, and a footer naming the business.
"""

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.models.report import MonthlyReport


HEADER_COLOR = colors.HexColor("#0D6EFD")
TOTAL_ROW_COLOR = colors.HexColor("#E8F4F8")


def render_report_pdf(report: MonthlyReport) -> bytes:
    """Render one monthly report as an A4 PDF document."""
    out = BytesIO()
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph("Monthly Rent Report", styles["Title"]))
    story.append(Paragraph(f"<b>{escape(report.property_name)}</b>", styles["Heading2"]))
    story.append(Paragraph(escape(report.month_label), styles["Normal"]))
    story.append(Spacer(1, 0.6 * cm))

    data = [["Item", "Value"]] + [
        [Paragraph(escape(item), styles["Normal"]), Paragraph(escape(value), styles["Normal"])]
        for item, value in report.line_items()
    ]
    table = Table(data, colWidths=[7 * cm, 9 * cm], repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -2), [colors.white, colors.HexColor("#F9F9F9")]),
        ("BACKGROUND", (0, -1), (-1, -1), TOTAL_ROW_COLOR),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    story.append(table)
    story.append(Spacer(1, 0.6 * cm))

    story.append(Paragraph(
        f"<b>Report date:</b> {report.generated_on.isoformat()}",
        styles["Normal"],
    ))
    if not report.has_expense_record:
        story.append(Paragraph(
            "No expenses were recorded for this month.",
            styles["Italic"],
        ))
    story.append(Spacer(1, 1 * cm))

    story.append(Paragraph(f"By: {escape(report.business_name)}", styles["Normal"]))

    doc = SimpleDocTemplate(
        out,
        pagesize=A4,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=f"Monthly Rent Report - {report.property_name} - {report.month}",
    )
    doc.build(story)
    return out.getvalue()
