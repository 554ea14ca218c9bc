"""
Tests for monthly reports and their PDF rendering
"""

from datetime import date

import pytest

from src.reports import (
    MonthlyReportBuilder,
    ReportError,
    month_label,
    render_report_card,
    render_report_pdf,
    report_filename,
)


REPORT_DAY = date(2024, 3, 20)


@pytest.fixture
def builder(store):
    return MonthlyReportBuilder(store, today=lambda: REPORT_DAY)


class TestMonthLabel:
    """Tests for month labels."""

    @pytest.mark.parametrize("month,expected", [
        ("2024-03", "March 2024"),
        ("2023-12", "December 2023"),
        ("2025-01", "January 2025"),
    ])
    def test_labels(self, month, expected):
        assert month_label(month) == expected

    @pytest.mark.parametrize("month", ["2024-13", "2024-3", "March", "", None])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            month_label(month)


class TestMonthlyReportBuilder:
    """Tests for building monthly reports."""

    def test_report_with_expenses(self, store, builder, property_a):
        """Test the report of the concrete scenario."""
        prop = store.add_property(property_a)
        store.add_expense({
            "propertyId": prop["id"],
            "month": "2024-03",
            "electricity": 50,
            "water": 20,
            "other": 10,
        })

        report = builder.build(prop["id"], "2024-03")
        assert report.property_name == "A"
        assert report.tenant == "T"
        assert report.month_label == "March 2024"
        assert report.has_expense_record is True
        assert report.total_expenses == 80
        assert report.net_income == 920
        assert report.generated_on == REPORT_DAY
        assert report.business_name == "Smart Property Management System"

    def test_report_without_expenses(self, store, builder, property_a):
        """Test a month with no record reports zero costs."""
        prop = store.add_property(property_a)
        report = builder.build(prop["id"], "2024-02")

        assert report.has_expense_record is False
        assert report.total_expenses == 0
        assert report.net_income == 1000

    def test_vacant_property_has_no_income(self, store, builder, make_property):
        prop = store.add_property(make_property(status="vacant", monthlyRent=800))
        store.add_expense({"propertyId": prop["id"], "month": "2024-03", "water": 30})

        report = builder.build(prop["id"], "2024-03")
        assert report.rent_income == 0
        assert report.net_income == -30

    def test_first_expense_counts(self, store, builder, make_property):
        """Test duplicates: the first recorded expense is used."""
        prop = store.add_property(make_property())
        store.add_expense({"propertyId": prop["id"], "month": "2024-03", "other": 5})
        store.add_expense({"propertyId": prop["id"], "month": "2024-03", "other": 500})

        assert builder.build(prop["id"], "2024-03").other == 5

    def test_unknown_property(self, builder):
        with pytest.raises(ReportError, match="not found"):
            builder.build(999, "2024-03")

    def test_invalid_month(self, store, builder, property_a):
        prop = store.add_property(property_a)
        with pytest.raises(ValueError):
            builder.build(prop["id"], "03/2024")

    def test_build_all(self, store, builder, make_property):
        """Test one report per property, in store order."""
        store.add_property(make_property(name="One"))
        store.add_property(make_property(name="Two"))
        assert [r.property_name for r in builder.build_all("2024-03")] == ["One", "Two"]

    def test_line_items(self, store, builder, property_a):
        """Test the printed rows."""
        store.update_settings(currency="USD")
        prop = store.add_property(property_a)
        items = dict(builder.build(prop["id"], "2024-03").line_items())

        assert items["Monthly rent"] == "1,000.00 USD"
        assert items["Payment date"] == "Day 5 of each month"
        assert items["Owner net income"] == "1,000.00 USD"


class TestReportOutput:
    """Tests for report files."""

    def test_filename(self, store, builder, make_property):
        """Test unsafe characters are replaced."""
        prop = store.add_property(make_property(name="Flat 3/B"))
        report = builder.build(prop["id"], "2024-03")
        assert report_filename(report) == "report_Flat_3_B_2024-03.pdf"

    def test_render_pdf(self, store, builder, property_a):
        """Test a PDF document is produced."""
        prop = store.add_property(property_a)
        pdf = render_report_pdf(builder.build(prop["id"], "2024-03"))
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 500

    def test_report_card_escapes_markup(self, store, builder, make_property):
        """Test the browser card shows names as text, not markup."""
        prop = store.add_property(make_property(name='<img src=x onerror="alert(1)">'))
        card = render_report_card(builder.build(prop["id"], "2024-03"))

        assert "<img" not in card
        assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in card
        assert "Month: March 2024" in card

    def test_render_pdf_escapes_markup(self, store, builder, make_property):
        """Test names with markup characters do not break rendering."""
        prop = store.add_property(make_property(name="<b>Tom & Jerry</b>"))
        pdf = render_report_pdf(builder.build(prop["id"], "2024-02"))
        assert pdf.startswith(b"%PDF")
