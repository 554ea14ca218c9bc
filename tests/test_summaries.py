"""
Tests for expense summaries and property name resolution
"""

from src.queries import ExpenseSummaryBuilder, resolve_property_name


def add_expense(store, property_id, month, electricity=0, water=0, other=0):
    return store.add_expense({
        "propertyId": property_id,
        "month": month,
        "electricity": electricity,
        "water": water,
        "other": other,
    })


class TestResolvePropertyName:
    """Tests for resolving an expense's property."""

    def test_existing_property(self, store, property_a):
        prop = store.add_property(property_a)
        assert resolve_property_name(store, prop["id"]) == ("A", True)

    def test_missing_property_uses_label(self, store):
        """Test unknown ids resolve to the deleted-property label."""
        assert resolve_property_name(store, 999) == ("Deleted property", False)

    def test_custom_fallback(self, store):
        assert resolve_property_name(store, 999, "Gone") == ("Gone", False)

    def test_property_without_name(self, store):
        """Test imported records lacking a name still resolve."""
        store.import_data({"properties": [{"id": 1}]})
        assert resolve_property_name(store, 1) == ("Deleted property", True)


class TestExpenseSummaryBuilder:
    """Tests for grouped expense summaries."""

    def test_empty(self, store):
        assert ExpenseSummaryBuilder(store).build() == []

    def test_summary_fields(self, store, property_a):
        """Test a single expense becomes one summary row."""
        prop = store.add_property(property_a)
        expense = add_expense(store, prop["id"], "2024-03", 50, 20, 10)

        [summary] = ExpenseSummaryBuilder(store).build()
        assert summary.month == "2024-03"
        assert summary.property_id == prop["id"]
        assert summary.property_name == "A"
        assert summary.property_exists is True
        assert summary.expense_id == expense["id"]
        assert summary.total == 80
        assert summary.record_count == 1
        assert summary.currency == "UM"

    def test_groups_by_month_and_property(self, store, make_property):
        """Test one row per (month, property), in first-seen order."""
        a = store.add_property(make_property(name="A"))
        b = store.add_property(make_property(name="B"))
        add_expense(store, a["id"], "2024-02", electricity=1)
        add_expense(store, b["id"], "2024-02", electricity=2)
        add_expense(store, a["id"], "2024-03", electricity=3)
        add_expense(store, a["id"], "2024-02", electricity=4)

        summaries = ExpenseSummaryBuilder(store).build()
        assert [(s.month, s.property_name) for s in summaries] == [
            ("2024-02", "A"),
            ("2024-02", "B"),
            ("2024-03", "A"),
        ]

    def test_duplicates_show_first_record(self, store, make_property):
        """Test the earliest record represents its group."""
        prop = store.add_property(make_property())
        first = add_expense(store, prop["id"], "2024-03", electricity=10)
        add_expense(store, prop["id"], "2024-03", electricity=99)

        [summary] = ExpenseSummaryBuilder(store).build()
        assert summary.expense_id == first["id"]
        assert summary.electricity == 10
        assert summary.record_count == 2

    def test_orphaned_expense(self, store):
        """Test expenses of a missing property are labelled, not dropped."""
        add_expense(store, 12345, "2024-03", water=5)

        [summary] = ExpenseSummaryBuilder(store, deleted_label="(removed)").build()
        assert summary.property_name == "(removed)"
        assert summary.property_exists is False

    def test_malformed_imported_expenses(self, store):
        """Test bad records are skipped or zeroed, never fatal."""
        store.import_data({
            "expenses": [
                "junk",
                {"id": 1, "propertyId": [1], "month": {"y": 2024}, "water": "abc"},
                {"id": 2, "propertyId": 7, "month": "2024-03", "electricity": "12.5"},
            ],
        })

        summaries = ExpenseSummaryBuilder(store).build()
        assert len(summaries) == 2
        assert summaries[0].total == 0
        assert summaries[0].property_exists is False
        assert summaries[1].electricity == 12.5

    def test_build_for_month(self, store, make_property):
        prop = store.add_property(make_property())
        add_expense(store, prop["id"], "2024-02", other=1)
        add_expense(store, prop["id"], "2024-03", other=2)

        [summary] = ExpenseSummaryBuilder(store).build_for_month("2024-03")
        assert summary.other == 2

    def test_uses_store_currency(self, store, make_property):
        store.update_settings(currency="USD")
        prop = store.add_property(make_property())
        add_expense(store, prop["id"], "2024-03")
        assert ExpenseSummaryBuilder(store).build()[0].currency == "USD"
