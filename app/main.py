"""
Streamlit Frontend for Rental Manager

The screens a landlord uses day to day:
- Dashboard: occupancy, this month's income, expenses and profit
- Properties: add, edit and delete rental units
- Expenses: record monthly electricity/water/other costs
- Reports: printable monthly statement per property, as PDF
- Settings: currency, business name, backup export/import, reset

DESIGN PRINCIPLES:
1. The UI never touches stored records directly - every change goes
   through the Store
2. Destructive actions ask for confirmation
3. Clear error messages in simple language
"""

import html
from datetime import date
from typing import Optional

import streamlit as st
from pydantic import ValidationError

from src.backup import BackupFormatError, backup_filename, dump_backup
from src.logging_config import configure_logging
from src.models.rental import PropertyStatus
from src.queries import ExpenseSummaryBuilder
from src.reports import (
    MonthlyReportBuilder,
    month_label,
    render_report_card,
    render_report_pdf,
    report_filename,
)
from src.store import Store, create_store


# Page configuration
st.set_page_config(
    page_title="Rental Manager",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .report-card {
        padding: 20px;
        background-color: #ffffff;
        border-radius: 10px;
        border-top: 5px solid #0d6efd;
        margin: 10px 0;
    }
    .deleted-property {
        color: #dc3545;
        font-style: italic;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_store() -> Store:
    """Get or create the application's store (cached)."""
    configure_logging()
    return create_store()


def format_money(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def first_error(error: ValidationError) -> str:
    """The first validation message, phrased for the user."""
    details = error.errors()[0]
    field = ".".join(str(part) for part in details["loc"]) or "input"
    return f"{field}: {details['msg']}"


def month_picker(label: str, key: str) -> str:
    """Year + month inputs returning YYYY-MM (defaults to this month)."""
    today = date.today()
    col1, col2 = st.columns(2)
    with col1:
        year = st.number_input(
            f"{label} - Year",
            min_value=2000,
            max_value=2100,
            value=today.year,
            step=1,
            key=f"{key}_year",
        )
    with col2:
        month = st.selectbox(
            f"{label} - Month",
            options=list(range(1, 13)),
            index=today.month - 1,
            format_func=lambda m: month_label(f"2000-{m:02d}").split()[0],
            key=f"{key}_month",
        )
    return f"{int(year):04d}-{month:02d}"


def main():
    """Main application entry point."""
    store = get_store()

    # Sidebar navigation
    st.sidebar.title("🏠 Rental Manager")
    st.sidebar.caption(store.get_business_settings().business_name)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "🏘️ Properties", "💡 Expenses", "📄 Reports", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(store)
    elif page == "🏘️ Properties":
        render_properties_page(store)
    elif page == "💡 Expenses":
        render_expenses_page(store)
    elif page == "📄 Reports":
        render_reports_page(store)
    elif page == "⚙️ Settings":
        render_settings_page(store)


def render_dashboard_page(store: Store):
    """Render the statistics dashboard."""
    st.title("📊 Dashboard")

    stats = store.get_statistics()
    currency = store.get_business_settings().currency

    col1, col2, col3 = st.columns(3)
    col1.metric("Total properties", stats.total_properties)
    col2.metric("Rented", stats.rented_properties)
    col3.metric("Vacant", stats.vacant_properties)

    st.markdown(f"### {month_label(stats.month)}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Monthly income", format_money(stats.monthly_income, currency))
    col2.metric("Expenses", format_money(stats.monthly_expenses, currency))
    col3.metric("Net profit", format_money(stats.net_profit, currency))


def render_property_form(store: Store, existing: Optional[dict] = None):
    """Add form, or edit form when `existing` is given."""
    form_key = f"property_form_{existing['id']}" if existing else "property_form_new"
    existing = existing or {}

    statuses = list(PropertyStatus)
    try:
        status_index = statuses.index(PropertyStatus(existing.get("status", "rented")))
    except ValueError:
        status_index = 0

    try:
        rental_date = date.fromisoformat(existing["rentalDate"])
    except (KeyError, TypeError, ValueError):
        rental_date = date.today()

    with st.form(form_key, clear_on_submit=not existing):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Property name *", value=existing.get("name", ""))
            tenant = st.text_input("Tenant *", value=existing.get("tenant", ""))
            monthly_rent = st.number_input(
                "Monthly rent *",
                min_value=0.0,
                value=float(existing.get("monthlyRent") or 0.0),
                step=1.0,
                format="%.2f",
            )
        with col2:
            rental_date = st.date_input("Rental date *", value=rental_date)
            payment_date = st.number_input(
                "Payment day of month *",
                min_value=1,
                max_value=31,
                value=int(existing.get("paymentDate") or 1),
                step=1,
            )
            status = st.selectbox(
                "Status",
                options=statuses,
                index=status_index,
                format_func=lambda s: s.value.title(),
            )
        notes = st.text_area("Notes", value=existing.get("notes") or "")

        submitted = st.form_submit_button("💾 Save property", type="primary")

    if not submitted:
        return

    if not name.strip() or not tenant.strip() or monthly_rent <= 0:
        st.error("Please fill in all required fields")
        return

    data = {
        "name": name,
        "tenant": tenant,
        "monthlyRent": round(monthly_rent, 2),
        "rentalDate": rental_date.isoformat(),
        "paymentDate": int(payment_date),
        "status": status.value,
        "notes": notes.strip() or None,
    }

    try:
        if existing:
            store.update_property(existing["id"], data)
            st.success("Property updated")
        else:
            store.add_property(data)
            st.success("Property added")
    except ValidationError as e:
        st.error(first_error(e))
        return
    st.rerun()


def render_properties_page(store: Store):
    """Render the properties list with add/edit/delete."""
    st.title("🏘️ Properties")
    currency = store.get_business_settings().currency

    with st.expander("➕ Add a property"):
        render_property_form(store)

    properties = [p for p in store.get_properties() if isinstance(p, dict)]
    if not properties:
        st.info("No properties registered yet.")
        return

    for prop in properties:
        status = prop.get("status", "")
        badge = "🟢 Rented" if status == PropertyStatus.RENTED.value else "⚪ Vacant"
        with st.expander(f"{prop.get('name', '?')} - {prop.get('tenant', '')} ({badge})"):
            st.markdown(
                f"**Rent:** {format_money(float(prop.get('monthlyRent') or 0), currency)}  \n"
                f"**Rental date:** {prop.get('rentalDate', '')}  \n"
                f"**Payment day:** {prop.get('paymentDate', '')}"
            )
            if prop.get("notes"):
                st.caption(prop["notes"])

            render_property_form(store, existing=prop)

            confirm = st.checkbox(
                "Also delete all of this property's expenses",
                key=f"confirm_delete_{prop.get('id')}",
            )
            if st.button("🗑️ Delete property", key=f"delete_{prop.get('id')}", disabled=not confirm):
                store.delete_property(prop.get("id"))
                st.success("Property deleted")
                st.rerun()


def render_expenses_page(store: Store):
    """Render the expense entry form and grouped list."""
    st.title("💡 Expenses")
    currency = store.get_business_settings().currency

    properties = [p for p in store.get_properties() if isinstance(p, dict)]
    if properties:
        with st.form("expense_form", clear_on_submit=True):
            prop = st.selectbox(
                "Property *",
                options=properties,
                format_func=lambda p: p.get("name", "?"),
            )
            month = month_picker("Month", key="expense")
            col1, col2, col3 = st.columns(3)
            electricity = col1.number_input("Electricity", min_value=0.0, step=1.0, format="%.2f")
            water = col2.number_input("Water", min_value=0.0, step=1.0, format="%.2f")
            other = col3.number_input("Other", min_value=0.0, step=1.0, format="%.2f")
            submitted = st.form_submit_button("💾 Record expenses", type="primary")

        if submitted:
            try:
                store.add_expense({
                    "propertyId": prop["id"],
                    "month": month,
                    "electricity": round(electricity, 2),
                    "water": round(water, 2),
                    "other": round(other, 2),
                })
                st.success("Expenses recorded")
                st.rerun()
            except ValidationError as e:
                st.error(first_error(e))
    else:
        st.info("Add a property before recording expenses.")

    st.markdown("---")
    summaries = ExpenseSummaryBuilder(store).build()
    if not summaries:
        st.info("No expenses recorded.")
        return

    for index, summary in enumerate(summaries):
        col1, col2, col3 = st.columns([3, 3, 1])
        with col1:
            if summary.property_exists:
                st.markdown(f"**{summary.property_name}**")
            else:
                st.markdown(
                    f'<span class="deleted-property">{html.escape(summary.property_name)}</span>',
                    unsafe_allow_html=True,
                )
            st.caption(str(summary.month))
        with col2:
            st.markdown(f"**{format_money(summary.total, currency)}**")
            st.caption(
                f"Electricity: {summary.electricity:.2f} · "
                f"Water: {summary.water:.2f} · Other: {summary.other:.2f}"
            )
            if summary.record_count > 1:
                st.caption(f"⚠️ {summary.record_count} records for this month")
        with col3:
            # Imported records may lack an id and cannot be addressed
            if summary.expense_id is not None and st.button("🗑️", key=f"delete_expense_{index}"):
                store.delete_expense(summary.expense_id)
                st.rerun()


def render_reports_page(store: Store):
    """Render monthly reports with PDF download."""
    st.title("📄 Monthly Reports")

    month = month_picker("Report month", key="report")
    reports = MonthlyReportBuilder(store).build_all(month)

    if not reports:
        st.info("No properties registered.")
        return

    for report in reports:
        st.markdown(render_report_card(report), unsafe_allow_html=True)
        st.table([{"Item": item, "Value": value} for item, value in report.line_items()])
        st.caption(f"Report date: {report.generated_on.isoformat()} · {report.business_name}")
        st.download_button(
            "📥 Export PDF",
            data=render_report_pdf(report),
            file_name=report_filename(report),
            mime="application/pdf",
            key=f"pdf_{report.property_id}_{month}",
        )


def render_settings_page(store: Store):
    """Render settings and data management."""
    st.title("⚙️ Settings")

    settings = store.get_business_settings()
    with st.form("settings_form"):
        currency = st.text_input("Currency", value=settings.currency)
        business_name = st.text_input("Business name", value=settings.business_name)
        if st.form_submit_button("💾 Save settings", type="primary"):
            store.update_settings(currency=currency, business_name=business_name)
            st.success("Settings saved")
            st.rerun()

    st.markdown("---")
    st.markdown("### Backup")

    st.download_button(
        "📤 Export all data",
        data=dump_backup(store.export_data()).encode("utf-8"),
        file_name=backup_filename(),
        mime="application/json",
    )

    uploaded = st.file_uploader("Import a backup", type=["json"])
    if uploaded and st.button("📥 Import", type="primary"):
        try:
            store.import_json(uploaded.getvalue().decode("utf-8"))
            st.success("Data imported")
        except (BackupFormatError, UnicodeDecodeError) as e:
            st.error(f"Import failed: {e}")

    st.markdown("---")
    st.markdown("### Danger zone")
    confirm = st.checkbox("I understand this deletes all data and cannot be undone")
    if st.button("🗑️ Clear all data", disabled=not confirm):
        store.clear_all_data()
        st.success("All data deleted")
        st.rerun()


if __name__ == "__main__":
    main()
