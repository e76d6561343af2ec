"""
Streamlit Frontend for My Wallet

The screens a user works with every day: a dashboard, the transaction
list, budgets, reports and settings (including backup and restore).

DESIGN PRINCIPLES:
1. Every number on screen comes from the report functions, never from
   ad hoc arithmetic in the page code
2. Validation errors are shown in plain language next to the form
3. Destructive actions (restore, clear) need an explicit confirmation
"""

from datetime import date, datetime
from decimal import Decimal

import streamlit as st
from pydantic import ValidationError

from mywallet.models import (
    PAYMENT_METHODS,
    TimeFrame,
    TransactionType,
    categories_for,
    get_category,
    get_payment_method,
)
from mywallet.orchestrator import WalletComponents, create_app_components
from mywallet.services.storage import InvalidFormatError, StorageError
from mywallet.stores import BudgetConflictError


# Page configuration
st.set_page_config(
    page_title="My Wallet",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components() -> WalletComponents:
    """Get or create application components (cached)."""
    return create_app_components()


def money(amount: Decimal, currency: str) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def validation_message(error: ValidationError) -> str:
    """First validation problem, phrased for the user."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "input"
    return f"{field}: {first['msg']}"


def main():
    """Main application entry point."""
    components = get_components()

    st.sidebar.title("💰 My Wallet")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "💳 Transactions", "🎯 Budgets", "📈 Reports", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(components)
    elif page == "💳 Transactions":
        render_transactions_page(components)
    elif page == "🎯 Budgets":
        render_budgets_page(components)
    elif page == "📈 Reports":
        render_reports_page(components)
    elif page == "⚙️ Settings":
        render_settings_page(components)


def render_dashboard_page(components: WalletComponents):
    """Render the dashboard."""
    st.title("📊 Dashboard")

    summary = components.reports.dashboard(time_frame=TimeFrame.MONTHLY)
    currency = summary.currency

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(
            "Total Balance",
            money(summary.total_balance, currency),
            delta=f"{summary.monthly_change:+.2f}% vs last month",
        )
    with col2:
        st.metric("Income this month", money(summary.monthly_stats.income, currency))
    with col3:
        st.metric("Expenses this month", money(summary.monthly_stats.expenses, currency))

    overview = summary.budget_overview
    st.markdown("### Budget")
    if overview.active_budgets:
        st.progress(
            overview.budget_percentage / 100,
            text=(
                f"{money(overview.remaining_budget, currency)} left of "
                f"{money(overview.total_budget, currency)} "
                f"({overview.days_remaining} days remaining, "
                f"{money(overview.daily_allowance, currency)} per day)"
            ),
        )
    else:
        st.info("No active budgets. Create one on the Budgets page.")

    left, right = st.columns(2)
    with left:
        st.markdown("### Spending by category")
        if summary.category_spending:
            st.bar_chart(
                {
                    "Category": [c.name for c in summary.category_spending],
                    "Amount": [float(c.amount) for c in summary.category_spending],
                },
                x="Category",
                y="Amount",
            )
        else:
            st.caption("No expenses yet.")

    with right:
        st.markdown("### Recent transactions")
        if not summary.recent_transactions:
            st.caption("No transactions yet.")
        for t in summary.recent_transactions:
            amount = money(t.signed_amount, currency)
            st.markdown(
                f"**{get_category(t.category).name}** · {amount}  \n"
                f"{t.timestamp:%b %d, %H:%M} {t.description or ''}"
            )

    if summary.cash_flow is not None:
        st.markdown("### Cash flow")
        st.bar_chart(
            {
                "Period": summary.cash_flow.labels,
                "Income": [float(v) for v in summary.cash_flow.income],
                "Expense": [float(v) for v in summary.cash_flow.expense],
            },
            x="Period",
            y=["Income", "Expense"],
        )


def render_edit_transaction_form(components: WalletComponents, transaction):
    """Edit form for one transaction; saving merges the changes onto it."""
    store = components.transactions

    with st.form(f"edit_{transaction.id}"):
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            value=float(transaction.amount),
            step=1.0,
            format="%.2f",
        )
        options = [c.id for c in categories_for(transaction.type)]
        category = st.selectbox(
            "Category",
            options=options,
            index=options.index(transaction.category) if transaction.category in options else 0,
            format_func=lambda x: get_category(x).name,
        )
        methods = [None] + [m.id for m in PAYMENT_METHODS]
        payment_method = st.selectbox(
            "Payment method",
            options=methods,
            index=methods.index(transaction.payment_method),
            format_func=lambda x: "Not set" if x is None else get_payment_method(x).name,
        )
        day = st.date_input("Date", value=transaction.timestamp.date())
        description = st.text_input("Description", value=transaction.description or "")

        save, cancel = st.columns(2)
        if save.form_submit_button("Save changes", type="primary"):
            try:
                store.update(transaction.id, {
                    "amount": Decimal(str(amount)),
                    "category": category,
                    "payment_method": payment_method,
                    "timestamp": datetime.combine(day, transaction.timestamp.time()),
                    "description": description or None,
                })
            except ValidationError as e:
                st.error(validation_message(e))
                return
            except StorageError as e:
                st.error(str(e))
                return
            st.session_state.pop("editing_transaction", None)
            st.rerun()
        if cancel.form_submit_button("Cancel"):
            st.session_state.pop("editing_transaction", None)
            st.rerun()


def render_transactions_page(components: WalletComponents):
    """Render the transaction list with edit and delete, and the add form."""
    st.title("💳 Transactions")
    store = components.transactions
    currency = components.preferences.get().currency

    with st.expander("➕ Add transaction", expanded=not len(store)):
        type_ = st.radio(
            "Type",
            options=list(TransactionType),
            format_func=lambda x: x.value.title(),
            horizontal=True,
        )
        with st.form("add_transaction", clear_on_submit=True):
            amount = st.number_input("Amount", min_value=0.0, step=1.0, format="%.2f")
            category = st.selectbox(
                "Category",
                options=[c.id for c in categories_for(type_)],
                format_func=lambda x: get_category(x).name,
            )
            payment_method = st.selectbox(
                "Payment method",
                options=[None] + [m.id for m in PAYMENT_METHODS],
                format_func=lambda x: "Not set" if x is None else get_payment_method(x).name,
            )
            day = st.date_input("Date", value=date.today())
            description = st.text_input("Description")

            if st.form_submit_button("Save", type="primary"):
                try:
                    store.add({
                        "type": type_,
                        "amount": Decimal(str(amount)),
                        "category": category,
                        "payment_method": payment_method,
                        "timestamp": datetime.combine(day, datetime.now().time()),
                        "description": description or None,
                    })
                    st.success("Transaction saved.")
                except ValidationError as e:
                    st.error(validation_message(e))

    groups = store.grouped_by_date()
    if not groups:
        st.info("No transactions yet.")
        return

    for day, transactions in groups.items():
        st.markdown(f"#### {datetime.fromisoformat(day):%A, %B %d, %Y}")
        for t in transactions:
            col1, col2, col3, col4 = st.columns([4, 2, 1, 1])
            with col1:
                st.markdown(f"**{get_category(t.category).name}** {t.description or ''}")
            with col2:
                st.markdown(money(t.signed_amount, currency))
            with col3:
                if st.button("✏️", key=f"edit_{t.id}"):
                    st.session_state["editing_transaction"] = t.id
            with col4:
                if st.button("🗑️", key=f"delete_{t.id}"):
                    try:
                        store.remove(t.id)
                    except StorageError as e:
                        st.error(str(e))
                    st.rerun()
            if st.session_state.get("editing_transaction") == t.id:
                render_edit_transaction_form(components, t)


def render_budgets_page(components: WalletComponents):
    """Render budgets with their progress."""
    st.title("🎯 Budgets")
    store = components.budgets
    currency = components.preferences.get().currency

    with st.expander("➕ New budget"):
        with st.form("add_budget", clear_on_submit=True):
            category = st.selectbox(
                "Category",
                options=[c.id for c in categories_for(TransactionType.EXPENSE)],
                format_func=lambda x: get_category(x).name,
            )
            amount = st.number_input("Amount", min_value=0.0, step=10.0, format="%.2f")
            today = date.today()
            start = st.date_input("Start", value=today.replace(day=1))
            end = st.date_input("End", value=today)

            if st.form_submit_button("Create", type="primary"):
                try:
                    store.add({
                        "category": category,
                        "amount": Decimal(str(amount)),
                        "start_date": start,
                        "end_date": end,
                    })
                    st.success("Budget created.")
                except ValidationError as e:
                    st.error(validation_message(e))
                except BudgetConflictError as e:
                    st.error(str(e))

    statuses = {s.budget_id: s for s in components.reports.budget_statuses()}
    budgets = store.all()
    if not budgets:
        st.info("No budgets yet.")
        return

    for budget in budgets:
        category = get_category(budget.category)
        st.markdown(
            f"**{category.name}** · {budget.start_date:%b %d} - {budget.end_date:%b %d, %Y}"
        )
        status = statuses.get(budget.id)
        if status is None:
            st.caption(f"Inactive · cap {money(budget.amount, currency)}")
        else:
            st.progress(
                status.percentage / 100,
                text=(
                    f"{money(status.spent, currency)} of {money(budget.amount, currency)} "
                    f"({status.percentage}%)"
                ),
            )
        if st.button("Delete", key=f"delete_budget_{budget.id}"):
            store.remove(budget.id)
            st.rerun()


def render_reports_page(components: WalletComponents):
    """Render cash flow and category trends."""
    st.title("📈 Reports")

    time_frame = st.radio(
        "Time frame",
        options=list(TimeFrame),
        format_func=lambda x: x.value.title(),
        horizontal=True,
        index=2,
    )
    series = components.reports.cash_flow(time_frame)
    st.markdown("### Cash flow")
    st.bar_chart(
        {
            "Period": series.labels,
            "Income": [float(v) for v in series.income],
            "Expense": [float(v) for v in series.expense],
        },
        x="Period",
        y=["Income", "Expense"],
    )

    overview = components.reports.monthly_overview()
    st.markdown("### Cumulative income and expense")
    st.line_chart(
        {
            "Month": overview.labels,
            "Income": [float(v) for v in overview.income],
            "Expense": [float(v) for v in overview.expense],
        },
        x="Month",
        y=["Income", "Expense"],
    )

    trend = components.reports.category_trend()
    categories = sorted({c for point in trend for c in point.totals}, key=lambda c: c.value)
    if categories:
        st.markdown("### Category trend")
        data = {"Month": [point.label for point in trend]}
        for category in categories:
            data[get_category(category).name] = [
                float(point.totals.get(category, 0)) for point in trend
            ]
        st.line_chart(data, x="Month")


def render_settings_page(components: WalletComponents):
    """Render user settings, backup and restore."""
    st.title("⚙️ Settings")
    preferences = components.preferences
    current = preferences.get()

    with st.form("preferences"):
        currency = st.text_input("Currency symbol", value=current.currency, max_chars=4)
        language = st.selectbox(
            "Language",
            options=["en", "he"],
            index=0 if current.language == "en" else 1,
        )
        dark_mode = st.checkbox("Dark mode", value=current.dark_mode)
        reminder_enabled = st.checkbox("Daily reminder", value=current.reminder_enabled)

        if st.form_submit_button("Save settings"):
            try:
                preferences.update(
                    currency=currency,
                    language=language,
                    dark_mode=dark_mode,
                    reminder_enabled=reminder_enabled,
                )
                st.success("Settings saved.")
            except ValidationError as e:
                st.error(validation_message(e))

    st.markdown("---")
    st.markdown("### Backup")
    snapshot = components.snapshots.snapshot()
    st.download_button(
        "Download backup",
        data=components.snapshots.render(snapshot),
        file_name=f"wallet-{date.today():%Y-%m-%d}.json",
        mime="application/json",
        on_click=components.snapshots.record_export,
        args=(snapshot,),
    )

    uploaded = st.file_uploader("Restore from backup", type=["json"])
    if uploaded is not None:
        st.warning("Restoring replaces all transactions, budgets and settings.")
        if st.button("Restore", type="primary"):
            try:
                snapshot = components.snapshots.import_snapshot(
                    uploaded.getvalue().decode("utf-8")
                )
                st.success(
                    f"Restored {len(snapshot.transactions)} transactions and "
                    f"{len(snapshot.budgets)} budgets."
                )
            except (InvalidFormatError, UnicodeDecodeError) as e:
                st.error(f"This file cannot be restored: {e}")

    st.markdown("---")
    st.markdown("### Danger zone")
    confirm = st.checkbox("I understand this deletes all my data")
    if st.button("Clear all data", disabled=not confirm):
        components.snapshots.clear_all()
        st.success("All data cleared.")

    st.markdown("---")
    st.markdown("### Recent activity")
    for event in components.audit_logger.recent_events(limit=20):
        st.caption(f"{event.timestamp:%Y-%m-%d %H:%M} · {event.description}")


if __name__ == "__main__":
    main()
