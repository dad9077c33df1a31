"""Streamlit dashboard entry point."""

import math
from collections.abc import Callable, Sequence
from datetime import date, datetime
from decimal import Decimal

import altair as alt
import streamlit as st

from cashflow_ledger.application.use_cases.get_period_view import PeriodView
from cashflow_ledger.domain.constants import (
    DEFAULT_CATEGORY_TREE,
    VARIANCE_VIEW,
)
from cashflow_ledger.domain.models import (
    Category,
    CategoryTree,
    Granularity,
    LedgerStore,
    Payment,
    PaymentRef,
    PeriodBucket,
    Scenario,
    VarianceBucket,
)
from cashflow_ledger.domain.services.period_bounds import shift_anchor
from cashflow_ledger.domain.services.rollup import CategoryTotals
from cashflow_ledger.infrastructure.container import (
    build_edit_cell_use_case,
    build_load_ledger_use_case,
    build_move_payment_use_case,
    build_period_view_use_case,
    build_variance_view_use_case,
)
from cashflow_ledger.infrastructure.logging.logger import get_usage_logger

CURRENCY_CODE = "AED"
LEDGER_STATE_KEY = "ledgers"
ANCHOR_STATE_KEY = "anchor_date"


def _fetch_ledger(scenario: Scenario, seed_date: date) -> LedgerStore:
    """Load a scenario ledger through the load use case."""
    use_case = build_load_ledger_use_case()
    return use_case.execute(scenario, seed_date=seed_date)


def _get_ledger(scenario: Scenario, seed_date: date) -> LedgerStore:
    """Return the session copy of a ledger, loading it on first access."""
    ledgers = st.session_state.setdefault(LEDGER_STATE_KEY, {})
    if scenario.value not in ledgers:
        ledgers[scenario.value] = _fetch_ledger(scenario, seed_date)
    return ledgers[scenario.value]


def _format_currency(value: Decimal, currency_code: str = CURRENCY_CODE) -> str:
    """Format currency values for display."""
    return f"{value:,.2f} {currency_code}"


def _week_of_month(day: date) -> int:
    """Return the calendar row of a date in its month, weeks from Sunday."""
    first_weekday = (day.replace(day=1).weekday() + 1) % 7
    return math.ceil((day.day + first_weekday) / 7)


def _bucket_header(
    bucket: PeriodBucket | VarianceBucket,
    granularity: Granularity,
) -> str:
    """Return the column header of a bucket.

    Yearly views are bucketed by month, so their headers name month and year.
    """
    if granularity == Granularity.DAILY:
        return bucket.date.strftime("%a, %b %d").upper()
    if granularity == Granularity.WEEKLY:
        month = bucket.date.strftime("%b").upper()
        return f"{month} WEEK {_week_of_month(bucket.date)}"
    if granularity == Granularity.MONTHLY:
        return bucket.date.strftime("%B").upper()
    return bucket.date.strftime("%b %Y").upper()


def _fetch_last_updated(scenario: Scenario) -> datetime | None:
    """Return when the scenario ledger was last saved."""
    return build_load_ledger_use_case().last_updated(scenario)


def _category_rows(
    buckets: Sequence[PeriodBucket | VarianceBucket],
    headers: Sequence[str],
    tree: CategoryTree,
    amount_of: Callable[[PeriodBucket | VarianceBucket, str], Decimal],
) -> list[dict[str, str | float]]:
    """Return one indented row per category, groups before their children."""
    rows: list[dict[str, str | float]] = []

    def _visit(category: Category, depth: int) -> None:
        row: dict[str, str | float] = {
            "Category": f"{'  ' * depth}{category.name}"
        }
        for header, bucket in zip(headers, buckets):
            row[header] = float(amount_of(bucket, category.id))
        rows.append(row)
        for child in getattr(category, "children", ()):
            _visit(child, depth + 1)

    for root in tree.roots:
        _visit(root, 0)
    return rows


def _build_table_rows(
    view: PeriodView,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> list[dict[str, str | float]]:
    """Build one row per category with a column per bucket.

    Args:
        view: Projected period view.
        tree: Category tree giving row order and indentation.

    Returns:
        Rows ready for ``st.dataframe``, framed by opening and closing
        balance rows.
    """
    headers = [_bucket_header(b, view.granularity) for b in view.buckets]
    totals = CategoryTotals(tree)
    return [
        {
            "Category": "Opening Balance",
            **{
                header: float(bucket.opening_balance)
                for header, bucket in zip(headers, view.buckets)
            },
        },
        *_category_rows(view.buckets, headers, tree, totals.total),
        {
            "Category": "Closing Balance",
            **{
                header: float(closing)
                for header, closing in zip(headers, view.closing_balances)
            },
        },
    ]


def _build_variance_rows(
    buckets: Sequence[VarianceBucket],
    granularity: Granularity,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> list[dict[str, str | float]]:
    """Build actual minus budgeted rows with a column per bucket."""
    headers = [_bucket_header(b, granularity) for b in buckets]
    return _category_rows(
        buckets,
        headers,
        tree,
        lambda bucket, category_id: bucket.amounts.get(
            category_id, Decimal("0")
        ),
    )


def _prepare_balance_chart_data(
    view: PeriodView,
) -> list[dict[str, str | float]]:
    """Return Altair-ready closing balances per bucket."""
    return [
        {
            "period": _bucket_header(bucket, view.granularity),
            "start": bucket.date.isoformat(),
            "closing_balance": float(closing),
            "closing_label": _format_currency(closing),
        }
        for bucket, closing in zip(view.buckets, view.closing_balances)
    ]


def _render_balance_chart(data: Sequence[dict[str, str | float]]) -> None:
    """Render closing balances as a line chart."""
    if not data:
        st.info("No periods to chart.")
        return
    chart = (
        alt.Chart(alt.Data(values=list(data)))
        .mark_line(point=True, color="#1b9aaa")
        .encode(
            x=alt.X("start:T", title=None),
            y=alt.Y("closing_balance:Q", title="Closing balance"),
            tooltip=[
                alt.Tooltip("period:N"),
                alt.Tooltip("closing_label:N"),
            ],
        )
        .properties(height=260)
    )
    st.subheader("Closing balance")
    st.altair_chart(chart, width="stretch")


def _render_summary(view: PeriodView) -> None:
    """Render the four headline metrics of the first bucket."""
    summary = view.summary
    inflow_col, outflow_col, balance_col, facility_col = st.columns(4)
    inflow_col.metric("Total Inflow", _format_currency(summary.total_inflow))
    outflow_col.metric(
        "Total Outflow", _format_currency(summary.total_outflow)
    )
    balance_col.metric(
        "Balance (End of Period)",
        _format_currency(summary.closing_balance),
    )
    facility_col.metric(
        "Bank Facility Remaining",
        _format_currency(summary.facility_remaining),
    )


def _render_last_updated(scenario: Scenario) -> None:
    stamp = _fetch_last_updated(scenario)
    if stamp is None:
        st.caption("Last updated: not saved yet")
        return
    st.caption(f"Last updated: {stamp.isoformat(sep=' ', timespec='minutes')}")


def _render_edit_form(
    scenario: Scenario,
    store: LedgerStore,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> None:
    """Render the cell edit form and apply submitted edits."""
    leaves = list(tree.leaves())
    with st.form("edit_cell"):
        st.subheader("Edit cell")
        day = st.date_input("Date", value=st.session_state[ANCHOR_STATE_KEY])
        leaf = st.selectbox(
            "Category",
            options=leaves,
            format_func=lambda category: category.name,
        )
        raw_amount = st.text_input("Amount", placeholder="Empty clears")
        submitted = st.form_submit_button("Save")
    if not submitted:
        return
    result = build_edit_cell_use_case().execute_input(
        store, day, leaf.id, raw_amount
    )
    st.session_state[LEDGER_STATE_KEY][scenario.value] = result.store
    get_usage_logger().info(
        f"Cell edit {scenario.value} {day} {leaf.id} value={raw_amount!r}"
    )
    if not result.warnings:
        st.rerun()
    for warning in result.warnings:
        st.warning(warning.message)


def _payment_label(payment: Payment) -> str:
    label = f"{_format_currency(payment.amount)} by {payment.method.value}"
    if payment.is_linked:
        return f"{label} ({payment.role.value})"
    return label


def _render_move_form(
    scenario: Scenario,
    store: LedgerStore,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> None:
    """Render the payment move controls and apply a requested move.

    The payment list follows the selected source cell, so the controls are
    plain widgets rather than a form.
    """
    leaves = list(tree.leaves())
    st.subheader("Move payment")
    source_day = st.date_input(
        "From date",
        value=st.session_state[ANCHOR_STATE_KEY],
        key="move_source_date",
    )
    source = st.selectbox(
        "From category",
        options=leaves,
        format_func=lambda category: category.name,
        key="move_source_category",
    )
    record = store.find(source_day)
    payments = list(record.payments(source.id)) if record else []
    if not payments:
        st.caption("No payments in the selected cell.")
        return
    payment = st.selectbox(
        "Payment",
        options=payments,
        format_func=_payment_label,
        key="move_payment",
    )
    dest_day = st.date_input("To date", value=source_day, key="move_dest_date")
    dest = st.selectbox(
        "To category",
        options=leaves,
        index=leaves.index(source),
        format_func=lambda category: category.name,
        key="move_dest_category",
    )
    if not st.button("Move", key="move_submit"):
        return
    result = build_move_payment_use_case().execute(
        store,
        PaymentRef(payment.id, source_day, source.id),
        dest_day,
        dest.id,
    )
    st.session_state[LEDGER_STATE_KEY][scenario.value] = result.store
    get_usage_logger().info(
        f"Payment move {scenario.value} {payment.id} "
        f"{source_day}/{source.id} -> {dest_day}/{dest.id}"
    )
    if not result.warnings:
        st.rerun()
    for warning in result.warnings:
        st.warning(warning.message)


def _render_variance(granularity: Granularity, anchor: date) -> None:
    """Render actual minus budgeted totals for every category."""
    actual = _get_ledger(Scenario.ACTUAL, seed_date=date.today())
    budgeted = _get_ledger(Scenario.BUDGETED, seed_date=date.today())
    buckets = build_variance_view_use_case().execute(
        actual, budgeted, granularity, anchor
    )
    st.caption(
        f"{Scenario.ACTUAL.value} minus {Scenario.BUDGETED.value}; "
        "positive outflows are overspends."
    )
    st.dataframe(
        _build_variance_rows(buckets, granularity),
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Cash Flow", layout="wide")

    view_name = st.sidebar.selectbox(
        "Scenario",
        [*Scenario, VARIANCE_VIEW],
        format_func=lambda item: getattr(item, "value", item),
    )
    granularity = st.sidebar.selectbox(
        "Period",
        list(Granularity),
        format_func=lambda item: item.value,
    )
    if ANCHOR_STATE_KEY not in st.session_state:
        st.session_state[ANCHOR_STATE_KEY] = date.today()
    previous_col, next_col = st.sidebar.columns(2)
    if previous_col.button("Previous"):
        st.session_state[ANCHOR_STATE_KEY] = shift_anchor(
            st.session_state[ANCHOR_STATE_KEY], granularity, -1
        )
    if next_col.button("Next"):
        st.session_state[ANCHOR_STATE_KEY] = shift_anchor(
            st.session_state[ANCHOR_STATE_KEY], granularity, 1
        )
    anchor = st.sidebar.date_input(
        "Start date", value=st.session_state[ANCHOR_STATE_KEY]
    )
    st.session_state[ANCHOR_STATE_KEY] = anchor

    if view_name == VARIANCE_VIEW:
        st.title(f"{granularity.value} Variance")
        _render_variance(granularity, anchor)
        return

    scenario = Scenario(view_name)
    st.title(f"{granularity.value} Cash Flow")
    _render_last_updated(scenario)
    store = _get_ledger(scenario, seed_date=date.today())
    if not store.days:
        st.warning("The ledger is empty.")
        return
    view = build_period_view_use_case().execute(store, granularity, anchor)

    _render_summary(view)
    _render_balance_chart(_prepare_balance_chart_data(view))
    st.dataframe(_build_table_rows(view), width="stretch", hide_index=True)
    _render_edit_form(scenario, store)
    _render_move_form(scenario, store)


if __name__ == "__main__":  # pragma: no cover
    main()
