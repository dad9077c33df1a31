"""Balance recalculation over an ordered ledger."""

from dataclasses import replace
from decimal import Decimal

from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.models import (
    CategoryKind,
    CategoryTree,
    DayRecord,
    LedgerStore,
    PeriodBucket,
)

ZERO = Decimal("0")


def _kind_total(
    day: DayRecord | PeriodBucket,
    kind: CategoryKind,
    tree: CategoryTree,
) -> Decimal:
    total = ZERO
    for category_id, payments in day.cells.items():
        # Unknown ids and group ids never hold payments for totals.
        if not tree.is_leaf(category_id):
            continue
        if tree.kind_of(category_id) != kind:
            continue
        for payment in payments:
            total += payment.amount
    return total


def inflow_total(
    day: DayRecord | PeriodBucket,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> Decimal:
    """Sum the payments of every inflow leaf of a day or bucket."""
    return _kind_total(day, CategoryKind.INFLOW, tree)


def outflow_total(
    day: DayRecord | PeriodBucket,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> Decimal:
    """Sum the payments of every outflow leaf of a day or bucket."""
    return _kind_total(day, CategoryKind.OUTFLOW, tree)


def closing_balance(
    day: DayRecord | PeriodBucket,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> Decimal:
    """Return opening balance plus inflows minus outflows."""
    return day.opening_balance + inflow_total(day, tree) - outflow_total(
        day, tree
    )


def recalculate_balances(
    store: LedgerStore,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> LedgerStore:
    """Recompute every opening balance from the first day forward.

    The first opening balance is the seed and is kept as is; each following
    day opens at the previous day's closing balance. The fold is pure and
    idempotent.

    Args:
        store: Ledger sorted by date.
        tree: Category tree deciding which cells are inflows or outflows.

    Returns:
        LedgerStore: New store with consistent opening balances.
    """
    if not store.days:
        return store
    days = [store.days[0]]
    for record in store.days[1:]:
        opening = closing_balance(days[-1], tree)
        if record.opening_balance != opening:
            record = replace(record, opening_balance=opening)
        days.append(record)
    return replace(store, days=tuple(days))


__all__ = [
    "inflow_total",
    "outflow_total",
    "closing_balance",
    "recalculate_balances",
]
