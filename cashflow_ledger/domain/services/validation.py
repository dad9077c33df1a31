"""Domain validation helpers."""

from datetime import date
from logging import Logger

from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.models import BankFacility, CategoryTree, LedgerStore
from cashflow_ledger.domain.services.recalculation import closing_balance


def find_balance_drift(
    store: LedgerStore,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> list[date]:
    """Return the dates whose opening balance disagrees with the fold.

    Args:
        store: Ledger snapshot, usually freshly loaded from storage.
        tree: Category tree deciding inflows and outflows.

    Returns:
        list[date]: Dates needing recalculation, in ledger order.
    """
    drifted: list[date] = []
    previous = None
    for record in store.days:
        if previous is not None:
            # Compare against the stored previous day, not a recomputed one.
            if record.opening_balance != closing_balance(previous, tree):
                drifted.append(record.date)
        previous = record
    return drifted


def find_order_violations(store: LedgerStore) -> list[date]:
    """Return dates that are duplicated or out of chronological order."""
    violations: list[date] = []
    for earlier, later in zip(store.days, store.days[1:]):
        if later.date <= earlier.date:
            violations.append(later.date)
    return violations


def validate_facility_usage(
    day: date,
    facility: BankFacility,
    logger: Logger,
) -> None:
    """Warn when a facility is overdrawn or carries negative figures.

    Args:
        day: Date the facility belongs to.
        facility: Facility limit and usage.
        logger: Logger used for warnings.
    """
    if facility.limit < 0 or facility.taken < 0:
        logger.warning(
            f"Bank facility on {day} has negative figures: "
            f"limit={facility.limit}, taken={facility.taken}"
        )
    if facility.taken > facility.limit:
        logger.warning(
            f"Bank facility on {day} is overdrawn: "
            f"taken={facility.taken} exceeds limit={facility.limit}"
        )


__all__ = [
    "find_balance_drift",
    "find_order_violations",
    "validate_facility_usage",
]
