"""Bootstrap of an empty ledger."""

from datetime import date, timedelta
from decimal import Decimal

from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.models import BankFacility, CategoryTree, LedgerStore
from cashflow_ledger.domain.services.day_store import new_day_record
from cashflow_ledger.domain.services.recalculation import recalculate_balances


def generate_initial_store(
    name: str,
    seed_date: date,
    day_count: int,
    seed_opening_balance: Decimal,
    seed_facility: BankFacility,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> LedgerStore:
    """Create consecutive empty days starting at seed_date.

    Args:
        name: Scenario name of the store.
        seed_date: First date of the ledger.
        day_count: Number of consecutive days to create.
        seed_opening_balance: Opening balance of the first day.
        seed_facility: Facility recorded on every created day.
        tree: Category tree providing the leaf cells.

    Returns:
        LedgerStore: Recalculated store.
    """
    days = tuple(
        new_day_record(
            seed_date + timedelta(days=offset),
            tree,
            seed_facility,
            opening_balance=seed_opening_balance,
        )
        for offset in range(max(day_count, 0))
    )
    return recalculate_balances(LedgerStore(name=name, days=days), tree)


__all__ = ["generate_initial_store"]
