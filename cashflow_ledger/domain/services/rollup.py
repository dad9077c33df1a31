"""Category tree roll-ups for days and period buckets."""

from datetime import date
from decimal import Decimal

from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.models import (
    Category,
    CategoryTree,
    DayRecord,
    LeafCategory,
    PeriodBucket,
)

ZERO = Decimal("0")


class CategoryTotals:
    """Memoized category totals for one query pass.

    Create one instance per projection or render; the cache is keyed by
    ``(date, category_id)`` and is never persisted.
    """

    def __init__(self, tree: CategoryTree = DEFAULT_CATEGORY_TREE) -> None:
        self._tree = tree
        self._cache: dict[tuple[date, str], Decimal] = {}

    def total(self, day: DayRecord | PeriodBucket, category_id: str) -> Decimal:
        """Return the total of a category on a day.

        Leaves sum their payments, groups sum their children. Unknown ids
        total zero.
        """
        category = self._tree.find(category_id)
        if category is None:
            return ZERO
        return self._total(day, category)

    def _total(self, day: DayRecord | PeriodBucket, category: Category) -> Decimal:
        key = (day.date, category.id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        if isinstance(category, LeafCategory):
            result = sum(
                (payment.amount for payment in day.payments(category.id)),
                start=ZERO,
            )
        else:
            result = sum(
                (self._total(day, child) for child in category.children),
                start=ZERO,
            )
        self._cache[key] = result
        return result


def category_total(
    day: DayRecord | PeriodBucket,
    category_id: str,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> Decimal:
    """Return the roll-up total of a category for a single query."""
    return CategoryTotals(tree).total(day, category_id)


__all__ = ["CategoryTotals", "category_total"]
