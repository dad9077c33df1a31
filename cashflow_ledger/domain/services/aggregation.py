"""Period projections over a ledger snapshot."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    Granularity,
    LedgerStore,
    Payment,
    PeriodBucket,
    PeriodSummary,
    VarianceBucket,
)
from cashflow_ledger.domain.services.period_bounds import bucket_bounds
from cashflow_ledger.domain.services.recalculation import (
    closing_balance,
    inflow_total,
    outflow_total,
)
from cashflow_ledger.domain.services.rollup import CategoryTotals


def project(
    store: LedgerStore,
    granularity: Granularity,
    anchor_date: date,
    bucket_count: int,
    *,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
    default_facility: BankFacility = DEFAULT_BANK_FACILITY,
) -> tuple[PeriodBucket, ...]:
    """Bucket a ledger into consecutive periods starting at an anchor.

    Args:
        store: Ledger snapshot, sorted by date.
        granularity: Bucket size.
        anchor_date: Date the first bucket starts at or contains.
        bucket_count: Number of buckets to build.
        tree: Category tree; cells of unknown categories are ignored.
        default_facility: Facility reported by buckets holding no day.

    Returns:
        tuple[PeriodBucket, ...]: Buckets in chronological order. Payments are
        concatenated, not summed, so each keeps its method and role.
    """
    leaf_ids = tree.leaf_ids()
    buckets: list[PeriodBucket] = []
    for offset in range(max(bucket_count, 0)):
        start, end = bucket_bounds(granularity, anchor_date, offset)
        days_in_period = [d for d in store.days if start <= d.date <= end]
        first_on_or_after = next(
            (d for d in store.days if d.date >= start),
            None,
        )
        cells: dict[str, list[Payment]] = {leaf_id: [] for leaf_id in leaf_ids}
        for record in days_in_period:
            for category_id, payments in record.cells.items():
                if category_id in cells:
                    cells[category_id].extend(payments)
        buckets.append(
            PeriodBucket(
                date=start,
                end=end,
                opening_balance=(
                    first_on_or_after.opening_balance
                    if first_on_or_after is not None
                    else Decimal("0")
                ),
                bank_facility=(
                    days_in_period[0].bank_facility
                    if days_in_period
                    else default_facility
                ),
                cells={key: tuple(value) for key, value in cells.items()},
            )
        )
    return tuple(buckets)


def summarize_bucket(
    bucket: PeriodBucket,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> PeriodSummary:
    """Return inflow, outflow, closing balance and facility headroom."""
    return PeriodSummary(
        total_inflow=inflow_total(bucket, tree),
        total_outflow=outflow_total(bucket, tree),
        closing_balance=closing_balance(bucket, tree),
        facility_remaining=bucket.bank_facility.remaining,
    )


def compute_variance(
    actual: Sequence[PeriodBucket],
    budgeted: Sequence[PeriodBucket],
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> tuple[VarianceBucket, ...]:
    """Return actual minus budgeted totals per bucket and category.

    Both sequences must come from the same granularity and anchor. Group
    categories are included so roll-up rows can be shown as well.
    """
    if len(actual) != len(budgeted):
        raise ValueError(
            "Variance requires the same number of actual and budgeted "
            f"buckets, got {len(actual)} and {len(budgeted)}"
        )
    actual_totals = CategoryTotals(tree)
    budgeted_totals = CategoryTotals(tree)
    category_ids = [category.id for category in tree.categories()]
    result: list[VarianceBucket] = []
    for actual_bucket, budgeted_bucket in zip(actual, budgeted):
        if actual_bucket.date != budgeted_bucket.date:
            raise ValueError(
                "Variance buckets are misaligned: "
                f"{actual_bucket.date} != {budgeted_bucket.date}"
            )
        result.append(
            VarianceBucket(
                date=actual_bucket.date,
                end=actual_bucket.end,
                amounts={
                    category_id: actual_totals.total(actual_bucket, category_id)
                    - budgeted_totals.total(budgeted_bucket, category_id)
                    for category_id in category_ids
                },
            )
        )
    return tuple(result)


__all__ = ["project", "summarize_bucket", "compute_variance"]
