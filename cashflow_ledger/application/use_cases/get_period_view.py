"""Use case to project a ledger into period buckets."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_BUCKET_COUNT,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    Granularity,
    LedgerStore,
    PeriodBucket,
    PeriodSummary,
)
from cashflow_ledger.domain.services.aggregation import (
    project,
    summarize_bucket,
)
from cashflow_ledger.domain.services.recalculation import closing_balance
from cashflow_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PeriodView:
    """Buckets of a projection with their headline figures.

    Attributes:
        granularity: Bucket size used.
        buckets: Buckets in chronological order.
        summary: Figures of the first bucket.
        closing_balances: Closing balance of every bucket.
    """

    granularity: Granularity
    buckets: tuple[PeriodBucket, ...]
    summary: PeriodSummary
    closing_balances: tuple[Decimal, ...]


class GetPeriodViewUseCase:
    """Build the period view displayed by the interfaces."""

    def __init__(
        self,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
        default_facility: BankFacility = DEFAULT_BANK_FACILITY,
        logger=None,
    ) -> None:
        self._tree = tree
        self._default_facility = default_facility
        self._logger = logger or get_app_logger()

    def execute(
        self,
        store: LedgerStore,
        granularity: Granularity,
        anchor_date: date,
        bucket_count: int = DEFAULT_BUCKET_COUNT,
    ) -> PeriodView:
        """Return buckets, the first bucket summary and closing balances."""
        buckets = project(
            store,
            granularity,
            anchor_date,
            bucket_count,
            tree=self._tree,
            default_facility=self._default_facility,
        )
        if buckets:
            summary = summarize_bucket(buckets[0], self._tree)
        else:
            zero = Decimal("0")
            summary = PeriodSummary(zero, zero, zero, zero)
        self._logger.debug(
            f"Projected {store.name} into {len(buckets)} "
            f"{granularity.value} buckets from {anchor_date}"
        )
        return PeriodView(
            granularity=granularity,
            buckets=buckets,
            summary=summary,
            closing_balances=tuple(
                closing_balance(bucket, self._tree) for bucket in buckets
            ),
        )


__all__ = ["GetPeriodViewUseCase", "PeriodView"]
