"""Use case comparing actual and budgeted ledgers."""

from datetime import date

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
    VarianceBucket,
)
from cashflow_ledger.domain.services.aggregation import (
    compute_variance,
    project,
)
from cashflow_ledger.infrastructure.logging.logger import get_app_logger


class GetVarianceViewUseCase:
    """Compute actual minus budgeted totals per period and category."""

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
        actual: LedgerStore,
        budgeted: LedgerStore,
        granularity: Granularity,
        anchor_date: date,
        bucket_count: int = DEFAULT_BUCKET_COUNT,
    ) -> tuple[VarianceBucket, ...]:
        """Project both ledgers identically and diff their totals."""
        actual_buckets, budgeted_buckets = (
            project(
                store,
                granularity,
                anchor_date,
                bucket_count,
                tree=self._tree,
                default_facility=self._default_facility,
            )
            for store in (actual, budgeted)
        )
        self._logger.debug(
            f"Comparing {actual.name} with {budgeted.name} over "
            f"{bucket_count} {granularity.value} buckets from {anchor_date}"
        )
        return compute_variance(actual_buckets, budgeted_buckets, self._tree)


__all__ = ["GetVarianceViewUseCase"]
