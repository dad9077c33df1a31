"""CLI adapter printing a period report, or Actual against Budgeted variance.

Configuration comes from environment variables:

* ``LEDGER_SCENARIO`` (Actual, Budgeted or Variance, default Actual);
* ``LEDGER_GRANULARITY`` (Daily, Weekly, Monthly or Yearly, default Daily);
* ``LEDGER_ANCHOR_DATE`` (YYYY-MM-DD, default today);
* ``LEDGER_BUCKETS`` (default 7).
"""

from datetime import date
import os

from cashflow_ledger.domain.constants import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_CATEGORY_TREE,
    VARIANCE_VIEW,
)
from cashflow_ledger.domain.models import Granularity, Scenario
from cashflow_ledger.infrastructure.container import (
    build_load_ledger_use_case,
    build_period_view_use_case,
    build_variance_view_use_case,
)
from cashflow_ledger.infrastructure.logging.logger import get_app_logger


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_enum(enum_cls, value: str | None, default, logger):
    if not value:
        return default
    for member in enum_cls:
        if member.value.lower() == value.strip().lower():
            return member
    logger.warning(
        f"Unknown {enum_cls.__name__} '{value}'; using {default.value}"
    )
    return default


def _parse_bucket_count(value: str | None, logger) -> int:
    if not value:
        return DEFAULT_BUCKET_COUNT
    try:
        count = int(value)
    except ValueError:
        count = 0
    if count < 1:
        logger.warning(
            f"Invalid bucket count '{value}'; using {DEFAULT_BUCKET_COUNT}"
        )
        return DEFAULT_BUCKET_COUNT
    return count


def _print_period_report(scenario, granularity, anchor, bucket_count) -> None:
    store = build_load_ledger_use_case().execute(scenario, seed_date=anchor)
    view = build_period_view_use_case().execute(
        store,
        granularity,
        anchor,
        bucket_count=bucket_count,
    )

    print(
        f"{granularity.value} cash flow for {scenario.value} "
        f"from {anchor.isoformat()}"
    )
    print(
        f"Total inflow={view.summary.total_inflow:,.2f}, "
        f"total outflow={view.summary.total_outflow:,.2f}, "
        f"closing balance={view.summary.closing_balance:,.2f}, "
        f"facility remaining={view.summary.facility_remaining:,.2f}"
    )
    for bucket, closing in zip(view.buckets, view.closing_balances):
        print(
            f"{bucket.date.isoformat()}..{bucket.end.isoformat()}: "
            f"opening={bucket.opening_balance:,.2f} "
            f"closing={closing:,.2f}"
        )


def _print_variance_report(granularity, anchor, bucket_count) -> None:
    """Print actual minus budgeted totals of each top-level category."""
    load_use_case = build_load_ledger_use_case()
    actual = load_use_case.execute(Scenario.ACTUAL, seed_date=anchor)
    budgeted = load_use_case.execute(Scenario.BUDGETED, seed_date=anchor)
    buckets = build_variance_view_use_case().execute(
        actual,
        budgeted,
        granularity,
        anchor,
        bucket_count=bucket_count,
    )

    print(
        f"{granularity.value} variance of {Scenario.ACTUAL.value} against "
        f"{Scenario.BUDGETED.value} from {anchor.isoformat()}"
    )
    for bucket in buckets:
        figures = " ".join(
            f"{root.id}={bucket.amounts[root.id]:+,.2f}"
            for root in DEFAULT_CATEGORY_TREE.roots
        )
        print(f"{bucket.date.isoformat()}..{bucket.end.isoformat()}: {figures}")


def main() -> None:
    """Load the configured ledgers and print the report."""
    logger = get_app_logger()
    raw_scenario = os.getenv("LEDGER_SCENARIO")
    granularity = _parse_enum(
        Granularity,
        os.getenv("LEDGER_GRANULARITY"),
        Granularity.DAILY,
        logger,
    )
    anchor = _parse_date(os.getenv("LEDGER_ANCHOR_DATE"), logger) or date.today()
    bucket_count = _parse_bucket_count(os.getenv("LEDGER_BUCKETS"), logger)

    if raw_scenario and raw_scenario.strip().lower() == VARIANCE_VIEW.lower():
        _print_variance_report(granularity, anchor, bucket_count)
        return
    scenario = _parse_enum(Scenario, raw_scenario, Scenario.ACTUAL, logger)
    _print_period_report(scenario, granularity, anchor, bucket_count)


if __name__ == "__main__":  # pragma: no cover
    main()
