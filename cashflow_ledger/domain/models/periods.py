"""Domain models for period projections."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

from cashflow_ledger.domain.models.ledger import BankFacility, Payment


class Granularity(str, Enum):
    """Bucket size used when projecting a ledger."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


@dataclass(frozen=True)
class PeriodBucket:
    """Aggregated view over the days of one period.

    Attributes:
        date: First calendar date of the period.
        end: Last calendar date of the period.
        opening_balance: Opening balance of the first day on or after date.
        bank_facility: Facility of the first day inside the period.
        cells: Leaf category id mapped to every payment of the period.
    """

    date: date
    end: date
    opening_balance: Decimal
    bank_facility: BankFacility
    cells: Mapping[str, tuple[Payment, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def payments(self, category_id: str) -> tuple[Payment, ...]:
        return self.cells.get(category_id, ())


@dataclass(frozen=True)
class PeriodSummary:
    """Headline figures for a period."""

    total_inflow: Decimal
    total_outflow: Decimal
    closing_balance: Decimal
    facility_remaining: Decimal

    @property
    def net_flow(self) -> Decimal:
        """Return total_inflow minus total_outflow."""
        return self.total_inflow - self.total_outflow


@dataclass(frozen=True)
class VarianceBucket:
    """Per-category difference between actual and budgeted totals."""

    date: date
    end: date
    amounts: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amounts", MappingProxyType(dict(self.amounts)))


__all__ = ["Granularity", "PeriodBucket", "PeriodSummary", "VarianceBucket"]
