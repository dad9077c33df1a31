"""Domain models for ledger days, payments and scenarios."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType


class PaymentMethod(str, Enum):
    """Closed set of payment methods.

    Values match the labels stored in persisted snapshots.
    """

    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"
    FACILITY = "Facility"
    DEFERRED_CREDIT = "Credit Card"
    POST_DATED_CHEQUE = "PDC"


class PaymentRole(str, Enum):
    """Position of a payment inside a linked transaction."""

    STANDALONE = "standalone"
    PRIMARY = "primary"
    SUPPORT = "support"
    REPAYMENT = "repayment"


class Scenario(str, Enum):
    """Independent ledgers kept side by side."""

    ACTUAL = "Actual"
    BUDGETED = "Budgeted"


@dataclass(frozen=True)
class Payment:
    """Single payment recorded in a ledger cell."""

    id: str
    amount: Decimal
    method: PaymentMethod
    transaction_id: str | None = None
    role: PaymentRole = PaymentRole.STANDALONE
    details: str | None = None
    cheque_number: str | None = None

    @property
    def is_linked(self) -> bool:
        return self.transaction_id is not None


@dataclass(frozen=True)
class BankFacility:
    """Bank facility usage for a day."""

    limit: Decimal
    taken: Decimal

    @property
    def remaining(self) -> Decimal:
        """Return limit minus taken."""
        return self.limit - self.taken


@dataclass(frozen=True)
class DayRecord:
    """Ledger snapshot for one calendar date.

    Attributes:
        date: Calendar date, unique within a store.
        opening_balance: Cash position at the start of the day.
        bank_facility: Facility limit and usage on that day.
        cells: Leaf category id mapped to the payments of the day.
    """

    date: date
    opening_balance: Decimal
    bank_facility: BankFacility
    cells: Mapping[str, tuple[Payment, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def payments(self, category_id: str) -> tuple[Payment, ...]:
        return self.cells.get(category_id, ())


@dataclass(frozen=True)
class LedgerStore:
    """Chronologically ordered day records for one scenario."""

    name: str
    days: tuple[DayRecord, ...] = ()

    def find(self, day: date) -> DayRecord | None:
        """Return the record for a date, if present."""
        for record in self.days:
            if record.date == day:
                return record
        return None

    def total_amount(self) -> Decimal:
        """Sum every payment amount across the store."""
        return sum(
            (
                payment.amount
                for record in self.days
                for payments in record.cells.values()
                for payment in payments
            ),
            start=Decimal("0"),
        )


@dataclass(frozen=True)
class PaymentRef:
    """Location of a payment selected for relocation."""

    payment_id: str
    source_date: date
    source_category_id: str


@dataclass(frozen=True)
class LedgerSeed:
    """Configuration used to bootstrap an empty ledger."""

    opening_balance: Decimal
    facility: BankFacility
    day_count: int


__all__ = [
    "PaymentMethod",
    "PaymentRole",
    "Scenario",
    "Payment",
    "BankFacility",
    "DayRecord",
    "LedgerStore",
    "PaymentRef",
    "LedgerSeed",
]
