"""Domain models package."""

from .categories import (
    Category,
    CategoryKind,
    CategoryTree,
    GroupCategory,
    LeafCategory,
)
from .ledger import (
    BankFacility,
    DayRecord,
    LedgerSeed,
    LedgerStore,
    Payment,
    PaymentMethod,
    PaymentRef,
    PaymentRole,
    Scenario,
)
from .periods import Granularity, PeriodBucket, PeriodSummary, VarianceBucket
from .results import LedgerWarning, LedgerWarningCode, MutationResult

__all__ = [
    "Category",
    "CategoryKind",
    "CategoryTree",
    "GroupCategory",
    "LeafCategory",
    "BankFacility",
    "DayRecord",
    "LedgerSeed",
    "LedgerStore",
    "Payment",
    "PaymentMethod",
    "PaymentRef",
    "PaymentRole",
    "Scenario",
    "Granularity",
    "PeriodBucket",
    "PeriodSummary",
    "VarianceBucket",
    "LedgerWarning",
    "LedgerWarningCode",
    "MutationResult",
]
