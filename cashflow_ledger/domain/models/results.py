"""Typed results returned by ledger mutations."""

from dataclasses import dataclass
from enum import Enum

from cashflow_ledger.domain.models.ledger import LedgerStore


class LedgerWarningCode(str, Enum):
    """Recoverable conditions surfaced to callers."""

    MALFORMED_AMOUNT = "malformed_amount"
    UNKNOWN_CATEGORY = "unknown_category"
    INCONSISTENT_LINKED_MOVE = "inconsistent_linked_move"
    PAYMENT_NOT_FOUND = "payment_not_found"


@dataclass(frozen=True)
class LedgerWarning:
    """Warning attached to a mutation result."""

    code: LedgerWarningCode
    message: str


@dataclass(frozen=True)
class MutationResult:
    """New ledger snapshot plus the warnings raised while building it."""

    store: LedgerStore
    warnings: tuple[LedgerWarning, ...] = ()

    def has_warning(self, code: LedgerWarningCode) -> bool:
        return any(warning.code == code for warning in self.warnings)


__all__ = ["LedgerWarningCode", "LedgerWarning", "MutationResult"]
