"""Domain package for ledger rules and core models."""

from .constants import (
    CARD_SUPPORT_CATEGORY_ID,
    CARRYING_COST_FACTOR,
    CREDIT_REPAYMENT_CATEGORY_ID,
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
    REPAYMENT_DELAY,
    SUPPLIER_PAYMENTS_GROUP_ID,
)
from .errors import CorruptLedgerStateError, LedgerError

__all__ = [
    "CARD_SUPPORT_CATEGORY_ID",
    "CARRYING_COST_FACTOR",
    "CREDIT_REPAYMENT_CATEGORY_ID",
    "DEFAULT_BANK_FACILITY",
    "DEFAULT_CATEGORY_TREE",
    "REPAYMENT_DELAY",
    "SUPPLIER_PAYMENTS_GROUP_ID",
    "CorruptLedgerStateError",
    "LedgerError",
]
