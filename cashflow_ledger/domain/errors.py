"""Domain exceptions for the ledger engine."""


class LedgerError(Exception):
    """Base class for ledger failures."""


class CorruptLedgerStateError(LedgerError):
    """Persisted ledger data failed structural validation."""


__all__ = ["LedgerError", "CorruptLedgerStateError"]
