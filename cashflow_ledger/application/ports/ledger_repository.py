"""Port for loading and saving ledger snapshots."""

from datetime import datetime
from typing import Protocol

from cashflow_ledger.domain.models import LedgerStore


class LedgerRepositoryPort(Protocol):
    """Port persisting one ledger snapshot per scenario."""

    def load(self, scenario: str) -> LedgerStore | None:
        """Return the stored snapshot, or None when nothing is stored.

        Raises:
            CorruptLedgerStateError: If stored data fails validation.
        """

    def save(self, store: LedgerStore) -> None:
        """Persist a snapshot under its scenario name."""

    def last_updated(self, scenario: str) -> datetime | None:
        """Return when the scenario was last saved, or None if never."""


__all__ = ["LedgerRepositoryPort"]
