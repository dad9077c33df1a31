"""SQLAlchemy-backed repository for ledger snapshots."""

from datetime import datetime
import json

from sqlalchemy import text

from cashflow_ledger.application.ports.database import DatabaseEnginePort
from cashflow_ledger.application.ports.identifiers import ClockPort
from cashflow_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from cashflow_ledger.domain.constants import DEFAULT_CATEGORY_TREE
from cashflow_ledger.domain.errors import CorruptLedgerStateError
from cashflow_ledger.domain.models import CategoryTree, LedgerStore
from cashflow_ledger.infrastructure.identifiers import SystemClock
from cashflow_ledger.infrastructure.ledger_codec import (
    payload_to_store,
    store_to_payload,
)

CREATE_SNAPSHOTS_SQL = text(
    """
    CREATE TABLE IF NOT EXISTS ledger_snapshots (
        scenario TEXT PRIMARY KEY,
        payload TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """
)

SELECT_SNAPSHOT_SQL = text(
    """
    SELECT scenario, payload, updated_at
    FROM ledger_snapshots
    WHERE scenario = :scenario
    """
)

SELECT_UPDATED_AT_SQL = text(
    """
    SELECT updated_at
    FROM ledger_snapshots
    WHERE scenario = :scenario
    """
)

UPSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO ledger_snapshots (scenario, payload, updated_at)
    VALUES (:scenario, :payload, :updated_at)
    ON CONFLICT (scenario) DO UPDATE SET
        payload = excluded.payload,
        updated_at = excluded.updated_at
    """
)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Repository storing one JSON snapshot per scenario."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        clock: ClockPort | None = None,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            clock: Clock stamping saved snapshots.
            tree: Category tree used when decoding snapshots.
        """
        self._db_port = db_port
        self._clock = clock or SystemClock()
        self._tree = tree
        self._schema_ready = False

    def _ensure_schema(self, engine) -> None:
        if self._schema_ready:
            return
        with engine.begin() as conn:
            conn.execute(CREATE_SNAPSHOTS_SQL)
        self._schema_ready = True

    def load(self, scenario: str) -> LedgerStore | None:
        """Return the stored snapshot for a scenario.

        Raises:
            CorruptLedgerStateError: If the stored payload is not valid JSON
                or fails structural validation.
        """
        engine = self._db_port.get_ledger_engine()
        self._ensure_schema(engine)
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_SNAPSHOT_SQL,
                {"scenario": scenario},
            ).first()
        if row is None:
            return None
        try:
            payload = json.loads(row.payload)
        except (TypeError, ValueError) as exc:
            raise CorruptLedgerStateError(
                f"Stored ledger for {scenario} is not valid JSON"
            ) from exc
        return payload_to_store(payload, scenario, self._tree)

    def save(self, store: LedgerStore) -> None:
        """Insert or replace the snapshot of the store's scenario."""
        engine = self._db_port.get_ledger_engine()
        self._ensure_schema(engine)
        with engine.begin() as conn:
            conn.execute(
                UPSERT_SNAPSHOT_SQL,
                {
                    "scenario": store.name,
                    "payload": json.dumps(store_to_payload(store)),
                    "updated_at": self._clock.now().isoformat(),
                },
            )

    def last_updated(self, scenario: str) -> datetime | None:
        """Return the save timestamp of a scenario, or None if never saved.

        Raises:
            CorruptLedgerStateError: If the stored stamp is not ISO 8601.
        """
        engine = self._db_port.get_ledger_engine()
        self._ensure_schema(engine)
        with engine.connect() as conn:
            stamp = conn.execute(
                SELECT_UPDATED_AT_SQL,
                {"scenario": scenario},
            ).scalar_one_or_none()
        if stamp is None:
            return None
        try:
            return datetime.fromisoformat(stamp)
        except ValueError as exc:
            raise CorruptLedgerStateError(
                f"Stored timestamp for {scenario} is invalid: {stamp!r}"
            ) from exc


__all__ = ["SqlAlchemyLedgerRepository"]
