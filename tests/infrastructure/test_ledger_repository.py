"""Tests for the SQLAlchemy ledger repository."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from cashflow_ledger.domain.constants import DEFAULT_BANK_FACILITY
from cashflow_ledger.domain.errors import CorruptLedgerStateError
from cashflow_ledger.domain.services.bootstrap import generate_initial_store
from cashflow_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)


def _build_repository():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    clock = MagicMock()
    clock.now.return_value = datetime(2024, 8, 1, 12, 0, tzinfo=timezone.utc)
    return SqlAlchemyLedgerRepository(db_port, clock=clock), engine


def _store(name: str = "Actual", opening: str = "100"):
    return generate_initial_store(
        name, date(2024, 8, 1), 3, Decimal(opening), DEFAULT_BANK_FACILITY
    )


def test_load_returns_none_for_unknown_scenario() -> None:
    """A scenario that was never saved has no snapshot."""
    repository, _ = _build_repository()

    assert repository.load("Actual") is None


def test_save_then_load_restores_store() -> None:
    """Saved snapshots are read back unchanged."""
    repository, engine = _build_repository()
    store = _store()

    repository.save(store)

    assert repository.load("Actual") == store
    with engine.connect() as conn:
        updated_at = conn.execute(
            text("SELECT updated_at FROM ledger_snapshots")
        ).scalar_one()
    assert updated_at == "2024-08-01T12:00:00+00:00"


def test_save_replaces_existing_snapshot_per_scenario() -> None:
    """One row is kept per scenario; scenarios stay independent."""
    repository, engine = _build_repository()

    repository.save(_store("Actual", "1"))
    repository.save(_store("Actual", "2"))
    repository.save(_store("Budgeted", "3"))

    assert repository.load("Actual").days[0].opening_balance == Decimal("2")
    assert repository.load("Budgeted").days[0].opening_balance == Decimal("3")
    with engine.connect() as conn:
        count = conn.execute(
            text("SELECT COUNT(*) FROM ledger_snapshots")
        ).scalar_one()
    assert count == 2


def test_invalid_json_raises_corrupt_state() -> None:
    """Unreadable payloads surface as corrupt ledger state."""
    repository, engine = _build_repository()
    repository.load("Actual")
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO ledger_snapshots (scenario, payload, updated_at) "
                "VALUES ('Actual', '{not json', 'now')"
            )
        )

    with pytest.raises(CorruptLedgerStateError):
        repository.load("Actual")


def test_last_updated_reads_back_the_save_stamp() -> None:
    """The clock stamp written by save is returned per scenario."""
    repository, _ = _build_repository()

    assert repository.last_updated("Actual") is None
    repository.save(_store())

    assert repository.last_updated("Actual") == datetime(
        2024, 8, 1, 12, 0, tzinfo=timezone.utc
    )
    assert repository.last_updated("Budgeted") is None


def test_last_updated_rejects_unreadable_stamp() -> None:
    """A stamp that is not ISO 8601 surfaces as corrupt ledger state."""
    repository, engine = _build_repository()
    repository.load("Actual")
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO ledger_snapshots (scenario, payload, updated_at) "
                "VALUES ('Actual', '{}', 'yesterday')"
            )
        )

    with pytest.raises(CorruptLedgerStateError):
        repository.last_updated("Actual")
