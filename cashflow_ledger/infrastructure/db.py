"""Database infrastructure for the cashflow ledger.

This module exposes helpers to create and reuse the SQLAlchemy engine backing
ledger persistence. It belongs to the infrastructure layer because it deals
with an external system (SQLite by default, any SQLAlchemy URL otherwise).
"""

from pathlib import Path
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from cashflow_ledger.application.ports.database import DatabaseEnginePort
from cashflow_ledger.infrastructure.settings import LedgerSettings


def _ensure_sqlite_directory(db_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(db_url).database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: SQLite engines use SQLAlchemy defaults; server databases get
        a small connection pool with health checks enabled.
    """
    if db_url.startswith("sqlite"):
        _ensure_sqlite_directory(db_url)
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine for ``LedgerSettings.database_url``.
    """
    global _ledger_engine
    if _ledger_engine is None:
        dotenv.load_dotenv()
        settings = LedgerSettings.from_env()
        _ledger_engine = _create_engine(settings.database_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to ledger storage.
        """
        return get_ledger_engine()


__all__ = ["get_ledger_engine", "SqlAlchemyDatabaseEngineAdapter"]
