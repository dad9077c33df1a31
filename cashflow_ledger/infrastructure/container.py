"""Composition root for wiring infrastructure adapters."""

from cashflow_ledger.application.ports.database import DatabaseEnginePort
from cashflow_ledger.application.ports.identifiers import (
    ClockPort,
    IdentifierGeneratorPort,
)
from cashflow_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from cashflow_ledger.application.use_cases.edit_cell import EditCellUseCase
from cashflow_ledger.application.use_cases.get_period_view import (
    GetPeriodViewUseCase,
)
from cashflow_ledger.application.use_cases.get_variance_view import (
    GetVarianceViewUseCase,
)
from cashflow_ledger.application.use_cases.load_ledger import (
    LoadLedgerUseCase,
)
from cashflow_ledger.application.use_cases.move_payment import (
    MovePaymentUseCase,
)
from cashflow_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from cashflow_ledger.infrastructure.identifiers import (
    SystemClock,
    UuidIdentifierGenerator,
)
from cashflow_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from cashflow_ledger.infrastructure.logging.logger import get_app_logger
from cashflow_ledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_id_generator() -> IdentifierGeneratorPort:
    return UuidIdentifierGenerator()


def build_clock() -> ClockPort:
    return SystemClock()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the SQL ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db, clock=build_clock())


def build_load_ledger_use_case(
    repository: LedgerRepositoryPort | None = None,
) -> LoadLedgerUseCase:
    """Return the load use case seeded from settings."""
    settings = LedgerSettings.from_env()
    return LoadLedgerUseCase(
        repository or build_ledger_repository(),
        seed=settings.seed(),
        logger=get_app_logger(),
    )


def build_edit_cell_use_case(
    repository: LedgerRepositoryPort | None = None,
) -> EditCellUseCase:
    """Return the edit use case persisting through the repository."""
    settings = LedgerSettings.from_env()
    return EditCellUseCase(
        build_id_generator(),
        repository=repository or build_ledger_repository(),
        default_facility=settings.default_facility,
        logger=get_app_logger(),
    )


def build_move_payment_use_case(
    repository: LedgerRepositoryPort | None = None,
) -> MovePaymentUseCase:
    """Return the move use case persisting through the repository."""
    settings = LedgerSettings.from_env()
    return MovePaymentUseCase(
        repository=repository or build_ledger_repository(),
        default_facility=settings.default_facility,
        logger=get_app_logger(),
    )


def build_period_view_use_case() -> GetPeriodViewUseCase:
    """Return the period projection use case."""
    settings = LedgerSettings.from_env()
    return GetPeriodViewUseCase(
        default_facility=settings.default_facility,
        logger=get_app_logger(),
    )


def build_variance_view_use_case() -> GetVarianceViewUseCase:
    """Return the actual versus budgeted comparison use case."""
    settings = LedgerSettings.from_env()
    return GetVarianceViewUseCase(
        default_facility=settings.default_facility,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_id_generator",
    "build_clock",
    "build_ledger_repository",
    "build_load_ledger_use_case",
    "build_edit_cell_use_case",
    "build_move_payment_use_case",
    "build_period_view_use_case",
    "build_variance_view_use_case",
]
