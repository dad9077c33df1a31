"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cashflow_ledger.application.use_cases import (
    EditCellUseCase,
    GetPeriodViewUseCase,
    GetVarianceViewUseCase,
    LoadLedgerUseCase,
    MovePaymentUseCase,
)
from cashflow_ledger.infrastructure import container
from cashflow_ledger.infrastructure import settings as settings_module
from cashflow_ledger.infrastructure.identifiers import (
    SystemClock,
    UuidIdentifierGenerator,
)
from cashflow_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)


@pytest.fixture
def fake_logger(monkeypatch):
    logger = MagicMock()
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    monkeypatch.setenv("LEDGER_DB_URL", "sqlite://")
    monkeypatch.setenv("LEDGER_SEED_OPENING_BALANCE", "10")
    monkeypatch.setenv("LEDGER_FACILITY_LIMIT", "100")
    monkeypatch.setenv("LEDGER_FACILITY_TAKEN", "40")
    monkeypatch.setenv("LEDGER_DAY_COUNT", "3")
    return logger


def test_build_ledger_repository_uses_given_port():
    """The repository wraps the provided database port."""
    db_port = MagicMock()

    repository = container.build_ledger_repository(db_port)

    assert isinstance(repository, SqlAlchemyLedgerRepository)
    assert repository._db_port is db_port
    assert isinstance(repository._clock, SystemClock)


def test_build_id_generator_returns_unique_ids():
    """Generated ids are distinct strings."""
    generator = container.build_id_generator()

    assert isinstance(generator, UuidIdentifierGenerator)
    assert generator.new_id() != generator.new_id()


def test_build_load_ledger_use_case_reads_seed_from_settings(fake_logger):
    """The load use case is seeded from environment settings."""
    repository = MagicMock()

    use_case = container.build_load_ledger_use_case(repository)

    assert isinstance(use_case, LoadLedgerUseCase)
    assert use_case._repository is repository
    assert use_case._logger is fake_logger
    assert use_case._seed.opening_balance == Decimal("10")
    assert use_case._seed.facility.remaining == Decimal("60")
    assert use_case._seed.day_count == 3


def test_mutation_use_cases_share_default_facility(fake_logger):
    """Mutation and view use cases receive the configured facility."""
    repository = MagicMock()

    edit = container.build_edit_cell_use_case(repository)
    move = container.build_move_payment_use_case(repository)
    view = container.build_period_view_use_case()
    variance = container.build_variance_view_use_case()

    assert isinstance(edit, EditCellUseCase)
    assert isinstance(move, MovePaymentUseCase)
    assert isinstance(view, GetPeriodViewUseCase)
    assert isinstance(variance, GetVarianceViewUseCase)
    for use_case in (edit, move, view, variance):
        assert use_case._default_facility.limit == Decimal("100")
        assert use_case._logger is fake_logger
    assert edit._repository is repository
    assert move._repository is repository
