"""Tests for the move payment use case."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

from cashflow_ledger.application.use_cases.move_payment import (
    MovePaymentUseCase,
)
from cashflow_ledger.domain.constants import DEFAULT_BANK_FACILITY
from cashflow_ledger.domain.models import (
    LedgerWarningCode,
    Payment,
    PaymentMethod,
    PaymentRef,
)
from cashflow_ledger.domain.services.bootstrap import generate_initial_store
from cashflow_ledger.domain.services.linked_transactions import edit_cell

DAY = date(2024, 8, 1)


def _store():
    store = generate_initial_store(
        "Actual", DAY, 5, Decimal("100"), DEFAULT_BANK_FACILITY
    )
    payment = Payment("p-1", Decimal("30"), PaymentMethod.BANK_TRANSFER)
    return edit_cell(
        store, DAY, "outflow_gov_taxes", [payment], new_id=lambda: "unused"
    ).store


def test_execute_moves_and_persists() -> None:
    """A successful move is saved and logged."""
    repository = MagicMock()
    logger = MagicMock()
    use_case = MovePaymentUseCase(repository=repository, logger=logger)

    result = use_case.execute(
        _store(),
        PaymentRef("p-1", DAY, "outflow_gov_taxes"),
        DAY + timedelta(days=2),
        "outflow_gov_taxes",
    )

    repository.save.assert_called_once_with(result.store)
    logger.info.assert_called_once()
    assert result.store.days[1].opening_balance == Decimal("100")
    assert result.store.days[3].opening_balance == Decimal("70")


def test_execute_skips_persistence_when_payment_is_missing() -> None:
    """Unresolvable references are logged and nothing is saved."""
    repository = MagicMock()
    logger = MagicMock()
    use_case = MovePaymentUseCase(repository=repository, logger=logger)
    store = _store()

    result = use_case.execute(
        store,
        PaymentRef("missing", DAY, "outflow_gov_taxes"),
        DAY,
        "outflow_gov_taxes",
    )

    assert result.store is store
    repository.save.assert_not_called()
    message = logger.warning.call_args[0][0]
    assert message.startswith(LedgerWarningCode.PAYMENT_NOT_FOUND.value)
