"""Tests for moving payments between cells."""

from datetime import date, timedelta
from decimal import Decimal

from cashflow_ledger.domain.constants import (
    CARD_SUPPORT_CATEGORY_ID,
    DEFAULT_BANK_FACILITY,
)
from cashflow_ledger.domain.models import (
    LedgerStore,
    LedgerWarningCode,
    Payment,
    PaymentMethod,
    PaymentRef,
)
from cashflow_ledger.domain.services.bootstrap import generate_initial_store
from cashflow_ledger.domain.services.linked_transactions import edit_cell
from cashflow_ledger.domain.services.recalculation import closing_balance
from cashflow_ledger.domain.services.relocation import move_payment

DAY = date(2024, 8, 1)
LATER = DAY + timedelta(days=3)


def _store_with_rent() -> LedgerStore:
    store = generate_initial_store(
        "Actual", DAY, 10, Decimal("1000"), DEFAULT_BANK_FACILITY
    )
    rent = Payment("rent-1", Decimal("250"), PaymentMethod.CHEQUE)
    return edit_cell(
        store, DAY, "outflow_office_rent", [rent], new_id=lambda: "unused"
    ).store


def test_move_conserves_total_amount() -> None:
    """A move relocates the payment without changing any amount."""
    store = _store_with_rent()

    result = move_payment(
        store,
        PaymentRef("rent-1", DAY, "outflow_office_rent"),
        LATER,
        "outflow_office_utilities",
    )

    assert result.warnings == ()
    assert result.store.total_amount() == store.total_amount()
    assert result.store.find(DAY).payments("outflow_office_rent") == ()
    (moved,) = result.store.find(LATER).payments("outflow_office_utilities")
    assert moved.id == "rent-1"
    assert moved.amount == Decimal("250")


def test_move_recalculates_balances() -> None:
    """Balances between source and destination shift with the payment."""
    result = move_payment(
        _store_with_rent(),
        PaymentRef("rent-1", DAY, "outflow_office_rent"),
        LATER,
        "outflow_office_rent",
    )

    store = result.store
    assert closing_balance(store.find(DAY)) == Decimal("1000")
    assert store.find(LATER).opening_balance == Decimal("1000")
    assert closing_balance(store.find(LATER)) == Decimal("750")
    assert store.days[-1].opening_balance == Decimal("750")


def test_move_creates_missing_destination_day() -> None:
    """Moving past the last day appends the destination date."""
    far = DAY + timedelta(days=40)

    result = move_payment(
        _store_with_rent(),
        PaymentRef("rent-1", DAY, "outflow_office_rent"),
        far,
        "outflow_office_rent",
    )

    assert result.store.days[-1].date == far
    assert result.store.days[-1].opening_balance == Decimal("1000")


def test_missing_payment_leaves_store_unchanged() -> None:
    """An unknown payment id is reported and nothing moves."""
    store = _store_with_rent()

    result = move_payment(
        store,
        PaymentRef("nope", DAY, "outflow_office_rent"),
        LATER,
        "outflow_office_rent",
    )

    assert result.store is store
    assert result.has_warning(LedgerWarningCode.PAYMENT_NOT_FOUND)


def test_missing_source_day_leaves_store_unchanged() -> None:
    """A source date outside the ledger is reported."""
    store = _store_with_rent()

    result = move_payment(
        store,
        PaymentRef("rent-1", date(2020, 1, 1), "outflow_office_rent"),
        LATER,
        "outflow_office_rent",
    )

    assert result.store is store
    assert "not in the ledger" in result.warnings[0].message


def test_moving_a_linked_payment_warns_and_keeps_satellites() -> None:
    """Linked satellites stay put when their primary is moved."""
    store = generate_initial_store(
        "Actual", DAY, 10, Decimal("1000"), DEFAULT_BANK_FACILITY
    )
    ids = iter(["tx-1", "sup-1", "rep-1"])
    store = edit_cell(
        store,
        DAY,
        "outflow_supplier_1",
        [Payment("p-1", Decimal("100"), PaymentMethod.DEFERRED_CREDIT)],
        new_id=lambda: next(ids),
    ).store

    result = move_payment(
        store,
        PaymentRef("p-1", DAY, "outflow_supplier_1"),
        LATER,
        "outflow_supplier_1",
    )

    assert result.has_warning(LedgerWarningCode.INCONSISTENT_LINKED_MOVE)
    (moved,) = result.store.find(LATER).payments("outflow_supplier_1")
    assert moved.transaction_id == "tx-1"
    (support,) = result.store.find(DAY).payments(CARD_SUPPORT_CATEGORY_ID)
    assert support.id == "sup-1"


def test_move_to_unknown_category_warns() -> None:
    """The payment is kept under the unknown id but leaves the totals."""
    result = move_payment(
        _store_with_rent(),
        PaymentRef("rent-1", DAY, "outflow_office_rent"),
        DAY,
        "outflow_mystery",
    )

    assert result.has_warning(LedgerWarningCode.UNKNOWN_CATEGORY)
    assert len(result.store.find(DAY).payments("outflow_mystery")) == 1
    assert closing_balance(result.store.find(DAY)) == Decimal("1000")
