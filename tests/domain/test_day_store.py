"""Tests for the mutable working copy of a ledger."""

from datetime import date
from decimal import Decimal

import pytest

from cashflow_ledger.domain.constants import DEFAULT_BANK_FACILITY
from cashflow_ledger.domain.models import (
    BankFacility,
    DayRecord,
    LedgerStore,
    Payment,
    PaymentMethod,
)
from cashflow_ledger.domain.services.day_store import (
    DayRecordStore,
    new_day_record,
)


def _payment(payment_id: str, transaction_id: str | None = None) -> Payment:
    return Payment(
        payment_id,
        Decimal("1"),
        PaymentMethod.DEFERRED_CREDIT,
        transaction_id=transaction_id,
    )


def test_find_or_create_keeps_days_sorted() -> None:
    """Created days are inserted in chronological order."""
    store = LedgerStore(
        name="Actual",
        days=(new_day_record(date(2024, 1, 1)), new_day_record(date(2024, 1, 5))),
    )
    facility = BankFacility(Decimal("10"), Decimal("2"))
    draft = DayRecordStore(store, default_facility=facility)

    created = draft.find_or_create(date(2024, 1, 3))
    snapshot = draft.snapshot()

    assert [record.date for record in snapshot.days] == [
        date(2024, 1, 1),
        date(2024, 1, 3),
        date(2024, 1, 5),
    ]
    assert created.opening_balance == Decimal("0")
    assert created.bank_facility == facility
    assert created.payments("inflow_direct") == ()
    assert len(draft) == 3


def test_find_or_create_returns_existing_day() -> None:
    """An existing date is not duplicated."""
    record = new_day_record(date(2024, 1, 1), facility=DEFAULT_BANK_FACILITY)
    draft = DayRecordStore(LedgerStore(name="Actual", days=(record,)))

    assert draft.find_or_create(date(2024, 1, 1)) is record
    assert len(draft) == 1


def test_remove_payments_by_transaction_scans_every_cell() -> None:
    """Tagged payments are removed from known and unknown cells alike."""
    draft = DayRecordStore(LedgerStore(name="Actual"))
    draft.append_to_cell(date(2024, 1, 1), "outflow_supplier_1", _payment("a", "tx"))
    draft.append_to_cell(date(2024, 1, 1), "outflow_supplier_1", _payment("b"))
    draft.append_to_cell(date(2024, 3, 1), "legacy_cell", _payment("c", "tx"))

    removed = draft.remove_payments_by_transaction("tx")

    assert removed == 2
    assert [p.id for p in draft.cell(date(2024, 1, 1), "outflow_supplier_1")] == [
        "b"
    ]
    assert draft.cell(date(2024, 3, 1), "legacy_cell") == ()


def test_remove_payment_returns_the_removed_payment() -> None:
    """remove_payment hands back the payment it took out of the cell."""
    draft = DayRecordStore(LedgerStore(name="Actual"))
    draft.append_to_cell(date(2024, 1, 1), "inflow_direct", _payment("a"))

    assert draft.remove_payment(date(2024, 1, 1), "inflow_direct", "a").id == "a"
    assert draft.remove_payment(date(2024, 1, 1), "inflow_direct", "a") is None
    assert draft.remove_payment(date(2024, 2, 1), "inflow_direct", "a") is None


def test_transaction_ids_in_lists_distinct_ids() -> None:
    """Each transaction id of a cell is listed once, in order."""
    draft = DayRecordStore(LedgerStore(name="Actual"))
    day = date(2024, 1, 1)
    for payment in (_payment("a", "t2"), _payment("b"), _payment("c", "t1"),
                    _payment("d", "t2")):
        draft.append_to_cell(day, "outflow_supplier_1", payment)

    assert draft.transaction_ids_in(day, "outflow_supplier_1") == ["t2", "t1"]


def test_snapshot_does_not_touch_the_source_store() -> None:
    """Edits to the working copy stay out of the original snapshot."""
    source = LedgerStore(name="Actual", days=(new_day_record(date(2024, 1, 1)),))
    draft = DayRecordStore(source)

    draft.append_to_cell(date(2024, 1, 1), "inflow_direct", _payment("a"))

    assert source.days[0].payments("inflow_direct") == ()
    assert len(draft.snapshot().days[0].payments("inflow_direct")) == 1


def test_snapshot_cells_are_read_only() -> None:
    """Snapshot cells reject in-place edits; only the working copy changes."""
    draft = DayRecordStore(LedgerStore(name="Actual"))
    draft.append_to_cell(date(2024, 1, 1), "inflow_direct", _payment("a"))
    record = draft.snapshot().days[0]

    with pytest.raises(TypeError):
        record.cells["inflow_direct"] = ()
    with pytest.raises(TypeError):
        del record.cells["inflow_direct"]
    assert [p.id for p in record.payments("inflow_direct")] == ["a"]


def test_day_record_copies_the_mapping_it_is_given() -> None:
    """Mutating the dict passed in does not leak into the record."""
    cells = {"inflow_direct": (_payment("a"),)}
    record = DayRecord(
        date(2024, 1, 1), Decimal("0"), DEFAULT_BANK_FACILITY, cells
    )

    cells["inflow_direct"] = ()

    assert len(record.payments("inflow_direct")) == 1
