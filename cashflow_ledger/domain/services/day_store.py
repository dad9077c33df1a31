"""Mutable working copy of a ledger used while applying one mutation.

A mutation copies the immutable ``LedgerStore`` into a ``DayRecordStore``,
edits the copy, then freezes it again with ``snapshot()``. The source store
is never touched, so a failed mutation leaves the previous snapshot intact.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    DayRecord,
    LedgerStore,
    Payment,
)


def empty_cells(tree: CategoryTree) -> dict[str, tuple[Payment, ...]]:
    """Return a cell mapping with an empty entry for every leaf."""
    return {leaf_id: () for leaf_id in tree.leaf_ids()}


def new_day_record(
    day: date,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
    facility: BankFacility = DEFAULT_BANK_FACILITY,
    opening_balance: Decimal = Decimal("0"),
) -> DayRecord:
    """Build an empty record for a date."""
    return DayRecord(
        date=day,
        opening_balance=opening_balance,
        bank_facility=facility,
        cells=empty_cells(tree),
    )


class DayRecordStore:
    """Ordered day records supporting lookup-or-create and cell edits."""

    def __init__(
        self,
        ledger: LedgerStore,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
        default_facility: BankFacility = DEFAULT_BANK_FACILITY,
    ) -> None:
        self._name = ledger.name
        self._tree = tree
        self._default_facility = default_facility
        self._days: list[DayRecord] = list(ledger.days)

    def __len__(self) -> int:
        return len(self._days)

    def _index_of(self, day: date) -> int | None:
        for index, record in enumerate(self._days):
            if record.date == day:
                return index
        return None

    def get(self, day: date) -> DayRecord | None:
        index = self._index_of(day)
        return self._days[index] if index is not None else None

    def find_or_create(self, day: date) -> DayRecord:
        """Return the record for a date, creating it when absent.

        New records start with a zero opening balance, the default facility
        and an empty cell per leaf; the store is re-sorted by date after the
        insert so index-based folds stay valid.
        """
        record = self.get(day)
        if record is not None:
            return record
        record = new_day_record(day, self._tree, self._default_facility)
        self._days.append(record)
        self._days.sort(key=lambda item: item.date)
        return record

    def cell(self, day: date, category_id: str) -> tuple[Payment, ...]:
        record = self.get(day)
        if record is None:
            return ()
        return record.payments(category_id)

    def replace_cell(
        self,
        day: date,
        category_id: str,
        payments: tuple[Payment, ...],
    ) -> None:
        """Overwrite the payments of one cell, creating the day if needed."""
        record = self.find_or_create(day)
        cells = dict(record.cells)
        cells[category_id] = tuple(payments)
        self._put(replace(record, cells=cells))

    def append_to_cell(
        self,
        day: date,
        category_id: str,
        payment: Payment,
    ) -> None:
        self.replace_cell(
            day, category_id, self.cell(day, category_id) + (payment,)
        )

    def remove_payment(
        self,
        day: date,
        category_id: str,
        payment_id: str,
    ) -> Payment | None:
        """Remove a payment by id from one cell and return it."""
        payments = self.cell(day, category_id)
        removed = next((p for p in payments if p.id == payment_id), None)
        if removed is None:
            return None
        self.replace_cell(
            day,
            category_id,
            tuple(p for p in payments if p.id != payment_id),
        )
        return removed

    def remove_payments_by_transaction(self, transaction_id: str) -> int:
        """Remove every payment tagged with a transaction id.

        Every day and every cell is scanned, including cells of categories
        unknown to the tree.

        Returns:
            int: Number of payments removed.
        """
        removed = 0
        for index, record in enumerate(self._days):
            cells = {}
            changed = False
            for category_id, payments in record.cells.items():
                kept = tuple(
                    p for p in payments if p.transaction_id != transaction_id
                )
                if len(kept) != len(payments):
                    removed += len(payments) - len(kept)
                    changed = True
                cells[category_id] = kept
            if changed:
                self._days[index] = replace(record, cells=cells)
        return removed

    def transaction_ids_in(self, day: date, category_id: str) -> list[str]:
        """Return the distinct transaction ids held by a cell, in order."""
        seen: list[str] = []
        for payment in self.cell(day, category_id):
            if payment.transaction_id and payment.transaction_id not in seen:
                seen.append(payment.transaction_id)
        return seen

    def _put(self, record: DayRecord) -> None:
        index = self._index_of(record.date)
        self._days[index] = record

    def snapshot(self) -> LedgerStore:
        """Freeze the working copy into a new ledger store."""
        return LedgerStore(name=self._name, days=tuple(self._days))


__all__ = ["DayRecordStore", "empty_cells", "new_day_record"]
