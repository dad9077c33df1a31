"""Cell edits and the deferred-credit linked transaction rule.

A supplier payment made by deferred credit is recorded as three payments
sharing one transaction id:

* the primary outflow in the edited supplier cell;
* a support inflow of the same amount in the card-support cell, same day;
* a repayment outflow of amount x 1.018 in the credit-repayment cell,
  60 days later.

The three records are created and removed together. Only the first payment
of an edited cell takes part in the linkage.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date

from cashflow_ledger.domain.constants import (
    CARD_SUPPORT_CATEGORY_ID,
    CARRYING_COST_FACTOR,
    CREDIT_REPAYMENT_CATEGORY_ID,
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
    REPAYMENT_DELAY,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    LedgerStore,
    LedgerWarning,
    LedgerWarningCode,
    MutationResult,
    Payment,
    PaymentMethod,
    PaymentRole,
)
from cashflow_ledger.domain.services.day_store import DayRecordStore
from cashflow_ledger.domain.services.normalization import (
    is_supplier_payment_category,
    normalize_payments,
)
from cashflow_ledger.domain.services.recalculation import recalculate_balances


def is_linked_edit(
    category_id: str,
    primary: Payment | None,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> bool:
    """Return True when an edit must spawn satellite payments."""
    return (
        primary is not None
        and primary.method == PaymentMethod.DEFERRED_CREDIT
        and is_supplier_payment_category(category_id, tree)
    )


def edit_cell(
    store: LedgerStore,
    day: date,
    category_id: str,
    payments: Iterable[Payment],
    *,
    new_id: Callable[[], str],
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
    default_facility: BankFacility = DEFAULT_BANK_FACILITY,
) -> MutationResult:
    """Replace the payments of one cell and rebuild linked satellites.

    Args:
        store: Current ledger snapshot.
        day: Date of the edited cell.
        category_id: Leaf category of the edited cell.
        payments: New content of the cell; may be empty to clear it.
        new_id: Identifier generator for transaction and satellite ids.
        tree: Category tree.
        default_facility: Facility for days created by the edit.

    Returns:
        MutationResult: Recalculated snapshot and any warnings.
    """
    normalized, warnings = normalize_payments(payments)
    warnings = list(warnings)
    if not tree.is_leaf(category_id):
        warnings.append(
            LedgerWarning(
                LedgerWarningCode.UNKNOWN_CATEGORY,
                f"Category {category_id} is not a leaf of the category tree; "
                "its payments are ignored by totals",
            )
        )

    draft = DayRecordStore(store, tree, default_facility)
    primary = normalized[0] if normalized else None
    linked = is_linked_edit(category_id, primary, tree)

    # Edits replace, never accumulate: drop every set the cell belonged to.
    previous_ids = draft.transaction_ids_in(day, category_id)
    if (
        linked
        and primary.transaction_id
        and primary.transaction_id not in previous_ids
    ):
        previous_ids.append(primary.transaction_id)
    for transaction_id in previous_ids:
        draft.remove_payments_by_transaction(transaction_id)

    if not linked:
        draft.replace_cell(
            day,
            category_id,
            tuple(_untagged(payment) for payment in normalized),
        )
        return MutationResult(
            store=recalculate_balances(draft.snapshot(), tree),
            warnings=tuple(warnings),
        )

    transaction_id = (
        primary.transaction_id
        or (previous_ids[0] if previous_ids else None)
        or new_id()
    )
    tagged_primary = replace(
        primary,
        transaction_id=transaction_id,
        role=PaymentRole.PRIMARY,
    )
    draft.replace_cell(
        day,
        category_id,
        (tagged_primary,)
        + tuple(_untagged(payment) for payment in normalized[1:]),
    )
    draft.append_to_cell(
        day,
        CARD_SUPPORT_CATEGORY_ID,
        Payment(
            id=new_id(),
            amount=primary.amount,
            method=primary.method,
            transaction_id=transaction_id,
            role=PaymentRole.SUPPORT,
            details=primary.details,
        ),
    )
    draft.append_to_cell(
        day + REPAYMENT_DELAY,
        CREDIT_REPAYMENT_CATEGORY_ID,
        Payment(
            id=new_id(),
            amount=primary.amount * CARRYING_COST_FACTOR,
            method=PaymentMethod.DEFERRED_CREDIT,
            transaction_id=transaction_id,
            role=PaymentRole.REPAYMENT,
        ),
    )
    return MutationResult(
        store=recalculate_balances(draft.snapshot(), tree),
        warnings=tuple(warnings),
    )


def _untagged(payment: Payment) -> Payment:
    if payment.transaction_id is None and payment.role == PaymentRole.STANDALONE:
        return payment
    return replace(payment, transaction_id=None, role=PaymentRole.STANDALONE)


def linked_payments(
    store: LedgerStore,
    transaction_id: str,
) -> list[tuple[date, str, Payment]]:
    """Return every (date, category id, payment) sharing a transaction id."""
    return [
        (record.date, category_id, payment)
        for record in store.days
        for category_id, payments in record.cells.items()
        for payment in payments
        if payment.transaction_id == transaction_id
    ]


__all__ = ["edit_cell", "is_linked_edit", "linked_payments"]
