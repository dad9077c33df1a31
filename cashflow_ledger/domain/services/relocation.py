"""Payment relocation between ledger cells."""

from datetime import date

from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    LedgerStore,
    LedgerWarning,
    LedgerWarningCode,
    MutationResult,
    PaymentRef,
)
from cashflow_ledger.domain.services.day_store import DayRecordStore
from cashflow_ledger.domain.services.recalculation import recalculate_balances


def move_payment(
    store: LedgerStore,
    ref: PaymentRef,
    dest_date: date,
    dest_category_id: str,
    *,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
    default_facility: BankFacility = DEFAULT_BANK_FACILITY,
) -> MutationResult:
    """Move one payment to another cell without changing its amount.

    Linked payments are moved too, but their satellites stay where they are
    and the result carries an ``INCONSISTENT_LINKED_MOVE`` warning.

    Args:
        store: Current ledger snapshot.
        ref: Source location and id of the payment.
        dest_date: Destination date, created when absent.
        dest_category_id: Destination leaf category.
        tree: Category tree.
        default_facility: Facility for a created destination day.

    Returns:
        MutationResult: Recalculated snapshot and warnings. When the payment
        cannot be found the original store is returned unchanged.
    """
    draft = DayRecordStore(store, tree, default_facility)
    if draft.get(ref.source_date) is None:
        return MutationResult(
            store=store,
            warnings=(_not_found(ref, "source date is not in the ledger"),),
        )
    payment = draft.remove_payment(
        ref.source_date, ref.source_category_id, ref.payment_id
    )
    if payment is None:
        return MutationResult(
            store=store,
            warnings=(_not_found(ref, "payment is not in the source cell"),),
        )

    warnings: list[LedgerWarning] = []
    if payment.transaction_id is not None:
        warnings.append(
            LedgerWarning(
                LedgerWarningCode.INCONSISTENT_LINKED_MOVE,
                f"Payment {payment.id} belongs to linked transaction "
                f"{payment.transaction_id}; its linked payments were not "
                "moved and may no longer be consistent",
            )
        )
    if not tree.is_leaf(dest_category_id):
        warnings.append(
            LedgerWarning(
                LedgerWarningCode.UNKNOWN_CATEGORY,
                f"Category {dest_category_id} is not a leaf of the category "
                "tree; the moved payment is ignored by totals",
            )
        )
    draft.append_to_cell(dest_date, dest_category_id, payment)
    return MutationResult(
        store=recalculate_balances(draft.snapshot(), tree),
        warnings=tuple(warnings),
    )


def _not_found(ref: PaymentRef, reason: str) -> LedgerWarning:
    return LedgerWarning(
        LedgerWarningCode.PAYMENT_NOT_FOUND,
        f"Payment {ref.payment_id} on {ref.source_date.isoformat()} "
        f"in {ref.source_category_id} not moved: {reason}",
    )


__all__ = ["move_payment"]
