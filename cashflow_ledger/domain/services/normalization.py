"""Domain normalization helpers for user-entered amounts."""

from collections.abc import Callable, Iterable
from dataclasses import replace
from decimal import Decimal

from cashflow_ledger.domain.constants import (
    DEFAULT_CATEGORY_TREE,
    SUPPLIER_PAYMENTS_GROUP_ID,
)
from cashflow_ledger.domain.models import (
    CategoryTree,
    LedgerWarning,
    LedgerWarningCode,
    Payment,
    PaymentMethod,
)
from cashflow_ledger.utils.decimal_utils import try_coerce_decimal

ZERO = Decimal("0")


def normalize_amount(value) -> tuple[Decimal, bool]:
    """Normalize an amount under the permissive input policy.

    Args:
        value: Raw amount (number, string or Decimal).

    Returns:
        tuple[Decimal, bool]: The usable amount and whether the raw value
        was malformed. Missing, non-numeric, non-finite and negative
        values become 0.
    """
    if value is None:
        return ZERO, True
    amount = try_coerce_decimal(value)
    if amount is None or amount < 0:
        return ZERO, True
    return amount, False


def normalize_payments(
    payments: Iterable[Payment],
) -> tuple[tuple[Payment, ...], tuple[LedgerWarning, ...]]:
    """Normalize payment amounts, reporting every value that was replaced."""
    normalized: list[Payment] = []
    warnings: list[LedgerWarning] = []
    for payment in payments:
        amount, malformed = normalize_amount(payment.amount)
        if malformed:
            warnings.append(
                LedgerWarning(
                    LedgerWarningCode.MALFORMED_AMOUNT,
                    f"Payment {payment.id} amount {payment.amount!r} "
                    "normalized to 0",
                )
            )
        normalized.append(replace(payment, amount=amount))
    return tuple(normalized), tuple(warnings)


def is_supplier_payment_category(
    category_id: str,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> bool:
    """Return True for leaves under the supplier payments group."""
    return tree.is_leaf(category_id) and tree.descends_from(
        category_id, SUPPLIER_PAYMENTS_GROUP_ID
    )


def default_method_for(
    category_id: str,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> PaymentMethod:
    """Return the method assigned to amounts typed into a cell."""
    if is_supplier_payment_category(category_id, tree):
        return PaymentMethod.DEFERRED_CREDIT
    return PaymentMethod.BANK_TRANSFER


def parse_cell_input(
    raw_value,
    category_id: str,
    new_id: Callable[[], str],
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> list[Payment]:
    """Turn a typed cell value into the payment list replacing the cell.

    A positive amount yields a single payment; anything else clears the cell.
    """
    amount, _ = normalize_amount(raw_value)
    if amount <= 0:
        return []
    return [
        Payment(
            id=new_id(),
            amount=amount,
            method=default_method_for(category_id, tree),
        )
    ]


__all__ = [
    "normalize_amount",
    "normalize_payments",
    "is_supplier_payment_category",
    "default_method_for",
    "parse_cell_input",
]
