"""JSON-friendly encoding of ledger snapshots.

The payload keeps the camelCase day layout of the browser version of the
cashflow sheet::

    {"name": "Actual", "days": [
        {"date": "2024-08-01", "openingBalance": "50000",
         "bankFacility": {"limit": "200000", "taken": "50000"},
         "data": {"inflow_direct": {"payments": [...]}}}]}

A bare list of days (the legacy browser format, numeric amounts) is accepted
on decode as well.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from cashflow_ledger.domain.constants import (
    CARD_SUPPORT_CATEGORY_ID,
    CREDIT_REPAYMENT_CATEGORY_ID,
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.errors import CorruptLedgerStateError
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    DayRecord,
    LedgerStore,
    Payment,
    PaymentMethod,
    PaymentRole,
)
from cashflow_ledger.domain.services.validation import find_order_violations
from cashflow_ledger.utils.decimal_utils import try_coerce_decimal


def store_to_payload(store: LedgerStore) -> dict[str, Any]:
    """Encode a ledger into plain JSON-serializable data."""
    return {
        "name": store.name,
        "days": [_day_to_payload(record) for record in store.days],
    }


def _day_to_payload(record: DayRecord) -> dict[str, Any]:
    return {
        "date": record.date.isoformat(),
        "openingBalance": str(record.opening_balance),
        "bankFacility": {
            "limit": str(record.bank_facility.limit),
            "taken": str(record.bank_facility.taken),
        },
        "data": {
            category_id: {
                "payments": [_payment_to_payload(p) for p in payments]
            }
            for category_id, payments in record.cells.items()
        },
    }


def _payment_to_payload(payment: Payment) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": payment.id,
        "amount": str(payment.amount),
        "method": payment.method.value,
        "role": payment.role.value,
    }
    if payment.transaction_id is not None:
        payload["transactionId"] = payment.transaction_id
    if payment.details is not None:
        payload["details"] = payment.details
    if payment.cheque_number is not None:
        payload["chequeNumber"] = payment.cheque_number
    return payload


def payload_to_store(
    payload: Any,
    scenario: str,
    tree: CategoryTree = DEFAULT_CATEGORY_TREE,
) -> LedgerStore:
    """Decode and validate a persisted ledger.

    Args:
        payload: Decoded JSON value.
        scenario: Scenario name used when the payload carries none.
        tree: Category tree; missing leaf cells are added empty.

    Returns:
        LedgerStore: Store sorted by date. Balances are returned as stored.

    Raises:
        CorruptLedgerStateError: If the payload fails structural validation.
    """
    if isinstance(payload, list):
        name, raw_days = scenario, payload
    elif isinstance(payload, dict):
        name = payload.get("name") or scenario
        raw_days = payload.get("days")
    else:
        raise CorruptLedgerStateError(
            f"Ledger payload must be an object or a list, "
            f"got {type(payload).__name__}"
        )
    if not isinstance(raw_days, list):
        raise CorruptLedgerStateError("Ledger payload has no list of days")
    days = sorted(
        (_day_from_payload(raw, tree) for raw in raw_days),
        key=lambda record: record.date,
    )
    store = LedgerStore(name=str(name), days=tuple(days))
    duplicates = find_order_violations(store)
    if duplicates:
        raise CorruptLedgerStateError(
            f"Ledger payload repeats dates: {sorted(set(duplicates))}"
        )
    return store


def _day_from_payload(raw: Any, tree: CategoryTree) -> DayRecord:
    if not isinstance(raw, dict):
        raise CorruptLedgerStateError("Day entry must be an object")
    day = _parse_date(raw.get("date"))
    raw_facility = raw.get("bankFacility")
    if raw_facility is None:
        facility = DEFAULT_BANK_FACILITY
    elif isinstance(raw_facility, dict):
        facility = BankFacility(
            limit=_parse_amount(raw_facility.get("limit"), "facility limit"),
            taken=_parse_amount(raw_facility.get("taken"), "facility taken"),
        )
    else:
        raise CorruptLedgerStateError(f"Day {day} has a malformed facility")
    raw_cells = raw.get("data", {})
    if not isinstance(raw_cells, dict):
        raise CorruptLedgerStateError(f"Day {day} has malformed cells")

    cells: dict[str, tuple[Payment, ...]] = {
        leaf_id: () for leaf_id in tree.leaf_ids()
    }
    for category_id, raw_cell in raw_cells.items():
        raw_payments = (
            raw_cell.get("payments") if isinstance(raw_cell, dict) else None
        )
        if not isinstance(raw_payments, list):
            raise CorruptLedgerStateError(
                f"Cell {category_id} on {day} has no list of payments"
            )
        cells[str(category_id)] = tuple(
            _payment_from_payload(p, category_id) for p in raw_payments
        )
    return DayRecord(
        date=day,
        opening_balance=_parse_amount(
            raw.get("openingBalance", 0), "opening balance"
        ),
        bank_facility=facility,
        cells=cells,
    )


def _payment_from_payload(raw: Any, category_id: str) -> Payment:
    if not isinstance(raw, dict) or not raw.get("id"):
        raise CorruptLedgerStateError(
            f"Payment in {category_id} is missing its id"
        )
    try:
        method = PaymentMethod(raw.get("method"))
    except ValueError as exc:
        raise CorruptLedgerStateError(
            f"Payment {raw['id']} has unknown method {raw.get('method')!r}"
        ) from exc
    transaction_id = raw.get("transactionId")
    raw_role = raw.get("role")
    if raw_role is None:
        role = _infer_role(category_id, transaction_id)
    else:
        try:
            role = PaymentRole(raw_role)
        except ValueError as exc:
            raise CorruptLedgerStateError(
                f"Payment {raw['id']} has unknown role {raw_role!r}"
            ) from exc
    return Payment(
        id=str(raw["id"]),
        amount=_parse_amount(raw.get("amount"), f"payment {raw['id']}"),
        method=method,
        transaction_id=transaction_id,
        role=role,
        details=raw.get("details"),
        cheque_number=raw.get("chequeNumber"),
    )


def _infer_role(category_id: str, transaction_id: str | None) -> PaymentRole:
    if transaction_id is None:
        return PaymentRole.STANDALONE
    if category_id == CARD_SUPPORT_CATEGORY_ID:
        return PaymentRole.SUPPORT
    if category_id == CREDIT_REPAYMENT_CATEGORY_ID:
        return PaymentRole.REPAYMENT
    return PaymentRole.PRIMARY


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise CorruptLedgerStateError(f"Day date must be a string: {value!r}")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as exc:
        raise CorruptLedgerStateError(f"Invalid day date: {value!r}") from exc


def _parse_amount(value: Any, label: str) -> Decimal:
    amount = try_coerce_decimal(value)
    if amount is None:
        raise CorruptLedgerStateError(f"Invalid {label}: {value!r}")
    return amount


__all__ = ["store_to_payload", "payload_to_store"]
