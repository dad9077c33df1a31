"""Domain services package."""

from .aggregation import compute_variance, project, summarize_bucket
from .bootstrap import generate_initial_store
from .day_store import DayRecordStore, empty_cells, new_day_record
from .linked_transactions import edit_cell, is_linked_edit, linked_payments
from .normalization import (
    default_method_for,
    is_supplier_payment_category,
    normalize_amount,
    normalize_payments,
    parse_cell_input,
)
from .period_bounds import bucket_bounds, shift_anchor
from .recalculation import (
    closing_balance,
    inflow_total,
    outflow_total,
    recalculate_balances,
)
from .relocation import move_payment
from .rollup import CategoryTotals, category_total
from .validation import (
    find_balance_drift,
    find_order_violations,
    validate_facility_usage,
)

__all__ = [
    "compute_variance",
    "project",
    "summarize_bucket",
    "generate_initial_store",
    "DayRecordStore",
    "empty_cells",
    "new_day_record",
    "edit_cell",
    "is_linked_edit",
    "linked_payments",
    "default_method_for",
    "is_supplier_payment_category",
    "normalize_amount",
    "normalize_payments",
    "parse_cell_input",
    "bucket_bounds",
    "shift_anchor",
    "closing_balance",
    "inflow_total",
    "outflow_total",
    "recalculate_balances",
    "move_payment",
    "CategoryTotals",
    "category_total",
    "find_balance_drift",
    "find_order_violations",
    "validate_facility_usage",
]
