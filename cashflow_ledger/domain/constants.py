"""Domain constants for the cashflow ledger."""

from datetime import timedelta
from decimal import Decimal

from cashflow_ledger.domain.models.categories import (
    CategoryKind,
    CategoryTree,
    GroupCategory,
    LeafCategory,
)
from cashflow_ledger.domain.models.ledger import BankFacility

INFLOW = CategoryKind.INFLOW
OUTFLOW = CategoryKind.OUTFLOW

SUPPLIER_PAYMENTS_GROUP_ID = "outflow_supplier"
CARD_SUPPORT_CATEGORY_ID = "inflow_card_support"
CREDIT_REPAYMENT_CATEGORY_ID = "outflow_loan_cc_repay"

REPAYMENT_DELAY = timedelta(days=60)
CARRYING_COST_FACTOR = Decimal("1.018")

DEFAULT_OPENING_BALANCE = Decimal("50000")
DEFAULT_BANK_FACILITY = BankFacility(
    limit=Decimal("200000"),
    taken=Decimal("50000"),
)
DEFAULT_DAY_COUNT = 365
DEFAULT_BUCKET_COUNT = 7

VARIANCE_VIEW = "Variance"

DEFAULT_CATEGORY_TREE = CategoryTree(
    (
        GroupCategory("inflow", "Cash Inflow", INFLOW, (
            LeafCategory("inflow_direct", "Direct", INFLOW),
            LeafCategory("inflow_third_party", "Third-Party", INFLOW),
            LeafCategory("inflow_corporate", "Corporate", INFLOW),
            LeafCategory(
                "inflow_bank_facility", "Bank Facility Drawdown", INFLOW
            ),
            LeafCategory(
                CARD_SUPPORT_CATEGORY_ID, "Card Support (Delayed)", INFLOW
            ),
        )),
        GroupCategory("outflow", "Cash Outflow (Expenses)", OUTFLOW, (
            GroupCategory("outflow_loan", "Loan & Credit Card", OUTFLOW, (
                LeafCategory("outflow_loan_bankA", "Bank A Loan", OUTFLOW),
                LeafCategory(
                    CREDIT_REPAYMENT_CATEGORY_ID,
                    "Credit Card Repayment",
                    OUTFLOW,
                ),
            )),
            GroupCategory(
                SUPPLIER_PAYMENTS_GROUP_ID, "Supplier Payments", OUTFLOW, (
                    LeafCategory("outflow_supplier_1", "Supplier A", OUTFLOW),
                    LeafCategory("outflow_supplier_2", "Supplier B", OUTFLOW),
                ),
            ),
            GroupCategory("outflow_office", "Office Expenses", OUTFLOW, (
                LeafCategory("outflow_office_rent", "Rent", OUTFLOW),
                LeafCategory("outflow_office_utilities", "Utilities", OUTFLOW),
            )),
            GroupCategory("outflow_payroll", "Payroll", OUTFLOW, (
                LeafCategory("outflow_payroll_salaries", "Salaries", OUTFLOW),
            )),
            GroupCategory("outflow_gov", "Government Expenses", OUTFLOW, (
                LeafCategory("outflow_gov_taxes", "Taxes", OUTFLOW),
            )),
            GroupCategory("outflow_marketing", "Marketing Expenses", OUTFLOW, (
                LeafCategory("outflow_marketing_ads", "Online Ads", OUTFLOW),
            )),
        )),
    )
)


__all__ = [
    "SUPPLIER_PAYMENTS_GROUP_ID",
    "CARD_SUPPORT_CATEGORY_ID",
    "CREDIT_REPAYMENT_CATEGORY_ID",
    "REPAYMENT_DELAY",
    "CARRYING_COST_FACTOR",
    "DEFAULT_OPENING_BALANCE",
    "DEFAULT_BANK_FACILITY",
    "DEFAULT_DAY_COUNT",
    "DEFAULT_BUCKET_COUNT",
    "VARIANCE_VIEW",
    "DEFAULT_CATEGORY_TREE",
]
