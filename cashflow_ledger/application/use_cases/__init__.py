"""Application use cases package."""

from .edit_cell import EditCellUseCase
from .get_period_view import GetPeriodViewUseCase, PeriodView
from .get_variance_view import GetVarianceViewUseCase
from .load_ledger import LoadLedgerUseCase
from .move_payment import MovePaymentUseCase

__all__ = [
    "EditCellUseCase",
    "GetPeriodViewUseCase",
    "PeriodView",
    "GetVarianceViewUseCase",
    "LoadLedgerUseCase",
    "MovePaymentUseCase",
]
