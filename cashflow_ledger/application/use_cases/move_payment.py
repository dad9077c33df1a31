"""Use case to move a payment to another cell."""

from datetime import date

from cashflow_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
)
from cashflow_ledger.domain.models import (
    BankFacility,
    CategoryTree,
    LedgerStore,
    LedgerWarningCode,
    MutationResult,
    PaymentRef,
)
from cashflow_ledger.domain.services.relocation import move_payment
from cashflow_ledger.infrastructure.logging.logger import get_app_logger


class MovePaymentUseCase:
    """Relocate a payment and persist the new snapshot."""

    def __init__(
        self,
        repository: LedgerRepositoryPort | None = None,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
        default_facility: BankFacility = DEFAULT_BANK_FACILITY,
        logger=None,
    ) -> None:
        self._repository = repository
        self._tree = tree
        self._default_facility = default_facility
        self._logger = logger or get_app_logger()

    def execute(
        self,
        store: LedgerStore,
        ref: PaymentRef,
        dest_date: date,
        dest_category_id: str,
    ) -> MutationResult:
        """Move the referenced payment to the destination cell."""
        result = move_payment(
            store,
            ref,
            dest_date,
            dest_category_id,
            tree=self._tree,
            default_facility=self._default_facility,
        )
        for warning in result.warnings:
            self._logger.warning(f"{warning.code.value}: {warning.message}")
        if result.has_warning(LedgerWarningCode.PAYMENT_NOT_FOUND):
            return result
        self._logger.info(
            f"Moved payment {ref.payment_id} in {store.name} from "
            f"{ref.source_date}/{ref.source_category_id} to "
            f"{dest_date}/{dest_category_id}"
        )
        if self._repository is not None:
            self._repository.save(result.store)
        return result


__all__ = ["MovePaymentUseCase"]
