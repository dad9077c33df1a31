"""Use case to edit one ledger cell."""

from collections.abc import Iterable
from datetime import date

from cashflow_ledger.application.ports.identifiers import (
    IdentifierGeneratorPort,
)
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
    MutationResult,
    Payment,
)
from cashflow_ledger.domain.services.linked_transactions import edit_cell
from cashflow_ledger.domain.services.normalization import parse_cell_input
from cashflow_ledger.infrastructure.logging.logger import get_app_logger


class EditCellUseCase:
    """Replace a cell's payments, rebuild linked payments and persist."""

    def __init__(
        self,
        id_generator: IdentifierGeneratorPort,
        repository: LedgerRepositoryPort | None = None,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
        default_facility: BankFacility = DEFAULT_BANK_FACILITY,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            id_generator: Port generating payment and transaction ids.
            repository: Optional port persisting the new snapshot.
            tree: Category tree.
            default_facility: Facility for days created by an edit.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._id_generator = id_generator
        self._repository = repository
        self._tree = tree
        self._default_facility = default_facility
        self._logger = logger or get_app_logger()

    def execute(
        self,
        store: LedgerStore,
        day: date,
        category_id: str,
        payments: Iterable[Payment],
    ) -> MutationResult:
        """Apply the edit and return the new snapshot.

        Args:
            store: Current snapshot.
            day: Date of the edited cell.
            category_id: Leaf category of the edited cell.
            payments: New cell content; empty clears the cell.

        Returns:
            MutationResult: New snapshot and warnings.
        """
        payments = list(payments)
        result = edit_cell(
            store,
            day,
            category_id,
            payments,
            new_id=self._id_generator.new_id,
            tree=self._tree,
            default_facility=self._default_facility,
        )
        self._logger.info(
            f"Edited {store.name} cell {category_id} on {day} "
            f"with {len(payments)} payments"
        )
        for warning in result.warnings:
            self._logger.warning(f"{warning.code.value}: {warning.message}")
        if self._repository is not None:
            self._repository.save(result.store)
        return result

    def execute_input(
        self,
        store: LedgerStore,
        day: date,
        category_id: str,
        raw_value,
    ) -> MutationResult:
        """Apply an edit typed directly into a cell.

        A positive amount becomes one payment; anything else clears the cell.
        """
        payments = parse_cell_input(
            raw_value,
            category_id,
            self._id_generator.new_id,
            self._tree,
        )
        return self.execute(store, day, category_id, payments)


__all__ = ["EditCellUseCase"]
