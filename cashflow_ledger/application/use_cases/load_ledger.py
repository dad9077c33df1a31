"""Use case to load a scenario ledger, bootstrapping it when needed."""

from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError

from cashflow_ledger.application.ports.ledger_repository import (
    LedgerRepositoryPort,
)
from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_CATEGORY_TREE,
    DEFAULT_DAY_COUNT,
    DEFAULT_OPENING_BALANCE,
)
from cashflow_ledger.domain.errors import CorruptLedgerStateError
from cashflow_ledger.domain.models import (
    CategoryTree,
    LedgerSeed,
    LedgerStore,
    Scenario,
)
from cashflow_ledger.domain.services.bootstrap import generate_initial_store
from cashflow_ledger.domain.services.recalculation import recalculate_balances
from cashflow_ledger.domain.services.validation import (
    find_balance_drift,
    validate_facility_usage,
)
from cashflow_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_SEED = LedgerSeed(
    opening_balance=DEFAULT_OPENING_BALANCE,
    facility=DEFAULT_BANK_FACILITY,
    day_count=DEFAULT_DAY_COUNT,
)


class LoadLedgerUseCase:
    """Load a persisted ledger or fall back to a freshly generated one."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        seed: LedgerSeed = DEFAULT_SEED,
        tree: CategoryTree = DEFAULT_CATEGORY_TREE,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port persisting ledger snapshots.
            seed: Bootstrap configuration for missing or corrupt ledgers.
            tree: Category tree.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._seed = seed
        self._tree = tree
        self._logger = logger or get_app_logger()

    def execute(
        self,
        scenario: Scenario | str,
        seed_date: date,
    ) -> LedgerStore:
        """Return a consistent ledger for the scenario.

        Args:
            scenario: Scenario to load.
            seed_date: First day of a bootstrapped ledger.

        Returns:
            LedgerStore: Stored ledger with recomputed balances, or a new
            ledger when nothing usable is stored.
        """
        name = scenario.value if isinstance(scenario, Scenario) else scenario
        try:
            store = self._repository.load(name)
        except CorruptLedgerStateError as exc:
            self._logger.warning(
                f"Stored ledger for {name} is corrupt ({exc}); "
                "generating a new ledger"
            )
            store = None
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to load ledger for {name}: {exc}; "
                "generating a new ledger"
            )
            store = None

        if store is None or not store.days:
            self._logger.info(
                f"Bootstrapping {name} ledger from {seed_date} "
                f"for {self._seed.day_count} days"
            )
            return generate_initial_store(
                name,
                seed_date,
                self._seed.day_count,
                self._seed.opening_balance,
                self._seed.facility,
                self._tree,
            )

        drift = find_balance_drift(store, self._tree)
        if drift:
            self._logger.warning(
                f"{len(drift)} stored opening balances of {name} were stale, "
                f"first on {drift[0]}"
            )
        for record in store.days:
            validate_facility_usage(
                record.date, record.bank_facility, self._logger
            )
        self._logger.info(f"Loaded {name} ledger with {len(store.days)} days")
        return recalculate_balances(store, self._tree)

    def last_updated(self, scenario: Scenario | str) -> datetime | None:
        """Return when the scenario was last saved.

        Storage failures are logged and reported as unknown (None).
        """
        name = scenario.value if isinstance(scenario, Scenario) else scenario
        try:
            return self._repository.last_updated(name)
        except (CorruptLedgerStateError, SQLAlchemyError) as exc:
            self._logger.warning(
                f"Could not read last update of {name} ledger: {exc}"
            )
            return None


__all__ = ["LoadLedgerUseCase", "DEFAULT_SEED"]
