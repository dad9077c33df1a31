"""Settings helpers for the ledger infrastructure."""

from dataclasses import dataclass
from decimal import Decimal
import os

from cashflow_ledger.domain.constants import (
    DEFAULT_BANK_FACILITY,
    DEFAULT_DAY_COUNT,
    DEFAULT_OPENING_BALANCE,
)
from cashflow_ledger.domain.models import BankFacility, LedgerSeed
from cashflow_ledger.infrastructure.logging.logger import get_app_logger
from cashflow_ledger.utils.decimal_utils import try_coerce_decimal
from cashflow_ledger.utils.utils import get_project_root


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for ledger storage and bootstrap.

    Attributes:
        database_url: SQLAlchemy URL of the ledger database.
        seed_opening_balance: Opening balance of a bootstrapped ledger.
        facility_limit: Default bank facility limit.
        facility_taken: Default bank facility usage.
        day_count: Number of days created when bootstrapping.
    """

    database_url: str
    seed_opening_balance: Decimal = DEFAULT_OPENING_BALANCE
    facility_limit: Decimal = DEFAULT_BANK_FACILITY.limit
    facility_taken: Decimal = DEFAULT_BANK_FACILITY.taken
    day_count: int = DEFAULT_DAY_COUNT

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        return cls(
            database_url=os.getenv("LEDGER_DB_URL") or default_database_url(),
            seed_opening_balance=cls._decimal_from_env(
                "LEDGER_SEED_OPENING_BALANCE",
                DEFAULT_OPENING_BALANCE,
                logger,
            ),
            facility_limit=cls._decimal_from_env(
                "LEDGER_FACILITY_LIMIT",
                DEFAULT_BANK_FACILITY.limit,
                logger,
            ),
            facility_taken=cls._decimal_from_env(
                "LEDGER_FACILITY_TAKEN",
                DEFAULT_BANK_FACILITY.taken,
                logger,
            ),
            day_count=cls._int_from_env(
                "LEDGER_DAY_COUNT",
                DEFAULT_DAY_COUNT,
                logger,
            ),
        )

    @property
    def default_facility(self) -> BankFacility:
        return BankFacility(limit=self.facility_limit, taken=self.facility_taken)

    def seed(self) -> LedgerSeed:
        """Return the bootstrap configuration."""
        return LedgerSeed(
            opening_balance=self.seed_opening_balance,
            facility=self.default_facility,
            day_count=self.day_count,
        )

    @staticmethod
    def _decimal_from_env(name: str, default: Decimal, logger) -> Decimal:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = try_coerce_decimal(raw)
        if value is None:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        return value

    @staticmethod
    def _int_from_env(name: str, default: int, logger) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value < 1:
            logger.warning(f"{name} must be positive; using {default}")
            return default
        return value


def default_database_url() -> str:
    """Return the SQLite URL of the ledger file under data/."""
    return f"sqlite:///{get_project_root() / 'data' / 'ledger.db'}"


__all__ = ["LedgerSettings", "default_database_url"]
