"""Application ports package."""

from .database import DatabaseEnginePort
from .identifiers import ClockPort, IdentifierGeneratorPort
from .ledger_repository import LedgerRepositoryPort

__all__ = [
    "ClockPort",
    "DatabaseEnginePort",
    "IdentifierGeneratorPort",
    "LedgerRepositoryPort",
]
