"""Ports for identifier and time generation."""

from datetime import datetime
from typing import Protocol


class IdentifierGeneratorPort(Protocol):
    """Port producing unique identifiers for payments and transactions."""

    def new_id(self) -> str:
        """Return a new identifier, unique per call."""


class ClockPort(Protocol):
    """Port supplying the current time for freshness metadata."""

    def now(self) -> datetime:
        """Return the current timestamp."""


__all__ = ["IdentifierGeneratorPort", "ClockPort"]
