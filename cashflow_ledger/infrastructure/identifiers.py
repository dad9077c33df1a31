"""Identifier and clock adapters."""

from datetime import datetime, timezone
import uuid

from cashflow_ledger.application.ports.identifiers import (
    ClockPort,
    IdentifierGeneratorPort,
)


class UuidIdentifierGenerator(IdentifierGeneratorPort):
    """Random UUID4 identifiers."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SystemClock(ClockPort):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["UuidIdentifierGenerator", "SystemClock"]
