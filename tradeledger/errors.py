"""Error kinds raised by the ledger core."""

from datetime import date
from decimal import Decimal
from typing import Optional


class LedgerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(LedgerError, ValueError):
    """Input is missing a required field or has the wrong shape.

    Args:
        message: Human readable description.
        fields: Names of the offending fields, if known.
    """

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class DailyLimitExceeded(LedgerError):
    """The daily trade cap for a date has already been reached."""

    def __init__(self, day: date, limit: int):
        super().__init__(f"Maximum {limit} trades per day reached for {day.isoformat()}")
        self.date = day
        self.limit = limit


class InsufficientBalance(LedgerError):
    """A withdrawal asked for more than the current balance."""

    def __init__(self, requested: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient balance: requested {requested}, available {available}"
        )
        self.requested = requested
        self.available = available


class NotFound(LedgerError, KeyError):
    """A delete referenced a record id that does not exist."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:
        return self.args[0]


__all__ = [
    "DailyLimitExceeded",
    "InsufficientBalance",
    "LedgerError",
    "NotFound",
    "ValidationError",
]
