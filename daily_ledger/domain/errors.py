"""Domain errors raised by the ledger engine and its store adapters."""

from datetime import date


class LedgerError(Exception):
    """Base class for ledger engine errors."""


class StoreError(LedgerError):
    """A ledger store operation failed.

    Attributes:
        day: Date the failing operation was about, when known.
    """

    def __init__(self, message: str, day: date | None = None) -> None:
        super().__init__(message)
        self.day = day


class StoreFetchError(StoreError):
    """A read from the ledger store failed."""


class StoreUpsertError(StoreError):
    """A write to the ledger store failed."""


class InvalidRangeError(ValueError, LedgerError):
    """A date range is malformed or inverted."""


__all__ = [
    "LedgerError",
    "StoreError",
    "StoreFetchError",
    "StoreUpsertError",
    "InvalidRangeError",
]
