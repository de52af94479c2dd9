"""Domain models for persisted daily balances and recalculation runs."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal

from daily_ledger.domain.models.movements import ClassificationAmbiguity


@dataclass(frozen=True)
class DailyBalanceRecord:
    """Opening and closing balance of one calendar day.

    Attributes:
        date: Calendar day, unique in the store.
        opening_balance: Balance at the start of the day.
        closing_balance: Balance at the end of the day.
        created_at: Creation time of the stored row, kept across upserts.
    """

    date: date
    opening_balance: Decimal
    closing_balance: Decimal
    created_at: datetime | None = None

    @property
    def variation(self) -> Decimal:
        """Return closing minus opening."""
        return self.closing_balance - self.opening_balance

    def with_created_at(self, created_at: datetime | None) -> "DailyBalanceRecord":
        """Return a copy carrying the given creation time."""
        return replace(self, created_at=created_at)


@dataclass(frozen=True)
class DateFailure:
    """A date that could not be processed.

    Attributes:
        date: Failing date.
        reason: Human readable failure description.
        kind: "fetch", "upsert" or "cancelled".
        terminal: True when the run stopped at this date.
    """

    date: date
    reason: str
    kind: str
    terminal: bool = False


@dataclass(frozen=True)
class RecalculationResult:
    """Output of a recalculation pass over a date range."""

    updated: list[DailyBalanceRecord] = field(default_factory=list)
    failures: list[DateFailure] = field(default_factory=list)
    warnings: list[ClassificationAmbiguity] = field(default_factory=list)

    @property
    def halted(self) -> bool:
        """Return True when a terminal failure stopped the pass."""
        return any(failure.terminal for failure in self.failures)


@dataclass(frozen=True)
class RecalculationRun:
    """Caller-facing summary of a recalculation trigger."""

    total_days: int
    processed_days: int
    updated: list[DailyBalanceRecord]
    failures: list[DateFailure]
    warnings: list[ClassificationAmbiguity] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """Return True when every day was computed and persisted."""
        return not self.failures and self.processed_days == self.total_days

    @property
    def last_closing(self) -> Decimal | None:
        """Return the closing balance of the last computed day."""
        if not self.updated:
            return None
        return self.updated[-1].closing_balance


@dataclass(frozen=True)
class ChainAdjustment:
    """Before/after balances of a day re-chained by a sync."""

    date: date
    previous_opening: Decimal
    new_opening: Decimal
    previous_closing: Decimal
    new_closing: Decimal


@dataclass(frozen=True)
class ChainSyncResult:
    """Outcome of a balance chain synchronization."""

    adjustments: list[ChainAdjustment]
    failures: list[DateFailure]

    @property
    def updated_count(self) -> int:
        return len(self.adjustments)


@dataclass(frozen=True)
class BalanceImportRow:
    """One administrative balance line, as typed by an operator."""

    raw_date: str | None
    opening: object
    closing: object
    note: str | None = None


@dataclass(frozen=True)
class ImportResult:
    """Counts and messages of an administrative balance import."""

    total: int
    succeeded: int
    failed: int
    errors: list[str]

    @property
    def success(self) -> bool:
        return self.failed == 0


__all__ = [
    "DailyBalanceRecord",
    "DateFailure",
    "RecalculationResult",
    "RecalculationRun",
    "ChainAdjustment",
    "ChainSyncResult",
    "BalanceImportRow",
    "ImportResult",
]
