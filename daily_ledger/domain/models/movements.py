"""Domain models for raw movements and their daily aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class SourceKind(str, Enum):
    """Origin table of a movement record."""

    REVENUE = "revenue"
    AREA_EXPENSE = "area_expense"
    BANK_TRANSFER = "bank_transfer"


class MovementCategory(str, Enum):
    """Ledger meaning of a movement, derived from its label."""

    EXPENSE = "expense"
    APPLICATION_DEPOSIT = "application_deposit"
    APPLICATION_REDEMPTION = "application_redemption"
    APPLICATION_TRANSFER_OUT = "application_transfer_out"

    @property
    def is_application(self) -> bool:
        """Return True for movements of the investment account."""
        return self is not MovementCategory.EXPENSE


@dataclass(frozen=True)
class MovementRecord:
    """Raw movement row read from the store.

    Attributes:
        date: Calendar day of the movement.
        amount: Movement amount, always positive in the source tables.
        category_label: Free-text area or account name.
        source_kind: Table the row came from.
    """

    date: date
    amount: Decimal
    category_label: str
    source_kind: SourceKind


@dataclass(frozen=True)
class ClassificationAmbiguity:
    """Warning about a label that defaulted to an expense."""

    date: date
    label: str
    source_kind: SourceKind


@dataclass(frozen=True)
class DailyMovementSummary:
    """Per-day movement totals used by one recalculation pass."""

    date: date
    revenue_total: Decimal
    expense_total: Decimal
    application_net: Decimal
    ambiguities: tuple[ClassificationAmbiguity, ...] = ()

    @property
    def net_change(self) -> Decimal:
        """Return the balance variation implied by the totals."""
        return self.revenue_total - self.expense_total + self.application_net


__all__ = [
    "SourceKind",
    "MovementCategory",
    "MovementRecord",
    "DailyMovementSummary",
    "ClassificationAmbiguity",
]
