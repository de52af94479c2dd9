"""Domain models for the investment (application) account statement."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from daily_ledger.domain.models.movements import SourceKind


@dataclass(frozen=True)
class ApplicationBaseBalance:
    """Explicit starting balance of the investment account."""

    date: date
    amount: Decimal


@dataclass(frozen=True)
class ApplicationMovement:
    """Single movement of the investment account.

    Attributes:
        date: Day of the movement.
        is_redemption: True when money left the investment account.
        amount: Positive movement amount.
        description: Label of the originating record.
        source_kind: Table the record came from.
        balance_after: Investment balance right after the movement.
    """

    date: date
    is_redemption: bool
    amount: Decimal
    description: str
    source_kind: SourceKind
    balance_after: Decimal | None = None


@dataclass(frozen=True)
class ApplicationDailyBalance:
    """Investment account position for a day with movements."""

    date: date
    closing_balance: Decimal
    applied: Decimal
    redeemed: Decimal

    @property
    def net_movement(self) -> Decimal:
        return self.applied - self.redeemed


@dataclass(frozen=True)
class ApplicationStatement:
    """Investment account statement for a period."""

    opening_balance: Decimal
    closing_balance: Decimal
    total_applied: Decimal
    total_redeemed: Decimal
    movements: list[ApplicationMovement]
    daily_balances: list[ApplicationDailyBalance]
    base_date: date | None = None


__all__ = [
    "ApplicationBaseBalance",
    "ApplicationMovement",
    "ApplicationDailyBalance",
    "ApplicationStatement",
]
