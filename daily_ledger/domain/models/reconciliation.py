"""Domain models for reconciliation inputs and outputs."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class ReconciliationMode(str, Enum):
    """Kind of external figure the ledger is compared against."""

    BANK = "bank"
    BILLING = "billing"


@dataclass(frozen=True)
class ObservedBalanceSnapshot:
    """Balance reported by a bank for a given day."""

    date: date
    bank_id: str
    amount: Decimal


@dataclass(frozen=True)
class BillingTotal:
    """Amount billed on a given day, optionally per receiving account."""

    date: date
    amount: Decimal
    account_label: str = ""


@dataclass(frozen=True)
class ReconciliationRow:
    """Comparison of a computed ledger figure with an observed one.

    Attributes:
        date: Compared day.
        computed_total: Figure taken from the ledger.
        observed_total: Figure reported by the external source.
        difference: observed_total minus computed_total.
        divergent: True when the difference exceeds the tolerance.
    """

    date: date
    computed_total: Decimal
    observed_total: Decimal
    difference: Decimal
    divergent: bool


@dataclass(frozen=True)
class ReconciliationSummary:
    """Totals over a list of reconciliation rows."""

    days_with_data: int
    divergent_days: int
    largest_difference: Decimal
    observed_total: Decimal
    computed_total: Decimal


__all__ = [
    "ReconciliationMode",
    "ObservedBalanceSnapshot",
    "BillingTotal",
    "ReconciliationRow",
    "ReconciliationSummary",
]
