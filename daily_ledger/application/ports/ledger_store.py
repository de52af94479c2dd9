"""Application port for ledger persistence."""

from datetime import date
from typing import Protocol

from daily_ledger.domain.models import (
    ApplicationBaseBalance,
    BillingTotal,
    DailyBalanceRecord,
    MovementRecord,
    ObservedBalanceSnapshot,
    SourceKind,
)


class LedgerStorePort(Protocol):
    """Port exposing movements, balance records and observed figures.

    Read methods raise ``StoreFetchError`` and writes raise
    ``StoreUpsertError`` when the backend fails.
    """

    def fetch_movements(
        self,
        day: date,
        source_kind: SourceKind,
    ) -> list[MovementRecord]:
        """Return the movements of one source kind for a day."""

    def fetch_movements_between(
        self,
        start_date: date,
        end_date: date,
        source_kind: SourceKind,
    ) -> list[MovementRecord]:
        """Return the movements of one source kind for a date range."""

    def fetch_balance_record(self, day: date) -> DailyBalanceRecord | None:
        """Return the stored balance record for a day."""

    def fetch_latest_balance_before(
        self,
        day: date,
    ) -> DailyBalanceRecord | None:
        """Return the last stored balance record strictly before a day."""

    def fetch_balance_records(
        self,
        start_date: date,
        end_date: date | None,
    ) -> list[DailyBalanceRecord]:
        """Return stored balance records in ascending date order."""

    def upsert_balance_record(
        self,
        record: DailyBalanceRecord,
        preserve_created_at: bool = True,
    ) -> None:
        """Insert or update the balance record of ``record.date``."""

    def fetch_observed_balances(
        self,
        start_date: date | None,
        end_date: date,
    ) -> list[ObservedBalanceSnapshot]:
        """Return bank-reported balances; ``start_date=None`` is unbounded."""

    def fetch_billing_totals(
        self,
        start_date: date,
        end_date: date,
    ) -> list[BillingTotal]:
        """Return billed amounts for a date range."""

    def fetch_application_base_balance(self) -> ApplicationBaseBalance | None:
        """Return the explicit starting balance of the investment account."""


__all__ = ["LedgerStorePort"]
