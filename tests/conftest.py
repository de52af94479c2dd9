"""Shared fixtures for the daily ledger tests."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.errors import StoreFetchError, StoreUpsertError
from daily_ledger.domain.models import (
    ApplicationBaseBalance,
    BillingTotal,
    DailyBalanceRecord,
    MovementRecord,
    ObservedBalanceSnapshot,
    SourceKind,
)


class FakeLedgerStore(LedgerStorePort):
    """In-memory ledger store with injectable failures."""

    def __init__(self) -> None:
        self.movements: list[MovementRecord] = []
        self.records: dict[date, DailyBalanceRecord] = {}
        self.snapshots: list[ObservedBalanceSnapshot] = []
        self.billing: list[BillingTotal] = []
        self.application_base: ApplicationBaseBalance | None = None
        self.fetch_failures: set[date] = set()
        self.upsert_failures: set[date] = set()
        self.upserts: list[DailyBalanceRecord] = []

    def add_movement(
        self,
        day: date,
        amount: str,
        label: str,
        source_kind: SourceKind = SourceKind.AREA_EXPENSE,
    ) -> None:
        self.movements.append(
            MovementRecord(day, Decimal(amount), label, source_kind)
        )

    def add_record(
        self,
        day: date,
        opening: str,
        closing: str,
        created_at: datetime | None = None,
    ) -> None:
        self.records[day] = DailyBalanceRecord(
            day,
            Decimal(opening),
            Decimal(closing),
            created_at,
        )

    def fetch_movements(self, day, source_kind):
        self._check_fetch(day)
        return [
            movement
            for movement in self.movements
            if movement.date == day and movement.source_kind is source_kind
        ]

    def fetch_movements_between(self, start_date, end_date, source_kind):
        return [
            movement
            for movement in self.movements
            if start_date <= movement.date <= end_date
            and movement.source_kind is source_kind
        ]

    def fetch_balance_record(self, day):
        self._check_fetch(day)
        return self.records.get(day)

    def fetch_latest_balance_before(self, day):
        earlier = [key for key in self.records if key < day]
        return self.records[max(earlier)] if earlier else None

    def fetch_balance_records(self, start_date, end_date):
        return [
            self.records[key]
            for key in sorted(self.records)
            if key >= start_date and (end_date is None or key <= end_date)
        ]

    def upsert_balance_record(self, record, preserve_created_at=True):
        if record.date in self.upsert_failures:
            raise StoreUpsertError(f"write refused for {record.date}", day=record.date)
        existing = self.records.get(record.date)
        if preserve_created_at and existing is not None and existing.created_at:
            record = record.with_created_at(existing.created_at)
        self.records[record.date] = record
        self.upserts.append(record)

    def fetch_observed_balances(self, start_date, end_date):
        return [
            snapshot
            for snapshot in self.snapshots
            if snapshot.date <= end_date
            and (start_date is None or snapshot.date >= start_date)
        ]

    def fetch_billing_totals(self, start_date, end_date):
        return [
            total
            for total in self.billing
            if start_date <= total.date <= end_date
        ]

    def fetch_application_base_balance(self):
        return self.application_base

    def _check_fetch(self, day: date) -> None:
        if day in self.fetch_failures:
            raise StoreFetchError(f"read refused for {day}", day=day)


@pytest.fixture
def store() -> FakeLedgerStore:
    return FakeLedgerStore()


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()
