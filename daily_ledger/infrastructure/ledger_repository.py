"""SQLAlchemy-backed implementation of the ledger store port."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Numeric, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from daily_ledger.application.ports.database import DatabaseEnginePort
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
from daily_ledger.utils.date_utils import coerce_date, coerce_datetime
from daily_ledger.utils.decimal_utils import round_money

_MONEY = Numeric(14, 2)

CREATE_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS movements (
        movement_date DATE NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        category_label TEXT,
        source_kind TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS daily_balances (
        balance_date DATE PRIMARY KEY,
        opening_balance NUMERIC(14, 2) NOT NULL,
        closing_balance NUMERIC(14, 2) NOT NULL,
        created_at TIMESTAMP,
        updated_at TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bank_balance_snapshots (
        snapshot_date DATE NOT NULL,
        bank_id TEXT NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        PRIMARY KEY (snapshot_date, bank_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS billing_totals (
        billing_date DATE NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        account_label TEXT NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS application_base_balances (
        base_date DATE PRIMARY KEY,
        amount NUMERIC(14, 2) NOT NULL
    )
    """,
)

SELECT_MOVEMENTS_SQL = text(
    """
    SELECT movement_date, amount, category_label, source_kind
    FROM movements
    WHERE movement_date >= :start_date
      AND movement_date <= :end_date
      AND source_kind = :source_kind
    ORDER BY movement_date
    """
).bindparams(
    bindparam("start_date", type_=Date()),
    bindparam("end_date", type_=Date()),
)

_BALANCE_COLUMNS = "balance_date, opening_balance, closing_balance, created_at"

SELECT_BALANCE_SQL = text(
    f"""
    SELECT {_BALANCE_COLUMNS}
    FROM daily_balances
    WHERE balance_date = :day
    """
).bindparams(bindparam("day", type_=Date()))

SELECT_LATEST_BALANCE_BEFORE_SQL = text(
    f"""
    SELECT {_BALANCE_COLUMNS}
    FROM daily_balances
    WHERE balance_date < :day
    ORDER BY balance_date DESC
    LIMIT 1
    """
).bindparams(bindparam("day", type_=Date()))

SELECT_BALANCES_FROM_SQL = text(
    f"""
    SELECT {_BALANCE_COLUMNS}
    FROM daily_balances
    WHERE balance_date >= :start_date
    ORDER BY balance_date
    """
).bindparams(bindparam("start_date", type_=Date()))

SELECT_BALANCES_BETWEEN_SQL = text(
    f"""
    SELECT {_BALANCE_COLUMNS}
    FROM daily_balances
    WHERE balance_date >= :start_date
      AND balance_date <= :end_date
    ORDER BY balance_date
    """
).bindparams(
    bindparam("start_date", type_=Date()),
    bindparam("end_date", type_=Date()),
)

_UPSERT_BALANCE_SQL = """
    INSERT INTO daily_balances (
        balance_date,
        opening_balance,
        closing_balance,
        created_at,
        updated_at
    )
    VALUES (
        :balance_date,
        :opening_balance,
        :closing_balance,
        :created_at,
        :updated_at
    )
    ON CONFLICT (balance_date) DO UPDATE SET
        opening_balance = excluded.opening_balance,
        closing_balance = excluded.closing_balance,
        updated_at = excluded.updated_at{extra}
"""

_UPSERT_PARAMS = (
    bindparam("balance_date", type_=Date()),
    bindparam("opening_balance", type_=_MONEY),
    bindparam("closing_balance", type_=_MONEY),
    bindparam("created_at", type_=DateTime()),
    bindparam("updated_at", type_=DateTime()),
)

UPSERT_BALANCE_SQL = text(_UPSERT_BALANCE_SQL.format(extra="")).bindparams(
    *_UPSERT_PARAMS
)

UPSERT_BALANCE_RESET_CREATED_SQL = text(
    _UPSERT_BALANCE_SQL.format(
        extra=",\n        created_at = excluded.created_at"
    )
).bindparams(*_UPSERT_PARAMS)

SELECT_SNAPSHOTS_SQL = text(
    """
    SELECT snapshot_date, bank_id, amount
    FROM bank_balance_snapshots
    WHERE snapshot_date <= :end_date
    ORDER BY snapshot_date, bank_id
    """
).bindparams(bindparam("end_date", type_=Date()))

SELECT_SNAPSHOTS_BETWEEN_SQL = text(
    """
    SELECT snapshot_date, bank_id, amount
    FROM bank_balance_snapshots
    WHERE snapshot_date >= :start_date
      AND snapshot_date <= :end_date
    ORDER BY snapshot_date, bank_id
    """
).bindparams(
    bindparam("start_date", type_=Date()),
    bindparam("end_date", type_=Date()),
)

SELECT_BILLING_SQL = text(
    """
    SELECT billing_date, amount, account_label
    FROM billing_totals
    WHERE billing_date >= :start_date
      AND billing_date <= :end_date
    ORDER BY billing_date
    """
).bindparams(
    bindparam("start_date", type_=Date()),
    bindparam("end_date", type_=Date()),
)

SELECT_APPLICATION_BASE_SQL = text(
    """
    SELECT base_date, amount
    FROM application_base_balances
    ORDER BY base_date
    LIMIT 1
    """
)


class SqlAlchemyLedgerRepository(LedgerStorePort):
    """Ledger store backed by SQLAlchemy text queries.

    Works against PostgreSQL and SQLite; both support the
    ``INSERT ... ON CONFLICT`` upsert keyed on ``balance_date``.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def ensure_schema(self) -> None:
        """Create the ledger tables if they do not exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            for statement in CREATE_SCHEMA_SQL:
                conn.exec_driver_sql(statement)

    def fetch_movements(
        self,
        day: date,
        source_kind: SourceKind,
    ) -> list[MovementRecord]:
        return self._select_movements(day, day, source_kind, error_day=day)

    def fetch_movements_between(
        self,
        start_date: date,
        end_date: date,
        source_kind: SourceKind,
    ) -> list[MovementRecord]:
        return self._select_movements(start_date, end_date, source_kind)

    def fetch_balance_record(self, day: date) -> DailyBalanceRecord | None:
        rows = self._fetch_all(SELECT_BALANCE_SQL, {"day": day}, day)
        return self._to_balance_record(rows[0]) if rows else None

    def fetch_latest_balance_before(
        self,
        day: date,
    ) -> DailyBalanceRecord | None:
        rows = self._fetch_all(
            SELECT_LATEST_BALANCE_BEFORE_SQL,
            {"day": day},
            day,
        )
        return self._to_balance_record(rows[0]) if rows else None

    def fetch_balance_records(
        self,
        start_date: date,
        end_date: date | None,
    ) -> list[DailyBalanceRecord]:
        if end_date is None:
            rows = self._fetch_all(
                SELECT_BALANCES_FROM_SQL,
                {"start_date": start_date},
            )
        else:
            rows = self._fetch_all(
                SELECT_BALANCES_BETWEEN_SQL,
                {"start_date": start_date, "end_date": end_date},
            )
        return [self._to_balance_record(row) for row in rows]

    def upsert_balance_record(
        self,
        record: DailyBalanceRecord,
        preserve_created_at: bool = True,
    ) -> None:
        now = datetime.now(timezone.utc)
        params = {
            "balance_date": record.date,
            "opening_balance": round_money(record.opening_balance),
            "closing_balance": round_money(record.closing_balance),
            "created_at": record.created_at or now,
            "updated_at": now,
        }
        statement = (
            UPSERT_BALANCE_SQL
            if preserve_created_at
            else UPSERT_BALANCE_RESET_CREATED_SQL
        )
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(statement, params)
        except SQLAlchemyError as exc:
            raise StoreUpsertError(
                f"Failed to upsert balance for {record.date}: {exc}",
                day=record.date,
            ) from exc

    def fetch_observed_balances(
        self,
        start_date: date | None,
        end_date: date,
    ) -> list[ObservedBalanceSnapshot]:
        if start_date is None:
            rows = self._fetch_all(SELECT_SNAPSHOTS_SQL, {"end_date": end_date})
        else:
            rows = self._fetch_all(
                SELECT_SNAPSHOTS_BETWEEN_SQL,
                {"start_date": start_date, "end_date": end_date},
            )
        return [
            ObservedBalanceSnapshot(
                date=coerce_date(row.snapshot_date),
                bank_id=str(row.bank_id),
                amount=round_money(row.amount),
            )
            for row in rows
        ]

    def fetch_billing_totals(
        self,
        start_date: date,
        end_date: date,
    ) -> list[BillingTotal]:
        rows = self._fetch_all(
            SELECT_BILLING_SQL,
            {"start_date": start_date, "end_date": end_date},
        )
        return [
            BillingTotal(
                date=coerce_date(row.billing_date),
                amount=round_money(row.amount),
                account_label=row.account_label or "",
            )
            for row in rows
        ]

    def fetch_application_base_balance(self) -> ApplicationBaseBalance | None:
        rows = self._fetch_all(SELECT_APPLICATION_BASE_SQL, {})
        if not rows:
            return None
        return ApplicationBaseBalance(
            date=coerce_date(rows[0].base_date),
            amount=round_money(rows[0].amount),
        )

    def _select_movements(
        self,
        start_date: date,
        end_date: date,
        source_kind: SourceKind,
        error_day: date | None = None,
    ) -> list[MovementRecord]:
        rows = self._fetch_all(
            SELECT_MOVEMENTS_SQL,
            {
                "start_date": start_date,
                "end_date": end_date,
                "source_kind": source_kind.value,
            },
            error_day,
        )
        return [
            MovementRecord(
                date=coerce_date(row.movement_date),
                amount=round_money(row.amount),
                category_label=row.category_label or "",
                source_kind=source_kind,
            )
            for row in rows
        ]

    def _fetch_all(self, query, params: dict, day: date | None = None) -> list:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                return conn.execute(query, params).all()
        except SQLAlchemyError as exc:
            raise StoreFetchError(
                f"Ledger store read failed: {exc}",
                day=day,
            ) from exc

    @staticmethod
    def _to_balance_record(row) -> DailyBalanceRecord:
        return DailyBalanceRecord(
            date=coerce_date(row.balance_date),
            opening_balance=round_money(row.opening_balance),
            closing_balance=round_money(row.closing_balance),
            created_at=coerce_datetime(row.created_at),
        )


__all__ = [
    "CREATE_SCHEMA_SQL",
    "UPSERT_BALANCE_SQL",
    "UPSERT_BALANCE_RESET_CREATED_SQL",
    "SqlAlchemyLedgerRepository",
]
