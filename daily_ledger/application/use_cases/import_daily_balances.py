"""Use case importing administrative daily balances."""

from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.errors import StoreError
from daily_ledger.domain.models import (
    BalanceImportRow,
    DailyBalanceRecord,
    ImportResult,
)
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.utils.date_utils import parse_flexible_date
from daily_ledger.utils.decimal_utils import parse_money


class ImportDailyBalancesUseCase:
    """Write operator-supplied opening and closing balances.

    Rows are validated one by one; a bad row or a store error is reported
    and the import moves on to the next row.
    """

    def __init__(
        self,
        store: LedgerStorePort,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._logger = logger or get_app_logger()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, rows: Iterable[BalanceImportRow]) -> ImportResult:
        """Import the rows.

        Args:
            rows: Balance lines with dates as YYYY-MM-DD or DD/MM/YYYY.

        Returns:
            ImportResult: Totals and the error message of every failed row.
        """
        rows = list(rows)
        succeeded = 0
        errors: list[str] = []

        for row in rows:
            day = parse_flexible_date(row.raw_date)
            if day is None:
                errors.append(f"Invalid date: '{row.raw_date}'")
                continue
            opening = parse_money(row.opening)
            closing = parse_money(row.closing)
            if opening is None or closing is None:
                errors.append(f"Invalid amounts for {day.isoformat()}")
                continue
            try:
                existing = self._store.fetch_balance_record(day)
                created_at = (
                    existing.created_at
                    if existing is not None and existing.created_at is not None
                    else self._clock()
                )
                self._store.upsert_balance_record(
                    DailyBalanceRecord(
                        date=day,
                        opening_balance=opening,
                        closing_balance=closing,
                        created_at=created_at,
                    ),
                    preserve_created_at=True,
                )
            except StoreError as exc:
                self._logger.error(f"Balance import failed for {day}: {exc}")
                errors.append(f"{day.isoformat()}: {exc}")
                continue
            succeeded += 1

        result = ImportResult(
            total=len(rows),
            succeeded=succeeded,
            failed=len(errors),
            errors=errors,
        )
        self._logger.info(
            f"Imported {result.succeeded}/{result.total} daily balances"
        )
        return result


__all__ = ["ImportDailyBalancesUseCase"]
