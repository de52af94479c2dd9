"""Use case re-chaining stored balances without recomputing movements.

The first record of the window is the starting point. Every later record
gets the previous closing as its opening and keeps its own daily variation
(closing minus opening as stored).
"""

from datetime import date

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.errors import StoreUpsertError
from daily_ledger.domain.models import (
    ChainAdjustment,
    ChainSyncResult,
    DailyBalanceRecord,
    DateFailure,
)
from daily_ledger.domain.services.validation import resolve_date_range
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.utils.decimal_utils import round_money


class SyncBalanceChainUseCase:
    """Align each stored opening balance with the previous closing."""

    def __init__(self, store: LedgerStorePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            store: Port providing balance records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._logger = logger or get_app_logger()

    def execute(self, start_date, end_date=None) -> ChainSyncResult:
        """Re-chain records from ``start_date`` (to ``end_date`` if given).

        Returns:
            ChainSyncResult: Adjusted days and failed updates.
        """
        end: date | None
        if end_date is None:
            start, _ = resolve_date_range(start_date)
            end = None
        else:
            start, end = resolve_date_range(start_date, end_date)

        records = self._store.fetch_balance_records(start, end)
        if not records:
            self._logger.info(f"No balance records to synchronize from {start}")
            return ChainSyncResult(adjustments=[], failures=[])

        first, *rest = records
        self._logger.info(
            f"Synchronizing {len(records)} records; {first.date} kept as "
            "starting point"
        )
        carry = round_money(first.closing_balance)
        adjustments: list[ChainAdjustment] = []
        failures: list[DateFailure] = []

        for record in rest:
            variation = round_money(record.variation)
            new_opening = carry
            new_closing = round_money(new_opening + variation)
            carry = new_closing
            if (
                new_opening == round_money(record.opening_balance)
                and new_closing == round_money(record.closing_balance)
            ):
                continue
            updated = DailyBalanceRecord(
                date=record.date,
                opening_balance=new_opening,
                closing_balance=new_closing,
                created_at=record.created_at,
            )
            try:
                self._store.upsert_balance_record(
                    updated,
                    preserve_created_at=True,
                )
            except StoreUpsertError as exc:
                self._logger.error(
                    f"Could not update balance for {record.date}: {exc}"
                )
                failures.append(DateFailure(record.date, str(exc), "upsert"))
                continue
            self._logger.info(
                f"{record.date}: opening {record.opening_balance} -> "
                f"{new_opening}, closing {record.closing_balance} -> "
                f"{new_closing}"
            )
            adjustments.append(
                ChainAdjustment(
                    date=record.date,
                    previous_opening=record.opening_balance,
                    new_opening=new_opening,
                    previous_closing=record.closing_balance,
                    new_closing=new_closing,
                )
            )

        return ChainSyncResult(adjustments=adjustments, failures=failures)


__all__ = ["SyncBalanceChainUseCase"]
