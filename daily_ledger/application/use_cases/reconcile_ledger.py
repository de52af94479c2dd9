"""Use cases comparing the computed ledger with externally observed figures.

Both comparisons are read-only: they never write balance records.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.constants import (
    DEFAULT_BANK_TOLERANCE,
    DEFAULT_BILLING_TOLERANCE,
)
from daily_ledger.domain.models import (
    BillingTotal,
    MovementRecord,
    ObservedBalanceSnapshot,
    ReconciliationMode,
    ReconciliationRow,
    SourceKind,
)
from daily_ledger.domain.services.aggregation import DailyMovementAggregator
from daily_ledger.domain.services.classification import MovementClassifier
from daily_ledger.domain.services.reconciliation import (
    build_reconciliation_row,
    latest_snapshot_total,
)
from daily_ledger.domain.services.validation import resolve_date_range
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.utils.date_utils import iter_dates
from daily_ledger.utils.decimal_utils import ZERO, add_money


class ReconciliationComparator:
    """Compare ledger balances and revenues with bank and billing figures."""

    def __init__(
        self,
        store: LedgerStorePort,
        classifier: MovementClassifier | None = None,
        aggregator: DailyMovementAggregator | None = None,
        logger=None,
        bank_tolerance: Decimal = DEFAULT_BANK_TOLERANCE,
        billing_tolerance: Decimal = DEFAULT_BILLING_TOLERANCE,
    ) -> None:
        """Initialize the comparator.

        Args:
            store: Port providing ledger records and observed figures.
            classifier: Classifier used to spot the application account.
            aggregator: Aggregator computing ledger revenue per day.
            logger: Optional logger compatible with logging.Logger-like API.
            bank_tolerance: Largest bank difference considered a match.
            billing_tolerance: Largest billing difference considered a match.
        """
        self._store = store
        self._classifier = classifier or MovementClassifier()
        self._aggregator = aggregator or DailyMovementAggregator(
            self._classifier
        )
        self._logger = logger or get_app_logger()
        self._bank_tolerance = bank_tolerance
        self._billing_tolerance = billing_tolerance

    def compare_bank_balances(self, day: date) -> ReconciliationRow:
        """Compare the stored closing balance with bank-reported balances.

        Args:
            day: Day to reconcile.

        Returns:
            ReconciliationRow: Observed sum of the latest balance per bank
            against the ledger closing balance.
        """
        snapshots = self._store.fetch_observed_balances(None, day)
        return self._bank_row(day, snapshots)

    def compare_bank_range(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ReconciliationRow]:
        """Return bank reconciliation rows for days with a ledger record.

        Days without a stored balance (weekends, days not yet recalculated)
        produce no row.
        """
        snapshots = self._store.fetch_observed_balances(None, end_date)
        rows = []
        for day in iter_dates(start_date, end_date):
            row = self._bank_row(day, snapshots, skip_unrecorded=True)
            if row is not None:
                rows.append(row)
        return rows

    def compare_billing(
        self,
        start_date: date,
        end_date: date,
    ) -> list[ReconciliationRow]:
        """Compare billed amounts with ledger revenue, day by day.

        The investment account is excluded on both sides. Days with neither
        billing nor revenue produce no row.

        Returns:
            list[ReconciliationRow]: Rows in ascending date order.
        """
        billed = self._billing_by_day(
            self._store.fetch_billing_totals(start_date, end_date)
        )
        revenues = self._revenues_by_day(
            self._store.fetch_movements_between(
                start_date,
                end_date,
                SourceKind.REVENUE,
            )
        )
        rows = []
        for day in iter_dates(start_date, end_date):
            if day not in billed and day not in revenues:
                continue
            summary = self._aggregator.aggregate(day, revenues.get(day, []))
            row = build_reconciliation_row(
                day,
                computed_total=summary.revenue_total,
                observed_total=billed.get(day, ZERO),
                tolerance=self._billing_tolerance,
            )
            if row.divergent:
                self._logger.warning(
                    f"Billing divergence on {day}: billed={row.observed_total} "
                    f"ledger={row.computed_total} diff={row.difference}"
                )
            rows.append(row)
        return rows

    def _bank_row(
        self,
        day: date,
        snapshots: Iterable[ObservedBalanceSnapshot],
        skip_unrecorded: bool = False,
    ) -> ReconciliationRow | None:
        observed, bank_count = latest_snapshot_total(snapshots, day)
        record = self._store.fetch_balance_record(day)
        if record is None and skip_unrecorded:
            self._logger.info(f"No ledger balance for {day}; skipped")
            return None
        if record is None:
            self._logger.warning(
                f"No ledger balance for {day}; comparing banks against zero"
            )
        if bank_count == 0:
            self._logger.warning(f"No bank balances reported up to {day}")
        computed = record.closing_balance if record is not None else ZERO
        row = build_reconciliation_row(
            day,
            computed_total=computed,
            observed_total=observed,
            tolerance=self._bank_tolerance,
        )
        if row.divergent:
            self._logger.warning(
                f"Bank divergence on {day}: banks={row.observed_total} "
                f"ledger={row.computed_total} diff={row.difference}"
            )
        return row

    def _billing_by_day(
        self,
        totals: Iterable[BillingTotal],
    ) -> dict[date, Decimal]:
        billed: dict[date, Decimal] = {}
        for total in totals:
            if self._classifier.classify(total.account_label).is_application:
                continue
            billed[total.date] = add_money(billed.get(total.date, ZERO), total.amount)
        return billed

    def _revenues_by_day(
        self,
        movements: Iterable[MovementRecord],
    ) -> dict[date, list[MovementRecord]]:
        grouped: dict[date, list[MovementRecord]] = defaultdict(list)
        for movement in movements:
            if self._classifier.classify(movement.category_label).is_application:
                continue
            grouped[movement.date].append(movement)
        return dict(grouped)


class RunReconciliationUseCase:
    """Run a bank or billing reconciliation over a date range."""

    def __init__(self, comparator: ReconciliationComparator, logger=None) -> None:
        self._comparator = comparator
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date,
        end_date=None,
        mode: ReconciliationMode | str = ReconciliationMode.BANK,
    ) -> list[ReconciliationRow]:
        """Return reconciliation rows for the range.

        Raises:
            InvalidRangeError: If the range is malformed or inverted.
            ValueError: If ``mode`` is not a known reconciliation mode.
        """
        start, end = resolve_date_range(start_date, end_date)
        resolved_mode = ReconciliationMode(mode)
        if resolved_mode is ReconciliationMode.BANK:
            rows = self._comparator.compare_bank_range(start, end)
        else:
            rows = self._comparator.compare_billing(start, end)
        divergent = sum(1 for row in rows if row.divergent)
        self._logger.info(
            f"{resolved_mode.value} reconciliation {start}..{end}: "
            f"{len(rows)} days compared, {divergent} divergent"
        )
        return rows


__all__ = ["ReconciliationComparator", "RunReconciliationUseCase"]
