"""Use case recomputing daily balances over a contiguous date range.

Each day's opening balance is the previous day's closing balance, so dates
are processed strictly in ascending order. The pass is written as a left
fold over the dates: ``_step`` receives the accumulated ``_FoldState`` and
returns a new one, and the loop only stops early on a terminal failure.

Failure policy:

* a read failure (movements or the existing record) stops the pass at that
  date, since the carry-forward value is unknown past it;
* a write failure is recorded and the pass continues with the in-memory
  closing balance.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import Decimal

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.errors import StoreFetchError, StoreUpsertError
from daily_ledger.domain.models import (
    ClassificationAmbiguity,
    DailyBalanceRecord,
    DateFailure,
    MovementRecord,
    RecalculationResult,
    RecalculationRun,
    SourceKind,
)
from daily_ledger.domain.services.aggregation import DailyMovementAggregator
from daily_ledger.domain.services.validation import (
    resolve_date_range,
    validate_balance_sign,
)
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.utils.date_utils import iter_dates
from daily_ledger.utils.decimal_utils import ZERO, round_money

DEFAULT_SOURCE_KINDS = (SourceKind.REVENUE, SourceKind.AREA_EXPENSE)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _FoldState:
    """Accumulator threaded through the recalculation fold."""

    opening_carry: Decimal
    anchor_date: date | None = None
    anchor_opening: Decimal | None = None
    updated: tuple[DailyBalanceRecord, ...] = ()
    failures: tuple[DateFailure, ...] = ()
    warnings: tuple[ClassificationAmbiguity, ...] = ()
    halted: bool = False

    def opening_for(self, day: date) -> Decimal:
        if day == self.anchor_date and self.anchor_opening is not None:
            return self.anchor_opening
        return self.opening_carry

    def fail(self, failure: DateFailure) -> "_FoldState":
        return replace(
            self,
            failures=self.failures + (failure,),
            halted=self.halted or failure.terminal,
        )


class LedgerRecalculator:
    """Recompute and persist daily balance records."""

    def __init__(
        self,
        store: LedgerStorePort,
        aggregator: DailyMovementAggregator | None = None,
        logger=None,
        source_kinds: Iterable[SourceKind] = DEFAULT_SOURCE_KINDS,
        clock: Callable[[], datetime] = _utc_now,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize the recalculator.

        Args:
            store: Port providing movements and balance persistence.
            aggregator: Aggregator turning movements into daily totals.
            logger: Optional logger compatible with logging.Logger-like API.
            source_kinds: Movement sources fetched for every day.
            clock: Timestamp factory for newly created records.
            should_cancel: Optional hook checked between dates.
        """
        self._store = store
        self._aggregator = aggregator or DailyMovementAggregator()
        self._logger = logger or get_app_logger()
        self._source_kinds = tuple(source_kinds)
        self._clock = clock
        self._should_cancel = should_cancel

    def recalculate(
        self,
        start,
        end,
        anchor_opening: Decimal | None = None,
    ) -> RecalculationResult:
        """Recompute balances for every date in ``[start, end]``.

        Args:
            start: First date, as a date or a YYYY-MM-DD string.
            end: Last date, inclusive.
            anchor_opening: Explicit opening balance of ``start``. When
                given, ``start`` is the anchor date and its opening is never
                derived from earlier records.

        Returns:
            RecalculationResult: Persisted records, failures and warnings.

        Raises:
            InvalidRangeError: If the range is malformed or inverted.
        """
        start_date, end_date = resolve_date_range(start, end)
        try:
            state = self._initial_state(start_date, anchor_opening)
        except StoreFetchError as exc:
            self._logger.error(
                f"Could not read the balance preceding {start_date}: {exc}"
            )
            failure = DateFailure(start_date, str(exc), "fetch", terminal=True)
            return RecalculationResult(failures=[failure])

        for day in iter_dates(start_date, end_date):
            if self._should_cancel is not None and self._should_cancel():
                self._logger.warning(f"Recalculation cancelled before {day}")
                state = state.fail(
                    DateFailure(day, "cancelled", "cancelled", terminal=True)
                )
                break
            state = self._step(state, day)
            if state.halted:
                break

        return RecalculationResult(
            updated=list(state.updated),
            failures=list(state.failures),
            warnings=list(state.warnings),
        )

    def _initial_state(
        self,
        start_date: date,
        anchor_opening: Decimal | None,
    ) -> _FoldState:
        if anchor_opening is not None:
            opening = round_money(anchor_opening)
            self._logger.info(
                f"Anchor opening {opening} supplied for {start_date}"
            )
            return _FoldState(
                opening_carry=opening,
                anchor_date=start_date,
                anchor_opening=opening,
            )

        previous = self._store.fetch_latest_balance_before(start_date)
        if previous is not None:
            self._logger.info(
                f"Carrying closing {previous.closing_balance} "
                f"from {previous.date} into {start_date}"
            )
            return _FoldState(opening_carry=round_money(previous.closing_balance))

        # No earlier record: start is the first ledger day and keeps the
        # opening it was stored with.
        existing = self._store.fetch_balance_record(start_date)
        opening = (
            round_money(existing.opening_balance) if existing is not None else ZERO
        )
        self._logger.info(
            f"{start_date} is the earliest ledger day; "
            f"keeping opening {opening}"
        )
        return _FoldState(
            opening_carry=opening,
            anchor_date=start_date,
            anchor_opening=opening,
        )

    def _step(self, state: _FoldState, day: date) -> _FoldState:
        try:
            existing = self._store.fetch_balance_record(day)
            movements = self._fetch_day_movements(day)
        except StoreFetchError as exc:
            self._logger.error(f"Stopping recalculation at {day}: {exc}")
            return state.fail(DateFailure(day, str(exc), "fetch", terminal=True))

        summary = self._aggregator.aggregate(day, movements)
        for ambiguity in summary.ambiguities:
            self._logger.warning(
                f"Label '{ambiguity.label}' on {day} "
                f"({ambiguity.source_kind.value}) classified as expense"
            )

        opening = state.opening_for(day)
        closing = round_money(opening + summary.net_change)
        created_at = (
            existing.created_at
            if existing is not None and existing.created_at is not None
            else self._clock()
        )
        record = DailyBalanceRecord(
            date=day,
            opening_balance=opening,
            closing_balance=closing,
            created_at=created_at,
        )
        validate_balance_sign(record, self._logger)
        state = replace(
            state,
            opening_carry=closing,
            warnings=state.warnings + summary.ambiguities,
        )

        try:
            self._store.upsert_balance_record(record, preserve_created_at=True)
        except StoreUpsertError as exc:
            self._logger.error(
                f"Could not persist balance for {day}; "
                f"carrying {closing} forward: {exc}"
            )
            return state.fail(DateFailure(day, str(exc), "upsert"))

        self._logger.info(
            f"{day}: opening={opening} revenue={summary.revenue_total} "
            f"expense={summary.expense_total} "
            f"application={summary.application_net} closing={closing}"
        )
        return replace(state, updated=state.updated + (record,))

    def _fetch_day_movements(self, day: date) -> list[MovementRecord]:
        movements: list[MovementRecord] = []
        for source_kind in self._source_kinds:
            movements.extend(self._store.fetch_movements(day, source_kind))
        return movements


class RunRecalculationUseCase:
    """Trigger a recalculation and summarize it for callers."""

    def __init__(self, recalculator: LedgerRecalculator, logger=None) -> None:
        """Initialize the use case.

        Args:
            recalculator: Engine performing the recalculation pass.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._recalculator = recalculator
        self._logger = logger or get_app_logger()

    def execute(
        self,
        start_date,
        end_date=None,
        anchor_opening: Decimal | None = None,
    ) -> RecalculationRun:
        """Recalculate ``[start_date, end_date]`` and report the outcome.

        Returns:
            RecalculationRun: Attempted vs processed days, records, failures.

        Raises:
            InvalidRangeError: If the range is malformed or inverted.
        """
        start, end = resolve_date_range(start_date, end_date)
        total_days = (end - start).days + 1
        result = self._recalculator.recalculate(start, end, anchor_opening)

        upsert_failures = [
            failure for failure in result.failures if failure.kind == "upsert"
        ]
        processed_days = len(result.updated) + len(upsert_failures)
        run = RecalculationRun(
            total_days=total_days,
            processed_days=processed_days,
            updated=result.updated,
            failures=result.failures,
            warnings=result.warnings,
        )
        if run.completed:
            self._logger.info(
                f"Recalculated {total_days} days from {start} to {end}"
            )
        else:
            self._logger.warning(
                f"Recalculation {start}..{end} processed "
                f"{processed_days}/{total_days} days with "
                f"{len(result.failures)} failures"
            )
        return run


__all__ = [
    "DEFAULT_SOURCE_KINDS",
    "LedgerRecalculator",
    "RunRecalculationUseCase",
]
