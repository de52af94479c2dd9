"""Tests for the ledger recalculation engine and its trigger."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from daily_ledger.application.use_cases.recalculate_ledger import (
    LedgerRecalculator,
    RunRecalculationUseCase,
)
from daily_ledger.domain.errors import InvalidRangeError, StoreFetchError
from daily_ledger.domain.models import SourceKind

D1 = date(2025, 1, 1)
D2 = date(2025, 1, 2)
D3 = date(2025, 1, 3)
D4 = date(2025, 1, 4)


class _Clock:
    """Clock returning a new timestamp on every call."""

    def __init__(self) -> None:
        self.current = datetime(2025, 6, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


def _recalculator(store, logger, **kwargs) -> LedgerRecalculator:
    kwargs.setdefault("clock", _Clock())
    return LedgerRecalculator(store, logger=logger, **kwargs)


def _seed_daily_activity(store) -> None:
    for offset in range(4):
        day = D1 + timedelta(days=offset)
        store.add_movement(day, "100.00", "Vendas", SourceKind.REVENUE)
        store.add_movement(day, "30.00", "Fornecedores")


def test_anchor_day_and_next_opening(store, logger):
    """The anchor opening feeds the first day and its closing the next."""
    store.add_movement(D1, "500.00", "Vendas", SourceKind.REVENUE)
    store.add_movement(D1, "200.00", "Fornecedores")

    result = _recalculator(store, logger).recalculate(
        D1,
        D2,
        anchor_opening=Decimal("1000.00"),
    )

    assert result.failures == []
    assert store.records[D1].opening_balance == Decimal("1000.00")
    assert store.records[D1].closing_balance == Decimal("1300.00")
    assert store.records[D2].opening_balance == Decimal("1300.00")
    assert store.records[D2].closing_balance == Decimal("1300.00")


def test_openings_chain_across_the_range(store, logger):
    _seed_daily_activity(store)

    result = _recalculator(store, logger).recalculate(
        D1,
        D4,
        anchor_opening=Decimal("10.00"),
    )

    records = result.updated
    assert [record.date for record in records] == [D1, D2, D3, D4]
    for previous, current in zip(records, records[1:]):
        assert current.opening_balance == previous.closing_balance
    assert records[-1].closing_balance == Decimal("290.00")
    for record in records:
        assert record.closing_balance.as_tuple().exponent == -2


def test_second_run_is_idempotent_and_keeps_created_at(store, logger):
    _seed_daily_activity(store)
    recalculator = _recalculator(store, logger)

    first = recalculator.recalculate(D1, D4, anchor_opening=Decimal("10.00"))
    stored_after_first = dict(store.records)
    second = recalculator.recalculate(D1, D4, anchor_opening=Decimal("10.00"))

    assert [
        (r.date, r.opening_balance, r.closing_balance) for r in first.updated
    ] == [
        (r.date, r.opening_balance, r.closing_balance) for r in second.updated
    ]
    for day, record in store.records.items():
        assert record.created_at == stored_after_first[day].created_at


def test_opening_carried_from_latest_earlier_record(store, logger):
    store.add_record(date(2024, 12, 27), "0.00", "900.00")
    store.add_movement(D1, "50.00", "Aluguel")

    result = _recalculator(store, logger).recalculate(D1, D1)

    assert result.updated[0].opening_balance == Decimal("900.00")
    assert result.updated[0].closing_balance == Decimal("850.00")


def test_earliest_day_keeps_its_stored_opening(store, logger):
    """Without earlier records the first day is the anchor."""
    store.add_record(D1, "750.00", "0.00")
    store.add_movement(D1, "50.00", "Vendas", SourceKind.REVENUE)

    result = _recalculator(store, logger).recalculate(D1, D2)

    assert store.records[D1].opening_balance == Decimal("750.00")
    assert store.records[D1].closing_balance == Decimal("800.00")
    assert result.updated[1].opening_balance == Decimal("800.00")


def test_empty_ledger_starts_from_zero(store, logger):
    store.add_movement(D1, "20.00", "Vendas", SourceKind.REVENUE)

    result = _recalculator(store, logger).recalculate(D1, D1)

    assert result.updated[0].opening_balance == Decimal("0.00")
    assert result.updated[0].closing_balance == Decimal("20.00")


def test_write_failure_is_recorded_and_later_days_still_chain(store, logger):
    """A failed write keeps the in-memory closing as the next opening."""
    _seed_daily_activity(store)
    store.upsert_failures = {D2}

    result = _recalculator(store, logger).recalculate(
        D1,
        D4,
        anchor_opening=Decimal("10.00"),
    )

    assert [failure.date for failure in result.failures] == [D2]
    assert result.failures[0].kind == "upsert"
    assert result.halted is False
    assert [record.date for record in result.updated] == [D1, D3, D4]
    assert D2 not in store.records
    assert store.records[D3].opening_balance == Decimal("150.00")
    assert store.records[D4].closing_balance == Decimal("290.00")
    logger.error.assert_called_once()


def test_read_failure_stops_the_pass(store, logger):
    _seed_daily_activity(store)
    store.fetch_failures = {D3}

    result = _recalculator(store, logger).recalculate(
        D1,
        D4,
        anchor_opening=Decimal("10.00"),
    )

    assert [record.date for record in result.updated] == [D1, D2]
    assert len(result.failures) == 1
    assert result.failures[0].date == D3
    assert result.failures[0].terminal is True
    assert result.halted is True
    assert D4 not in store.records


def test_failure_reading_previous_balance_is_terminal(logger):
    store = MagicMock()
    store.fetch_latest_balance_before.side_effect = StoreFetchError("down")

    result = _recalculator(store, logger).recalculate(D1, D2)

    assert result.updated == []
    assert result.failures[0].date == D1
    assert result.failures[0].kind == "fetch"
    store.upsert_balance_record.assert_not_called()


def test_cancellation_stops_between_dates(store, logger):
    _seed_daily_activity(store)
    checks = iter([False, False, True])

    result = _recalculator(
        store,
        logger,
        should_cancel=lambda: next(checks),
    ).recalculate(D1, D4, anchor_opening=Decimal("0.00"))

    assert [record.date for record in result.updated] == [D1, D2]
    assert result.failures[-1].kind == "cancelled"
    assert result.failures[-1].date == D3
    assert D3 not in store.records


def test_inverted_range_raises_before_any_work(store, logger):
    with pytest.raises(InvalidRangeError):
        _recalculator(store, logger).recalculate(D2, D1)

    assert store.upserts == []


def test_ambiguous_labels_surface_as_warnings(store, logger):
    store.add_movement(D1, "10.00", "")

    result = _recalculator(store, logger).recalculate(
        D1,
        D1,
        anchor_opening=Decimal("100.00"),
    )

    assert result.updated[0].closing_balance == Decimal("90.00")
    assert len(result.warnings) == 1
    assert result.warnings[0].source_kind is SourceKind.AREA_EXPENSE
    logger.warning.assert_called()


def test_only_configured_sources_are_fetched(store, logger):
    store.add_movement(D1, "10.00", "Tarifa", SourceKind.BANK_TRANSFER)

    default_run = _recalculator(store, logger).recalculate(
        D1, D1, anchor_opening=Decimal("0.00")
    )
    with_transfers = _recalculator(
        store,
        logger,
        source_kinds=list(SourceKind),
    ).recalculate(D1, D1, anchor_opening=Decimal("0.00"))

    assert default_run.updated[0].closing_balance == Decimal("0.00")
    assert with_transfers.updated[0].closing_balance == Decimal("-10.00")


def test_run_use_case_reports_complete_run(store, logger):
    _seed_daily_activity(store)
    use_case = RunRecalculationUseCase(_recalculator(store, logger), logger=logger)

    run = use_case.execute("2025-01-01", "2025-01-04", Decimal("10.00"))

    assert run.completed is True
    assert run.total_days == 4
    assert run.processed_days == 4
    assert run.last_closing == Decimal("290.00")


def test_run_use_case_counts_write_failures_as_processed(store, logger):
    _seed_daily_activity(store)
    store.upsert_failures = {D2}
    use_case = RunRecalculationUseCase(_recalculator(store, logger), logger=logger)

    run = use_case.execute(D1, D4, Decimal("10.00"))

    assert run.completed is False
    assert run.processed_days == run.total_days == 4
    assert len(run.failures) == 1


def test_run_use_case_defaults_end_to_start(store, logger):
    use_case = RunRecalculationUseCase(_recalculator(store, logger), logger=logger)

    run = use_case.execute("2025-01-03")

    assert run.total_days == 1
    assert [record.date for record in run.updated] == [D3]
