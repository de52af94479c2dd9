"""Tests for the recalculate_ledger_cli adapter."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from daily_ledger.adapters import recalculate_ledger_cli
from daily_ledger.domain.errors import StoreFetchError
from daily_ledger.domain.models import (
    DailyBalanceRecord,
    DateFailure,
    RecalculationRun,
)
from daily_ledger.infrastructure.settings import LedgerSettings


@pytest.fixture
def cli_env(monkeypatch):
    """Patch loggers, settings and the use case builder."""
    for name in ("LEDGER_START_DATE", "LEDGER_END_DATE", "LEDGER_ANCHOR_OPENING"):
        monkeypatch.delenv(name, raising=False)
    app_logger = MagicMock()
    use_case = MagicMock()
    monkeypatch.setattr(recalculate_ledger_cli, "get_app_logger", lambda: app_logger)
    monkeypatch.setattr(
        recalculate_ledger_cli,
        "get_usage_logger",
        lambda: MagicMock(),
    )
    monkeypatch.setattr(
        recalculate_ledger_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: LedgerSettings(default_window_days=3)),
    )
    monkeypatch.setattr(
        recalculate_ledger_cli,
        "build_recalculation_use_case",
        lambda settings=None: use_case,
    )
    monkeypatch.setattr(recalculate_ledger_cli, "_today", lambda: date(2025, 1, 10))
    return app_logger, use_case


def test_main_prints_summary(monkeypatch, capsys, cli_env):
    _, use_case = cli_env
    monkeypatch.setenv("LEDGER_START_DATE", "2025-01-01")
    monkeypatch.setenv("LEDGER_END_DATE", "2025-01-02")
    monkeypatch.setenv("LEDGER_ANCHOR_OPENING", "1000")
    use_case.execute.return_value = RecalculationRun(
        total_days=2,
        processed_days=2,
        updated=[
            DailyBalanceRecord(date(2025, 1, 1), Decimal("1000.00"), Decimal("1300.00")),
            DailyBalanceRecord(date(2025, 1, 2), Decimal("1300.00"), Decimal("1300.00")),
        ],
        failures=[],
    )

    exit_code = recalculate_ledger_cli.main()

    assert exit_code == 0
    use_case.execute.assert_called_once_with(
        date(2025, 1, 1),
        date(2025, 1, 2),
        anchor_opening=Decimal("1000.00"),
    )
    output = capsys.readouterr().out
    assert "Recalculated 2/2 days" in output
    assert "Last closing balance: 1300.00" in output


def test_main_defaults_to_window_ending_today(cli_env):
    _, use_case = cli_env
    use_case.execute.return_value = RecalculationRun(0, 0, [], [])

    recalculate_ledger_cli.main()

    use_case.execute.assert_called_once_with(
        date(2025, 1, 8),
        date(2025, 1, 10),
        anchor_opening=None,
    )


def test_main_reports_failures_with_non_zero_exit(capsys, cli_env):
    _, use_case = cli_env
    use_case.execute.return_value = RecalculationRun(
        total_days=3,
        processed_days=1,
        updated=[],
        failures=[
            DateFailure(date(2025, 1, 9), "read refused", "fetch", terminal=True)
        ],
    )

    assert recalculate_ledger_cli.main() == 1
    assert "Failed 2025-01-09 [fetch]: read refused" in capsys.readouterr().out


def test_main_rejects_malformed_dates(monkeypatch, cli_env):
    app_logger, use_case = cli_env
    monkeypatch.setenv("LEDGER_START_DATE", "01/01/2025")

    assert recalculate_ledger_cli.main() == 1
    app_logger.error.assert_called_once()
    use_case.execute.assert_not_called()


@pytest.mark.parametrize("anchor", ["lots", "1e30"])
def test_main_rejects_invalid_anchor(monkeypatch, cli_env, anchor):
    app_logger, use_case = cli_env
    monkeypatch.setenv("LEDGER_ANCHOR_OPENING", anchor)

    assert recalculate_ledger_cli.main() == 1
    use_case.execute.assert_not_called()


def test_main_logs_inverted_range(monkeypatch, cli_env):
    app_logger, use_case = cli_env
    use_case.execute.side_effect = ValueError("Start date after end date")

    assert recalculate_ledger_cli.main() == 1
    app_logger.error.assert_called_once_with("Start date after end date")


def test_main_reports_store_failures(cli_env):
    app_logger, use_case = cli_env
    use_case.execute.side_effect = StoreFetchError("db down")

    assert recalculate_ledger_cli.main() == 1
    app_logger.error.assert_called_once_with("db down")
