"""CLI adapter recomputing daily balances over a date window.

Environment variables:

* ``LEDGER_START_DATE``: first day (YYYY-MM-DD). Defaults to the start of
  the configured window ending at ``LEDGER_END_DATE``.
* ``LEDGER_END_DATE``: last day, inclusive. Defaults to today.
* ``LEDGER_ANCHOR_OPENING``: explicit opening balance of the first day.
"""

from datetime import date, timedelta
import os

from daily_ledger.domain.errors import LedgerError
from daily_ledger.infrastructure.container import build_recalculation_use_case
from daily_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from daily_ledger.infrastructure.settings import LedgerSettings
from daily_ledger.utils.date_utils import coerce_date
from daily_ledger.utils.decimal_utils import parse_money


def _today() -> date:
    return date.today()


def _resolve_window(window_days: int) -> tuple[date, date]:
    """Resolve the recalculation window from the environment.

    Raises:
        ValueError: If a configured date is not in YYYY-MM-DD format.
    """
    raw_start = os.getenv("LEDGER_START_DATE", "").strip()
    raw_end = os.getenv("LEDGER_END_DATE", "").strip()
    end = coerce_date(raw_end) if raw_end else _today()
    if raw_start:
        start = coerce_date(raw_start)
    else:
        start = end - timedelta(days=window_days - 1)
    return start, end


def main() -> int:
    """Run a recalculation and print its summary.

    Returns:
        int: 0 when every day was recomputed and stored, 1 otherwise.
    """
    logger = get_app_logger()
    settings = LedgerSettings.from_env()

    try:
        start, end = _resolve_window(settings.default_window_days)
    except ValueError as exc:
        logger.error(str(exc))
        return 1

    raw_anchor = os.getenv("LEDGER_ANCHOR_OPENING")
    anchor_opening = parse_money(raw_anchor)
    if raw_anchor and anchor_opening is None:
        logger.error(f"Invalid LEDGER_ANCHOR_OPENING '{raw_anchor}'")
        return 1

    get_usage_logger().info(
        f"recalculate_ledger_cli start={start} end={end} "
        f"anchor={anchor_opening}"
    )
    use_case = build_recalculation_use_case(settings=settings)
    try:
        run = use_case.execute(start, end, anchor_opening=anchor_opening)
    except (ValueError, LedgerError) as exc:
        logger.error(str(exc))
        return 1

    print(
        f"Recalculated {run.processed_days}/{run.total_days} days "
        f"({start} to {end})"
    )
    print(f"Records stored: {len(run.updated)}")
    if run.last_closing is not None:
        print(f"Last closing balance: {run.last_closing}")
    if run.warnings:
        print(f"Ambiguous labels classified as expense: {len(run.warnings)}")
    for failure in run.failures:
        print(f"Failed {failure.date} [{failure.kind}]: {failure.reason}")

    return 0 if run.completed else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
