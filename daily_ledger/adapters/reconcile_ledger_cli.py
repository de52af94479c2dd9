"""CLI adapter comparing the ledger with bank or billing figures.

Environment variables:

* ``LEDGER_RECONCILIATION_MODE``: ``bank`` (default) or ``billing``.
* ``LEDGER_END_DATE``: last day (YYYY-MM-DD). Defaults to the last
  business day.
* ``LEDGER_START_DATE``: first day. Defaults to ``LEDGER_END_DATE``.
"""

from datetime import date
import os

from daily_ledger.domain.errors import LedgerError
from daily_ledger.domain.models import ReconciliationMode
from daily_ledger.domain.services.reconciliation import summarize_rows
from daily_ledger.infrastructure.container import build_reconciliation_use_case
from daily_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from daily_ledger.utils.date_utils import coerce_date, last_business_day


def _today() -> date:
    return date.today()


def _parse_mode(value: str | None, logger) -> ReconciliationMode | None:
    """Parse the reconciliation mode.

    Args:
        value: Raw mode name, case-insensitive.
        logger: Logger used for errors.

    Returns:
        ReconciliationMode | None: Parsed mode or None when unknown.
    """
    raw = (value or ReconciliationMode.BANK.value).strip().lower()
    try:
        return ReconciliationMode(raw)
    except ValueError:
        logger.error(
            f"Invalid reconciliation mode '{value}'. Expected bank or billing."
        )
        return None


def main() -> int:
    """Run a reconciliation and print one line per compared day."""
    logger = get_app_logger()
    mode = _parse_mode(os.getenv("LEDGER_RECONCILIATION_MODE"), logger)
    if mode is None:
        return 1

    raw_start = os.getenv("LEDGER_START_DATE", "").strip()
    raw_end = os.getenv("LEDGER_END_DATE", "").strip()
    try:
        end = coerce_date(raw_end) if raw_end else last_business_day(_today())
        start = coerce_date(raw_start) if raw_start else end
    except ValueError as exc:
        logger.error(str(exc))
        return 1

    get_usage_logger().info(
        f"reconcile_ledger_cli mode={mode.value} start={start} end={end}"
    )
    use_case = build_reconciliation_use_case()
    try:
        rows = use_case.execute(start, end, mode=mode)
    except (ValueError, LedgerError) as exc:
        logger.error(str(exc))
        return 1

    print(f"{mode.value.capitalize()} reconciliation ({start} to {end})")
    for row in rows:
        flag = "DIVERGENT" if row.divergent else "ok"
        print(
            f"{row.date}: ledger={row.computed_total} "
            f"observed={row.observed_total} diff={row.difference} {flag}"
        )
    summary = summarize_rows(rows)
    print(
        f"Days compared: {summary.days_with_data}, "
        f"divergent: {summary.divergent_days}, "
        f"largest difference: {summary.largest_difference}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
