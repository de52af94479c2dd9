"""Domain validation helpers."""

from datetime import date
from logging import Logger

from daily_ledger.domain.errors import InvalidRangeError
from daily_ledger.domain.models import DailyBalanceRecord
from daily_ledger.utils.date_utils import coerce_date


def resolve_date_range(start, end=None) -> tuple[date, date]:
    """Validate and normalize a date range.

    Args:
        start: First day, as a date or a YYYY-MM-DD string.
        end: Last day; defaults to ``start`` when omitted.

    Returns:
        tuple[date, date]: Normalized inclusive range.

    Raises:
        InvalidRangeError: If a bound is malformed or start is after end.
    """
    try:
        start_date = coerce_date(start)
        end_date = coerce_date(end) if end not in (None, "") else start_date
    except ValueError as exc:
        raise InvalidRangeError(str(exc)) from exc
    if start_date > end_date:
        raise InvalidRangeError(
            f"Start date {start_date} is after end date {end_date}"
        )
    return start_date, end_date


def validate_balance_sign(record: DailyBalanceRecord, logger: Logger) -> None:
    """Warn when a computed closing balance is negative."""
    if record.closing_balance < 0:
        logger.warning(
            f"Closing balance is negative on {record.date}: "
            f"{record.closing_balance}"
        )


__all__ = ["resolve_date_range", "validate_balance_sign"]
