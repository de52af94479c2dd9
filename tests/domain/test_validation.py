"""Tests for the domain validation helpers."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from daily_ledger.domain.errors import InvalidRangeError
from daily_ledger.domain.models import DailyBalanceRecord
from daily_ledger.domain.services.validation import (
    resolve_date_range,
    validate_balance_sign,
)


def test_resolve_date_range_accepts_strings_and_dates():
    start, end = resolve_date_range("2025-01-01", date(2025, 1, 3))

    assert start == date(2025, 1, 1)
    assert end == date(2025, 1, 3)


def test_resolve_date_range_defaults_end_to_start():
    assert resolve_date_range("2025-01-05") == (date(2025, 1, 5), date(2025, 1, 5))


def test_resolve_date_range_rejects_inverted_range():
    with pytest.raises(InvalidRangeError):
        resolve_date_range("2025-01-05", "2025-01-01")


@pytest.mark.parametrize("value", ["05/01/2025", "2025-13-01", "yesterday", None])
def test_resolve_date_range_rejects_malformed_start(value):
    with pytest.raises(InvalidRangeError):
        resolve_date_range(value)


def test_invalid_range_is_a_value_error():
    assert issubclass(InvalidRangeError, ValueError)


def test_validate_balance_sign_warns_on_negative_closing():
    logger = MagicMock()
    record = DailyBalanceRecord(date(2025, 1, 1), Decimal("10.00"), Decimal("-5.00"))

    validate_balance_sign(record, logger)

    logger.warning.assert_called_once()


def test_validate_balance_sign_is_silent_otherwise():
    logger = MagicMock()
    record = DailyBalanceRecord(date(2025, 1, 1), Decimal("10.00"), Decimal("0.00"))

    validate_balance_sign(record, logger)

    logger.warning.assert_not_called()
