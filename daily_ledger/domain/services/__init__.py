"""Domain services package."""

from .aggregation import DailyMovementAggregator
from .classification import APPLICATION_RULES, Classification, MovementClassifier
from .normalization import normalize_label, strip_accents
from .reconciliation import (
    build_reconciliation_row,
    latest_snapshot_total,
    summarize_rows,
)
from .validation import resolve_date_range, validate_balance_sign

__all__ = [
    "APPLICATION_RULES",
    "Classification",
    "DailyMovementAggregator",
    "MovementClassifier",
    "build_reconciliation_row",
    "latest_snapshot_total",
    "normalize_label",
    "resolve_date_range",
    "strip_accents",
    "summarize_rows",
    "validate_balance_sign",
]
