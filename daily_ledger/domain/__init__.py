"""Domain package for ledger rules and core models."""

from .errors import (
    InvalidRangeError,
    LedgerError,
    StoreError,
    StoreFetchError,
    StoreUpsertError,
)
from .models import (
    DailyBalanceRecord,
    DailyMovementSummary,
    MovementCategory,
    MovementRecord,
    ReconciliationMode,
    ReconciliationRow,
    SourceKind,
)
from .services import (
    DailyMovementAggregator,
    MovementClassifier,
    resolve_date_range,
)

__all__ = [
    "InvalidRangeError",
    "LedgerError",
    "StoreError",
    "StoreFetchError",
    "StoreUpsertError",
    "DailyBalanceRecord",
    "DailyMovementSummary",
    "MovementCategory",
    "MovementRecord",
    "ReconciliationMode",
    "ReconciliationRow",
    "SourceKind",
    "DailyMovementAggregator",
    "MovementClassifier",
    "resolve_date_range",
]
