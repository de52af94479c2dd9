"""Domain models package."""

from .application import (
    ApplicationBaseBalance,
    ApplicationDailyBalance,
    ApplicationMovement,
    ApplicationStatement,
)
from .ledger import (
    BalanceImportRow,
    ChainAdjustment,
    ChainSyncResult,
    DailyBalanceRecord,
    DateFailure,
    ImportResult,
    RecalculationResult,
    RecalculationRun,
)
from .movements import (
    ClassificationAmbiguity,
    DailyMovementSummary,
    MovementCategory,
    MovementRecord,
    SourceKind,
)
from .reconciliation import (
    BillingTotal,
    ObservedBalanceSnapshot,
    ReconciliationMode,
    ReconciliationRow,
    ReconciliationSummary,
)

__all__ = [
    "ApplicationBaseBalance",
    "ApplicationDailyBalance",
    "ApplicationMovement",
    "ApplicationStatement",
    "BalanceImportRow",
    "ChainAdjustment",
    "ChainSyncResult",
    "DailyBalanceRecord",
    "DateFailure",
    "ImportResult",
    "RecalculationResult",
    "RecalculationRun",
    "ClassificationAmbiguity",
    "DailyMovementSummary",
    "MovementCategory",
    "MovementRecord",
    "SourceKind",
    "BillingTotal",
    "ObservedBalanceSnapshot",
    "ReconciliationMode",
    "ReconciliationRow",
    "ReconciliationSummary",
]
