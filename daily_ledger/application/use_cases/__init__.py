"""Application use cases package."""

from .get_application_statement import GetApplicationStatementUseCase
from .import_daily_balances import ImportDailyBalancesUseCase
from .recalculate_ledger import (
    DEFAULT_SOURCE_KINDS,
    LedgerRecalculator,
    RunRecalculationUseCase,
)
from .reconcile_ledger import ReconciliationComparator, RunReconciliationUseCase
from .sync_balance_chain import SyncBalanceChainUseCase

__all__ = [
    "DEFAULT_SOURCE_KINDS",
    "GetApplicationStatementUseCase",
    "ImportDailyBalancesUseCase",
    "LedgerRecalculator",
    "ReconciliationComparator",
    "RunReconciliationUseCase",
    "RunRecalculationUseCase",
    "SyncBalanceChainUseCase",
]
