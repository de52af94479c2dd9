"""Composition root for wiring infrastructure adapters."""

from daily_ledger.application.ports.database import DatabaseEnginePort
from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.application.use_cases.get_application_statement import (
    GetApplicationStatementUseCase,
)
from daily_ledger.application.use_cases.import_daily_balances import (
    ImportDailyBalancesUseCase,
)
from daily_ledger.application.use_cases.recalculate_ledger import (
    LedgerRecalculator,
    RunRecalculationUseCase,
)
from daily_ledger.application.use_cases.reconcile_ledger import (
    ReconciliationComparator,
    RunReconciliationUseCase,
)
from daily_ledger.application.use_cases.sync_balance_chain import (
    SyncBalanceChainUseCase,
)
from daily_ledger.domain.services.aggregation import DailyMovementAggregator
from daily_ledger.domain.services.classification import MovementClassifier
from daily_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from daily_ledger.infrastructure.ledger_repository import (
    SqlAlchemyLedgerRepository,
)
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_store(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerStorePort:
    """Return the SQL-backed ledger store."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_recalculation_use_case(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
    should_cancel=None,
) -> RunRecalculationUseCase:
    """Return the recalculation trigger wired to the configured store."""
    resolved_store = store or build_ledger_store()
    resolved_settings = settings or LedgerSettings.from_env()
    logger = get_app_logger()
    recalculator = LedgerRecalculator(
        resolved_store,
        aggregator=DailyMovementAggregator(MovementClassifier()),
        logger=logger,
        source_kinds=resolved_settings.movement_sources,
        should_cancel=should_cancel,
    )
    return RunRecalculationUseCase(recalculator, logger=logger)


def build_reconciliation_use_case(
    store: LedgerStorePort | None = None,
    settings: LedgerSettings | None = None,
) -> RunReconciliationUseCase:
    """Return the reconciliation trigger with configured tolerances."""
    resolved_store = store or build_ledger_store()
    resolved_settings = settings or LedgerSettings.from_env()
    logger = get_app_logger()
    comparator = ReconciliationComparator(
        resolved_store,
        logger=logger,
        bank_tolerance=resolved_settings.bank_tolerance,
        billing_tolerance=resolved_settings.billing_tolerance,
    )
    return RunReconciliationUseCase(comparator, logger=logger)


def build_chain_sync_use_case(
    store: LedgerStorePort | None = None,
) -> SyncBalanceChainUseCase:
    """Return the balance chain synchronization use case."""
    return SyncBalanceChainUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_import_use_case(
    store: LedgerStorePort | None = None,
) -> ImportDailyBalancesUseCase:
    """Return the administrative balance import use case."""
    return ImportDailyBalancesUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


def build_application_statement_use_case(
    store: LedgerStorePort | None = None,
) -> GetApplicationStatementUseCase:
    """Return the investment account statement use case."""
    return GetApplicationStatementUseCase(
        store or build_ledger_store(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_store",
    "build_recalculation_use_case",
    "build_reconciliation_use_case",
    "build_chain_sync_use_case",
    "build_import_use_case",
    "build_application_statement_use_case",
]
