"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

from daily_ledger.application.use_cases.recalculate_ledger import (
    DEFAULT_SOURCE_KINDS,
)
from daily_ledger.domain.constants import (
    DEFAULT_BANK_TOLERANCE,
    DEFAULT_BILLING_TOLERANCE,
)
from daily_ledger.domain.models import SourceKind
from daily_ledger.infrastructure.logging.logger import get_app_logger

DEFAULT_MOVEMENT_SOURCES = DEFAULT_SOURCE_KINDS


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the recalculation and reconciliation engine.

    Attributes:
        bank_tolerance: Largest bank difference still considered a match.
        billing_tolerance: Largest billing difference considered a match.
        movement_sources: Movement source kinds fetched for every day.
        default_window_days: Days recalculated by the CLI when no range is
            given.
    """

    bank_tolerance: Decimal = DEFAULT_BANK_TOLERANCE
    billing_tolerance: Decimal = DEFAULT_BILLING_TOLERANCE
    movement_sources: tuple[SourceKind, ...] = DEFAULT_MOVEMENT_SOURCES
    default_window_days: int = 7

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        return cls(
            bank_tolerance=cls._read_decimal(
                "LEDGER_BANK_TOLERANCE",
                DEFAULT_BANK_TOLERANCE,
                logger,
            ),
            billing_tolerance=cls._read_decimal(
                "LEDGER_BILLING_TOLERANCE",
                DEFAULT_BILLING_TOLERANCE,
                logger,
            ),
            movement_sources=cls._read_sources(logger),
            default_window_days=cls._read_window(logger),
        )

    @staticmethod
    def _read_decimal(name: str, default: Decimal, logger) -> Decimal:
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            logger.warning(f"Invalid {name}='{raw}'; using {default}")
            return default
        if not value.is_finite() or value < 0:
            logger.warning(f"Invalid {name}='{raw}'; using {default}")
            return default
        return value

    @staticmethod
    def _read_sources(logger) -> tuple[SourceKind, ...]:
        raw = os.getenv("LEDGER_MOVEMENT_SOURCES")
        if not raw:
            return DEFAULT_MOVEMENT_SOURCES
        sources = []
        for item in raw.split(","):
            name = item.strip().lower()
            if not name:
                continue
            try:
                source = SourceKind(name)
            except ValueError:
                logger.warning(f"Ignoring unknown movement source '{name}'")
                continue
            if source not in sources:
                sources.append(source)
        if not sources:
            logger.warning(
                "LEDGER_MOVEMENT_SOURCES has no valid entry; using defaults"
            )
            return DEFAULT_MOVEMENT_SOURCES
        return tuple(sources)

    @staticmethod
    def _read_window(logger) -> int:
        raw = os.getenv("LEDGER_DEFAULT_WINDOW_DAYS")
        if not raw:
            return 7
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value < 1:
            logger.warning(f"Invalid LEDGER_DEFAULT_WINDOW_DAYS='{raw}'; using 7")
            return 7
        return value


__all__ = ["DEFAULT_MOVEMENT_SOURCES", "LedgerSettings"]
