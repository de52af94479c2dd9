"""Use case building the investment (application) account statement."""

from datetime import date
from decimal import Decimal

from daily_ledger.application.ports.ledger_store import LedgerStorePort
from daily_ledger.domain.models import (
    ApplicationDailyBalance,
    ApplicationMovement,
    ApplicationStatement,
    MovementCategory,
    MovementRecord,
    SourceKind,
)
from daily_ledger.domain.services.classification import MovementClassifier
from daily_ledger.domain.services.validation import resolve_date_range
from daily_ledger.infrastructure.logging.logger import get_app_logger
from daily_ledger.utils.date_utils import iter_dates
from daily_ledger.utils.decimal_utils import ZERO, add_money, round_money

_SOURCES = (SourceKind.AREA_EXPENSE, SourceKind.BANK_TRANSFER, SourceKind.REVENUE)


class GetApplicationStatementUseCase:
    """Compute the investment account balance and its movements.

    Seen from the investment account, transfers out of the cash ledger are
    applications (the balance grows) and redemptions, including revenue
    booked on the application account, reduce it.
    """

    def __init__(
        self,
        store: LedgerStorePort,
        classifier: MovementClassifier | None = None,
        logger=None,
    ) -> None:
        self._store = store
        self._classifier = classifier or MovementClassifier()
        self._logger = logger or get_app_logger()

    def execute(self, start_date, end_date=None) -> ApplicationStatement:
        """Return the statement for ``[start_date, end_date]``.

        Returns:
            ApplicationStatement: Opening and closing balances, totals,
            movements with running balance and per-day positions.

        Raises:
            InvalidRangeError: If the range is malformed or inverted.
        """
        start, end = resolve_date_range(start_date, end_date)
        base = self._store.fetch_application_base_balance()
        base_date = base.date if base is not None else start
        balance = round_money(base.amount) if base is not None else ZERO
        if base is None:
            self._logger.warning(
                "No application base balance found; starting from zero"
            )

        movements = self._collect_movements(min(base_date, start), end)

        opening = balance
        in_period: list[ApplicationMovement] = []
        for movement in movements:
            if movement.date < base_date:
                continue
            delta = -movement.amount if movement.is_redemption else movement.amount
            balance = add_money(balance, delta)
            if movement.date < start:
                opening = balance
                continue
            in_period.append(
                ApplicationMovement(
                    date=movement.date,
                    is_redemption=movement.is_redemption,
                    amount=movement.amount,
                    description=movement.description,
                    source_kind=movement.source_kind,
                    balance_after=balance,
                )
            )

        total_applied = ZERO
        total_redeemed = ZERO
        for movement in in_period:
            if movement.is_redemption:
                total_redeemed = add_money(total_redeemed, movement.amount)
            else:
                total_applied = add_money(total_applied, movement.amount)

        closing = in_period[-1].balance_after if in_period else opening
        statement = ApplicationStatement(
            opening_balance=opening,
            closing_balance=closing,
            total_applied=total_applied,
            total_redeemed=total_redeemed,
            movements=in_period,
            daily_balances=self._daily_balances(in_period, start, end),
            base_date=base.date if base is not None else None,
        )
        self._logger.info(
            f"Application statement {start}..{end}: opening={opening} "
            f"closing={closing} movements={len(in_period)}"
        )
        return statement

    def _collect_movements(
        self,
        start: date,
        end: date,
    ) -> list[ApplicationMovement]:
        collected: list[ApplicationMovement] = []
        for source_kind in _SOURCES:
            records = self._store.fetch_movements_between(start, end, source_kind)
            for record in records:
                movement = self._to_application_movement(record)
                if movement is not None:
                    collected.append(movement)
        # Stable sort keeps store order within a day.
        return sorted(collected, key=lambda item: item.date)

    def _to_application_movement(
        self,
        record: MovementRecord,
    ) -> ApplicationMovement | None:
        category = self._classifier.classify(record.category_label)
        if not category.is_application:
            return None
        amount = round_money(record.amount)
        if amount == 0:
            return None
        is_redemption = (
            record.source_kind is SourceKind.REVENUE
            or category is MovementCategory.APPLICATION_REDEMPTION
        )
        return ApplicationMovement(
            date=record.date,
            is_redemption=is_redemption,
            amount=amount,
            description=record.category_label,
            source_kind=record.source_kind,
        )

    @staticmethod
    def _daily_balances(
        movements: list[ApplicationMovement],
        start: date,
        end: date,
    ) -> list[ApplicationDailyBalance]:
        by_day: dict[date, list[ApplicationMovement]] = {}
        for movement in movements:
            by_day.setdefault(movement.date, []).append(movement)

        daily = []
        for day in iter_dates(start, end):
            day_movements = by_day.get(day)
            if not day_movements:
                continue
            applied: Decimal = ZERO
            redeemed: Decimal = ZERO
            for movement in day_movements:
                if movement.is_redemption:
                    redeemed = add_money(redeemed, movement.amount)
                else:
                    applied = add_money(applied, movement.amount)
            daily.append(
                ApplicationDailyBalance(
                    date=day,
                    closing_balance=day_movements[-1].balance_after,
                    applied=applied,
                    redeemed=redeemed,
                )
            )
        return daily


__all__ = ["GetApplicationStatementUseCase"]
