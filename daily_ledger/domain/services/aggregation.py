"""Aggregation of raw movements into daily ledger totals."""

from collections.abc import Iterable
from datetime import date

from daily_ledger.domain.models import (
    ClassificationAmbiguity,
    DailyMovementSummary,
    MovementCategory,
    MovementRecord,
    SourceKind,
)
from daily_ledger.domain.services.classification import MovementClassifier
from daily_ledger.utils.decimal_utils import ZERO, add_money, round_money


class DailyMovementAggregator:
    """Sum one day's movements into revenue, expense and application totals."""

    def __init__(self, classifier: MovementClassifier | None = None) -> None:
        self._classifier = classifier or MovementClassifier()

    def aggregate(
        self,
        day: date,
        movements: Iterable[MovementRecord],
    ) -> DailyMovementSummary:
        """Return the totals for ``day``.

        Revenue records labelled as application movements are cash coming
        back from the investment account: they go to ``application_net``
        instead of ``revenue_total``. Area expenses and bank transfers are
        classified and split between ``expense_total`` and
        ``application_net``. Records dated on other days are ignored.

        Args:
            day: Day being aggregated.
            movements: Raw movement records, any source kind.

        Returns:
            DailyMovementSummary: Rounded totals for the day.
        """
        revenue_total = ZERO
        expense_total = ZERO
        application_net = ZERO
        ambiguities: list[ClassificationAmbiguity] = []

        for movement in movements:
            if movement.date != day:
                continue
            amount = round_money(movement.amount)
            classification = self._classifier.explain(movement.category_label)
            category = classification.category
            if classification.ambiguous:
                ambiguities.append(
                    ClassificationAmbiguity(
                        date=day,
                        label=movement.category_label or "",
                        source_kind=movement.source_kind,
                    )
                )

            if movement.source_kind is SourceKind.REVENUE:
                if category.is_application:
                    application_net = add_money(application_net, amount)
                else:
                    revenue_total = add_money(revenue_total, amount)
                continue

            if category is MovementCategory.EXPENSE:
                expense_total = add_money(expense_total, amount)
            elif category is MovementCategory.APPLICATION_REDEMPTION:
                application_net = add_money(application_net, amount)
            else:
                application_net = add_money(application_net, -amount)

        return DailyMovementSummary(
            date=day,
            revenue_total=revenue_total,
            expense_total=expense_total,
            application_net=application_net,
            ambiguities=tuple(ambiguities),
        )


__all__ = ["DailyMovementAggregator"]
