"""Classification of free-text labels into ledger movement categories."""

from dataclasses import dataclass

from daily_ledger.domain.constants import (
    AMBIGUOUS_HINTS,
    APPLICATION_KEYWORD,
    REDEMPTION_KEYWORD,
    TRANSFER_KEYWORD,
)
from daily_ledger.domain.models import MovementCategory
from daily_ledger.domain.services.normalization import normalize_label

# Tested in order once a label is known to be an application movement.
APPLICATION_RULES: tuple[tuple[str, MovementCategory], ...] = (
    (REDEMPTION_KEYWORD, MovementCategory.APPLICATION_REDEMPTION),
    (TRANSFER_KEYWORD, MovementCategory.APPLICATION_TRANSFER_OUT),
)


@dataclass(frozen=True)
class Classification:
    """Category assigned to a label, plus an ambiguity flag."""

    category: MovementCategory
    normalized_label: str
    ambiguous: bool = False


class MovementClassifier:
    """Map area and account labels to movement categories.

    Labels without the application keyword are expenses. Application labels
    are matched against ``rules`` in order; the first keyword found wins and
    a label matching none of them falls back to ``default_application``.
    """

    def __init__(
        self,
        rules: tuple[tuple[str, MovementCategory], ...] = APPLICATION_RULES,
        application_keyword: str = APPLICATION_KEYWORD,
        default_application: MovementCategory = (
            MovementCategory.APPLICATION_TRANSFER_OUT
        ),
        ambiguous_hints: tuple[str, ...] = AMBIGUOUS_HINTS,
    ) -> None:
        self._rules = rules
        self._application_keyword = application_keyword
        self._default_application = default_application
        self._ambiguous_hints = ambiguous_hints

    def classify(self, label: str | None) -> MovementCategory:
        """Return the movement category of a label."""
        return self.explain(label).category

    def explain(self, label: str | None) -> Classification:
        """Classify a label and report whether the result is a guess.

        Args:
            label: Raw area or account name.

        Returns:
            Classification: Category, normalized label and ambiguity flag.
        """
        normalized = normalize_label(label)
        if self._application_keyword not in normalized:
            return Classification(
                category=MovementCategory.EXPENSE,
                normalized_label=normalized,
                ambiguous=self._is_ambiguous(normalized),
            )
        for keyword, category in self._rules:
            if keyword in normalized:
                return Classification(category, normalized)
        return Classification(self._default_application, normalized)

    def _is_ambiguous(self, normalized: str) -> bool:
        if not normalized:
            return True
        return any(hint in normalized for hint in self._ambiguous_hints)


__all__ = ["APPLICATION_RULES", "Classification", "MovementClassifier"]
