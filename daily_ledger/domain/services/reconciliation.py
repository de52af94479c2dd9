"""Pure reconciliation helpers comparing ledger and observed figures."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from daily_ledger.domain.models import (
    ObservedBalanceSnapshot,
    ReconciliationRow,
    ReconciliationSummary,
)
from daily_ledger.utils.decimal_utils import ZERO, add_money, round_money


def build_reconciliation_row(
    day: date,
    computed_total,
    observed_total,
    tolerance: Decimal,
) -> ReconciliationRow:
    """Compare two figures for a day.

    Args:
        day: Compared day.
        computed_total: Figure taken from the ledger.
        observed_total: Figure reported by the external source.
        tolerance: Largest absolute difference still considered a match.

    Returns:
        ReconciliationRow: Row with ``difference = observed - computed``.
    """
    computed = round_money(computed_total)
    observed = round_money(observed_total)
    difference = round_money(observed - computed)
    return ReconciliationRow(
        date=day,
        computed_total=computed,
        observed_total=observed,
        difference=difference,
        divergent=abs(difference) > tolerance,
    )


def latest_snapshot_total(
    snapshots: Iterable[ObservedBalanceSnapshot],
    as_of: date,
) -> tuple[Decimal, int]:
    """Sum the most recent snapshot of each bank up to ``as_of``.

    Returns:
        tuple[Decimal, int]: Rounded total and number of banks counted.
    """
    latest: dict[str, ObservedBalanceSnapshot] = {}
    for snapshot in snapshots:
        if snapshot.date > as_of:
            continue
        current = latest.get(snapshot.bank_id)
        if current is None or snapshot.date >= current.date:
            latest[snapshot.bank_id] = snapshot
    total = ZERO
    for bank_id in sorted(latest):
        total = add_money(total, latest[bank_id].amount)
    return total, len(latest)


def summarize_rows(rows: Iterable[ReconciliationRow]) -> ReconciliationSummary:
    """Aggregate reconciliation rows into headline figures."""
    rows = list(rows)
    divergent = [row for row in rows if row.divergent]
    largest = ZERO
    for row in divergent:
        if abs(row.difference) > abs(largest):
            largest = row.difference
    observed = ZERO
    computed = ZERO
    for row in rows:
        observed = add_money(observed, row.observed_total)
        computed = add_money(computed, row.computed_total)
    return ReconciliationSummary(
        days_with_data=len(rows),
        divergent_days=len(divergent),
        largest_difference=largest,
        observed_total=observed,
        computed_total=computed,
    )


__all__ = [
    "build_reconciliation_row",
    "latest_snapshot_total",
    "summarize_rows",
]
