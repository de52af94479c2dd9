"""Daily cash ledger: balance recalculation and reconciliation engine."""
