"""Infrastructure adapters for the daily ledger."""
