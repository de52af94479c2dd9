"""Command-line adapters for the daily ledger."""
