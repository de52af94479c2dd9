"""Domain constants for the daily ledger."""

from decimal import Decimal

APPLICATION_KEYWORD = "APLICACAO"
REDEMPTION_KEYWORD = "RESGATE"
TRANSFER_KEYWORD = "TRANSFERENCIA"

# Fragments hinting at an investment movement that lacks the full keyword.
AMBIGUOUS_HINTS = ("APLIC", "RESGATE", "INVEST")

DEFAULT_BANK_TOLERANCE = Decimal("0.01")
DEFAULT_BILLING_TOLERANCE = Decimal("0.009")


__all__ = [
    "APPLICATION_KEYWORD",
    "REDEMPTION_KEYWORD",
    "TRANSFER_KEYWORD",
    "AMBIGUOUS_HINTS",
    "DEFAULT_BANK_TOLERANCE",
    "DEFAULT_BILLING_TOLERANCE",
]
