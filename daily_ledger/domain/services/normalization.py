"""Domain normalization helpers."""

import unicodedata


def strip_accents(text: str) -> str:
    """Remove combining diacritical marks from a string."""
    normalized = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def normalize_label(label: str | None) -> str:
    """Normalize a category label for keyword matching.

    Args:
        label: Raw area or account name from a repository.

    Returns:
        str: Label without diacritics, uppercased and trimmed.
    """
    if not label:
        return ""
    return strip_accents(str(label)).upper().strip()


__all__ = ["strip_accents", "normalize_label"]
