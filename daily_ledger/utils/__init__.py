"""Shared helpers for dates, money and paths."""
