"""Utilities package for the COGS calculator."""

from .rounding import round_cents, to_decimal

__all__ = [
    "round_cents",
    "to_decimal",
]
