"""
Overhead aggregation.

Overhead is everything it costs to keep the doors open that is not tied to a
specific piece: rent, insurance, utilities, software subscriptions. It is
entered as named line items split into fixed and variable categories.

A negative line item is treated as a data-entry error and contributes
nothing; it is never subtracted from the total.
"""

from decimal import Decimal
from typing import Iterable

from src.utils.rounding import ZERO, to_decimal

from .types import OverheadItem, OverheadSettings


def sum_overhead_items(items: Iterable[OverheadItem]) -> Decimal:
    """
    Add up overhead line items, treating negative amounts as 0.

    Example:
        >>> sum_overhead_items([OverheadItem("1", "Refund", -500), OverheadItem("2", "Rent", 300)])
        Decimal('300')
    """
    return sum((max(ZERO, to_decimal(item.amount)) for item in items), ZERO)


def calculate_total_overhead(settings: OverheadSettings) -> Decimal:
    """Return the combined monthly total of fixed and variable overhead."""
    return sum_overhead_items(settings.fixed_costs) + sum_overhead_items(settings.variable_costs)
