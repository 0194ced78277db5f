"""DTO utilities for service layer.

Provides standardized formatting functions for cost values, ensuring
consistent JSON serialization and report output.
"""

from decimal import Decimal
from typing import Union

from src.utils.rounding import round_cents


def cost_to_string(value: Union[Decimal, float, int, str, None]) -> str:
    """
    Convert a cost value to a 2-decimal string format.

    This is the standard format for cost values in JSON output.

    Args:
        value: Cost value (Decimal, float, int, str, or None)

    Returns:
        String formatted as "12.34" (2 decimal places).
        Returns "0.00" if value is None.

    Examples:
        >>> cost_to_string(Decimal("12.345"))
        '12.35'
        >>> cost_to_string(12.3)
        '12.30'
        >>> cost_to_string(None)
        '0.00'
    """
    return str(round_cents(value))


def format_currency(value: Union[Decimal, float, int, str, None]) -> str:
    """
    Format a cost as a US dollar string with thousands separators.

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(0)
        '$0.00'
        >>> format_currency(Decimal("-5"))
        '-$5.00'
    """
    amount = round_cents(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
