"""
Monetary rounding helpers for the COGS calculator.

Every reported money figure in the application goes through round_cents()
exactly once. Values are handled as Decimal so that float inputs such as
1.005 round the way a person doing the arithmetic by hand would expect.

Usage:
    from src.utils.rounding import round_cents, to_decimal

    round_cents(1.005)      # Decimal('1.01')
    to_decimal(0.1)         # Decimal('0.1')
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

Number = Union[Decimal, float, int, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert a numeric input to Decimal.

    Floats are converted through their string form so 0.1 becomes
    Decimal('0.1') rather than its binary approximation.

    Args:
        value: Decimal, float, int, numeric string, or None

    Returns:
        Decimal value (Decimal('0') for None)
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_cents(value: Union[Number, None]) -> Decimal:
    """
    Round a dollar amount to the nearest cent.

    Half-cent values round away from zero. Precision is widened for large
    amounts so that any finite value can be quantized.

    Args:
        value: Amount to round

    Returns:
        Decimal quantized to two decimal places

    Examples:
        >>> round_cents(1.005)
        Decimal('1.01')
        >>> round_cents(-2.345)
        Decimal('-2.35')
        >>> round_cents(140)
        Decimal('140.00')
    """
    amount = to_decimal(value)
    with localcontext() as ctx:
        # Integer digits plus two decimal places plus one guard digit
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
