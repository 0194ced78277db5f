"""
Input guards for the costing primitives.

Each guarded primitive evaluates a single guard before doing any arithmetic.
A DEGRADED result means the primitive reports a zero contribution instead of
computing a cost from a zero divisor or a negative rate, time, or count.
Callers never see an exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from src.utils.rounding import Number, to_decimal


class GuardStatus(Enum):
    """Outcome of evaluating a primitive's inputs."""

    VALID = "valid"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class GuardResult:
    """Tagged guard outcome.

    Attributes:
        status: VALID or DEGRADED
        reason: Why the inputs were rejected (None when valid)
    """

    status: GuardStatus
    reason: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status is GuardStatus.VALID


VALID = GuardResult(GuardStatus.VALID)


def check_guards(
    positive: Optional[Dict[str, Number]] = None,
    non_negative: Optional[Dict[str, Number]] = None,
) -> GuardResult:
    """
    Check that divisors are positive and magnitudes are non-negative.

    Fields are checked in the order given; the first failure is reported.

    Args:
        positive: Field name -> value that must be greater than 0
        non_negative: Field name -> value that must be zero or greater

    Returns:
        VALID, or a DEGRADED GuardResult naming the first failing field

    Examples:
        >>> check_guards(positive={"pieces_per_firing": 0}).reason
        'pieces_per_firing must be greater than 0'
        >>> check_guards(non_negative={"hourly_rate": 15}).is_valid
        True
    """
    for name, value in (positive or {}).items():
        if to_decimal(value) <= 0:
            return GuardResult(GuardStatus.DEGRADED, f"{name} must be greater than 0")

    for name, value in (non_negative or {}).items():
        if to_decimal(value) < 0:
            return GuardResult(GuardStatus.DEGRADED, f"{name} must not be negative")

    return VALID
