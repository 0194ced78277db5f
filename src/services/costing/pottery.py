"""
Pottery studio piece COGS.

COGS is the total cost to produce one piece a customer paints. This module
adds up, per piece:

    1. Bisque cost     - the unpainted ceramic piece bought from a supplier
    2. Glaze cost      - paint, brushes, and supplies used per piece
    3. Staff labor     - each role's wages, split across concurrent customers
    4. Kiln labor      - wages for loading, firing, and unloading the kiln
    5. Studio overhead - monthly overhead spread across monthly volume

Transaction boundary: Pure computation (no database access).
"""

import logging
from decimal import Decimal
from typing import Dict, List

from src.services.logging_utils import get_service_logger, log_operation
from src.utils.rounding import Number, ZERO, round_cents, to_decimal

from .guards import check_guards
from .labor import MINUTES_PER_HOUR, calculate_staff_labor_cost
from .types import (
    KilnBatchConfig,
    OverheadInput,
    PieceCOGSBreakdown,
    PieceCOGSResult,
    StaffRole,
)

logger = get_service_logger(__name__)


def calculate_kiln_labor_cost(config: KilnBatchConfig) -> Decimal:
    """
    Calculate the kiln labor cost allocated to a single piece.

    Formula: (hourly_rate x minutes_per_firing / 60) x kiln_worker_count / pieces_per_firing

    Example: 2 workers at 17/hr, a 30-minute firing, 20 pieces per load:
        firing labor = (17 x 30 / 60) x 2 = 17.00, per piece = 17.00 / 20 = 0.85

    Returns 0 when pieces_per_firing is not positive or the rate, worker
    count, or minutes are negative.
    """
    guard = check_guards(
        positive={"pieces_per_firing": config.pieces_per_firing},
        non_negative={
            "hourly_rate": config.hourly_rate,
            "kiln_worker_count": config.kiln_worker_count,
            "minutes_per_firing": config.minutes_per_firing,
        },
    )
    if not guard.is_valid:
        log_operation(
            logger,
            operation="calculate_kiln_labor_cost",
            outcome="degraded",
            level=logging.DEBUG,
            reason=guard.reason,
        )
        return round_cents(ZERO)

    firing_labor = (
        to_decimal(config.hourly_rate) * to_decimal(config.minutes_per_firing) / MINUTES_PER_HOUR
    ) * to_decimal(config.kiln_worker_count)
    return round_cents(firing_labor / to_decimal(config.pieces_per_firing))


def calculate_overhead_cost(overhead: OverheadInput) -> Decimal:
    """
    Spread monthly overhead evenly across the pieces produced in a month.

    Example: 6000/month with 400 pieces/month = 15.00 per piece.

    Returns 0 when pieces_per_month is not positive or monthly_overhead is
    negative.
    """
    guard = check_guards(
        positive={"pieces_per_month": overhead.pieces_per_month},
        non_negative={"monthly_overhead": overhead.monthly_overhead},
    )
    if not guard.is_valid:
        log_operation(
            logger,
            operation="calculate_overhead_cost",
            outcome="degraded",
            level=logging.DEBUG,
            reason=guard.reason,
        )
        return round_cents(ZERO)

    return round_cents(to_decimal(overhead.monthly_overhead) / to_decimal(overhead.pieces_per_month))


def calculate_piece_cogs(
    bisque_cost: Number,
    glaze_cost_per_piece: Number,
    staff_roles: List[StaffRole],
    kiln: KilnBatchConfig,
    overhead: OverheadInput,
) -> PieceCOGSResult:
    """
    Calculate the total COGS for a single customer piece.

    bisque + glaze + staff labor + kiln labor + overhead = total COGS

    Roles sharing a name overwrite each other in labor_by_role (the later
    role wins) but every role still counts toward labor_total. The labor
    total is rounded once, after summing the per-role costs.

    When overhead is kept as categorized line items, compute
    overhead.monthly_overhead with calculate_total_overhead() first.

    Args:
        bisque_cost: Wholesale cost of the unpainted piece
        glaze_cost_per_piece: Glaze and supplies consumed per piece
        staff_roles: Roles contributing labor to a customer's piece
        kiln: Kiln firing labor settings
        overhead: Monthly overhead and production volume

    Returns:
        PieceCOGSResult with the total and a line-by-line breakdown
    """
    labor_by_role: Dict[str, Decimal] = {}
    labor_sum = ZERO

    for role in staff_roles:
        cost = calculate_staff_labor_cost(role)
        labor_by_role[role.name] = cost
        labor_sum += cost

    labor_total = round_cents(labor_sum)
    kiln_cost = calculate_kiln_labor_cost(kiln)
    overhead_cost = calculate_overhead_cost(overhead)

    bisque = to_decimal(bisque_cost)
    glaze = to_decimal(glaze_cost_per_piece)
    total_cogs = round_cents(bisque + glaze + labor_total + kiln_cost + overhead_cost)

    log_operation(
        logger,
        operation="calculate_piece_cogs",
        outcome="success",
        level=logging.DEBUG,
        role_count=len(staff_roles),
        total_cogs=str(total_cogs),
    )

    return PieceCOGSResult(
        total_cogs=total_cogs,
        breakdown=PieceCOGSBreakdown(
            bisque_cost=bisque,
            glaze_cost=glaze,
            labor_by_role=labor_by_role,
            labor_total=labor_total,
            kiln_cost=kiln_cost,
            overhead_cost=overhead_cost,
        ),
    )
