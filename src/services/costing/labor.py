"""
Labor cost primitives.

This module provides functions for:
- Per-employee wage cost (rate x hours)
- Totals and averages across a shift, grouped by role and by shift
- Percentage-based allocation of employee cost across products
- Staff attention time shared by customers served at the same time

Transaction boundary: Pure computation (no database access).
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from src.services.logging_utils import get_service_logger, log_operation
from src.utils.rounding import ZERO, round_cents, to_decimal

from .guards import check_guards
from .types import (
    AllocationDetail,
    Employee,
    LaborAllocation,
    LaborAllocationResult,
    LaborCostResult,
    LaborGroup,
    StaffRole,
)

logger = get_service_logger(__name__)

UNASSIGNED = "unassigned"
MINUTES_PER_HOUR = Decimal("60")


def labor_cost(employee: Employee) -> Decimal:
    """Return hourly_rate x hours_worked, unrounded."""
    return to_decimal(employee.hourly_rate) * to_decimal(employee.hours_worked)


def _group_by(employees: List[Employee], attr: str) -> Optional[Dict[str, LaborGroup]]:
    """Group employee cost by a label attribute.

    Returns None when no employee carries the label at all. Otherwise entries
    without it are bucketed under "unassigned". Keys keep first-seen order.
    """
    if not any(getattr(e, attr) for e in employees):
        return None

    groups: Dict[str, LaborGroup] = {}
    for employee in employees:
        key = getattr(employee, attr) or UNASSIGNED
        group = groups.setdefault(key, LaborGroup(count=0, total_cost=ZERO))
        group.count += 1
        group.total_cost += labor_cost(employee)
    return groups


def calculate_labor_cost(employees: List[Employee]) -> LaborCostResult:
    """
    Total the wage cost of a list of worker-shift entries.

    The total is not rounded; only the per-employee average is.

    Args:
        employees: Worker-shift entries

    Returns:
        LaborCostResult with total, count, average, and optional role/shift groups

    Example:
        >>> result = calculate_labor_cost([
        ...     Employee(15, 8, role="stocker"),
        ...     Employee(18, 8),
        ... ])
        >>> result.total_labor_cost
        Decimal('264')
        >>> list(result.by_role)
        ['stocker', 'unassigned']
    """
    total = sum((labor_cost(e) for e in employees), ZERO)
    count = len(employees)

    result = LaborCostResult(
        total_labor_cost=total,
        employee_count=count,
        average_cost_per_employee=round_cents(total / count) if count > 0 else None,
        by_role=_group_by(employees, "role"),
        by_shift=_group_by(employees, "shift"),
    )

    log_operation(
        logger,
        operation="calculate_labor_cost",
        outcome="success",
        level=logging.DEBUG,
        employee_count=count,
        total_labor_cost=str(total),
    )
    return result


def allocate_labor(
    employees: List[Employee],
    allocations: Dict[str, List[LaborAllocation]],
) -> LaborAllocationResult:
    """
    Split employee shift cost across products by percentage.

    Each employee's cost is rounded to the cent first. Every allocation line
    is then rounded on its own; product totals are rounded after summing
    their lines, and the overall allocated total is rounded once at the end.

    Percentages are not validated: allocations adding up to more than 100%
    of an employee simply produce a negative unallocated figure. An
    allocation pointing at an employee index that does not exist contributes
    nothing.

    Args:
        employees: Worker-shift entries, addressed by position
        allocations: Product name -> allocation lines, in display order

    Returns:
        LaborAllocationResult with per-product totals and detail lines

    Example:
        >>> result = allocate_labor(
        ...     [Employee(20, 8, role="baker")],
        ...     {"Bread": [LaborAllocation(0, 60)], "Cake": [LaborAllocation(0, 40)]},
        ... )
        >>> result.labor_by_product
        {'Bread': Decimal('96.00'), 'Cake': Decimal('64.00')}
        >>> result.unallocated_labor
        Decimal('0.00')
    """
    employee_costs = [round_cents(labor_cost(e)) for e in employees]

    labor_by_product: Dict[str, Decimal] = {}
    detail_by_product: Dict[str, List[AllocationDetail]] = {}
    running_allocated = ZERO

    for product_name, lines in allocations.items():
        product_total = ZERO
        details: List[AllocationDetail] = []

        for line in lines:
            if not 0 <= line.employee_index < len(employees):
                log_operation(
                    logger,
                    operation="allocate_labor",
                    outcome="unknown_employee",
                    level=logging.WARNING,
                    product=product_name,
                    employee_index=line.employee_index,
                )
                continue

            employee = employees[line.employee_index]
            percentage = to_decimal(line.percentage)
            cost = round_cents(employee_costs[line.employee_index] * percentage / 100)

            product_total += cost
            running_allocated += cost
            details.append(
                AllocationDetail(
                    role=employee.role or UNASSIGNED,
                    percentage=percentage,
                    cost=cost,
                )
            )

        labor_by_product[product_name] = round_cents(product_total)
        detail_by_product[product_name] = details

    total_allocated = round_cents(running_allocated)
    total_employee_cost = sum(employee_costs, ZERO)

    return LaborAllocationResult(
        labor_by_product=labor_by_product,
        detail_by_product=detail_by_product,
        total_allocated=total_allocated,
        unallocated_labor=round_cents(total_employee_cost - total_allocated),
    )


def calculate_staff_labor_cost(role: StaffRole) -> Decimal:
    """
    Calculate one staff role's labor cost per customer piece.

    Formula: (hourly_rate x minutes_per_customer / 60) / customers_simultaneous

    A Glazing Guide earning 15/hr who spends 20 minutes per customer while
    helping 4 customers at once costs (15 x 20 / 60) / 4 = 1.25 per piece.

    Returns 0 when customers_simultaneous is not positive or the rate or
    minutes are negative.
    """
    guard = check_guards(
        positive={"customers_simultaneous": role.customers_simultaneous},
        non_negative={
            "hourly_rate": role.hourly_rate,
            "minutes_per_customer": role.minutes_per_customer,
        },
    )
    if not guard.is_valid:
        log_operation(
            logger,
            operation="calculate_staff_labor_cost",
            outcome="degraded",
            level=logging.DEBUG,
            role=role.name,
            reason=guard.reason,
        )
        return round_cents(ZERO)

    attention_cost = to_decimal(role.hourly_rate) * to_decimal(role.minutes_per_customer) / MINUTES_PER_HOUR
    return round_cents(attention_cost / to_decimal(role.customers_simultaneous))
