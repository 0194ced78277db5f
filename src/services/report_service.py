"""
Report Service - Plain-text cost reports.

Formats costing engine results for the command line. Every money figure is
shown with format_currency(); nothing here recalculates a cost.
"""

from typing import Dict, List, Optional

from src.services.costing import (
    COGSResult,
    LaborAllocationResult,
    LaborCostResult,
    LaborGroup,
    MultiProductCOGSResult,
    PieceCOGSResult,
    ProductCostResult,
)

from .dto_utils import format_currency

LABEL_WIDTH = 21
RULE = "─" * 25


def _line(label: str, value: str) -> str:
    return f"{label + ':':<{LABEL_WIDTH}}{value}"


def _heading(title: str) -> List[str]:
    return ["", f"=== {title} ===", ""]


def _group_lines(title: str, groups: Optional[Dict[str, LaborGroup]]) -> List[str]:
    if not groups:
        return []
    lines = ["", f"{title}:"]
    for label, group in groups.items():
        noun = "employee" if group.count == 1 else "employees"
        lines.append(f"  {label}: {group.count} {noun}, {format_currency(group.total_cost)}")
    return lines


def format_labor_report(result: LaborCostResult) -> str:
    """Format a labor total with optional role and shift groupings."""
    lines = _heading("LABOR BREAKDOWN")
    lines.append(_line("Total Labor Cost", format_currency(result.total_labor_cost)))
    lines.append(_line("Employee Count", str(result.employee_count)))
    if result.average_cost_per_employee is not None:
        lines.append(_line("Avg per Employee", format_currency(result.average_cost_per_employee)))
    lines.extend(_group_lines("By Role", result.by_role))
    lines.extend(_group_lines("By Shift", result.by_shift))
    return "\n".join(lines)


def format_allocation_report(result: LaborAllocationResult) -> str:
    """Format labor allocated to each product and what is left over."""
    lines = _heading("LABOR BY PRODUCT")
    for product, total in result.labor_by_product.items():
        lines.append(_line(product, format_currency(total)))
        for detail in result.detail_by_product.get(product, []):
            lines.append(f"  {detail.role} @ {detail.percentage}%: {format_currency(detail.cost)}")
    lines.append(RULE)
    lines.append(_line("Total Allocated", format_currency(result.total_allocated)))
    lines.append(_line("Unallocated", format_currency(result.unallocated_labor)))
    return "\n".join(lines)


def format_cogs_report(result: COGSResult) -> str:
    """Format a simple purchase + shipping + labor COGS summary."""
    lines = _heading("COGS SUMMARY")
    lines.append(_line("Purchase Cost", format_currency(result.breakdown.purchase_cost)))
    lines.append(_line("Shipping Cost", format_currency(result.breakdown.shipping_cost)))
    lines.append(_line("Labor Cost", format_currency(result.breakdown.labor_cost)))
    lines.append(RULE)
    lines.append(_line("Total COGS", format_currency(result.total_cogs)))
    if result.cost_per_unit is not None:
        lines.append(_line("Cost per Unit", format_currency(result.cost_per_unit)))
    return "\n".join(lines)


def format_multi_product_report(result: MultiProductCOGSResult) -> str:
    """Format a multi-product COGS summary with per-unit costs."""
    breakdown = result.breakdown
    lines = _heading("MULTI-PRODUCT COGS")
    for name, line in breakdown.by_product.items():
        lines.append(
            f"  {name}: {line.quantity} units, {format_currency(line.product_cost)}"
            f" ({format_currency(result.cost_per_unit[name])}/unit with shared costs)"
        )
    lines.append("")
    lines.append(_line("Product Cost", format_currency(breakdown.total_product_cost)))
    lines.append(_line("Shipping Cost", format_currency(breakdown.shipping_cost)))
    lines.append(_line("Labor Cost", format_currency(breakdown.labor_cost)))
    lines.append(RULE)
    lines.append(_line("Total COGS", format_currency(result.total_cogs)))
    return "\n".join(lines)


def format_product_cost_report(result: ProductCostResult) -> str:
    """Format an ingredient-based product cost."""
    lines = _heading(f"PRODUCT COST: {result.name}")
    for ingredient, cost in result.breakdown.items():
        lines.append(_line(ingredient, format_currency(cost)))
    lines.append(RULE)
    lines.append(_line("Total Cost", format_currency(result.total_cost)))
    if result.cost_per_unit is not None:
        lines.append(_line("Cost per Unit", format_currency(result.cost_per_unit)))
    return "\n".join(lines)


def format_piece_report(piece_name: str, result: PieceCOGSResult) -> str:
    """Format the full per-piece COGS breakdown for a pottery piece."""
    breakdown = result.breakdown
    lines = _heading(f"PIECE COGS: {piece_name}")
    lines.append(_line("Bisque", format_currency(breakdown.bisque_cost)))
    lines.append(_line("Glaze & Supplies", format_currency(breakdown.glaze_cost)))
    for role, cost in breakdown.labor_by_role.items():
        lines.append(f"  {role}: {format_currency(cost)}")
    lines.append(_line("Staff Labor", format_currency(breakdown.labor_total)))
    lines.append(_line("Kiln Labor", format_currency(breakdown.kiln_cost)))
    lines.append(_line("Overhead", format_currency(breakdown.overhead_cost)))
    lines.append(RULE)
    lines.append(_line("Total COGS", format_currency(result.total_cogs)))
    return "\n".join(lines)
