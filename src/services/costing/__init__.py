"""
Costing engine for small production businesses.

This package turns raw business inputs into rounded, itemized cost results:
- Labor totals, role/shift groupings, and percentage allocation to products
- Staff attention time shared by concurrent customers
- Kiln firing labor and monthly overhead amortized per piece
- Ingredient-based product cost, simple COGS, and multi-product COGS
- Full per-piece COGS for a pottery studio

Every function is pure: no database access, no shared state, and no
exceptions for bad numbers. Invalid divisors and negative rates, times, or
counts make the affected component contribute 0.

Usage:
    from src.services.costing import (
        calculate_piece_cogs,
        calculate_total_overhead,
        KilnBatchConfig,
        OverheadInput,
        StaffRole,
    )
"""

from .cogs import (
    calculate_cogs,
    calculate_multi_product_cogs,
    calculate_product_cost,
)
from .guards import GuardResult, GuardStatus, check_guards
from .labor import (
    UNASSIGNED,
    allocate_labor,
    calculate_labor_cost,
    calculate_staff_labor_cost,
    labor_cost,
)
from .overhead import calculate_total_overhead, sum_overhead_items
from .pottery import (
    calculate_kiln_labor_cost,
    calculate_overhead_cost,
    calculate_piece_cogs,
)
from .types import (
    AllocationDetail,
    BisquePiece,
    COGSBreakdown,
    COGSResult,
    Employee,
    Ingredient,
    KilnBatchConfig,
    LaborAllocation,
    LaborAllocationResult,
    LaborCostResult,
    LaborGroup,
    MultiProductCOGSBreakdown,
    MultiProductCOGSResult,
    OverheadInput,
    OverheadItem,
    OverheadSettings,
    PieceCOGSBreakdown,
    PieceCOGSResult,
    Product,
    ProductCOGSLine,
    ProductCostResult,
    ProductEntry,
    StaffRole,
    StudioSettings,
)

__all__ = [
    # Assemblers
    "calculate_cogs",
    "calculate_multi_product_cogs",
    "calculate_product_cost",
    "calculate_piece_cogs",
    # Primitives
    "labor_cost",
    "calculate_labor_cost",
    "allocate_labor",
    "calculate_staff_labor_cost",
    "calculate_kiln_labor_cost",
    "calculate_overhead_cost",
    "sum_overhead_items",
    "calculate_total_overhead",
    "UNASSIGNED",
    # Guards
    "GuardResult",
    "GuardStatus",
    "check_guards",
    # Inputs
    "Employee",
    "StaffRole",
    "LaborAllocation",
    "KilnBatchConfig",
    "OverheadItem",
    "OverheadSettings",
    "OverheadInput",
    "Ingredient",
    "Product",
    "ProductEntry",
    "BisquePiece",
    "StudioSettings",
    # Results
    "LaborGroup",
    "LaborCostResult",
    "AllocationDetail",
    "LaborAllocationResult",
    "ProductCostResult",
    "COGSBreakdown",
    "COGSResult",
    "ProductCOGSLine",
    "MultiProductCOGSBreakdown",
    "MultiProductCOGSResult",
    "PieceCOGSBreakdown",
    "PieceCOGSResult",
]
