"""
Value records for the costing engine.

Inputs are frozen dataclasses created fresh for each calculation. Numeric
fields accept Decimal, float, int, or numeric strings; the calculators convert
them with to_decimal() before doing any arithmetic.

Results share one shape: a rounded total plus a named breakdown of the
components that produced it. Optional outputs are None when absent.

Records that the settings store persists (StaffRole, KilnBatchConfig,
OverheadItem, OverheadSettings, BisquePiece, StudioSettings) provide
to_dict()/from_dict() helpers. Money values are written as strings so the
JSON payload round-trips without float drift.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from src.utils.rounding import Number, to_decimal


def _money_str(value: Number) -> str:
    return str(to_decimal(value))


# ============================================================================
# Labor inputs
# ============================================================================


@dataclass(frozen=True)
class Employee:
    """One worker-shift entry.

    Attributes:
        hourly_rate: Wage per hour
        hours_worked: Hours on the shift
        role: Optional job role (e.g., "cashier")
        shift: Optional shift label (e.g., "morning")
    """

    hourly_rate: Number
    hours_worked: Number
    role: Optional[str] = None
    shift: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Employee":
        return cls(
            hourly_rate=to_decimal(data.get("hourly_rate", 0)),
            hours_worked=to_decimal(data.get("hours_worked", 0)),
            role=data.get("role"),
            shift=data.get("shift"),
        )


@dataclass(frozen=True)
class StaffRole:
    """A recurring labor role whose time is shared by concurrent customers.

    Attributes:
        name: Display name (e.g., "Glazing Guide")
        hourly_rate: Wage per hour
        minutes_per_customer: Minutes this role spends on one customer
        customers_simultaneous: Customers served at the same time
    """

    name: str
    hourly_rate: Number
    minutes_per_customer: Number
    customers_simultaneous: Number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hourly_rate": _money_str(self.hourly_rate),
            "minutes_per_customer": _money_str(self.minutes_per_customer),
            "customers_simultaneous": _money_str(self.customers_simultaneous),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StaffRole":
        return cls(
            name=data.get("name", ""),
            hourly_rate=to_decimal(data.get("hourly_rate", 0)),
            minutes_per_customer=to_decimal(data.get("minutes_per_customer", 0)),
            customers_simultaneous=to_decimal(data.get("customers_simultaneous", 0)),
        )


@dataclass(frozen=True)
class LaborAllocation:
    """Share of one employee's shift cost assigned to a product.

    Attributes:
        employee_index: Position of the employee in the employee list
        percentage: Percent of that employee's cost (0-100 expected, not clamped)
    """

    employee_index: int
    percentage: Number

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LaborAllocation":
        return cls(
            employee_index=int(data.get("employee_index", 0)),
            percentage=to_decimal(data.get("percentage", 0)),
        )


# ============================================================================
# Kiln and overhead inputs
# ============================================================================


@dataclass(frozen=True)
class KilnBatchConfig:
    """One kiln firing cycle, amortized across the pieces it holds."""

    hourly_rate: Number
    minutes_per_firing: Number
    kiln_worker_count: Number
    pieces_per_firing: Number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hourly_rate": _money_str(self.hourly_rate),
            "minutes_per_firing": _money_str(self.minutes_per_firing),
            "kiln_worker_count": _money_str(self.kiln_worker_count),
            "pieces_per_firing": _money_str(self.pieces_per_firing),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KilnBatchConfig":
        return cls(
            hourly_rate=to_decimal(data.get("hourly_rate", 0)),
            minutes_per_firing=to_decimal(data.get("minutes_per_firing", 0)),
            kiln_worker_count=to_decimal(data.get("kiln_worker_count", 0)),
            pieces_per_firing=to_decimal(data.get("pieces_per_firing", 0)),
        )


@dataclass(frozen=True)
class OverheadItem:
    """A monthly overhead line item (e.g., Rent = 2000)."""

    id: str
    name: str
    amount: Number

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "amount": _money_str(self.amount)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverheadItem":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            amount=to_decimal(data.get("amount", 0)),
        )


@dataclass(frozen=True)
class OverheadSettings:
    """Overhead split into fixed (rent, insurance) and variable (utilities) costs."""

    fixed_costs: List[OverheadItem] = field(default_factory=list)
    variable_costs: List[OverheadItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixed_costs": [item.to_dict() for item in self.fixed_costs],
            "variable_costs": [item.to_dict() for item in self.variable_costs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverheadSettings":
        return cls(
            fixed_costs=[OverheadItem.from_dict(i) for i in data.get("fixed_costs", [])],
            variable_costs=[OverheadItem.from_dict(i) for i in data.get("variable_costs", [])],
        )


@dataclass(frozen=True)
class OverheadInput:
    """Monthly overhead and production volume used for per-piece allocation."""

    monthly_overhead: Number
    pieces_per_month: Number


# ============================================================================
# Product inputs
# ============================================================================


@dataclass(frozen=True)
class Ingredient:
    """A material or ingredient line: quantity used times cost per unit."""

    name: str
    quantity: Number
    unit_cost: Number

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ingredient":
        return cls(
            name=data.get("name", ""),
            quantity=to_decimal(data.get("quantity", 0)),
            unit_cost=to_decimal(data.get("unit_cost", 0)),
        )


@dataclass(frozen=True)
class Product:
    """A product made from ingredients, optionally yielding several units per batch."""

    name: str
    ingredients: List[Ingredient] = field(default_factory=list)
    batch_yield: Optional[Number] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        batch_yield = data.get("batch_yield")
        return cls(
            name=data.get("name", ""),
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients", [])],
            batch_yield=to_decimal(batch_yield) if batch_yield is not None else None,
        )


@dataclass(frozen=True)
class ProductEntry:
    """A purchased product line in a multi-product COGS calculation."""

    name: str
    unit_cost: Number
    quantity: Number

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductEntry":
        return cls(
            name=data.get("name", ""),
            unit_cost=to_decimal(data.get("unit_cost", 0)),
            quantity=to_decimal(data.get("quantity", 0)),
        )


# ============================================================================
# Studio records (persisted by the settings store)
# ============================================================================


@dataclass(frozen=True)
class BisquePiece:
    """An unpainted ceramic piece the studio sells (e.g., "Snowman Globe")."""

    id: str
    name: str
    wholesale_cost: Number

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "wholesale_cost": _money_str(self.wholesale_cost)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BisquePiece":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            wholesale_cost=to_decimal(data.get("wholesale_cost", 0)),
        )


@dataclass(frozen=True)
class StudioSettings:
    """Studio-wide settings that feed the piece COGS calculation."""

    overhead: OverheadSettings
    pieces_per_month: Number
    glaze_cost_per_piece: Number
    kiln: KilnBatchConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overhead": self.overhead.to_dict(),
            "pieces_per_month": _money_str(self.pieces_per_month),
            "glaze_cost_per_piece": _money_str(self.glaze_cost_per_piece),
            "kiln": self.kiln.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudioSettings":
        return cls(
            overhead=OverheadSettings.from_dict(data.get("overhead") or {}),
            pieces_per_month=to_decimal(data.get("pieces_per_month", 0)),
            glaze_cost_per_piece=to_decimal(data.get("glaze_cost_per_piece", 0)),
            kiln=KilnBatchConfig.from_dict(data.get("kiln") or {}),
        )


# ============================================================================
# Results
# ============================================================================


@dataclass
class LaborGroup:
    """Employees sharing a role or shift, with their unrounded total cost."""

    count: int
    total_cost: Decimal


@dataclass
class LaborCostResult:
    """Result of calculate_labor_cost().

    Attributes:
        total_labor_cost: Sum of rate x hours over all employees (unrounded)
        employee_count: Number of employee entries
        average_cost_per_employee: Rounded average, None when there are no employees
        by_role: Role -> LaborGroup, None when no employee has a role
        by_shift: Shift -> LaborGroup, None when no employee has a shift
    """

    total_labor_cost: Decimal
    employee_count: int
    average_cost_per_employee: Optional[Decimal] = None
    by_role: Optional[Dict[str, LaborGroup]] = None
    by_shift: Optional[Dict[str, LaborGroup]] = None


@dataclass
class AllocationDetail:
    """One allocation line for a product: whose labor, what share, what cost."""

    role: str
    percentage: Decimal
    cost: Decimal


@dataclass
class LaborAllocationResult:
    """Result of allocate_labor()."""

    labor_by_product: Dict[str, Decimal]
    detail_by_product: Dict[str, List[AllocationDetail]]
    total_allocated: Decimal
    unallocated_labor: Decimal


@dataclass
class ProductCostResult:
    """Result of calculate_product_cost()."""

    name: str
    total_cost: Decimal
    breakdown: Dict[str, Decimal]
    cost_per_unit: Optional[Decimal] = None


@dataclass
class COGSBreakdown:
    """The three raw inputs of a simple COGS calculation."""

    purchase_cost: Decimal
    shipping_cost: Decimal
    labor_cost: Decimal


@dataclass
class COGSResult:
    """Result of calculate_cogs()."""

    total_cogs: Decimal
    breakdown: COGSBreakdown
    cost_per_unit: Optional[Decimal] = None


@dataclass
class ProductCOGSLine:
    """Per-product line of a multi-product COGS breakdown."""

    quantity: Decimal
    product_cost: Decimal


@dataclass
class MultiProductCOGSBreakdown:
    """Itemized components of a multi-product COGS calculation."""

    by_product: Dict[str, ProductCOGSLine]
    total_product_cost: Decimal
    shipping_cost: Decimal
    labor_cost: Decimal


@dataclass
class MultiProductCOGSResult:
    """Result of calculate_multi_product_cogs()."""

    total_cogs: Decimal
    breakdown: MultiProductCOGSBreakdown
    cost_per_unit: Dict[str, Decimal]


@dataclass
class PieceCOGSBreakdown:
    """Where every dollar of a single piece's COGS comes from."""

    bisque_cost: Decimal
    glaze_cost: Decimal
    labor_by_role: Dict[str, Decimal]
    labor_total: Decimal
    kiln_cost: Decimal
    overhead_cost: Decimal


@dataclass
class PieceCOGSResult:
    """Result of calculate_piece_cogs()."""

    total_cogs: Decimal
    breakdown: PieceCOGSBreakdown
