"""
COGS assemblers for ingredient-based products and purchased goods.

This module provides functions for:
- Ingredient-based product cost with per-unit yield cost
- Simple COGS from purchase, shipping, and labor totals
- Multi-product COGS with shipping and labor shared per unit

Transaction boundary: Pure computation (no database access).
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from src.services.logging_utils import get_service_logger, log_operation
from src.utils.rounding import Number, ZERO, round_cents, to_decimal

from .types import (
    COGSBreakdown,
    COGSResult,
    MultiProductCOGSBreakdown,
    MultiProductCOGSResult,
    Product,
    ProductCOGSLine,
    ProductCostResult,
    ProductEntry,
)

logger = get_service_logger(__name__)


def calculate_product_cost(product: Product) -> ProductCostResult:
    """
    Cost a product from its ingredient list.

    Each ingredient line is rounded to the cent. Ingredients sharing a name
    overwrite each other in the breakdown (the later line wins, keeping the
    first line's position) and the total is the rounded sum of the
    breakdown values.

    Args:
        product: Product with ingredients and an optional batch yield

    Returns:
        ProductCostResult; cost_per_unit is set only when batch_yield > 0

    Example:
        >>> result = calculate_product_cost(Product(
        ...     "Sourdough",
        ...     [Ingredient("Flour", 2.5, 0.80), Ingredient("Salt", 0.1, 0.35)],
        ...     batch_yield=4,
        ... ))
        >>> result.total_cost, result.cost_per_unit
        (Decimal('2.04'), Decimal('0.51'))
    """
    breakdown: Dict[str, Decimal] = {}
    for ingredient in product.ingredients:
        breakdown[ingredient.name] = round_cents(
            to_decimal(ingredient.quantity) * to_decimal(ingredient.unit_cost)
        )

    total_cost = round_cents(sum(breakdown.values(), ZERO))

    cost_per_unit: Optional[Decimal] = None
    if product.batch_yield is not None and to_decimal(product.batch_yield) > 0:
        cost_per_unit = round_cents(total_cost / to_decimal(product.batch_yield))

    return ProductCostResult(
        name=product.name,
        total_cost=total_cost,
        breakdown=breakdown,
        cost_per_unit=cost_per_unit,
    )


def calculate_cogs(
    purchase_cost: Number,
    shipping_cost: Number,
    labor_cost: Number,
    quantity: Optional[Number] = None,
) -> COGSResult:
    """
    Calculate COGS from purchase, shipping, and labor totals.

    The breakdown echoes the three inputs as given (unrounded).

    Args:
        purchase_cost: Cost to purchase the goods
        shipping_cost: Shipping and freight
        labor_cost: Labor total (e.g., from calculate_labor_cost)
        quantity: Optional unit count for a per-unit figure

    Returns:
        COGSResult; cost_per_unit is set only when quantity > 0

    Examples:
        >>> calculate_cogs(100, 15, 25).total_cogs
        Decimal('140.00')
        >>> calculate_cogs(100, 20, 30, quantity=10).cost_per_unit
        Decimal('15.00')
    """
    purchase = to_decimal(purchase_cost)
    shipping = to_decimal(shipping_cost)
    labor = to_decimal(labor_cost)

    total_cogs = round_cents(purchase + shipping + labor)

    cost_per_unit: Optional[Decimal] = None
    if quantity is not None and to_decimal(quantity) > 0:
        cost_per_unit = round_cents(total_cogs / to_decimal(quantity))

    return COGSResult(
        total_cogs=total_cogs,
        breakdown=COGSBreakdown(
            purchase_cost=purchase,
            shipping_cost=shipping,
            labor_cost=labor,
        ),
        cost_per_unit=cost_per_unit,
    )


def calculate_multi_product_cogs(
    products: List[ProductEntry],
    shipping_cost: Number,
    labor_cost: Number,
) -> MultiProductCOGSResult:
    """
    Calculate COGS for several product lines sharing shipping and labor.

    Shipping plus labor is spread evenly over every unit across all
    products. Each product's per-unit cost is its own unit_cost (as entered,
    not derived from the rounded product cost) plus that shared share, so
    per-unit figures can differ slightly from product_cost / quantity when
    unit_cost carries more than two decimals.

    Products sharing a name overwrite each other in by_product and
    cost_per_unit (the later entry wins) but all of them count toward the
    totals.

    Args:
        products: Product lines with unit cost and quantity
        shipping_cost: Shipping shared by all products
        labor_cost: Labor shared by all products

    Returns:
        MultiProductCOGSResult with totals, per-product lines, and per-unit costs

    Example:
        >>> result = calculate_multi_product_cogs(
        ...     [ProductEntry("Cookie", 0.50, 100), ProductEntry("Muffin", 0.75, 100)],
        ...     shipping_cost=20,
        ...     labor_cost=80,
        ... )
        >>> result.cost_per_unit
        {'Cookie': Decimal('1.00'), 'Muffin': Decimal('1.25')}
    """
    shipping = to_decimal(shipping_cost)
    labor = to_decimal(labor_cost)

    by_product: Dict[str, ProductCOGSLine] = {}
    product_cost_sum = ZERO
    total_units = ZERO

    for entry in products:
        quantity = to_decimal(entry.quantity)
        product_cost = round_cents(to_decimal(entry.unit_cost) * quantity)
        by_product[entry.name] = ProductCOGSLine(quantity=quantity, product_cost=product_cost)
        product_cost_sum += product_cost
        total_units += quantity

    total_product_cost = round_cents(product_cost_sum)
    total_cogs = round_cents(total_product_cost + shipping + labor)

    shared_cost_per_unit = (shipping + labor) / total_units if total_units > 0 else ZERO

    cost_per_unit: Dict[str, Decimal] = {}
    for entry in products:
        cost_per_unit[entry.name] = round_cents(to_decimal(entry.unit_cost) + shared_cost_per_unit)

    log_operation(
        logger,
        operation="calculate_multi_product_cogs",
        outcome="success",
        level=logging.DEBUG,
        product_count=len(products),
        total_units=str(total_units),
        total_cogs=str(total_cogs),
    )

    return MultiProductCOGSResult(
        total_cogs=total_cogs,
        breakdown=MultiProductCOGSBreakdown(
            by_product=by_product,
            total_product_cost=total_product_cost,
            shipping_cost=shipping,
            labor_cost=labor,
        ),
        cost_per_unit=cost_per_unit,
    )
