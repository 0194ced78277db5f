"""
Command-line entry point for the Small Batch COGS Calculator.

Usage Examples:
    # Create the database and seed default studio settings
    python -m src.main init

    # List the bisque catalog / add a piece
    python -m src.main catalog
    python -m src.main add-piece "Snowman Globe" 4.50

    # Import studio settings (legacy or current layout)
    python -m src.main import-settings studio_settings.json

    # Full COGS for one catalog piece
    python -m src.main piece "Snowman Globe"

    # Labor + purchase COGS from an input file
    python -m src.main cogs shift.json

    # Multi-product COGS / ingredient-based product cost
    python -m src.main products order.json
    python -m src.main recipe sourdough.json

Input files are JSON using the snake_case field names of the costing
records, for example shift.json:

    {
      "employees": [{"hourly_rate": 15, "hours_worked": 8, "role": "stocker"}],
      "purchase_cost": 1000,
      "shipping_cost": 150,
      "quantity": 200,
      "allocations": {"Bread": [{"employee_index": 0, "percentage": 100}]}
    }
"""

import argparse
import json
import logging
import sys
from decimal import InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.services import report_service, settings_service, studio_service
from src.services.costing import (
    Employee,
    LaborAllocation,
    Product,
    ProductEntry,
    allocate_labor,
    calculate_cogs,
    calculate_labor_cost,
    calculate_multi_product_cogs,
    calculate_product_cost,
)
from src.services.database import close_connections, initialize_app_database
from src.services.dto_utils import format_currency
from src.services.exceptions import ServiceError
from src.utils.config import get_config
from src.utils.constants import APP_NAME, APP_VERSION
from src.utils.rounding import to_decimal


def _load_json(path: str) -> Any:
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def _employees(data: Dict[str, Any]) -> List[Employee]:
    return [Employee.from_dict(e) for e in data.get("employees", [])]


def init_cmd(overwrite: bool) -> int:
    """Seed default settings."""
    written = settings_service.seed_defaults(overwrite=overwrite)
    if written:
        print(f"Seeded defaults for: {', '.join(written)}")
    else:
        print("Settings already present; nothing seeded")
    return 0


def catalog_cmd() -> int:
    """List named catalog pieces."""
    pieces = studio_service.named_only(settings_service.get_bisque_catalog())
    if not pieces:
        print("Catalog is empty. Add a piece with: add-piece NAME COST")
        return 0
    for piece in pieces:
        print(f"  {piece.name}: {format_currency(piece.wholesale_cost)}")
    return 0


def add_piece_cmd(name: str, cost: str) -> int:
    """Add a bisque piece to the catalog."""
    piece = settings_service.add_bisque_piece(name, cost)
    print(f"Added {piece.name} ({format_currency(piece.wholesale_cost)})")
    return 0


def import_settings_cmd(input_file: str) -> int:
    """Import studio settings from a JSON file."""
    settings = settings_service.import_studio_settings(_load_json(input_file))
    print(f"Imported studio settings ({settings.pieces_per_month} pieces/month)")
    return 0


def piece_cmd(name: str) -> int:
    """Print the COGS breakdown for a catalog piece."""
    piece, result = studio_service.cost_catalog_piece(name)
    print(report_service.format_piece_report(piece.name, result))
    return 0


def cogs_cmd(input_file: str) -> int:
    """Print labor and COGS reports for a shift input file."""
    data = _load_json(input_file)
    employees = _employees(data)
    labor = calculate_labor_cost(employees)
    print(report_service.format_labor_report(labor))

    allocations = data.get("allocations")
    if allocations:
        parsed = {
            product: [LaborAllocation.from_dict(a) for a in lines]
            for product, lines in allocations.items()
        }
        print(report_service.format_allocation_report(allocate_labor(employees, parsed)))

    quantity: Optional[Any] = data.get("quantity")
    result = calculate_cogs(
        purchase_cost=to_decimal(data.get("purchase_cost", 0)),
        shipping_cost=to_decimal(data.get("shipping_cost", 0)),
        labor_cost=labor.total_labor_cost,
        quantity=to_decimal(quantity) if quantity is not None else None,
    )
    print(report_service.format_cogs_report(result))
    return 0


def products_cmd(input_file: str) -> int:
    """Print a multi-product COGS report."""
    data = _load_json(input_file)
    if "labor_cost" in data:
        labor_cost = to_decimal(data["labor_cost"])
    else:
        labor_cost = calculate_labor_cost(_employees(data)).total_labor_cost

    result = calculate_multi_product_cogs(
        products=[ProductEntry.from_dict(p) for p in data.get("products", [])],
        shipping_cost=to_decimal(data.get("shipping_cost", 0)),
        labor_cost=labor_cost,
    )
    print(report_service.format_multi_product_report(result))
    return 0


def recipe_cmd(input_file: str) -> int:
    """Print ingredient-based product costs for one product or a list."""
    data = _load_json(input_file)
    products = data if isinstance(data, list) else [data]
    for product in products:
        result = calculate_product_cost(Product.from_dict(product))
        print(report_service.format_product_cost_report(result))
    return 0


DATABASE_COMMANDS = {"init", "catalog", "add-piece", "import-settings", "piece"}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME}: cost of goods sold for small production businesses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    init_parser = subparsers.add_parser("init", help="Create the database and seed defaults")
    init_parser.add_argument(
        "--overwrite", action="store_true", help="Replace existing settings with defaults"
    )

    subparsers.add_parser("catalog", help="List bisque catalog pieces")

    add_piece_parser = subparsers.add_parser("add-piece", help="Add a bisque piece")
    add_piece_parser.add_argument("name", help="Piece name")
    add_piece_parser.add_argument("cost", help="Wholesale cost")

    import_parser = subparsers.add_parser("import-settings", help="Import studio settings JSON")
    import_parser.add_argument("file", help="JSON settings file (legacy or current layout)")

    piece_parser = subparsers.add_parser("piece", help="COGS breakdown for a catalog piece")
    piece_parser.add_argument("name", help="Catalog piece name")

    cogs_parser = subparsers.add_parser("cogs", help="Labor and COGS report from a shift file")
    cogs_parser.add_argument("file", help="JSON input file")

    products_parser = subparsers.add_parser("products", help="Multi-product COGS report")
    products_parser.add_argument("file", help="JSON input file")

    recipe_parser = subparsers.add_parser("recipe", help="Ingredient-based product cost")
    recipe_parser.add_argument("file", help="JSON input file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command in DATABASE_COMMANDS:
            if args.verbose:
                print(f"Database: {get_config().database_path}")
            initialize_app_database()

        if args.command == "init":
            return init_cmd(args.overwrite)
        elif args.command == "catalog":
            return catalog_cmd()
        elif args.command == "add-piece":
            return add_piece_cmd(args.name, args.cost)
        elif args.command == "import-settings":
            return import_settings_cmd(args.file)
        elif args.command == "piece":
            return piece_cmd(args.name)
        elif args.command == "cogs":
            return cogs_cmd(args.file)
        elif args.command == "products":
            return products_cmd(args.file)
        elif args.command == "recipe":
            return recipe_cmd(args.file)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    except ServiceError as e:
        print(f"ERROR: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Could not read input: {e}")
        return 1
    except InvalidOperation:
        print("ERROR: Input contains a value that is not a number")
        return 1
    finally:
        if args.command in DATABASE_COMMANDS:
            close_connections()


if __name__ == "__main__":
    sys.exit(main())
