"""
Constants for the Small Batch COGS Calculator application.

This module defines system-wide constants including:
- Application metadata
- Settings storage keys and schema versions
- Seed data for new installations
- Validation limits and error messages
"""

from typing import Any, Dict, List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Small Batch COGS Calculator"
APP_VERSION = "0.1.0"
DATABASE_FILENAME = "cogs_calculator.db"

# ============================================================================
# Settings Storage
# ============================================================================

SETTINGS_KEY_STUDIO = "studio_settings"
SETTINGS_KEY_STAFF_ROLES = "staff_roles"
SETTINGS_KEY_CATALOG = "bisque_catalog"

ALL_SETTINGS_KEYS: List[str] = [
    SETTINGS_KEY_STUDIO,
    SETTINGS_KEY_STAFF_ROLES,
    SETTINGS_KEY_CATALOG,
]

# Version 1: single monthly_overhead number
# Version 2: overhead split into fixed and variable line items
LEGACY_SETTINGS_SCHEMA_VERSION = 1
SETTINGS_SCHEMA_VERSION = 2

# Name given to the single fixed-cost item created from legacy overhead
LEGACY_OVERHEAD_ITEM_ID = "1"
LEGACY_OVERHEAD_ITEM_NAME = "Other"

# ============================================================================
# Seed Data (new installations)
# ============================================================================

DEFAULT_STUDIO_SETTINGS: Dict[str, Any] = {
    "overhead": {
        "fixed_costs": [
            {"id": "1", "name": "Rent", "amount": "0"},
            {"id": "2", "name": "Insurance", "amount": "0"},
            {"id": "3", "name": "Property Taxes", "amount": "0"},
        ],
        "variable_costs": [
            {"id": "4", "name": "Utilities", "amount": "0"},
            {"id": "5", "name": "Supplies", "amount": "0"},
        ],
    },
    "pieces_per_month": "400",
    "glaze_cost_per_piece": "0.75",
    # Typical studio: 2 workers at 17/hr, 30-minute cycle, 20 pieces per load
    "kiln": {
        "hourly_rate": "17",
        "minutes_per_firing": "30",
        "kiln_worker_count": "2",
        "pieces_per_firing": "20",
    },
}

# A guide helping customers paint and a manager checking in
DEFAULT_STAFF_ROLES: List[Dict[str, Any]] = [
    {
        "name": "Glazing Guide",
        "hourly_rate": "15",
        "minutes_per_customer": "20",
        "customers_simultaneous": "4",
    },
    {
        "name": "Manager",
        "hourly_rate": "20",
        "minutes_per_customer": "5",
        "customers_simultaneous": "3",
    },
]

DEFAULT_BISQUE_CATALOG: List[Dict[str, Any]] = [
    {"id": "1", "name": "", "wholesale_cost": "0"},
]

# ============================================================================
# Validation
# ============================================================================

MAX_NAME_LENGTH = 200
MIN_COST = 0.0
MAX_COST = 1_000_000.0

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Must be a valid number"
ERROR_INVALID_POSITIVE = "Must be greater than zero"
ERROR_INVALID_NON_NEGATIVE = "Must be zero or greater"
