"""
Input validation functions for the COGS calculator.

The costing engine accepts any number and degrades invalid ones to a zero
contribution. These validators run at the storage boundary instead, so that
the person editing settings is told "please enter a positive value" before
a bad record is saved.

Field validators return (is_valid, error_message). Record validators return
a list of error messages (empty when the record is valid).
"""

import math
from typing import Any, Dict, List, Tuple

from .constants import (
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_REQUIRED_FIELD,
    MAX_COST,
    MAX_NAME_LENGTH,
)


def validate_required_string(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a string field is not empty.

    Args:
        value: The string value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    return True, ""


def validate_string_length(
    value: Any, max_length: int = MAX_NAME_LENGTH, field_name: str = "Field"
) -> Tuple[bool, str]:
    """Validate that a string doesn't exceed maximum length."""
    if value and len(value) > max_length:
        return False, f"{field_name}: Must be {max_length} characters or less"
    return True, ""


def validate_positive_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a finite positive number (> 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        num_value = float(value)
        if not math.isfinite(num_value):
            return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
        if num_value <= 0:
            return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
        return True, ""
    except (ValueError, TypeError):
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"


def validate_non_negative_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a finite non-negative number (>= 0).

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        num_value = float(value)
        if not math.isfinite(num_value):
            return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
        if num_value < 0:
            return False, f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"
        if num_value > MAX_COST:
            return False, f"{field_name}: Must be {MAX_COST:,.0f} or less"
        return True, ""
    except (ValueError, TypeError):
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"


def _collect(errors: List[str], result: Tuple[bool, str]) -> None:
    is_valid, message = result
    if not is_valid:
        errors.append(message)


def validate_staff_role_data(data: Dict[str, Any], label: str = "Staff role") -> List[str]:
    """
    Validate a staff role record before it is saved.

    Requires a non-negative rate and minutes and at least one customer
    served at a time. Blank names are allowed; unnamed roles are placeholders
    that are left out of COGS calculations.
    """
    errors: List[str] = []
    _collect(errors, validate_string_length(data.get("name"), field_name=f"{label} name"))
    _collect(errors, validate_non_negative_number(data.get("hourly_rate"), f"{label} hourly rate"))
    _collect(
        errors,
        validate_non_negative_number(
            data.get("minutes_per_customer"), f"{label} minutes per customer"
        ),
    )
    _collect(
        errors,
        validate_positive_number(
            data.get("customers_simultaneous"), f"{label} customers served at once"
        ),
    )
    return errors


def validate_kiln_data(data: Dict[str, Any]) -> List[str]:
    """Validate kiln firing settings."""
    errors: List[str] = []
    _collect(errors, validate_non_negative_number(data.get("hourly_rate"), "Kiln hourly rate"))
    _collect(
        errors, validate_non_negative_number(data.get("minutes_per_firing"), "Minutes per firing")
    )
    _collect(
        errors, validate_non_negative_number(data.get("kiln_worker_count"), "Kiln worker count")
    )
    _collect(errors, validate_positive_number(data.get("pieces_per_firing"), "Pieces per firing"))
    return errors


def validate_overhead_item_data(data: Dict[str, Any], label: str = "Overhead item") -> List[str]:
    """Validate one overhead line item."""
    errors: List[str] = []
    _collect(errors, validate_string_length(data.get("name"), field_name=f"{label} name"))
    _collect(errors, validate_non_negative_number(data.get("amount"), f"{label} amount"))
    return errors


def validate_studio_settings_data(data: Dict[str, Any]) -> List[str]:
    """
    Validate a full studio settings record.

    Args:
        data: Settings in StudioSettings.to_dict() form

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []
    overhead = data.get("overhead") or {}

    for category, label in (("fixed_costs", "Fixed cost"), ("variable_costs", "Variable cost")):
        for index, item in enumerate(overhead.get(category, []), start=1):
            errors.extend(validate_overhead_item_data(item, f"{label} #{index}"))

    _collect(errors, validate_positive_number(data.get("pieces_per_month"), "Pieces per month"))
    _collect(
        errors,
        validate_non_negative_number(data.get("glaze_cost_per_piece"), "Glaze cost per piece"),
    )
    errors.extend(validate_kiln_data(data.get("kiln") or {}))
    return errors


def validate_bisque_piece_data(data: Dict[str, Any], label: str = "Bisque piece") -> List[str]:
    """
    Validate a bisque catalog entry.

    Blank names are allowed: an unnamed entry is an in-progress row that is
    simply left out of COGS calculations.
    """
    errors: List[str] = []
    _collect(errors, validate_string_length(data.get("name"), field_name=f"{label} name"))
    _collect(
        errors, validate_non_negative_number(data.get("wholesale_cost"), f"{label} wholesale cost")
    )
    return errors
