"""Service layer exception classes for the COGS calculator.

The costing engine itself never raises: invalid numeric inputs degrade to a
zero contribution. These exceptions belong to the boundary layers around it
(settings storage, schema migration, catalog lookups) so that callers get a
consistent error surface.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── UnrecognizedSettingsShape
    ├── BisquePieceNotFound
    └── DatabaseError
"""

from typing import Any, Iterable, List


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ValidationError(ServiceError):
    """Raised when data validation fails.

    Args:
        errors: List of human-readable validation messages

    Example:
        >>> raise ValidationError(["Hourly rate: Must be zero or greater"])
        ValidationError: Validation failed: Hourly rate: Must be zero or greater
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        error_msg = "; ".join(self.errors)
        super().__init__(f"Validation failed: {error_msg}")


class UnrecognizedSettingsShape(ServiceError):
    """Raised when a stored settings payload matches neither known schema.

    Args:
        keys: The top-level keys found in the payload

    Example:
        >>> raise UnrecognizedSettingsShape(["foo", "bar"])
        UnrecognizedSettingsShape: Settings payload matches no known schema (keys: bar, foo)
    """

    def __init__(self, keys: Iterable[Any]):
        self.keys = sorted(str(k) for k in keys)
        listed = ", ".join(self.keys) if self.keys else "none"
        super().__init__(f"Settings payload matches no known schema (keys: {listed})")


class BisquePieceNotFound(ServiceError):
    """Raised when a bisque piece cannot be found in the catalog by name.

    Args:
        name: The piece name that was not found
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Bisque piece '{name}' not found in catalog")


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
