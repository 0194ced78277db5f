"""Services package - Business logic layer for the COGS calculator.

Architecture:
- costing: Pure calculation engine (no database access, never raises)
- Settings storage: Versioned key-value records managed via session_scope()
- Exceptions: Consistent error handling via the ServiceError hierarchy
- Validation: Input validation before records are saved

Service Modules:
- costing: Labor, overhead, kiln, product, and piece COGS calculations
- settings_service: Studio settings, staff roles, and bisque catalog storage
- settings_migration: Legacy-to-current settings payload migration
- studio_service: Piece COGS from stored studio settings
- report_service: Plain-text cost reports
- dto_utils: Cost and currency string formatting

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- logging_utils: Structured service logging
"""

from .exceptions import (
    BisquePieceNotFound,
    DatabaseError,
    ServiceError,
    UnrecognizedSettingsShape,
    ValidationError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "UnrecognizedSettingsShape",
    "BisquePieceNotFound",
    "DatabaseError",
]
