"""
Settings Service - Versioned key-value storage for studio settings.

Stores three independent records, each as a JSON payload in the
settings_records table:
- studio_settings: overhead, production volume, glaze cost, kiln settings
- staff_roles: labor roles and their per-customer cost parameters
- bisque_catalog: the unpainted pieces the studio sells

Missing records fall back to the seed defaults in utils.constants. Studio
settings written under an older schema are migrated on load and rewritten
at the current schema version.

All functions accept an optional session parameter; without one they run in
their own session_scope() transaction.

Usage:
    from src.services import settings_service

    settings = settings_service.get_studio_settings()
    roles = settings_service.get_staff_roles()
    settings_service.add_bisque_piece("Snowman Globe", "4.50")
"""

import json
import logging
from decimal import InvalidOperation
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from src.models import SettingsRecord
from src.services.costing.types import BisquePiece, StaffRole, StudioSettings
from src.utils.constants import (
    ALL_SETTINGS_KEYS,
    DEFAULT_BISQUE_CATALOG,
    DEFAULT_STAFF_ROLES,
    DEFAULT_STUDIO_SETTINGS,
    ERROR_INVALID_NUMBER,
    SETTINGS_KEY_CATALOG,
    SETTINGS_KEY_STAFF_ROLES,
    SETTINGS_KEY_STUDIO,
    SETTINGS_SCHEMA_VERSION,
)
from src.utils.validators import (
    validate_bisque_piece_data,
    validate_required_string,
    validate_staff_role_data,
    validate_studio_settings_data,
)

from .database import session_scope
from .exceptions import DatabaseError, UnrecognizedSettingsShape, ValidationError
from .logging_utils import get_service_logger, log_operation
from .settings_migration import LegacySettingsPayload, classify_settings_payload, migrate_legacy_settings

logger = get_service_logger(__name__)

DEFAULTS: Dict[str, Any] = {
    SETTINGS_KEY_STUDIO: DEFAULT_STUDIO_SETTINGS,
    SETTINGS_KEY_STAFF_ROLES: DEFAULT_STAFF_ROLES,
    SETTINGS_KEY_CATALOG: DEFAULT_BISQUE_CATALOG,
}


# ============================================================================
# Internal Helpers
# ============================================================================


def _get_record(session: Session, key: str) -> Optional[SettingsRecord]:
    return session.query(SettingsRecord).filter(SettingsRecord.key == key).first()


def _read_value(record: SettingsRecord) -> Any:
    try:
        return record.get_value()
    except (json.JSONDecodeError, TypeError) as e:
        raise DatabaseError(f"Stored payload for '{record.key}' is not valid JSON", e)


def _write_value(session: Session, key: str, value: Any) -> SettingsRecord:
    """Insert or replace the payload for a key at the current schema version."""
    record = _get_record(session, key)
    if record is None:
        record = SettingsRecord(key=key)
        session.add(record)
    record.set_value(value, SETTINGS_SCHEMA_VERSION)
    session.flush()
    return record


def _require_list(record: SettingsRecord) -> List[Dict[str, Any]]:
    value = _read_value(record)
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise UnrecognizedSettingsShape(value.keys() if isinstance(value, dict) else [])
    return value


# ============================================================================
# Studio Settings
# ============================================================================


def get_studio_settings(session: Optional[Session] = None) -> StudioSettings:
    """
    Load studio settings, migrating legacy payloads.

    Args:
        session: Optional database session

    Returns:
        StudioSettings (seed defaults when nothing is stored)

    Raises:
        UnrecognizedSettingsShape: If the stored payload matches no known schema
        DatabaseError: If the stored payload is not valid JSON
    """

    def _impl(sess: Session) -> StudioSettings:
        record = _get_record(sess, SETTINGS_KEY_STUDIO)
        if record is None:
            return StudioSettings.from_dict(DEFAULT_STUDIO_SETTINGS)

        payload = classify_settings_payload(_read_value(record))
        if isinstance(payload, LegacySettingsPayload):
            settings = migrate_legacy_settings(payload)
            from_version = record.schema_version
            _write_value(sess, SETTINGS_KEY_STUDIO, settings.to_dict())
            log_operation(
                logger,
                operation="get_studio_settings",
                outcome="migrated",
                from_version=from_version,
                to_version=SETTINGS_SCHEMA_VERSION,
            )
            return settings

        return payload.settings

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def save_studio_settings(settings: StudioSettings, session: Optional[Session] = None) -> StudioSettings:
    """
    Validate and store studio settings.

    Args:
        settings: Settings to store
        session: Optional database session

    Returns:
        The stored settings

    Raises:
        ValidationError: If any field is out of range
    """
    data = settings.to_dict()
    errors = validate_studio_settings_data(data)
    if errors:
        log_operation(
            logger,
            operation="save_studio_settings",
            outcome="validation_failed",
            level=logging.WARNING,
            errors=errors,
        )
        raise ValidationError(errors)

    def _impl(sess: Session) -> StudioSettings:
        _write_value(sess, SETTINGS_KEY_STUDIO, data)
        log_operation(logger, operation="save_studio_settings", outcome="success")
        return settings

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def import_studio_settings(raw: Any, session: Optional[Session] = None) -> StudioSettings:
    """
    Store a settings payload in either the legacy or the current layout.

    Raises:
        UnrecognizedSettingsShape: If the payload matches no known schema
        ValidationError: If the migrated settings are out of range
    """
    try:
        payload = classify_settings_payload(raw)
        if isinstance(payload, LegacySettingsPayload):
            settings = migrate_legacy_settings(payload)
        else:
            settings = payload.settings
    except InvalidOperation as e:
        errors = [f"Studio settings: {ERROR_INVALID_NUMBER}"]
        log_operation(
            logger,
            operation="import_studio_settings",
            outcome="validation_failed",
            level=logging.WARNING,
            errors=errors,
        )
        raise ValidationError(errors) from e
    return save_studio_settings(settings, session=session)


# ============================================================================
# Staff Roles
# ============================================================================


def get_staff_roles(session: Optional[Session] = None) -> List[StaffRole]:
    """
    Load stored staff roles in their saved order.

    Returns:
        List of StaffRole (seed defaults when nothing is stored)
    """

    def _impl(sess: Session) -> List[StaffRole]:
        record = _get_record(sess, SETTINGS_KEY_STAFF_ROLES)
        if record is None:
            return [StaffRole.from_dict(r) for r in DEFAULT_STAFF_ROLES]
        return [StaffRole.from_dict(r) for r in _require_list(record)]

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def save_staff_roles(roles: List[StaffRole], session: Optional[Session] = None) -> List[StaffRole]:
    """
    Validate and store staff roles, replacing the stored list.

    Raises:
        ValidationError: If any role has invalid numbers
    """
    data = [role.to_dict() for role in roles]
    errors: List[str] = []
    for index, role_data in enumerate(data, start=1):
        errors.extend(validate_staff_role_data(role_data, f"Staff role #{index}"))
    if errors:
        raise ValidationError(errors)

    def _impl(sess: Session) -> List[StaffRole]:
        _write_value(sess, SETTINGS_KEY_STAFF_ROLES, data)
        log_operation(logger, operation="save_staff_roles", outcome="success", role_count=len(data))
        return roles

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


# ============================================================================
# Bisque Catalog
# ============================================================================


def get_bisque_catalog(session: Optional[Session] = None) -> List[BisquePiece]:
    """
    Load the bisque catalog, including unnamed in-progress entries.

    Returns:
        List of BisquePiece (seed defaults when nothing is stored)
    """

    def _impl(sess: Session) -> List[BisquePiece]:
        record = _get_record(sess, SETTINGS_KEY_CATALOG)
        if record is None:
            return [BisquePiece.from_dict(p) for p in DEFAULT_BISQUE_CATALOG]
        return [BisquePiece.from_dict(p) for p in _require_list(record)]

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def save_bisque_catalog(
    pieces: List[BisquePiece], session: Optional[Session] = None
) -> List[BisquePiece]:
    """
    Validate and store the bisque catalog, replacing the stored list.

    Raises:
        ValidationError: If any piece has an invalid cost
    """
    data = [piece.to_dict() for piece in pieces]
    errors: List[str] = []
    for index, piece_data in enumerate(data, start=1):
        errors.extend(validate_bisque_piece_data(piece_data, f"Bisque piece #{index}"))
    if errors:
        raise ValidationError(errors)

    def _impl(sess: Session) -> List[BisquePiece]:
        _write_value(sess, SETTINGS_KEY_CATALOG, data)
        log_operation(logger, operation="save_bisque_catalog", outcome="success", piece_count=len(data))
        return pieces

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def _next_piece_id(pieces: List[BisquePiece]) -> str:
    numeric_ids = [int(p.id) for p in pieces if p.id.isdigit()]
    return str(max(numeric_ids, default=0) + 1)


def add_bisque_piece(
    name: str, wholesale_cost: Any, session: Optional[Session] = None
) -> BisquePiece:
    """
    Append a named piece to the bisque catalog.

    Args:
        name: Display name (required)
        wholesale_cost: What the studio pays the supplier
        session: Optional database session

    Returns:
        The new BisquePiece with a generated id

    Raises:
        ValidationError: If the name is blank or the cost is invalid
    """
    errors: List[str] = []
    is_valid, message = validate_required_string(name, "Bisque piece name")
    if not is_valid:
        errors.append(message)
    errors.extend(validate_bisque_piece_data({"name": name, "wholesale_cost": wholesale_cost}))
    if errors:
        raise ValidationError(errors)

    def _impl(sess: Session) -> BisquePiece:
        pieces = get_bisque_catalog(session=sess)
        piece = BisquePiece.from_dict(
            {"id": _next_piece_id(pieces), "name": name.strip(), "wholesale_cost": wholesale_cost}
        )
        save_bisque_catalog(pieces + [piece], session=sess)
        return piece

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


# ============================================================================
# Seeding and Reset
# ============================================================================


def seed_defaults(overwrite: bool = False, session: Optional[Session] = None) -> List[str]:
    """
    Write seed defaults for new installations.

    Args:
        overwrite: If True, replace existing records too
        session: Optional database session

    Returns:
        Keys that were written
    """

    def _impl(sess: Session) -> List[str]:
        written = []
        for key in ALL_SETTINGS_KEYS:
            if overwrite or _get_record(sess, key) is None:
                _write_value(sess, key, DEFAULTS[key])
                written.append(key)
        log_operation(logger, operation="seed_defaults", outcome="success", keys=written)
        return written

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def reset_settings(session: Optional[Session] = None) -> int:
    """
    Delete every stored settings record.

    Returns:
        Number of records deleted
    """

    def _impl(sess: Session) -> int:
        deleted = sess.query(SettingsRecord).delete()
        log_operation(logger, operation="reset_settings", outcome="success", deleted=deleted)
        return deleted

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)
