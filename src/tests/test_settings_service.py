"""Tests for the settings service (studio settings, staff roles, bisque catalog)."""

import logging
from decimal import Decimal

import pytest

from src.models import SettingsRecord
from src.services import settings_service
from src.services.costing import BisquePiece, StaffRole, StudioSettings
from src.services.database import session_scope
from src.services.exceptions import DatabaseError, UnrecognizedSettingsShape, ValidationError
from src.utils.constants import (
    ALL_SETTINGS_KEYS,
    LEGACY_SETTINGS_SCHEMA_VERSION,
    SETTINGS_KEY_CATALOG,
    SETTINGS_KEY_STAFF_ROLES,
    SETTINGS_KEY_STUDIO,
    SETTINGS_SCHEMA_VERSION,
)

LEGACY_SETTINGS = {
    "monthly_overhead": 4800,
    "pieces_per_month": 300,
    "glaze_cost_per_piece": 0.5,
    "kiln": {
        "hourly_rate": 17,
        "minutes_per_firing": 30,
        "kiln_worker_count": 2,
        "pieces_per_firing": 20,
    },
}


def _store_raw(key, payload, schema_version):
    """Write a record directly, bypassing the service."""
    with session_scope() as session:
        record = SettingsRecord(key=key)
        record.set_value(payload, schema_version)
        session.add(record)


def _get_record(key):
    with session_scope() as session:
        return session.query(SettingsRecord).filter(SettingsRecord.key == key).one()


class TestStudioSettings:
    """Tests for loading and saving studio settings."""

    def test_defaults_when_nothing_stored(self, test_db):
        settings = settings_service.get_studio_settings()

        assert settings.pieces_per_month == Decimal("400")
        assert settings.glaze_cost_per_piece == Decimal("0.75")
        assert [i.name for i in settings.overhead.variable_costs] == ["Utilities", "Supplies"]

    def test_save_and_reload(self, test_db, studio_settings):
        settings_service.save_studio_settings(studio_settings)

        loaded = settings_service.get_studio_settings()

        assert loaded == studio_settings
        assert _get_record(SETTINGS_KEY_STUDIO).schema_version == SETTINGS_SCHEMA_VERSION

    def test_save_rejects_invalid_settings(self, test_db, studio_settings):
        bad = StudioSettings(
            overhead=studio_settings.overhead,
            pieces_per_month=0,
            glaze_cost_per_piece=-1,
            kiln=studio_settings.kiln,
        )

        with pytest.raises(ValidationError) as exc_info:
            settings_service.save_studio_settings(bad)

        assert "Pieces per month: Must be greater than zero" in exc_info.value.errors
        assert "Glaze cost per piece: Must be zero or greater" in exc_info.value.errors

    def test_legacy_settings_migrated_on_load(self, test_db, caplog):
        """A legacy payload is migrated, rewritten at the current version, and logged."""
        _store_raw(SETTINGS_KEY_STUDIO, LEGACY_SETTINGS, LEGACY_SETTINGS_SCHEMA_VERSION)

        with caplog.at_level(logging.INFO):
            settings = settings_service.get_studio_settings()

        assert [(i.name, i.amount) for i in settings.overhead.fixed_costs] == [
            ("Other", Decimal("4800"))
        ]
        assert settings.pieces_per_month == Decimal("300")

        record = _get_record(SETTINGS_KEY_STUDIO)
        assert record.schema_version == SETTINGS_SCHEMA_VERSION
        assert "overhead" in record.get_value()

        assert "get_studio_settings: migrated" in caplog.text
        migrated = [r for r in caplog.records if getattr(r, "outcome", None) == "migrated"]
        assert migrated[0].from_version == LEGACY_SETTINGS_SCHEMA_VERSION
        assert migrated[0].to_version == SETTINGS_SCHEMA_VERSION

    def test_unrecognized_payload_raises(self, test_db):
        _store_raw(SETTINGS_KEY_STUDIO, {"theme": "dark"}, SETTINGS_SCHEMA_VERSION)

        with pytest.raises(UnrecognizedSettingsShape, match="keys: theme"):
            settings_service.get_studio_settings()

    def test_corrupt_json_raises_database_error(self, test_db):
        with session_scope() as session:
            session.add(SettingsRecord(key=SETTINGS_KEY_STUDIO, payload="{not json"))

        with pytest.raises(DatabaseError):
            settings_service.get_studio_settings()

    def test_import_legacy_settings(self, test_db):
        settings = settings_service.import_studio_settings(LEGACY_SETTINGS)

        assert settings.overhead.fixed_costs[0].name == "Other"
        assert settings_service.get_studio_settings() == settings

    def test_import_unrecognized_settings(self, test_db):
        with pytest.raises(UnrecognizedSettingsShape):
            settings_service.import_studio_settings({"pieces_per_month": 10})

    def test_import_non_numeric_value(self, test_db):
        raw = {**LEGACY_SETTINGS, "pieces_per_month": "lots"}

        with pytest.raises(ValidationError, match="Studio settings: Must be a valid number"):
            settings_service.import_studio_settings(raw)

        assert settings_service.get_studio_settings().pieces_per_month == Decimal("400")

    def test_import_non_numeric_overhead_item(self, test_db):
        raw = {
            "overhead": {"fixed_costs": [{"id": "1", "name": "Rent", "amount": "abc"}]},
            "pieces_per_month": 400,
            "glaze_cost_per_piece": 0.75,
            "kiln": LEGACY_SETTINGS["kiln"],
        }

        with pytest.raises(ValidationError):
            settings_service.import_studio_settings(raw)

    def test_import_nan_value(self, test_db):
        raw = {**LEGACY_SETTINGS, "pieces_per_month": "nan"}

        with pytest.raises(ValidationError, match="Pieces per month: Must be a valid number"):
            settings_service.import_studio_settings(raw)

    def test_uses_provided_session(self, test_db, studio_settings):
        with session_scope() as session:
            settings_service.save_studio_settings(studio_settings, session=session)
            loaded = settings_service.get_studio_settings(session=session)

        assert loaded.pieces_per_month == Decimal("400")


class TestStaffRoles:
    """Tests for staff role storage."""

    def test_defaults_when_nothing_stored(self, test_db):
        roles = settings_service.get_staff_roles()
        assert [r.name for r in roles] == ["Glazing Guide", "Manager"]
        assert roles[1].customers_simultaneous == Decimal("3")

    def test_save_and_reload_keeps_order_and_precision(self, test_db):
        roles = [
            StaffRole("Owner", Decimal("25.50"), 10, 6),
            StaffRole("", 0, 0, 1),
        ]
        settings_service.save_staff_roles(roles)

        loaded = settings_service.get_staff_roles()

        assert [r.name for r in loaded] == ["Owner", ""]
        assert loaded[0].hourly_rate == Decimal("25.50")

    def test_save_rejects_zero_customers(self, test_db):
        with pytest.raises(ValidationError) as exc_info:
            settings_service.save_staff_roles([StaffRole("Guide", 15, 20, 0)])

        assert exc_info.value.errors == [
            "Staff role #1 customers served at once: Must be greater than zero"
        ]

    def test_stored_mapping_is_rejected(self, test_db):
        _store_raw(SETTINGS_KEY_STAFF_ROLES, {"name": "Guide"}, SETTINGS_SCHEMA_VERSION)

        with pytest.raises(UnrecognizedSettingsShape):
            settings_service.get_staff_roles()


class TestBisqueCatalog:
    """Tests for bisque catalog storage."""

    def test_default_catalog_has_placeholder(self, test_db):
        catalog = settings_service.get_bisque_catalog()
        assert catalog == [BisquePiece(id="1", name="", wholesale_cost=Decimal("0"))]

    def test_add_piece_assigns_next_id(self, test_db):
        first = settings_service.add_bisque_piece("Snowman Globe", "4.50")
        second = settings_service.add_bisque_piece("  Mug  ", 3)

        assert first.id == "2"
        assert second.id == "3"
        assert second.name == "Mug"

        catalog = settings_service.get_bisque_catalog()
        assert [p.name for p in catalog] == ["", "Snowman Globe", "Mug"]
        assert catalog[1].wholesale_cost == Decimal("4.50")

    def test_add_piece_requires_name(self, test_db):
        with pytest.raises(ValidationError, match="Bisque piece name: This field is required"):
            settings_service.add_bisque_piece("   ", 4)

    def test_add_piece_rejects_negative_cost(self, test_db):
        with pytest.raises(ValidationError, match="wholesale cost: Must be zero or greater"):
            settings_service.add_bisque_piece("Plate", -1)

        assert len(settings_service.get_bisque_catalog()) == 1

    @pytest.mark.parametrize("cost", ["abc", "nan", "Infinity"])
    def test_add_piece_rejects_non_numeric_cost(self, test_db, cost):
        with pytest.raises(ValidationError, match="Bisque piece wholesale cost: Must be a valid number"):
            settings_service.add_bisque_piece("Mug", cost)

        assert len(settings_service.get_bisque_catalog()) == 1

    def test_non_numeric_ids_ignored_for_next_id(self, test_db):
        settings_service.save_bisque_catalog([BisquePiece("legacy-a", "Bowl", 2)])
        piece = settings_service.add_bisque_piece("Vase", 6)
        assert piece.id == "1"


class TestSeedAndReset:
    """Tests for seed_defaults() and reset_settings()."""

    def test_seed_writes_missing_keys_only(self, test_db):
        settings_service.save_staff_roles([StaffRole("Owner", 30, 10, 2)])

        written = settings_service.seed_defaults()

        assert written == [SETTINGS_KEY_STUDIO, SETTINGS_KEY_CATALOG]
        assert [r.name for r in settings_service.get_staff_roles()] == ["Owner"]

    def test_seed_is_idempotent(self, test_db):
        assert settings_service.seed_defaults() == ALL_SETTINGS_KEYS
        assert settings_service.seed_defaults() == []

    def test_seed_overwrite(self, test_db):
        settings_service.save_staff_roles([StaffRole("Owner", 30, 10, 2)])

        written = settings_service.seed_defaults(overwrite=True)

        assert written == ALL_SETTINGS_KEYS
        assert [r.name for r in settings_service.get_staff_roles()] == ["Glazing Guide", "Manager"]

    def test_reset_deletes_everything(self, test_db):
        settings_service.seed_defaults()

        assert settings_service.reset_settings() == 3
        assert settings_service.reset_settings() == 0
