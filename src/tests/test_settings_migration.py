"""Tests for studio settings schema migration.

Settings saved before overhead categories existed carry one
monthly_overhead number; loading them must produce a single fixed-cost
item named "Other" holding that value.
"""

from decimal import Decimal

import pytest

from src.services.exceptions import UnrecognizedSettingsShape
from src.services.settings_migration import (
    CurrentSettingsPayload,
    LegacySettingsPayload,
    classify_settings_payload,
    migrate_legacy_settings,
    migrate_settings,
)
from src.utils.constants import (
    DEFAULT_STUDIO_SETTINGS,
    LEGACY_SETTINGS_SCHEMA_VERSION,
    SETTINGS_SCHEMA_VERSION,
)

KILN = {
    "hourly_rate": 17,
    "minutes_per_firing": 30,
    "kiln_worker_count": 2,
    "pieces_per_firing": 20,
}


@pytest.fixture
def legacy_payload():
    return {
        "monthly_overhead": 5000,
        "pieces_per_month": 400,
        "glaze_cost_per_piece": 0.75,
        "kiln": dict(KILN),
    }


class TestClassifySettingsPayload:
    """Tests for classify_settings_payload()."""

    def test_legacy_shape(self, legacy_payload):
        payload = classify_settings_payload(legacy_payload)

        assert isinstance(payload, LegacySettingsPayload)
        assert payload.schema_version == LEGACY_SETTINGS_SCHEMA_VERSION
        assert payload.monthly_overhead == Decimal("5000")
        assert payload.kiln.pieces_per_firing == Decimal("20")

    def test_current_shape(self):
        payload = classify_settings_payload(DEFAULT_STUDIO_SETTINGS)

        assert isinstance(payload, CurrentSettingsPayload)
        assert payload.schema_version == SETTINGS_SCHEMA_VERSION
        assert [i.name for i in payload.settings.overhead.fixed_costs] == [
            "Rent",
            "Insurance",
            "Property Taxes",
        ]

    def test_empty_overhead_mapping_is_current(self):
        """An overhead mapping with no categories is still the current layout."""
        raw = {"overhead": {}, "pieces_per_month": 10, "glaze_cost_per_piece": 0, "kiln": KILN}
        payload = classify_settings_payload(raw)

        assert isinstance(payload, CurrentSettingsPayload)
        assert payload.settings.overhead.fixed_costs == []

    def test_legacy_without_overhead_value(self, legacy_payload):
        del legacy_payload["monthly_overhead"]
        payload = classify_settings_payload(legacy_payload)
        assert payload.monthly_overhead == Decimal("0")

    def test_missing_legacy_field_is_rejected(self, legacy_payload):
        del legacy_payload["kiln"]
        with pytest.raises(UnrecognizedSettingsShape) as exc_info:
            classify_settings_payload(legacy_payload)
        assert exc_info.value.keys == ["glaze_cost_per_piece", "monthly_overhead", "pieces_per_month"]

    def test_non_mapping_overhead_is_rejected(self, legacy_payload):
        legacy_payload["overhead"] = 5000
        with pytest.raises(UnrecognizedSettingsShape):
            classify_settings_payload(legacy_payload)

    def test_non_mapping_kiln_is_rejected(self, legacy_payload):
        legacy_payload["kiln"] = "electric"
        with pytest.raises(UnrecognizedSettingsShape):
            classify_settings_payload(legacy_payload)

    @pytest.mark.parametrize("raw", [None, [], "settings", 42])
    def test_non_mapping_payload_is_rejected(self, raw):
        with pytest.raises(UnrecognizedSettingsShape, match="keys: none"):
            classify_settings_payload(raw)


class TestMigrateLegacySettings:
    """Tests for migrate_legacy_settings() and migrate_settings()."""

    def test_overhead_becomes_single_other_item(self, legacy_payload):
        settings = migrate_legacy_settings(classify_settings_payload(legacy_payload))

        assert len(settings.overhead.fixed_costs) == 1
        item = settings.overhead.fixed_costs[0]
        assert item.id == "1"
        assert item.name == "Other"
        assert item.amount == Decimal("5000")
        assert settings.overhead.variable_costs == []

    def test_other_fields_carried_over(self, legacy_payload):
        settings = migrate_settings(legacy_payload)

        assert settings.pieces_per_month == Decimal("400")
        assert settings.glaze_cost_per_piece == Decimal("0.75")
        assert settings.kiln.hourly_rate == Decimal("17")
        assert settings.kiln.kiln_worker_count == Decimal("2")

    def test_current_payload_passes_through(self):
        settings = migrate_settings(DEFAULT_STUDIO_SETTINGS)
        assert len(settings.overhead.variable_costs) == 2
        assert settings.pieces_per_month == Decimal("400")

    def test_migrated_settings_serialize_as_current(self, legacy_payload):
        """Migrated settings classify as current once written back."""
        data = migrate_settings(legacy_payload).to_dict()
        assert isinstance(classify_settings_payload(data), CurrentSettingsPayload)
