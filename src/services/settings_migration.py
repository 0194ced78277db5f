"""
Studio settings schema migration.

Settings written before overhead categories existed carry a single
monthly_overhead number. Current settings carry an overhead mapping with
fixed and variable line items. A stored payload is classified into exactly
one of those shapes before use; a payload matching neither is rejected
rather than guessed at.

Shapes:
    Legacy (schema version 1):
        {"monthly_overhead"?: n, "pieces_per_month": n,
         "glaze_cost_per_piece": n, "kiln": {...}}
    Current (schema version 2):
        {"overhead": {"fixed_costs": [...], "variable_costs": [...]},
         "pieces_per_month": n, "glaze_cost_per_piece": n, "kiln": {...}}

Usage:
    from src.services.settings_migration import migrate_settings

    settings = migrate_settings(json.loads(stored_payload))
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

from src.services.costing.types import (
    KilnBatchConfig,
    OverheadItem,
    OverheadSettings,
    StudioSettings,
)
from src.services.exceptions import UnrecognizedSettingsShape
from src.utils.constants import (
    LEGACY_OVERHEAD_ITEM_ID,
    LEGACY_OVERHEAD_ITEM_NAME,
    LEGACY_SETTINGS_SCHEMA_VERSION,
    SETTINGS_SCHEMA_VERSION,
)
from src.utils.rounding import to_decimal

LEGACY_REQUIRED_KEYS = ("pieces_per_month", "glaze_cost_per_piece", "kiln")


@dataclass(frozen=True)
class LegacySettingsPayload:
    """Settings from before overhead categories: one overhead number."""

    monthly_overhead: Decimal
    pieces_per_month: Decimal
    glaze_cost_per_piece: Decimal
    kiln: KilnBatchConfig

    schema_version = LEGACY_SETTINGS_SCHEMA_VERSION


@dataclass(frozen=True)
class CurrentSettingsPayload:
    """Settings already in the categorized-overhead layout."""

    settings: StudioSettings

    schema_version = SETTINGS_SCHEMA_VERSION


SettingsPayload = Union[LegacySettingsPayload, CurrentSettingsPayload]


def classify_settings_payload(raw: Any) -> SettingsPayload:
    """
    Decide which schema a stored settings payload was written in.

    Args:
        raw: Decoded JSON payload

    Returns:
        CurrentSettingsPayload when the payload has an overhead mapping,
        LegacySettingsPayload when it has no overhead but has the other
        legacy fields

    Raises:
        UnrecognizedSettingsShape: If the payload matches neither shape
    """
    if not isinstance(raw, dict):
        raise UnrecognizedSettingsShape([])

    overhead = raw.get("overhead")
    if isinstance(overhead, dict):
        return CurrentSettingsPayload(settings=StudioSettings.from_dict(raw))

    if overhead is None and all(key in raw for key in LEGACY_REQUIRED_KEYS):
        if isinstance(raw.get("kiln"), dict):
            return LegacySettingsPayload(
                # A legacy payload may have no overhead figure at all
                monthly_overhead=to_decimal(raw.get("monthly_overhead") or 0),
                pieces_per_month=to_decimal(raw["pieces_per_month"]),
                glaze_cost_per_piece=to_decimal(raw["glaze_cost_per_piece"]),
                kiln=KilnBatchConfig.from_dict(raw["kiln"]),
            )

    raise UnrecognizedSettingsShape(raw.keys())


def migrate_legacy_settings(legacy: LegacySettingsPayload) -> StudioSettings:
    """
    Convert legacy settings into the categorized-overhead layout.

    The single overhead number becomes one fixed-cost item named "Other";
    there are no variable costs.
    """
    return StudioSettings(
        overhead=OverheadSettings(
            fixed_costs=[
                OverheadItem(
                    id=LEGACY_OVERHEAD_ITEM_ID,
                    name=LEGACY_OVERHEAD_ITEM_NAME,
                    amount=legacy.monthly_overhead,
                )
            ],
            variable_costs=[],
        ),
        pieces_per_month=legacy.pieces_per_month,
        glaze_cost_per_piece=legacy.glaze_cost_per_piece,
        kiln=legacy.kiln,
    )


def migrate_settings(raw: Any) -> StudioSettings:
    """
    Return current-layout settings for any recognized stored payload.

    Raises:
        UnrecognizedSettingsShape: If the payload matches neither shape
    """
    payload = classify_settings_payload(raw)
    if isinstance(payload, LegacySettingsPayload):
        return migrate_legacy_settings(payload)
    return payload.settings
