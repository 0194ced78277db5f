"""
SettingsRecord model for versioned key-value settings storage.

This module contains:
- SettingsRecord: One JSON payload per settings key, tagged with the schema
  version it was written under
"""

import json
from typing import Any

from sqlalchemy import Column, Integer, String, Text

from .base import BaseModel


class SettingsRecord(BaseModel):
    """
    A stored settings payload.

    Attributes:
        key: Settings key (e.g., "studio_settings", "staff_roles")
        schema_version: Version of the payload layout when it was written
        payload: JSON-encoded payload
    """

    __tablename__ = "settings_records"

    key = Column(String(100), nullable=False, unique=True, index=True)
    schema_version = Column(Integer, nullable=False, default=1)
    payload = Column(Text, nullable=False, default="null")

    def get_value(self) -> Any:
        """Decode the JSON payload."""
        return json.loads(self.payload)

    def set_value(self, value: Any, schema_version: int) -> None:
        """Encode a value as the JSON payload and stamp its schema version."""
        self.payload = json.dumps(value, sort_keys=True)
        self.schema_version = schema_version
