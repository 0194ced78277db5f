"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .settings_record import SettingsRecord

__all__ = [
    "Base",
    "BaseModel",
    "SettingsRecord",
]
