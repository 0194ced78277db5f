"""
Declarative base and shared columns for database models.

Every model gets an integer primary key and created/updated timestamps.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Return current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Abstract model with id, created_at, and updated_at columns."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Return column values keyed by column name, datetimes as ISO strings."""
        values = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            values[column.name] = value.isoformat() if isinstance(value, datetime) else value
        return values

    def __repr__(self) -> str:
        key = getattr(self, "key", None)
        suffix = f", key='{key}'" if key is not None else ""
        return f"{self.__class__.__name__}(id={self.id}{suffix})"
