"""
Settings database access.

The calculator keeps its studio settings, staff roles, and bisque catalog in
one small SQLite file. This module owns the engine and session factory for
that file and the transaction helper every settings operation runs in.

Usage:
    from src.services.database import session_scope

    with session_scope() as session:
        session.query(SettingsRecord).count()
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, close_all_sessions, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models.base import Base
from ..utils.config import get_config
from .exceptions import DatabaseError

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "settings_records"

_engine: Optional[Engine] = None
_SessionFactory: Optional[sessionmaker] = None


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Apply SQLite pragmas to every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def _is_memory_url(database_url: str) -> bool:
    return ":memory:" in database_url or "mode=memory" in database_url


def create_database_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create an engine for the settings database.

    Args:
        database_url: SQLAlchemy URL; defaults to the configured database file
        echo: Log every SQL statement

    Returns:
        Engine bound to the database
    """
    if database_url is None:
        database_url = get_config().database_url

    logger.info(f"Creating database engine: {database_url}")

    if _is_memory_url(database_url):
        # One shared connection, otherwise each checkout sees an empty database
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False, "timeout": 30},
    )


def get_engine(force_recreate: bool = False) -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine

    if _engine is None or force_recreate:
        _engine = create_database_engine()

    return _engine


def get_session_factory() -> sessionmaker:
    """Return the process-wide session factory."""
    global _SessionFactory

    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=get_engine(), expire_on_commit=False)

    return _SessionFactory


def get_session() -> Session:
    """Create a new database session."""
    return get_session_factory()()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Run a block of settings operations as one transaction.

    Commits when the block finishes, rolls back if it raises, and always
    closes the session.

    Example:
        with session_scope() as session:
            settings_service.save_staff_roles(roles, session=session)
            settings_service.add_bisque_piece("Mug", "3.00", session=session)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_database(engine: Optional[Engine] = None) -> None:
    """
    Create the settings table if it does not exist yet.

    Args:
        engine: Engine to use; defaults to the process-wide engine
    """
    if engine is None:
        engine = get_engine()

    # Register models with Base before create_all()
    from ..models import settings_record  # noqa: F401

    Base.metadata.create_all(engine)
    logger.debug("Settings tables created")


def verify_database(engine: Optional[Engine] = None) -> bool:
    """Return True if the settings table exists."""
    try:
        return SETTINGS_TABLE in inspect(engine or get_engine()).get_table_names()
    except Exception as e:
        logger.error(f"Database verification failed: {e}")
        return False


def initialize_app_database() -> None:
    """
    Open the configured database file, creating it and its table as needed.

    Raises:
        DatabaseError: If the settings table is still missing afterwards
    """
    config = get_config()
    if config.database_exists():
        logger.info(f"Using existing database at: {config.database_path}")
    else:
        logger.info(f"Creating new database at: {config.database_path}")

    init_database(get_engine())

    if not verify_database():
        raise DatabaseError(f"settings table missing from {config.database_path}")


def close_connections() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _SessionFactory

    if _SessionFactory is not None:
        close_all_sessions()
        _SessionFactory = None

    if _engine is not None:
        _engine.dispose()
        _engine = None

    logger.info("Database connections closed")
