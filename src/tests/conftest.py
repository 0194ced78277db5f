"""Pytest configuration and fixtures for service layer tests."""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session

from src.models.base import Base
from src.services.costing import (
    BisquePiece,
    KilnBatchConfig,
    OverheadItem,
    OverheadSettings,
    StaffRole,
    StudioSettings,
)


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the database to the test
    4. Drops all tables after the test completes
    """
    # Create in-memory SQLite database for testing
    engine = create_engine("sqlite:///:memory:", echo=False)

    # Create all tables
    Base.metadata.create_all(engine)

    # Create session factory
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    # Provide database to test
    yield Session

    # Cleanup
    Session.remove()
    Base.metadata.drop_all(engine)

    # Restore original session factory
    db_module.get_session_factory = original_get_session


@pytest.fixture
def glazing_guide():
    """Glazing Guide: 15/hr, 20 minutes per customer, 4 customers at once."""
    return StaffRole(
        name="Glazing Guide",
        hourly_rate=Decimal("15"),
        minutes_per_customer=Decimal("20"),
        customers_simultaneous=Decimal("4"),
    )


@pytest.fixture
def manager():
    """Manager: 20/hr, 5 minutes per customer, 3 customers at once."""
    return StaffRole(
        name="Manager",
        hourly_rate=Decimal("20"),
        minutes_per_customer=Decimal("5"),
        customers_simultaneous=Decimal("3"),
    )


@pytest.fixture
def typical_kiln():
    """Two workers at 17/hr, 30-minute firing, 20 pieces per load (0.85/piece)."""
    return KilnBatchConfig(
        hourly_rate=Decimal("17"),
        minutes_per_firing=Decimal("30"),
        kiln_worker_count=Decimal("2"),
        pieces_per_firing=Decimal("20"),
    )


@pytest.fixture
def studio_settings(typical_kiln):
    """Studio with 6000/month overhead over 400 pieces and no glaze cost."""
    return StudioSettings(
        overhead=OverheadSettings(
            fixed_costs=[
                OverheadItem(id="1", name="Rent", amount=Decimal("4000")),
                OverheadItem(id="2", name="Insurance", amount=Decimal("500")),
            ],
            variable_costs=[
                OverheadItem(id="3", name="Utilities", amount=Decimal("1500")),
            ],
        ),
        pieces_per_month=Decimal("400"),
        glaze_cost_per_piece=Decimal("0"),
        kiln=typical_kiln,
    )


@pytest.fixture
def snowman_globe():
    """A catalog piece with a 5.00 wholesale cost."""
    return BisquePiece(id="2", name="Snowman Globe", wholesale_cost=Decimal("5.00"))
