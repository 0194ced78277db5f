"""Tests for settings database setup and the session_scope transaction helper."""

import pytest

import src.services.database as db_module
from src.models import SettingsRecord
from src.services.database import (
    create_database_engine,
    init_database,
    session_scope,
    verify_database,
)
from src.utils.config import DATABASE_PATH_VAR, reset_config


class TestDatabaseSetup:
    """Tests for engine creation and table setup."""

    def test_init_creates_settings_table(self):
        engine = create_database_engine("sqlite:///:memory:")

        assert not verify_database(engine)
        init_database(engine)
        assert verify_database(engine)

    def test_initialize_app_database_uses_configured_file(self, tmp_path, monkeypatch):
        db_path = tmp_path / "cogs.db"
        monkeypatch.setenv(DATABASE_PATH_VAR, str(db_path))
        reset_config()
        db_module.close_connections()

        try:
            db_module.initialize_app_database()
            assert db_path.exists()
            assert verify_database()
        finally:
            db_module.close_connections()
            reset_config()


class TestSessionScope:
    """Tests for session_scope()."""

    def test_commits_on_success(self, test_db):
        with session_scope() as session:
            session.add(SettingsRecord(key="staff_roles", payload="[]"))

        with session_scope() as session:
            assert session.query(SettingsRecord).count() == 1

    def test_rolls_back_on_error(self, test_db):
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                session.add(SettingsRecord(key="staff_roles", payload="[]"))
                session.flush()
                raise RuntimeError("boom")

        with session_scope() as session:
            assert session.query(SettingsRecord).count() == 0


class TestSettingsRecord:
    """Tests for the SettingsRecord model."""

    def test_value_round_trip_and_dict(self, test_db):
        with session_scope() as session:
            record = SettingsRecord(key="bisque_catalog")
            record.set_value([{"id": "1", "name": "Mug"}], schema_version=2)
            session.add(record)
            session.flush()

            data = record.to_dict()

        assert record.get_value() == [{"id": "1", "name": "Mug"}]
        assert data["key"] == "bisque_catalog"
        assert data["schema_version"] == 2
        assert isinstance(data["created_at"], str)
        assert repr(record) == f"SettingsRecord(id={record.id}, key='bisque_catalog')"
