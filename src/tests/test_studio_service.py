"""Tests for studio_service: piece COGS from stored studio settings."""

from decimal import Decimal

import pytest

from src.services import settings_service, studio_service
from src.services.costing import BisquePiece, StaffRole
from src.services.database import session_scope
from src.services.exceptions import BisquePieceNotFound


class TestNamedOnly:
    """Tests for named_only()."""

    def test_drops_blank_names_keeps_order(self):
        pieces = [
            BisquePiece("1", "", 0),
            BisquePiece("2", "Mug", 3),
            BisquePiece("3", "   ", 1),
            BisquePiece("4", "Bowl", 4),
        ]
        assert [p.name for p in studio_service.named_only(pieces)] == ["Mug", "Bowl"]


class TestCalculateCogsForPiece:
    """Tests for calculate_cogs_for_piece()."""

    def test_unnamed_roles_excluded(self, snowman_globe, studio_settings, glazing_guide, manager):
        """A placeholder role with no name adds no labor."""
        placeholder = StaffRole("", 100, 60, 1)

        result = studio_service.calculate_cogs_for_piece(
            snowman_globe, studio_settings, [glazing_guide, placeholder, manager]
        )

        assert list(result.breakdown.labor_by_role) == ["Glazing Guide", "Manager"]
        assert result.breakdown.labor_total == Decimal("1.81")
        assert result.breakdown.overhead_cost == Decimal("15.00")
        # 5.00 + 0 + 1.81 + 0.85 + 15.00
        assert result.total_cogs == Decimal("22.66")

    def test_categorized_overhead_totalled_first(self, snowman_globe, studio_settings):
        result = studio_service.calculate_cogs_for_piece(snowman_globe, studio_settings, [])
        # 6000 / 400
        assert result.breakdown.overhead_cost == Decimal("15.00")


class TestCatalogPiece:
    """Tests for catalog lookups and stored-settings COGS."""

    def test_cogs_from_default_settings(self, test_db):
        """Seed defaults: 0.75 glaze, 1.81 labor, 0.85 kiln, no overhead."""
        settings_service.add_bisque_piece("Snowman Globe", "4.50")

        result = studio_service.calculate_cogs_for_catalog_piece("snowman globe")

        assert result.breakdown.bisque_cost == Decimal("4.50")
        assert result.total_cogs == Decimal("7.91")

    def test_uses_stored_settings(self, test_db, studio_settings):
        settings_service.save_studio_settings(studio_settings)
        settings_service.save_staff_roles([StaffRole("Owner", 30, 10, 1)])
        settings_service.add_bisque_piece("Mug", 3)

        result = studio_service.calculate_cogs_for_catalog_piece("Mug")

        # 3 + 0 + 5.00 + 0.85 + 15.00
        assert result.breakdown.labor_by_role == {"Owner": Decimal("5.00")}
        assert result.total_cogs == Decimal("23.85")

    def test_with_session(self, test_db):
        with session_scope() as session:
            settings_service.add_bisque_piece("Vase", 10, session=session)
            piece = studio_service.find_catalog_piece("VASE", session=session)
            result = studio_service.calculate_cogs_for_catalog_piece("vase", session=session)

        assert piece.name == "Vase"
        assert result.breakdown.bisque_cost == Decimal("10")

    def test_cost_catalog_piece_reads_catalog_once(self, test_db, monkeypatch):
        settings_service.add_bisque_piece("Snowman Globe", "4.50")
        calls = []
        original = settings_service.get_bisque_catalog

        def counting_catalog(session=None):
            calls.append(session)
            return original(session=session)

        monkeypatch.setattr(settings_service, "get_bisque_catalog", counting_catalog)

        piece, result = studio_service.cost_catalog_piece("SNOWMAN GLOBE")

        assert piece.name == "Snowman Globe"
        assert result.total_cogs == Decimal("7.91")
        assert len(calls) == 1
        assert calls[0] is not None

    def test_unknown_piece(self, test_db):
        with pytest.raises(BisquePieceNotFound, match="'Teapot' not found"):
            studio_service.calculate_cogs_for_catalog_piece("Teapot")

    def test_unnamed_placeholder_never_matches(self, test_db):
        with pytest.raises(BisquePieceNotFound):
            studio_service.find_catalog_piece("")
