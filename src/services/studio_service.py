"""
Studio Service - Piece COGS from studio settings.

Bridges stored studio data and the costing engine. Before calling
calculate_piece_cogs() it drops unnamed staff roles (placeholders the owner
has not filled in) and turns categorized overhead into a monthly total.

Usage:
    from src.services.studio_service import calculate_cogs_for_catalog_piece

    result = calculate_cogs_for_catalog_piece("Snowman Globe")
    print(result.total_cogs)
"""

from typing import List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy.orm import Session

from src.services.costing import (
    BisquePiece,
    OverheadInput,
    PieceCOGSResult,
    StaffRole,
    StudioSettings,
    calculate_piece_cogs,
    calculate_total_overhead,
)

from . import settings_service
from .database import session_scope
from .exceptions import BisquePieceNotFound
from .logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

Named = TypeVar("Named", BisquePiece, StaffRole)


def named_only(records: Sequence[Named]) -> List[Named]:
    """Return the records whose name is not blank, in their original order."""
    return [r for r in records if r.name and r.name.strip()]


def calculate_cogs_for_piece(
    piece: BisquePiece,
    settings: StudioSettings,
    staff_roles: Sequence[StaffRole],
) -> PieceCOGSResult:
    """
    Calculate full COGS for one bisque piece under the given studio settings.

    Args:
        piece: The bisque piece being painted
        settings: Studio overhead, volume, glaze, and kiln settings
        staff_roles: Staff roles; unnamed roles are ignored

    Returns:
        PieceCOGSResult from the costing engine
    """
    monthly_overhead = calculate_total_overhead(settings.overhead)

    return calculate_piece_cogs(
        bisque_cost=piece.wholesale_cost,
        glaze_cost_per_piece=settings.glaze_cost_per_piece,
        staff_roles=named_only(staff_roles),
        kiln=settings.kiln,
        overhead=OverheadInput(
            monthly_overhead=monthly_overhead,
            pieces_per_month=settings.pieces_per_month,
        ),
    )


def find_catalog_piece(name: str, session: Optional[Session] = None) -> BisquePiece:
    """
    Find a named bisque piece by case-insensitive name.

    Raises:
        BisquePieceNotFound: If no named piece matches
    """
    wanted = name.strip().lower()
    pieces = named_only(settings_service.get_bisque_catalog(session=session))
    for piece in pieces:
        if piece.name.strip().lower() == wanted:
            return piece
    raise BisquePieceNotFound(name)


def cost_catalog_piece(
    name: str, session: Optional[Session] = None
) -> Tuple[BisquePiece, PieceCOGSResult]:
    """
    Look up a catalog piece and cost it with the stored settings and roles.

    The catalog, settings, and roles are read in one session.

    Args:
        name: Catalog piece name (case-insensitive)
        session: Optional database session

    Returns:
        Tuple of (matched BisquePiece, PieceCOGSResult)

    Raises:
        BisquePieceNotFound: If the catalog has no piece with that name
    """

    def _impl(sess: Session) -> Tuple[BisquePiece, PieceCOGSResult]:
        piece = find_catalog_piece(name, session=sess)
        settings = settings_service.get_studio_settings(session=sess)
        roles = settings_service.get_staff_roles(session=sess)
        result = calculate_cogs_for_piece(piece, settings, roles)
        log_operation(
            logger,
            operation="cost_catalog_piece",
            outcome="success",
            piece=piece.name,
            total_cogs=str(result.total_cogs),
        )
        return piece, result

    if session is not None:
        return _impl(session)

    with session_scope() as sess:
        return _impl(sess)


def calculate_cogs_for_catalog_piece(
    name: str, session: Optional[Session] = None
) -> PieceCOGSResult:
    """
    Calculate COGS for a catalog piece using the stored settings and roles.

    Raises:
        BisquePieceNotFound: If the catalog has no piece with that name
    """
    return cost_catalog_piece(name, session=session)[1]
