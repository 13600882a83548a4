"""
Piece Store Module - Authoritative set of placed pieces.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from .geometry import PieceType
from .occupancy import build_occupancy
from .piece import LayoutEntry, Piece, pieces_from_layout

logger = logging.getLogger(__name__)


#  1  0  0  3
#  1  0  0  3
#  4  5  6  9
#  4  7  8  9
#  .  2  2  .
STANDARD_LAYOUT: List[LayoutEntry] = [
    LayoutEntry(0, PieceType.LARGE, 0, 1),
    LayoutEntry(1, PieceType.VERTICAL, 0, 0),
    LayoutEntry(2, PieceType.HORIZONTAL, 4, 1),
    LayoutEntry(3, PieceType.VERTICAL, 0, 3),
    LayoutEntry(4, PieceType.VERTICAL, 2, 0),
    LayoutEntry(5, PieceType.TINY, 2, 1),
    LayoutEntry(6, PieceType.TINY, 2, 2),
    LayoutEntry(7, PieceType.TINY, 3, 1),
    LayoutEntry(8, PieceType.TINY, 3, 2),
    LayoutEntry(9, PieceType.VERTICAL, 2, 3),
]


class PieceNotFoundError(LookupError):
    """Raised when no piece has the requested id."""


class PieceStore:
    """
    Owns the pieces of one puzzle and the move counter.

    Pieces are replaced wholesale by initialize() and otherwise only
    mutated in place by the move applicator.
    """

    def __init__(self, layout: Optional[List[LayoutEntry]] = None):
        """
        Initialize the store.

        Args:
            layout: Starting layout (default STANDARD_LAYOUT)
        """
        self._pieces: List[Piece] = []
        self._by_id: Dict[int, Piece] = {}
        self.move_count = 0
        self.initialize(layout if layout is not None else STANDARD_LAYOUT)

    def initialize(self, layout: List[LayoutEntry]) -> None:
        """
        Replace every piece with a fresh copy of a layout and zero the counter.

        Args:
            layout: Starting layout literal

        Raises:
            ValueError: If ids repeat
            OccupancyError: If pieces overlap or leave the board
        """
        pieces = pieces_from_layout(layout)

        by_id = {piece.id: piece for piece in pieces}
        if len(by_id) != len(pieces):
            raise ValueError("Layout contains duplicate piece ids")

        # Validates bounds and disjointness
        build_occupancy(pieces)

        self._pieces = pieces
        self._by_id = by_id
        self.move_count = 0
        logger.debug(f"Piece store initialized with {len(pieces)} pieces")

    def find_by_id(self, piece_id: int) -> Piece:
        """
        Get a piece by id.

        Args:
            piece_id: Id from a view event or a solver response

        Returns:
            The live Piece object

        Raises:
            PieceNotFoundError: If no piece has this id
        """
        try:
            return self._by_id[piece_id]
        except (KeyError, TypeError):
            raise PieceNotFoundError(f"No piece with id {piece_id!r}") from None

    def all(self) -> List[Piece]:
        """Get the live piece collection."""
        return self._pieces

    def occupancy(self) -> np.ndarray:
        """Build a fresh occupancy map from the current positions."""
        return build_occupancy(self._pieces)

    def to_payload(self) -> Dict[str, Dict[str, int]]:
        """
        Serialize positions for the solver.

        Returns:
            Mapping of str(piece id) to {"row": int, "col": int}
        """
        return {
            str(piece.id): {"row": piece.row, "col": piece.col}
            for piece in sorted(self._pieces, key=lambda p: p.id)
        }

    def snapshot(self) -> List[LayoutEntry]:
        """Capture current positions as a layout literal."""
        return [piece.to_entry() for piece in self._pieces]
