"""
Move Validator Module - Legality of a unit displacement.
"""

from typing import Iterable

import numpy as np

from .geometry import PieceType, in_bounds
from .occupancy import EMPTY
from .piece import Piece


# Top-left cell of the large piece when it sits over the exit
GOAL_POSITION = (3, 1)


def can_move(piece: Piece, drow: int, dcol: int, occupancy: np.ndarray) -> bool:
    """
    Check whether a piece may shift by (drow, dcol).

    Pure predicate: neither the piece nor the map is modified, so it is
    safe to call speculatively.

    Args:
        piece: Piece to move
        drow: Row displacement
        dcol: Column displacement
        occupancy: Current map from build_occupancy()

    Returns:
        True if the candidate footprint is on the board and every cell
        in it is empty or already owned by the piece itself
    """
    new_row = piece.row + drow
    new_col = piece.col + dcol

    if not in_bounds(new_row, new_col, piece.height, piece.width):
        return False

    for r, c in piece.footprint(new_row, new_col):
        occupant = occupancy[r, c]
        if occupant != EMPTY and occupant != piece.id:
            return False
    return True


def is_solved(pieces: Iterable[Piece]) -> bool:
    """True if the large piece sits directly above the exit."""
    for piece in pieces:
        if piece.type == PieceType.LARGE:
            return piece.position == GOAL_POSITION
    return False
