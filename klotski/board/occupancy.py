"""
Occupancy Index Module - Derived cell ownership map of the board.

The map is rebuilt from the piece positions on every call and never
cached, so it cannot drift from the pieces it describes.
"""

from typing import Iterable

import numpy as np

from .geometry import ROWS, COLS, in_bounds
from .piece import Piece


# Owner value of a cell no piece covers
EMPTY = -1


class OccupancyError(ValueError):
    """Raised when pieces overlap or leave the board."""


def build_occupancy(pieces: Iterable[Piece]) -> np.ndarray:
    """
    Build the ROWS x COLS ownership map for a piece set.

    Args:
        pieces: Every piece currently on the board

    Returns:
        Integer array where each cell holds the owning piece id or EMPTY

    Raises:
        OccupancyError: If a footprint leaves the board or two pieces
            claim the same cell
    """
    occupancy = np.full((ROWS, COLS), EMPTY, dtype=int)

    for piece in pieces:
        if not in_bounds(piece.row, piece.col, piece.height, piece.width):
            raise OccupancyError(
                f"Piece {piece.id} at ({piece.row},{piece.col}) "
                f"size {piece.height}x{piece.width} is off the board"
            )
        for r, c in piece.footprint():
            owner = occupancy[r, c]
            if owner != EMPTY:
                raise OccupancyError(
                    f"Cell ({r},{c}) claimed by both piece {owner} and piece {piece.id}"
                )
            occupancy[r, c] = piece.id

    return occupancy


def empty_cells(occupancy: np.ndarray) -> list:
    """
    List the uncovered cells of an occupancy map.

    Returns:
        (row, col) tuples in row-major order
    """
    rows, cols = np.nonzero(occupancy == EMPTY)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def format_occupancy(occupancy: np.ndarray) -> str:
    """Render an occupancy map as text, one line per row, '.' for empty."""
    lines = []
    for row in occupancy:
        lines.append(" ".join(f"{v:>2}" if v != EMPTY else " ." for v in row))
    return "\n".join(lines)
