"""
Grid Geometry Module - Board size and per-piece-type dimensions.
"""

from enum import Enum
from typing import Dict, Tuple


# Board size (rows x cols)
ROWS = 5
COLS = 4


class UnknownPieceTypeError(ValueError):
    """Raised when a piece type is not in the dimension table."""


class PieceType(Enum):
    """
    Piece variants of the standard Klotski set.

    Values are the lowercase names used in layout literals.
    """
    LARGE = "large"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    TINY = "tiny"


# (height, width) in cells
_DIMENSIONS: Dict[PieceType, Tuple[int, int]] = {
    PieceType.LARGE: (2, 2),
    PieceType.VERTICAL: (2, 1),
    PieceType.HORIZONTAL: (1, 2),
    PieceType.TINY: (1, 1),
}


def dimensions(piece_type: PieceType) -> Tuple[int, int]:
    """
    Get the footprint size of a piece type.

    Args:
        piece_type: Piece variant

    Returns:
        (height, width) in cells

    Raises:
        UnknownPieceTypeError: If piece_type is not in the table
    """
    try:
        return _DIMENSIONS[piece_type]
    except (KeyError, TypeError):
        raise UnknownPieceTypeError(f"Unknown piece type: {piece_type!r}") from None


def in_bounds(row: int, col: int, height: int = 1, width: int = 1) -> bool:
    """Check that a height x width rectangle at (row, col) lies on the board."""
    if row < 0 or col < 0:
        return False
    return row + height <= ROWS and col + width <= COLS
