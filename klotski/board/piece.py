"""
Piece Module - A rectangular block placed on the board.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .geometry import PieceType, dimensions


class LayoutEntry(NamedTuple):
    """One piece of a starting layout literal."""
    id: int
    type: PieceType
    row: int
    col: int


@dataclass
class Piece:
    """
    A block on the board, moved as a rigid unit.

    Position is mutable; size is fixed by the piece type.

    Attributes:
        id: Stable identifier, unique among pieces
        type: Piece variant
        row: Top row of the footprint (0-based)
        col: Left column of the footprint (0-based)
        height: Footprint height in cells (derived from type)
        width: Footprint width in cells (derived from type)
    """
    id: int
    type: PieceType
    row: int
    col: int
    height: int = field(init=False)
    width: int = field(init=False)

    def __post_init__(self):
        self.height, self.width = dimensions(self.type)

    @classmethod
    def from_entry(cls, entry: LayoutEntry) -> 'Piece':
        """Create a Piece from a layout entry."""
        return cls(id=entry.id, type=entry.type, row=entry.row, col=entry.col)

    def footprint(self, row: Optional[int] = None, col: Optional[int] = None) -> Iterator[Tuple[int, int]]:
        """
        Iterate the cells covered by this piece.

        Args:
            row: Top row to use instead of the current one
            col: Left column to use instead of the current one

        Yields:
            (row, col) of every covered cell
        """
        top = self.row if row is None else row
        left = self.col if col is None else col
        for r in range(top, top + self.height):
            for c in range(left, left + self.width):
                yield r, c

    @property
    def position(self) -> Tuple[int, int]:
        """Current (row, col) of the top-left cell."""
        return self.row, self.col

    def to_entry(self) -> LayoutEntry:
        """Snapshot the piece as a layout entry."""
        return LayoutEntry(self.id, self.type, self.row, self.col)


def pieces_from_layout(layout: List[LayoutEntry]) -> List[Piece]:
    """Build fresh Piece objects from a layout literal."""
    return [Piece.from_entry(entry) for entry in layout]
