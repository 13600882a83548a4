"""
Move Module - A unit cardinal displacement of one piece.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


# (drow, dcol) unit displacements
UP = (-1, 0)
DOWN = (1, 0)
LEFT = (0, -1)
RIGHT = (0, 1)
NO_DIRECTION = (0, 0)

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}


def is_unit_displacement(drow: int, dcol: int) -> bool:
    """True if (drow, dcol) is exactly one step in a cardinal direction."""
    return (drow, dcol) in DIRECTIONS.values()


@dataclass(frozen=True)
class Move:
    """
    One step of one piece.

    Exactly one of drow/dcol is non-zero and both are in {-1, 0, 1};
    diagonal, multi-cell and zero displacements cannot be constructed.

    Attributes:
        piece_id: Id of the piece to move
        drow: Row displacement
        dcol: Column displacement
    """
    piece_id: int
    drow: int
    dcol: int

    def __post_init__(self):
        if not is_unit_displacement(self.drow, self.dcol):
            raise ValueError(
                f"Move of piece {self.piece_id} must be a unit cardinal step, "
                f"got ({self.drow}, {self.dcol})"
            )

    @classmethod
    def from_json(cls, data: Any) -> 'Move':
        """
        Create a Move from a solver response object.

        Args:
            data: Mapping with integer "id", "drow" and "dcol" keys

        Returns:
            Move instance

        Raises:
            ValueError: If keys are missing, not integers, or not a unit step
        """
        if not isinstance(data, dict):
            raise ValueError(f"Move must be a JSON object, got {type(data).__name__}")

        values = []
        for key in ("id", "drow", "dcol"):
            if key not in data:
                raise ValueError(f"Move is missing '{key}': {data}")
            value = data[key]
            # bool is an int subclass but never a valid coordinate
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Move field '{key}' must be an integer: {data}")
            values.append(value)

        piece_id, drow, dcol = values
        return cls(piece_id=piece_id, drow=drow, dcol=dcol)

    def to_json(self) -> Dict[str, int]:
        """Serialize in the solver's wire format."""
        return {"id": self.piece_id, "drow": self.drow, "dcol": self.dcol}

    @property
    def direction_name(self) -> str:
        """Human-readable direction ("up", "down", "left", "right")."""
        for name, delta in DIRECTIONS.items():
            if delta == (self.drow, self.dcol):
                return name
        return "none"

    def __str__(self):
        return f"piece {self.piece_id} {self.direction_name}"
