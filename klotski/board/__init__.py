"""
Board Package - Model and rules of the 5x4 sliding-block puzzle.

Public API:
    - ROWS, COLS: Board size
    - PieceType: Piece variants and dimensions()
    - Piece, LayoutEntry: Placed blocks and layout literals
    - Move: Unit cardinal displacement of one piece
    - build_occupancy(): Fresh cell ownership map
    - can_move(): Move legality predicate
    - is_solved(): Goal check
    - PieceStore: Authoritative piece set and move counter

Usage:
    from klotski.board import PieceStore, can_move

    store = PieceStore()
    piece = store.find_by_id(5)
    if can_move(piece, 1, 0, store.occupancy()):
        ...
"""

from .geometry import (
    ROWS,
    COLS,
    PieceType,
    UnknownPieceTypeError,
    dimensions,
    in_bounds,
)
from .piece import Piece, LayoutEntry, pieces_from_layout
from .move import Move, UP, DOWN, LEFT, RIGHT, NO_DIRECTION, DIRECTIONS
from .occupancy import EMPTY, OccupancyError, build_occupancy, empty_cells, format_occupancy
from .rules import GOAL_POSITION, can_move, is_solved
from .store import STANDARD_LAYOUT, PieceNotFoundError, PieceStore

__all__ = [
    # Geometry
    "ROWS",
    "COLS",
    "PieceType",
    "UnknownPieceTypeError",
    "dimensions",
    "in_bounds",
    # Pieces
    "Piece",
    "LayoutEntry",
    "pieces_from_layout",
    # Moves
    "Move",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "NO_DIRECTION",
    "DIRECTIONS",
    # Occupancy
    "EMPTY",
    "OccupancyError",
    "build_occupancy",
    "empty_cells",
    "format_occupancy",
    # Rules
    "GOAL_POSITION",
    "can_move",
    "is_solved",
    # Store
    "STANDARD_LAYOUT",
    "PieceNotFoundError",
    "PieceStore",
]
