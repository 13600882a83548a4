"""
Puzzle Session Module - Board state of one puzzle and the move applicator.

A session owns the piece store, the move counter and the "just moved"
flash timers, and reports every change through Qt signals so the view
layer never reads board state directly.
"""

import logging
from typing import Dict, List, Optional

import numpy as np
from PyQt5.QtCore import QObject, pyqtSignal

from klotski.board import (
    LayoutEntry,
    Piece,
    PieceNotFoundError,
    PieceStore,
    STANDARD_LAYOUT,
    can_move,
    is_solved,
)
from klotski.scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)


class PuzzleSession(QObject):
    """
    One puzzle instance.

    Signals:
        piece_moved(int, int, int): Piece id and its new (row, col)
        moves_changed(int): New move count
        piece_flashed(int, bool): Flash marker set (True) or cleared (False)
        board_reset(): Pieces were rebuilt from the starting layout
        solved(): The large piece reached the exit (once per attempt)
    """

    piece_moved = pyqtSignal(int, int, int)
    moves_changed = pyqtSignal(int)
    piece_flashed = pyqtSignal(int, bool)
    board_reset = pyqtSignal()
    solved = pyqtSignal()

    # How long a moved piece stays highlighted
    DEFAULT_FLASH_MS = 250

    def __init__(
        self,
        scheduler: Scheduler,
        layout: Optional[List[LayoutEntry]] = None,
        flash_ms: int = DEFAULT_FLASH_MS
    ):
        """
        Initialize the session.

        Args:
            scheduler: Timer backend for clearing the flash marker
            layout: Starting layout (default STANDARD_LAYOUT)
            flash_ms: Flash duration in milliseconds
        """
        super().__init__()
        self._scheduler = scheduler
        self._layout = list(layout) if layout is not None else list(STANDARD_LAYOUT)
        self.flash_ms = flash_ms

        self.store = PieceStore(self._layout)

        # piece id -> pending flash clear
        self._flash_timers: Dict[int, ScheduledCall] = {}
        self._solved_reported = False

    @property
    def move_count(self) -> int:
        """Moves applied since the last reset."""
        return self.store.move_count

    @property
    def flashing(self) -> List[int]:
        """Ids of pieces whose flash marker is currently set."""
        return [pid for pid, call in self._flash_timers.items() if call.active]

    def pieces(self) -> List[Piece]:
        """Live piece collection."""
        return self.store.all()

    def occupancy(self) -> np.ndarray:
        """Fresh occupancy map of the current positions."""
        return self.store.occupancy()

    def payload(self) -> Dict[str, Dict[str, int]]:
        """Solver request body for the current positions."""
        return self.store.to_payload()

    def find_piece(self, piece_id: int) -> Optional[Piece]:
        """
        Look up a piece for a view event.

        Returns:
            The piece, or None (with a warning) if the id is unknown
        """
        try:
            return self.store.find_by_id(piece_id)
        except PieceNotFoundError:
            logger.warning(f"Ignoring event for unknown piece id {piece_id!r}")
            return None

    def can_move(self, piece_id: int, drow: int, dcol: int) -> bool:
        """Check a move against a freshly built occupancy map."""
        piece = self.find_piece(piece_id)
        if piece is None:
            return False
        return can_move(piece, drow, dcol, self.occupancy())

    def try_move(self, piece_id: int, drow: int, dcol: int) -> bool:
        """
        Validate and apply a user move.

        Illegal moves and unknown ids are silent no-ops.

        Args:
            piece_id: Piece to move
            drow: Row displacement
            dcol: Column displacement

        Returns:
            True if the move was applied
        """
        piece = self.find_piece(piece_id)
        if piece is None:
            return False

        if (drow, dcol) == (0, 0):
            return False

        if not can_move(piece, drow, dcol, self.occupancy()):
            logger.debug(f"Rejected move: piece {piece_id} by ({drow},{dcol})")
            return False

        self.apply_move(piece, drow, dcol)
        return True

    def apply_move(self, piece: Piece, drow: int, dcol: int) -> None:
        """
        Shift a piece by an already validated displacement.

        Does not re-validate. Increments the move counter by one, sets the
        flash marker and schedules its removal.

        Args:
            piece: Live piece from this session's store
            drow: Row displacement
            dcol: Column displacement
        """
        piece.row += drow
        piece.col += dcol
        self.store.move_count += 1

        logger.debug(f"Piece {piece.id} -> ({piece.row},{piece.col}), moves={self.store.move_count}")

        self.piece_moved.emit(piece.id, piece.row, piece.col)
        self.moves_changed.emit(self.store.move_count)
        self._flash(piece.id)

        if not self._solved_reported and is_solved(self.store.all()):
            self._solved_reported = True
            logger.info(f"Puzzle solved in {self.store.move_count} moves")
            self.solved.emit()

    def reset(self) -> None:
        """
        Discard all pieces and rebuild the starting layout.

        Pending flash timers are cancelled so none fires against the new board.
        """
        for call in self._flash_timers.values():
            call.cancel()
        self._flash_timers.clear()

        self.store.initialize(self._layout)
        self._solved_reported = False

        logger.info("Puzzle reset")
        self.board_reset.emit()
        self.moves_changed.emit(0)

    def _flash(self, piece_id: int) -> None:
        previous = self._flash_timers.get(piece_id)
        if previous is not None:
            previous.cancel()

        self.piece_flashed.emit(piece_id, True)
        self._flash_timers[piece_id] = self._scheduler.call_later(
            self.flash_ms, lambda: self._clear_flash(piece_id)
        )

    def _clear_flash(self, piece_id: int) -> None:
        self._flash_timers.pop(piece_id, None)
        self.piece_flashed.emit(piece_id, False)
