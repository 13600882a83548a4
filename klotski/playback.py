"""
Playback Controller Module - Solve/hint requests and paced playback.

This module provides the PlaybackController which gates who drives the
board: the user (IDLE) or the solver (BUSY).

State Flow:
    IDLE --solve/hint--> BUSY --response--> play moves --> IDLE
                          |                     |
                          +-- failure ----------+--> IDLE
                          +-- user click / reset (cancel) --> IDLE

Cancellation is cooperative: the BUSY flag is re-checked before every
move, and a move that has started always completes. Responses that
arrive after a cancel are recognised by their request generation and
dropped.
"""

import logging
from collections import deque
from enum import Enum, auto
from typing import Any, Deque, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from klotski.board import Move, PieceNotFoundError, PieceStore, can_move
from klotski.gesture import resolve_direction
from klotski.request_worker import ThreadedRequestRunner
from klotski.scheduler import ScheduledCall, Scheduler
from klotski.session import PuzzleSession
from klotski.solver_client import SolverClient

logger = logging.getLogger(__name__)


__all__ = [
    "PlaybackState",
    "PlaybackController",
]


class PlaybackState(Enum):
    """
    Controller states.

    States:
        IDLE: User input drives the board
        BUSY: A solver request or its playback is in progress
    """
    IDLE = auto()
    BUSY = auto()


class PlaybackController(QObject):
    """
    Drives the board from solver responses and routes user input.

    Signals:
        busy_changed(bool): Entered (True) or left (False) the BUSY state
        status_changed(str): Human-readable progress for the status line
        error_occurred(str): A solver request failed
    """

    busy_changed = pyqtSignal(bool)
    status_changed = pyqtSignal(str)
    error_occurred = pyqtSignal(str)

    # Pacing between solver moves
    DEFAULT_SOLVE_STEP_MS = 650
    DEFAULT_HINT_MS = 500

    def __init__(
        self,
        session: PuzzleSession,
        client: SolverClient,
        scheduler: Scheduler,
        runner: Optional[Any] = None,
        solve_step_ms: int = DEFAULT_SOLVE_STEP_MS,
        hint_ms: int = DEFAULT_HINT_MS
    ):
        """
        Initialize the controller.

        Args:
            session: Puzzle to drive
            client: Solver service client
            scheduler: Timer backend for pacing delays
            runner: Object with submit(request, on_success, on_failure);
                defaults to a ThreadedRequestRunner
            solve_step_ms: Delay after each solve move in milliseconds
            hint_ms: Delay after a hint move in milliseconds
        """
        super().__init__()
        self._session = session
        self._client = client
        self._scheduler = scheduler
        self._runner = runner if runner is not None else ThreadedRequestRunner()
        self.solve_step_ms = solve_step_ms
        self.hint_ms = hint_ms

        self._state = PlaybackState.IDLE
        # Bumped on every request and every cancel
        self._generation = 0
        self._queue: Deque[Move] = deque()
        self._total_moves = 0
        self._pending_step: Optional[ScheduledCall] = None
        # Status text once the goal is reached during the current request
        self._solved_status: Optional[str] = None

        session.solved.connect(self._on_solved)

    @property
    def state(self) -> PlaybackState:
        """Current controller state."""
        return self._state

    @property
    def is_busy(self) -> bool:
        """True while the solver drives the board."""
        return self._state == PlaybackState.BUSY

    @property
    def runner(self) -> Any:
        """Request runner in use."""
        return self._runner

    @property
    def moves_remaining(self) -> int:
        """Solver moves not yet applied."""
        return len(self._queue)

    def request_solve(self) -> bool:
        """
        Ask the solver for a full solution and play it back.

        Returns:
            False if a request or playback is already running
        """
        payload = self._begin("Solving")
        if payload is None:
            return False

        generation = self._generation
        self._runner.submit(
            lambda: self._client.solve(payload),
            lambda moves: self._on_solution(generation, moves),
            lambda message: self._on_request_failed(generation, message),
        )
        return True

    def request_hint(self) -> bool:
        """
        Ask the solver for the next move and apply it.

        Returns:
            False if a request or playback is already running
        """
        payload = self._begin("Requesting hint")
        if payload is None:
            return False

        generation = self._generation
        self._runner.submit(
            lambda: self._client.hint(payload),
            lambda move: self._on_hint(generation, move),
            lambda message: self._on_request_failed(generation, message),
        )
        return True

    def cancel(self) -> bool:
        """
        Stop the current request or playback.

        Applied moves are kept.

        Returns:
            True if something was cancelled
        """
        if not self.is_busy:
            return False

        applied = self._total_moves - len(self._queue)
        logger.info(f"Playback cancelled ({applied}/{self._total_moves} moves applied)")
        self._finish("Cancelled")
        return True

    def select_piece(self, piece_id: int, drow: int, dcol: int) -> bool:
        """
        Handle a user move command.

        While BUSY the command only cancels playback.

        Returns:
            True if a move was applied
        """
        if self.is_busy:
            self.cancel()
            return False
        return self._session.try_move(piece_id, drow, dcol)

    def click_piece(
        self,
        piece_id: int,
        x: float,
        y: float,
        width: float,
        height: float
    ) -> bool:
        """
        Handle a click at (x, y) inside a piece's width x height box.

        Returns:
            True if a move was applied
        """
        if self.is_busy:
            self.cancel()
            return False

        drow, dcol = resolve_direction(x, y, width, height)
        if (drow, dcol) == (0, 0):
            return False
        return self._session.try_move(piece_id, drow, dcol)

    def reset(self) -> None:
        """Cancel any playback and restore the starting layout."""
        self.cancel()
        self._session.reset()
        self.status_changed.emit("Ready")

    def get_state_string(self) -> str:
        """Get human-readable state string for UI display."""
        if not self.is_busy:
            return "Ready"
        if self._total_moves:
            current = self._total_moves - len(self._queue)
            return f"Playing ({current}/{self._total_moves})"
        return "Waiting for solver"

    def _begin(self, status: str) -> Optional[dict]:
        """Enter BUSY and snapshot the request payload, or None if already BUSY."""
        if self.is_busy:
            logger.warning(f"{status} ignored: solver already busy")
            return None

        self._generation += 1
        self._queue.clear()
        self._total_moves = 0
        self._solved_status = None
        self._state = PlaybackState.BUSY

        logger.info(f"{status} (request #{self._generation})")
        self.busy_changed.emit(True)
        self.status_changed.emit(f"{status}...")
        return self._session.payload()

    def _finish(self, status: str) -> None:
        """Return to IDLE and drop every pending step."""
        if self._pending_step is not None:
            self._pending_step.cancel()
            self._pending_step = None

        self._queue.clear()
        self._generation += 1
        was_busy = self.is_busy
        self._state = PlaybackState.IDLE

        if was_busy:
            self.busy_changed.emit(False)
        self.status_changed.emit(status)

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation or not self.is_busy:
            logger.debug(f"Discarding response for stale request #{generation}")
            return False
        return True

    def _check_moves(self, moves: List[Move]) -> bool:
        """
        Dry-run a response on a scratch copy of the board.

        Every piece id must exist and every step must be legal in sequence,
        so nothing is applied from a response that would corrupt the board.
        """
        scratch = PieceStore(self._session.store.snapshot())
        for index, move in enumerate(moves, start=1):
            try:
                piece = scratch.find_by_id(move.piece_id)
            except PieceNotFoundError as e:
                self._fail(f"Solver referenced an unknown piece: {e}")
                return False

            if not can_move(piece, move.drow, move.dcol, scratch.occupancy()):
                self._fail(f"Solver returned an illegal move {index}/{len(moves)}: {move}")
                return False
            piece.row += move.drow
            piece.col += move.dcol
        return True

    def _on_solution(self, generation: int, moves: List[Move]) -> None:
        if not self._is_current(generation):
            return
        if not self._check_moves(moves):
            return

        if not moves:
            logger.info("Solver returned an empty solution")
            self._finish("Nothing to play")
            return

        self._queue.extend(moves)
        self._total_moves = len(moves)
        self._play_next()

    def _play_next(self) -> None:
        self._pending_step = None

        # Cleared by cancel() between steps
        if not self.is_busy:
            return

        if not self._queue:
            logger.info(f"Playback finished ({self._total_moves} moves)")
            self._finish(self._solved_status or "Done")
            return

        move = self._queue.popleft()
        piece = self._session.store.find_by_id(move.piece_id)
        self._session.apply_move(piece, move.drow, move.dcol)

        if self._solved_status is None:
            self.status_changed.emit(self.get_state_string())
        self._pending_step = self._scheduler.call_later(self.solve_step_ms, self._play_next)

    def _on_hint(self, generation: int, move: Move) -> None:
        if not self._is_current(generation):
            return
        if not self._check_moves([move]):
            return

        piece = self._session.store.find_by_id(move.piece_id)
        self._session.apply_move(piece, move.drow, move.dcol)

        self.status_changed.emit(self._solved_status or f"Hint: {move}")
        self._pending_step = self._scheduler.call_later(
            self.hint_ms, lambda: self._finish(self._solved_status or "Ready")
        )

    def _on_solved(self) -> None:
        # Moves made by the user while IDLE report through the window directly
        if self.is_busy:
            self._solved_status = f"Solved in {self._session.move_count} moves"

    def _on_request_failed(self, generation: int, message: str) -> None:
        if not self._is_current(generation):
            return
        self._fail(message)

    def _fail(self, message: str) -> None:
        logger.error(f"Solver request failed: {message}")
        self._finish("Solver error")
        self.error_occurred.emit(message)


def make_controller(
    session: PuzzleSession,
    client: SolverClient,
    scheduler: Scheduler,
    settings: dict,
    runner: Optional[Any] = None
) -> PlaybackController:
    """Build a controller with pacing taken from the settings dictionary."""
    return PlaybackController(
        session,
        client,
        scheduler,
        runner=runner,
        solve_step_ms=settings.get("solve_step_delay_ms", PlaybackController.DEFAULT_SOLVE_STEP_MS),
        hint_ms=settings.get("hint_delay_ms", PlaybackController.DEFAULT_HINT_MS),
    )
