"""
Test doubles for headless controller tests.

ManualScheduler replaces Qt timers with a clock advanced by hand, and the
runners replace the request thread so responses arrive exactly when a
test says so.
"""

import sys
from pathlib import Path
from typing import Any, Callable, List, Tuple

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from klotski.board import Move
from klotski.scheduler import ScheduledCall, Scheduler
from klotski.solver_client import SolverError


class ManualScheduler(Scheduler):
    """Scheduler driven by advance(); calls fire in due-time order."""

    def __init__(self):
        super().__init__()
        self.now = 0
        self._seq = 0
        self._queue: List[Tuple[int, int, ScheduledCall]] = []

    def _start(self, delay_ms: int, call: ScheduledCall) -> None:
        self._seq += 1
        self._queue.append((self.now + delay_ms, self._seq, call))

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing every call that comes due."""
        target = self.now + ms
        while True:
            due = [entry for entry in self._queue if entry[0] <= target]
            if not due:
                break
            entry = min(due)
            self._queue.remove(entry)
            self.now = entry[0]
            entry[2].fire()
        self.now = target


class SyncRunner:
    """Runs each request immediately on submit()."""

    def __init__(self):
        self.submitted = 0

    def submit(self, request: Callable[[], Any], on_success, on_failure) -> None:
        self.submitted += 1
        try:
            result = request()
        except SolverError as e:
            on_failure(str(e))
            return
        on_success(result)


class DeferredRunner:
    """Holds requests until complete() is called for them."""

    def __init__(self):
        self.pending: List[Tuple[Callable[[], Any], Any, Any]] = []

    def submit(self, request: Callable[[], Any], on_success, on_failure) -> None:
        self.pending.append((request, on_success, on_failure))

    def complete(self, index: int = 0) -> None:
        """Run one held request and deliver its outcome."""
        request, on_success, on_failure = self.pending.pop(index)
        try:
            result = request()
        except SolverError as e:
            on_failure(str(e))
            return
        on_success(result)


class FakeClient:
    """Scripted stand-in for SolverClient."""

    def __init__(self, solution: List[Move] = None, hint: Move = None, error: SolverError = None):
        self.solution = solution or []
        self.hint_move = hint
        self.error = error
        self.payloads: List[dict] = []

    def solve(self, payload: dict) -> List[Move]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return list(self.solution)

    def hint(self, payload: dict) -> Move:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.hint_move


class SignalRecorder:
    """Collects signal arguments for assertions."""

    def __init__(self, signal=None):
        self.calls: List[tuple] = []
        if signal is not None:
            signal.connect(self)

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)
