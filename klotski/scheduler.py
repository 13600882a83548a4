"""
Scheduler Module - Cancellable delayed callbacks.

The session and the playback controller never sleep; they schedule the
next step through a Scheduler. QtScheduler fires on the Qt event loop of
the calling thread.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Set

from PyQt5.QtCore import QTimer

logger = logging.getLogger(__name__)


class ScheduledCall:
    """
    Handle for one pending callback.

    Cancelling is idempotent and safe after the call has fired.
    """

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        """True while the call is still waiting to fire."""
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        """Prevent the callback from running."""
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback unless cancelled or already run."""
        if not self.active:
            return
        self.fired = True
        self._callback()


class Scheduler(ABC):
    """
    Base class for delayed-callback backends.

    Subclasses implement _start() to arrange for call.fire() after the
    delay. Pending calls are tracked so they can be cancelled together.
    """

    def __init__(self):
        self._pending: Set[ScheduledCall] = set()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        """
        Schedule a callback.

        Args:
            delay_ms: Delay in milliseconds (clamped to >= 0)
            callback: Function called with no arguments

        Returns:
            Handle that can cancel the call
        """
        call = ScheduledCall(lambda: self._run(call, callback))
        self._pending.add(call)
        self._start(max(0, int(delay_ms)), call)
        return call

    def cancel_all(self) -> int:
        """
        Cancel every pending call.

        Returns:
            Number of calls cancelled
        """
        count = 0
        for call in list(self._pending):
            if call.active:
                call.cancel()
                count += 1
        self._pending.clear()
        if count:
            logger.debug(f"Cancelled {count} pending timers")
        return count

    @property
    def pending_count(self) -> int:
        """Number of calls still waiting to fire."""
        return sum(1 for call in self._pending if call.active)

    def _run(self, call: ScheduledCall, callback: Callable[[], None]) -> None:
        self._pending.discard(call)
        callback()

    @abstractmethod
    def _start(self, delay_ms: int, call: ScheduledCall) -> None:
        """Arrange for call.fire() to run after delay_ms."""
        pass


class QtScheduler(Scheduler):
    """Scheduler backed by single-shot QTimers."""

    def _start(self, delay_ms: int, call: ScheduledCall) -> None:
        QTimer.singleShot(delay_ms, call.fire)
