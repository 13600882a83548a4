"""
Request Worker Module - Runs blocking solver calls off the UI thread.

The worker thread only performs the HTTP round trip. Its result comes
back through a queued Qt signal, so board state is touched exclusively
on the thread that owns the event loop.
"""

import logging
from typing import Any, Callable, Set

from PyQt5.QtCore import Qt, QThread, pyqtSignal

from klotski.solver_client import SolverError

logger = logging.getLogger(__name__)


class RequestWorker(QThread):
    """
    One-shot background thread for a single solver request.

    Signals:
        succeeded(object): Return value of the request function
        failed(str): Error message if the request raised SolverError

    Example:
        worker = RequestWorker(lambda: client.hint(payload))
        worker.succeeded.connect(on_hint)
        worker.failed.connect(on_error)
        worker.start()
    """

    succeeded = pyqtSignal(object)
    failed = pyqtSignal(str)

    def __init__(self, request: Callable[[], Any]):
        super().__init__()
        self._request = request

    def run(self):
        """Perform the request and report the outcome."""
        try:
            result = self._request()
        except SolverError as e:
            self.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error in solver request")
            self.failed.emit(f"Unexpected error: {e}")
            return
        self.succeeded.emit(result)


class ThreadedRequestRunner:
    """
    Starts a RequestWorker per request and keeps it alive until it finishes.

    Callbacks run on the thread that created the runner.
    """

    def __init__(self):
        self._workers: Set[RequestWorker] = set()

    def submit(
        self,
        request: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_failure: Callable[[str], None]
    ) -> None:
        """
        Run a request in the background.

        Args:
            request: Blocking call raising SolverError on failure
            on_success: Called with the result
            on_failure: Called with an error message
        """
        worker = RequestWorker(request)
        worker.succeeded.connect(on_success, Qt.QueuedConnection)
        worker.failed.connect(on_failure, Qt.QueuedConnection)
        worker.finished.connect(lambda: self._workers.discard(worker))
        self._workers.add(worker)
        worker.start()

    def wait(self, timeout_ms: int = 2000) -> bool:
        """
        Block until running requests finish.

        Returns:
            True if every worker stopped within the timeout
        """
        all_stopped = True
        for worker in list(self._workers):
            if not worker.wait(timeout_ms):
                logger.warning("Solver request still running at shutdown")
                all_stopped = False
        return all_stopped
