"""
Solver Client Module - HTTP access to the external solving service.

The service exposes two endpoints that take the piece positions as
{"<id>": {"row": r, "col": c}, ...}:

    POST /solve -> {"moves": [{"id": i, "drow": dr, "dcol": dc}, ...]}
    POST /hint  -> {"id": i, "drow": dr, "dcol": dc}

Calls block; run them off the UI thread (see request_worker).
"""

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from klotski.board import Move

logger = logging.getLogger(__name__)


DEFAULT_SERVER_URL = "http://localhost:8080"


class SolverError(Exception):
    """Base class for failures talking to the solver."""


class SolverTransportError(SolverError):
    """The solver could not be reached."""


class SolverHTTPError(SolverError):
    """The solver answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Server error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class SolverProtocolError(SolverError):
    """The solver answered with a body that does not match the contract."""


def parse_solution(data: Any) -> List[Move]:
    """
    Parse a /solve response body.

    Raises:
        SolverProtocolError: If the body is not {"moves": [move, ...]} or a
            move is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("moves"), list):
        raise SolverProtocolError(f"Expected an object with a 'moves' list, got: {data!r}")
    try:
        return [Move.from_json(item) for item in data["moves"]]
    except ValueError as e:
        raise SolverProtocolError(str(e)) from e


def parse_hint(data: Any) -> Move:
    """
    Parse a /hint response body.

    Raises:
        SolverProtocolError: If the body is not a single well-formed move
    """
    try:
        return Move.from_json(data)
    except ValueError as e:
        raise SolverProtocolError(str(e)) from e


class SolverClient:
    """
    Thin client for the solving service.

    Every failure surfaces as a SolverError subclass; there is no retry.

    Example:
        client = SolverClient("http://localhost:8080")
        moves = client.solve(store.to_payload())
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        timeout_sec: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            base_url: Service root, e.g. "http://localhost:8080"
            timeout_sec: Per-request timeout; None waits indefinitely
            session: requests session to reuse (created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self._session = session if session is not None else requests.Session()

    def solve(self, payload: Dict[str, Dict[str, int]]) -> List[Move]:
        """
        Request a full solution.

        Args:
            payload: Piece positions from PieceStore.to_payload()

        Returns:
            Ordered moves from the current position

        Raises:
            SolverError: On transport, status or body failure
        """
        moves = parse_solution(self._post("/solve", payload))
        logger.info(f"Solver returned {len(moves)} moves")
        return moves

    def hint(self, payload: Dict[str, Dict[str, int]]) -> Move:
        """
        Request the next move only.

        Args:
            payload: Piece positions from PieceStore.to_payload()

        Returns:
            Single suggested move

        Raises:
            SolverError: On transport, status or body failure
        """
        move = parse_hint(self._post("/hint", payload))
        logger.info(f"Solver hint: {move}")
        return move

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def _post(self, path: str, payload: Dict[str, Dict[str, int]]) -> Any:
        url = f"{self.base_url}{path}"
        start_time = time.perf_counter()

        try:
            response = self._session.post(url, json=payload, timeout=self.timeout_sec)
        except requests.RequestException as e:
            raise SolverTransportError(f"Network error calling {url}: {e}") from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"POST {url} -> {response.status_code} ({elapsed_ms:.0f}ms)")

        if not response.ok:
            raise SolverHTTPError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise SolverProtocolError(f"Response from {url} is not JSON: {e}") from e
