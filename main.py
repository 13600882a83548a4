"""
Klotski Client - Entry Point

Launches the puzzle window and connects it to the external solving service.

Example:
    python main.py
    python main.py --server http://192.168.0.10:8080  # Remote solver
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtWidgets import QApplication

from klotski.control_ui import ControlWindow
from klotski.playback import PlaybackController, make_controller
from klotski.scheduler import QtScheduler
from klotski.session import PuzzleSession
from klotski.settings import load_settings
from klotski.snapshot import save_board_snapshot
from klotski.solver_client import SolverClient


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("klotski.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Owns the session, solver client and playback controller, and
    connects their signals to the window.
    """

    def __init__(self, server_url: Optional[str] = None, debug_mode: bool = False):
        """
        Initialize the application.

        Args:
            server_url: Solver base URL (overrides saved setting)
            debug_mode: Enable debug logging via CLI (overrides saved setting)
        """
        self.window: Optional[ControlWindow] = None
        self.controller: Optional[PlaybackController] = None

        # Load persistent settings
        self.settings = load_settings()

        # CLI flags override saved settings for this run only
        self.server_url = server_url or self.settings["server_url"]
        self.debug_mode = debug_mode or self.settings.get("debug_enabled", False)

        if self.debug_mode:
            logging.getLogger().setLevel(logging.DEBUG)

        self.scheduler = QtScheduler()
        self.session = PuzzleSession(self.scheduler, flash_ms=self.settings["flash_ms"])
        self.client = SolverClient(self.server_url, timeout_sec=self.settings["request_timeout_sec"])

    def setup(self):
        """Set up the UI and connect signals."""
        self.controller = make_controller(self.session, self.client, self.scheduler, self.settings)

        # Create UI window
        self.window = ControlWindow(self.session)
        self.window.set_server_info(self.server_url)

        # Window commands -> controller
        self.window.solve_requested.connect(self.controller.request_solve)
        self.window.hint_requested.connect(self.controller.request_hint)
        self.window.reset_requested.connect(self.controller.reset)
        self.window.snapshot_requested.connect(self._on_snapshot)
        self.window.shutdown_requested.connect(self._on_shutdown)
        self.window.board_view.piece_clicked.connect(self.controller.click_piece)

        # Core events -> window
        self.session.moves_changed.connect(self.window.set_moves)
        self.session.solved.connect(self._on_solved)
        self.controller.busy_changed.connect(self.window.set_busy)
        self.controller.status_changed.connect(self.window.set_status)
        self.controller.error_occurred.connect(self.window.set_error)

        logger.info(f"Application initialized, solver: {self.server_url}")

    def _on_solved(self):
        """Handle the large piece reaching the exit."""
        self.window.set_status(f"Solved in {self.session.move_count} moves")

    def _on_snapshot(self):
        """Handle snapshot button click."""
        path = save_board_snapshot(self.session.pieces(), self.session.move_count)
        self.window.set_status(f"Snapshot saved: {path.name}")

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        self.controller.cancel()
        self.scheduler.cancel_all()
        self.controller.runner.wait(2000)  # 2 second timeout
        self.client.close()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Klotski - sliding-block puzzle with solver playback"
    )
    parser.add_argument(
        "--server", "-s",
        default=None,
        help="Solver base URL (default: value in config.json, http://localhost:8080)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Klotski client."""
    args = parse_args()

    app = QApplication(sys.argv)

    application = Application(server_url=args.server, debug_mode=args.debug)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
