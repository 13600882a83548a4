"""
Control UI Module for the Klotski client

Provides a PyQt5-based main window holding the board view, the solver
buttons and the status display.
"""

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from klotski.board_view import BoardWidget
from klotski.session import PuzzleSession


class ControlWindow(QMainWindow):
    """
    Main window of the Klotski client.

    Forwards button presses as signals and exposes setters for the
    controller to update the labels.
    """

    # Signals for application wiring
    solve_requested = pyqtSignal()
    hint_requested = pyqtSignal()
    reset_requested = pyqtSignal()
    snapshot_requested = pyqtSignal()  # Request board snapshot save
    shutdown_requested = pyqtSignal()

    def __init__(self, session: PuzzleSession):
        super().__init__()
        self._is_busy = False
        self._init_ui(session)

    def _init_ui(self, session: PuzzleSession):
        """Initialize the user interface components."""
        # Window configuration
        self.setWindowTitle("Klotski")
        self.setMinimumSize(360, 560)

        # Central widget and layout
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(20, 20, 20, 20)
        central_widget.setLayout(layout)

        # Status label
        self.status_label = QLabel("Status: Ready")
        self.status_label.setAlignment(Qt.AlignCenter)
        status_font = QFont()
        status_font.setPointSize(10)
        status_font.setBold(True)
        self.status_label.setFont(status_font)
        layout.addWidget(self.status_label)

        # Board
        self.board_view = BoardWidget(session)
        layout.addWidget(self.board_view, 1)  # stretch factor 1

        # Solver buttons
        button_font = QFont()
        button_font.setPointSize(11)
        button_font.setBold(True)

        button_layout = QHBoxLayout()
        self.solve_button = QPushButton("SOLVE")
        self.hint_button = QPushButton("HINT")
        self.reset_button = QPushButton("RESET")
        for button in [self.solve_button, self.hint_button, self.reset_button]:
            button.setMinimumHeight(40)
            button.setFont(button_font)
            button_layout.addWidget(button)
        layout.addLayout(button_layout)

        self.solve_button.clicked.connect(self.solve_requested.emit)
        self.hint_button.clicked.connect(self.hint_requested.emit)
        self.reset_button.clicked.connect(self.reset_requested.emit)

        # Info labels
        self.moves_label = QLabel("Moves:  0")
        self.server_label = QLabel("Server: --")

        info_font = QFont()
        info_font.setPointSize(9)

        for label in [self.moves_label, self.server_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        # Snapshot button
        self.snapshot_button = QPushButton("Save Board Snapshot")
        self.snapshot_button.setMinimumHeight(30)
        snapshot_font = QFont()
        snapshot_font.setPointSize(9)
        self.snapshot_button.setFont(snapshot_font)
        self.snapshot_button.clicked.connect(self.snapshot_requested.emit)
        layout.addWidget(self.snapshot_button)

        # Apply styling
        self._apply_styles()

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #4CAF50;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 8px;
            }
            QPushButton:hover {
                background-color: #45a049;
            }
            QPushButton:pressed {
                background-color: #3d8b40;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    def set_status(self, status: str):
        """
        Update the status label.

        Args:
            status: Status text to display (e.g., "Ready", "Solving...", "Error: message")
        """
        self.status_label.setText(f"Status: {status}")

        # Color coding for different statuses
        lowered = status.lower()
        if lowered.startswith("error") or lowered.startswith("solver error"):
            self.status_label.setStyleSheet("color: #d32f2f;")
        elif lowered.startswith("solved"):
            self.status_label.setStyleSheet("color: #4CAF50;")
        else:
            self.status_label.setStyleSheet("color: #333333;")

    def set_error(self, message: str):
        """Show a solver failure in the status line."""
        self.set_status(f"Error: {message}")

    def set_moves(self, count: int):
        """
        Update the moves count label.

        Args:
            count: Moves applied since the last reset
        """
        self.moves_label.setText(f"Moves:  {count}")

    def set_server_info(self, url: str):
        """
        Update the solver server label.

        Args:
            url: Solver base URL
        """
        self.server_label.setText(f"Server: {url}")

    def set_busy(self, is_busy: bool):
        """
        Enable or disable solver buttons.

        Reset stays enabled so it can always cancel playback.

        Args:
            is_busy: True while a request or playback is running
        """
        self._is_busy = is_busy
        self.solve_button.setEnabled(not is_busy)
        self.hint_button.setEnabled(not is_busy)
        self.snapshot_button.setEnabled(not is_busy)

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested signal before closing to allow
        graceful cleanup of request threads.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
