"""
Board View Module for the Klotski client

Paints the puzzle with QPainter and turns mouse presses into
piece_clicked signals. Holds no board state of its own beyond what the
session signals tell it to repaint.
"""

import logging
from typing import Optional, Tuple

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QRectF, QSize, pyqtSignal
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush, QFont

from klotski.board import COLS, ROWS, Piece, PieceType
from klotski.session import PuzzleSession

# Configure module logger
logger = logging.getLogger(__name__)


# Piece colors
PIECE_FILL = {
    PieceType.LARGE: QColor(211, 47, 47),
    PieceType.VERTICAL: QColor(25, 118, 210),
    PieceType.HORIZONTAL: QColor(56, 142, 60),
    PieceType.TINY: QColor(251, 192, 45),
}
FLASH_FILL = QColor(255, 255, 255, 110)      # Overlay on a piece that just moved
PIECE_BORDER = QColor(51, 51, 51)
GRID_LINE = QColor(204, 204, 204)
BOARD_BACKGROUND = QColor(238, 238, 238)
EXIT_MARK = QColor(211, 47, 47, 160)         # Exit gap under the bottom row

CELL_SIZE = 80                                # Preferred cell size in pixels
PIECE_GAP = 3                                 # Inset of each piece rectangle
BORDER_THICKNESS = 2


class BoardWidget(QWidget):
    """
    Widget that draws the pieces of a PuzzleSession.

    Signals:
        piece_clicked(int, float, float, float, float): Piece id, click
            position relative to the piece's top-left corner, and the
            piece's width and height in pixels
    """

    piece_clicked = pyqtSignal(int, float, float, float, float)

    def __init__(self, session: PuzzleSession, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session

        self.setMinimumSize(COLS * 40, ROWS * 40)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        session.piece_moved.connect(self._on_piece_moved)
        session.piece_flashed.connect(self._on_piece_flashed)
        session.board_reset.connect(self._on_board_reset)

    def sizeHint(self):
        return QSize(COLS * CELL_SIZE, ROWS * CELL_SIZE)

    def cell_size(self) -> float:
        """Current cell edge length so the board fits the widget."""
        return min(self.width() / COLS, self.height() / ROWS)

    def board_origin(self) -> Tuple[float, float]:
        """Top-left pixel of the board, centred in the widget."""
        size = self.cell_size()
        return (self.width() - size * COLS) / 2, (self.height() - size * ROWS) / 2

    def piece_rect(self, piece: Piece) -> QRectF:
        """Pixel rectangle of a piece."""
        size = self.cell_size()
        ox, oy = self.board_origin()
        return QRectF(
            ox + piece.col * size + PIECE_GAP,
            oy + piece.row * size + PIECE_GAP,
            piece.width * size - 2 * PIECE_GAP,
            piece.height * size - 2 * PIECE_GAP,
        )

    def piece_at(self, x: float, y: float) -> Optional[Piece]:
        """Find the piece whose rectangle contains the pixel (x, y)."""
        for piece in self._session.pieces():
            if self.piece_rect(piece).contains(x, y):
                return piece
        return None

    def mousePressEvent(self, event):
        """Emit piece_clicked for a left click on a piece."""
        if event.button() != Qt.LeftButton:
            return

        x, y = event.x(), event.y()
        piece = self.piece_at(x, y)
        if piece is None:
            return

        rect = self.piece_rect(piece)
        logger.debug(f"Click on piece {piece.id} at ({x - rect.x():.0f},{y - rect.y():.0f})")
        self.piece_clicked.emit(piece.id, x - rect.x(), y - rect.y(), rect.width(), rect.height())

    def paintEvent(self, event):
        """Paint grid, exit and pieces."""
        size = self.cell_size()
        ox, oy = self.board_origin()

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        # Board and grid
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(BOARD_BACKGROUND))
        painter.drawRect(QRectF(ox, oy, size * COLS, size * ROWS))

        painter.setPen(QPen(GRID_LINE))
        painter.setBrush(Qt.NoBrush)
        for r in range(ROWS):
            for c in range(COLS):
                painter.drawRect(QRectF(ox + c * size, oy + r * size, size, size))

        # Exit under the two middle columns
        exit_pen = QPen(EXIT_MARK)
        exit_pen.setWidth(4)
        painter.setPen(exit_pen)
        bottom = oy + ROWS * size
        painter.drawLine(int(ox + size), int(bottom), int(ox + 3 * size), int(bottom))

        flashing = set(self._session.flashing)

        # Pieces
        label_font = QFont()
        label_font.setPointSize(10)
        label_font.setBold(True)
        painter.setFont(label_font)

        for piece in self._session.pieces():
            rect = self.piece_rect(piece)

            painter.setBrush(QBrush(PIECE_FILL[piece.type]))
            pen = QPen(PIECE_BORDER)
            pen.setWidth(BORDER_THICKNESS)
            painter.setPen(pen)
            painter.drawRoundedRect(rect, 6, 6)

            if piece.id in flashing:
                painter.setPen(Qt.NoPen)
                painter.setBrush(QBrush(FLASH_FILL))
                painter.drawRoundedRect(rect, 6, 6)

            painter.setPen(QPen(Qt.white))
            painter.drawText(rect, Qt.AlignCenter, str(piece.id))

        painter.end()

    def _on_piece_moved(self, piece_id: int, row: int, col: int):
        self.update()

    def _on_piece_flashed(self, piece_id: int, on: bool):
        self.update()

    def _on_board_reset(self):
        self.update()
