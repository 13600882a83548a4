"""
Board Snapshot Utilities

Functions for saving the current board as a PNG for bug reports and
for comparing against solver output.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image, ImageDraw, ImageFont

from klotski.board import COLS, ROWS, Piece, PieceType

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

CELL_SIZE = 60
MARGIN = 10
HEADER_HEIGHT = 24

PIECE_COLORS = {
    PieceType.LARGE: "#d32f2f",
    PieceType.VERTICAL: "#1976d2",
    PieceType.HORIZONTAL: "#388e3c",
    PieceType.TINY: "#fbc02d",
}


def render_board_image(pieces: Iterable[Piece], move_count: int = 0) -> Image.Image:
    """
    Draw the board with every piece labelled by id.

    Args:
        pieces: Pieces to draw
        move_count: Shown in the header line

    Returns:
        RGB image of the board
    """
    width = COLS * CELL_SIZE + 2 * MARGIN
    height = ROWS * CELL_SIZE + 2 * MARGIN + HEADER_HEIGHT
    image = Image.new("RGB", (width, height), "#f5f5f5")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    top = MARGIN + HEADER_HEIGHT
    draw.text((MARGIN, MARGIN), f"Moves: {move_count}", fill="#333333", font=font)

    # Grid
    for r in range(ROWS):
        for c in range(COLS):
            x0 = MARGIN + c * CELL_SIZE
            y0 = top + r * CELL_SIZE
            draw.rectangle([x0, y0, x0 + CELL_SIZE, y0 + CELL_SIZE], outline="#cccccc")

    for piece in pieces:
        x0 = MARGIN + piece.col * CELL_SIZE + 2
        y0 = top + piece.row * CELL_SIZE + 2
        x1 = MARGIN + (piece.col + piece.width) * CELL_SIZE - 2
        y1 = top + (piece.row + piece.height) * CELL_SIZE - 2
        draw.rectangle([x0, y0, x1, y1], fill=PIECE_COLORS[piece.type], outline="#333333", width=2)
        draw.text(((x0 + x1) // 2 - 3, (y0 + y1) // 2 - 5), str(piece.id), fill="white", font=font)

    return image


def save_board_snapshot(
    pieces: Iterable[Piece],
    move_count: int = 0,
    path: Optional[Path] = None
) -> Path:
    """
    Render the board and write it as PNG.

    Args:
        pieces: Pieces to draw
        move_count: Shown in the header line
        path: Output file (default DEBUG_DIR/board_<timestamp>.png)

    Returns:
        Path of the written file
    """
    if path is None:
        DEBUG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        path = DEBUG_DIR / f"board_{timestamp}.png"

    render_board_image(pieces, move_count).save(path, "PNG")
    logger.info(f"Board snapshot saved: {path}")

    _cleanup_debug_images()
    return path


def _cleanup_debug_images() -> None:
    """Remove old snapshots, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    snapshots = sorted(
        DEBUG_DIR.glob("board_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in snapshots[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.debug(f"Could not remove old snapshot {old_file}: {e}")
