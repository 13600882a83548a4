"""
Gesture Resolver Module - Maps a click inside a piece to a direction.

The piece rectangle is split along its two diagonals into four regions;
a click in the top region moves the piece up, and so on. Scaling by the
aspect ratio keeps the split on the true diagonals for non-square pieces.
"""

from typing import Tuple

from klotski.board import UP, DOWN, LEFT, RIGHT, NO_DIRECTION


def resolve_direction(
    pointer_x: float,
    pointer_y: float,
    box_width: float,
    box_height: float
) -> Tuple[int, int]:
    """
    Resolve a pointer position to a unit displacement.

    A point exactly on a diagonal belongs to the region clockwise of it:
    upper-right goes up, lower-right goes right, lower-left goes down and
    upper-left goes left.

    Args:
        pointer_x: X offset from the left edge of the piece
        pointer_y: Y offset from the top edge of the piece (grows downward)
        box_width: Piece width in the same units
        box_height: Piece height in the same units

    Returns:
        (drow, dcol) for up, right, down or left; NO_DIRECTION for a
        degenerate box or the exact centre point
    """
    if box_width <= 0 or box_height <= 0:
        return NO_DIRECTION

    k = box_height / box_width
    dx = pointer_x - box_width / 2
    dy = box_height / 2 - pointer_y

    if dy >= k * dx and dy > -k * dx:
        return UP
    if dy < k * dx and dy >= -k * dx:
        return RIGHT
    if dy <= k * dx and dy < -k * dx:
        return DOWN
    if dy > k * dx and dy <= -k * dx:
        return LEFT
    return NO_DIRECTION
