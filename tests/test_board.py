"""
Tests for the board model and move validator

Covers:
1. Geometry table and piece types
2. Occupancy map of the standard layout
3. Piece store lookup and serialization
4. Move legality (bounds, blocking, self-overlap)
5. Occupancy invariant across random legal walks

Usage:
    python tests/test_board.py
"""

import random
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from klotski.board import (
    COLS,
    DIRECTIONS,
    EMPTY,
    LayoutEntry,
    Move,
    OccupancyError,
    Piece,
    PieceNotFoundError,
    PieceStore,
    PieceType,
    ROWS,
    UnknownPieceTypeError,
    build_occupancy,
    can_move,
    dimensions,
    empty_cells,
    in_bounds,
    is_solved,
)


STANDARD_GRID = [
    [1, 0, 0, 3],
    [1, 0, 0, 3],
    [4, 5, 6, 9],
    [4, 7, 8, 9],
    [EMPTY, 2, 2, EMPTY],
]


def test_dimensions_table():
    """Each piece type has its fixed footprint."""
    assert dimensions(PieceType.LARGE) == (2, 2)
    assert dimensions(PieceType.VERTICAL) == (2, 1)
    assert dimensions(PieceType.HORIZONTAL) == (1, 2)
    assert dimensions(PieceType.TINY) == (1, 1)


def test_unknown_piece_type_fails_fast():
    """Unknown types raise instead of defaulting to 1x1."""
    for bad in ["large", "empty", None, 3, [1]]:
        try:
            dimensions(bad)
        except UnknownPieceTypeError:
            pass
        else:
            raise AssertionError(f"dimensions({bad!r}) should fail")

    try:
        Piece(id=0, type="tiny", row=0, col=0)
    except ValueError:
        pass
    else:
        raise AssertionError("Piece should reject an untyped layout name")


def test_piece_size_derived_from_type():
    """Height and width come from the type, not the constructor."""
    piece = Piece(id=3, type=PieceType.HORIZONTAL, row=4, col=1)
    assert (piece.height, piece.width) == (1, 2)
    assert list(piece.footprint()) == [(4, 1), (4, 2)]
    assert list(piece.footprint(0, 0)) == [(0, 0), (0, 1)]


def test_standard_occupancy():
    """The start layout leaves exactly the two bottom corners empty."""
    store = PieceStore()
    occupancy = store.occupancy()

    assert occupancy.shape == (ROWS, COLS)
    assert occupancy.tolist() == STANDARD_GRID
    assert empty_cells(occupancy) == [(4, 0), (4, 3)]


def test_occupancy_is_recomputed():
    """A new map reflects moves; an old map is not updated behind the caller."""
    store = PieceStore()
    before = store.occupancy()

    piece = store.find_by_id(2)
    piece.col -= 1
    after = store.occupancy()

    assert before[4, 0] == EMPTY
    assert after[4, 0] == 2
    assert after[4, 2] == EMPTY


def test_overlapping_layout_rejected():
    """Two pieces on one cell is a corrupted layout."""
    layout = [
        LayoutEntry(0, PieceType.LARGE, 0, 0),
        LayoutEntry(1, PieceType.TINY, 1, 1),
    ]
    try:
        PieceStore(layout)
    except OccupancyError:
        pass
    else:
        raise AssertionError("Overlapping layout should raise OccupancyError")


def test_off_board_layout_rejected():
    """A footprint past the board edge is a corrupted layout."""
    for entry in [
        LayoutEntry(0, PieceType.HORIZONTAL, 0, 3),
        LayoutEntry(0, PieceType.VERTICAL, 4, 0),
        LayoutEntry(0, PieceType.TINY, -1, 0),
    ]:
        try:
            build_occupancy([Piece.from_entry(entry)])
        except OccupancyError:
            pass
        else:
            raise AssertionError(f"{entry} should be off the board")


def test_duplicate_ids_rejected():
    """Ids must be unique within a layout."""
    layout = [
        LayoutEntry(0, PieceType.TINY, 0, 0),
        LayoutEntry(0, PieceType.TINY, 0, 1),
    ]
    try:
        PieceStore(layout)
    except ValueError:
        pass
    else:
        raise AssertionError("Duplicate ids should raise ValueError")


def test_find_by_id():
    """Lookup returns the live piece or raises PieceNotFoundError."""
    store = PieceStore()
    piece = store.find_by_id(5)
    assert piece.type == PieceType.TINY
    assert piece.position == (2, 1)
    assert store.find_by_id(5) is piece

    for bad in [10, -1, "5", None]:
        try:
            store.find_by_id(bad)
        except PieceNotFoundError:
            pass
        else:
            raise AssertionError(f"find_by_id({bad!r}) should fail")


def test_initialize_resets_counter():
    """Re-initializing restores positions and zeroes the move counter."""
    store = PieceStore()
    store.find_by_id(2).col = 0
    store.move_count = 7

    layout = store.snapshot()
    store.initialize([LayoutEntry(e.id, e.type, e.row, e.col) for e in layout])
    assert store.find_by_id(2).col == 0
    assert store.move_count == 0

    store.initialize(PieceStore().snapshot())
    assert store.find_by_id(2).col == 1


def test_payload_format():
    """Payload maps every id as a string key to its row and col."""
    payload = PieceStore().to_payload()
    assert sorted(payload, key=int) == [str(i) for i in range(10)]
    assert payload["0"] == {"row": 0, "col": 1}
    assert payload["2"] == {"row": 4, "col": 1}
    assert payload["9"] == {"row": 2, "col": 3}


def test_horizontal_blocked_by_right_edge():
    """Piece 2 slides right into the empty corner once, then hits the edge."""
    store = PieceStore()
    piece = store.find_by_id(2)
    assert piece.position == (4, 1)
    assert can_move(piece, 0, -1, store.occupancy())

    # (4,3) is empty, so the first step right stays on the board
    assert can_move(piece, 0, 1, store.occupancy())
    piece.col += 1
    assert piece.col + piece.width == COLS
    assert not can_move(piece, 0, 1, store.occupancy())


def test_tiny_blocked_by_neighbour():
    """Piece 5 cannot move down onto piece 7."""
    store = PieceStore()
    occupancy = store.occupancy()
    assert occupancy[3, 1] == 7
    assert not can_move(store.find_by_id(5), 1, 0, occupancy)


def test_start_layout_legal_moves():
    """Only pieces next to the two empty corners can move."""
    store = PieceStore()
    occupancy = store.occupancy()

    legal = set()
    for piece in store.all():
        for name, (drow, dcol) in DIRECTIONS.items():
            if can_move(piece, drow, dcol, occupancy):
                legal.add((piece.id, name))

    assert legal == {(2, "left"), (2, "right"), (4, "down"), (9, "down")}


def test_out_of_bounds_always_rejected():
    """Whenever the candidate footprint leaves the board, can_move is False."""
    for piece_type in PieceType:
        height, width = dimensions(piece_type)
        for row in range(ROWS - height + 1):
            for col in range(COLS - width + 1):
                piece = Piece(id=0, type=piece_type, row=row, col=col)
                occupancy = build_occupancy([piece])
                for drow, dcol in DIRECTIONS.values():
                    expected = in_bounds(row + drow, col + dcol, height, width)
                    assert can_move(piece, drow, dcol, occupancy) == expected


def test_self_overlap_allowed():
    """Moving into cells the piece itself still covers is legal."""
    piece = Piece(id=0, type=PieceType.LARGE, row=0, col=0)
    occupancy = build_occupancy([piece])
    assert can_move(piece, 0, 1, occupancy)
    assert can_move(piece, 1, 0, occupancy)


def test_can_move_is_pure():
    """Validation changes neither the piece nor the map."""
    store = PieceStore()
    occupancy = store.occupancy()
    snapshot = occupancy.copy()
    piece = store.find_by_id(4)

    for drow, dcol in DIRECTIONS.values():
        can_move(piece, drow, dcol, occupancy)

    assert piece.position == (2, 0)
    assert np.array_equal(occupancy, snapshot)


def test_random_walk_keeps_occupancy_consistent():
    """Validated moves never break disjointness or coverage."""
    rng = random.Random(1234)
    store = PieceStore()
    covered = sum(p.height * p.width for p in store.all())

    for _ in range(300):
        occupancy = store.occupancy()
        options = [
            (piece, delta)
            for piece in store.all()
            for delta in DIRECTIONS.values()
            if can_move(piece, delta[0], delta[1], occupancy)
        ]
        if not options:
            break

        piece, (drow, dcol) = rng.choice(options)
        piece.row += drow
        piece.col += dcol

        # Raises on overlap or off-board footprint
        occupancy = store.occupancy()
        assert int((occupancy != EMPTY).sum()) == covered
        for p in store.all():
            for r, c in p.footprint():
                assert occupancy[r, c] == p.id


def test_is_solved():
    """The goal is the large piece at row 3, col 1."""
    store = PieceStore()
    assert not is_solved(store.all())

    store.find_by_id(0).row, store.find_by_id(0).col = 3, 1
    assert is_solved(store.all())


def test_move_rejects_non_unit_steps():
    """Moves must be exactly one cell in one cardinal direction."""
    for drow, dcol in [(0, 0), (1, 1), (-1, 1), (2, 0), (0, -2)]:
        try:
            Move(5, drow, dcol)
        except ValueError:
            pass
        else:
            raise AssertionError(f"Move(5, {drow}, {dcol}) should be rejected")

    move = Move(5, 0, -1)
    assert move.direction_name == "left"
    assert str(move) == "piece 5 left"


def test_move_from_json():
    """Solver objects parse into Moves; malformed ones raise ValueError."""
    move = Move.from_json({"id": 7, "drow": 1, "dcol": 0})
    assert move == Move(7, 1, 0)
    assert move.to_json() == {"id": 7, "drow": 1, "dcol": 0}

    for bad in [
        [7, 1, 0],
        {"id": 7, "drow": 1},
        {"id": "7", "drow": 1, "dcol": 0},
        {"id": 7, "drow": True, "dcol": 0},
        {"id": 7, "drow": 0, "dcol": 0},
    ]:
        try:
            Move.from_json(bad)
        except ValueError:
            pass
        else:
            raise AssertionError(f"{bad!r} should not parse")


def main():
    """Run all tests."""
    tests = [(name, fn) for name, fn in sorted(globals().items()) if name.startswith("test_")]
    failed = 0
    for name, fn in tests:
        try:
            fn()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {name}: [FAIL] {e}")
    print()
    print("All tests PASSED!" if not failed else f"{failed} tests FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
