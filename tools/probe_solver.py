"""
Diagnostic script to check a running solver against the local rules.

Sends the standard layout to /hint and /solve, prints the answers, and
replays the solution through the move validator to find the first
illegal step.

Usage:
    python tools/probe_solver.py
    python tools/probe_solver.py --server http://localhost:8080 --skip-solve
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from klotski.board import PieceStore, can_move, format_occupancy, is_solved
from klotski.solver_client import SolverClient, SolverError


def replay(moves) -> int:
    """
    Apply moves to a fresh standard board, validating each one.

    Returns:
        Index of the first illegal move, or -1 if all are legal
    """
    store = PieceStore()
    for index, move in enumerate(moves):
        piece = store.find_by_id(move.piece_id)
        if not can_move(piece, move.drow, move.dcol, store.occupancy()):
            print(f"  Move {index + 1} ({move}) is ILLEGAL on:")
            print(format_occupancy(store.occupancy()))
            return index
        piece.row += move.drow
        piece.col += move.dcol

    print("  Final board:")
    print(format_occupancy(store.occupancy()))
    print(f"  Solved: {is_solved(store.all())}")
    return -1


def main():
    parser = argparse.ArgumentParser(description="Probe the Klotski solver service")
    parser.add_argument("--server", "-s", default="http://localhost:8080", help="Solver base URL")
    parser.add_argument("--skip-solve", action="store_true", help="Only request a hint")
    args = parser.parse_args()

    client = SolverClient(args.server)
    payload = PieceStore().to_payload()

    print(f"\n{'='*60}")
    print(f"Probing: {args.server}")
    print('='*60)

    try:
        hint = client.hint(payload)
        print(f"Hint: {hint}")

        if args.skip_solve:
            return 0

        moves = client.solve(payload)
    except SolverError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Solution: {len(moves)} moves")
    for i, move in enumerate(moves[:10]):
        print(f"  {i+1}. {move}")
    if len(moves) > 10:
        print(f"  ... and {len(moves) - 10} more")

    print("\nReplaying solution:")
    bad = replay(moves)
    return 0 if bad < 0 else 2


if __name__ == "__main__":
    sys.exit(main())
