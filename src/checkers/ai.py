"""Computer opponent. No search at all: it plays a random legal move, preferring the recommended captures."""

import random
from typing import Optional

from src.checkers.moves import Move
from src.checkers.pieces import Color
from src.checkers.selection import MoveGenerator, compute_moves


def pick_random_move(
    board: MoveGenerator, color: Color, rng: Optional[random.Random] = None
) -> Optional[Move]:
    """
    1. captures available? pick among the recommended ones (or among all captures if none are recommended)
    2. otherwise pick among the plain moves
    3. nothing to play --> None
    """
    rng = rng or random.Random()
    move_set = compute_moves(board, color)
    if move_set.all_captures:
        candidates = move_set.captures or move_set.all_captures
    else:
        candidates = move_set.normals
    if not candidates:
        return None
    return rng.choice(candidates)
