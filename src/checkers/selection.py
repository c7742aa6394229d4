"""
Mandatory capture and capture quality ("Ley de Calidad")
----

The board generates every capture route. This module decides which of them get recommended to the player:
1. the routes that take the most pieces
2. among those, the routes that take the most kings

NOTE: Recommending is all it does. A player may still pick any capture or even a plain move.
Ignoring an available capture is punished by the blow (see turn.py), not by shrinking the set of legal moves.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.checkers.moves import Board, Move
from src.checkers.pieces import Color
from src.checkers.square import Square


class MoveGenerator(Board, Protocol):
    """The board needs to generate moves on top of the basic movement strategy protocol"""

    def generate_normal_moves(self, color: Color) -> list[Move]: ...
    def generate_captures(self, color: Color) -> list[Move]: ...


@dataclass(frozen=True)
class MoveSet:
    """Everything the color to move may (or is advised to) do."""

    forced: bool
    moves: list[Move]
    captures: list[Move]
    normals: list[Move]
    all_captures: list[Move]
    pieces_with_capture: list[Square]


def filter_by_quantity_and_quality(captures: list[Move]) -> list[Move]:
    """Keep the longest captures, then the ones taking the most kings among them."""
    if not captures:
        return []
    max_captured = max(len(move.captures) for move in captures)
    longest = [move for move in captures if len(move.captures) == max_captured]
    max_kings = max(move.king_captures for move in longest)
    return [move for move in longest if move.king_captures == max_kings]


def capture_sources(captures: list[Move]) -> list[Square]:
    """The squares of the pieces that have at least one capture. One entry per piece, however many routes it has."""
    pieces: list[Square] = []
    for move in captures:
        if move.from_square not in pieces:
            pieces.append(move.from_square)
    return pieces


def pieces_that_can_capture(board: MoveGenerator, color: Color) -> list[Square]:
    return capture_sources(board.generate_captures(color))


def compute_moves(board: MoveGenerator, color: Color) -> MoveSet:
    """
    The full picture for the color to move.
    ----

    * `moves`: every legal move (all captures + all plain moves)
    * `captures`: the recommended captures only
    * `forced`: at least one capture is available
    * `pieces_with_capture`: used afterwards to see if the player ignored a capture
    """
    all_captures = board.generate_captures(color)
    normals = board.generate_normal_moves(color)
    return MoveSet(
        forced=len(all_captures) > 0,
        moves=all_captures + normals,
        captures=filter_by_quantity_and_quality(all_captures),
        normals=normals,
        all_captures=all_captures,
        pieces_with_capture=capture_sources(all_captures),
    )


def serialize_move_map(moves: list[Move]) -> dict[str, list[Move]]:
    """Group moves by the key ('row,col') of their starting square."""
    move_map: dict[str, list[Move]] = {}
    for move in moves:
        move_map.setdefault(move.from_square.to_key(), []).append(move)
    return move_map


def find_legal_move(proposed: Move, legal_moves: list[Move]) -> Optional[Move]:
    """
    Look up the server generated move matching a submitted one (same path, same captures).

    Always continue with the returned move, never with the submitted one.
    """
    return next((move for move in legal_moves if move == proposed), None)
