"""
Turn bookkeeping around a move: missed captures, the blow ("soplado") and the end of the game.

All functions are pure: they take the board / move set and return new values. The Game decides when to call them.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Self

from src.checkers.board import Board
from src.checkers.moves import Move
from src.checkers.pieces import Color, opponent_of
from src.checkers.selection import MoveSet
from src.checkers.square import Square


class EndReason(Enum):
    NO_MOVES = auto()
    NO_PIECES = auto()
    DRAW = auto()
    RESIGN = auto()
    BLOWN = auto()


@dataclass(frozen=True)
class Outcome:
    """How the game ended. No winner for a draw."""

    winner: Optional[Color]
    reason: EndReason


@dataclass(frozen=True)
class MissedCapture:
    """Record of a player making a plain move while a capture was available."""

    by_color: Color
    blowable_pieces: tuple[Square, ...]
    turn_number: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            by_color=Color[data["by_color"].upper()],
            blowable_pieces=tuple(Square.from_dict(sq) for sq in data["blowable_pieces"]),
            turn_number=int(data["turn_number"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "by_color": self.by_color.name.lower(),
            "blowable_pieces": [square.to_dict() for square in self.blowable_pieces],
            "turn_number": self.turn_number,
        }


@dataclass(frozen=True)
class PendingBlow:
    """
    The one-shot option for the opponent to remove one of the pieces that ignored a capture.

    `piece_color` is the offending color, `offered_to` the color allowed to blow.
    """

    piece_color: Color
    offered_to: Color
    blowable_pieces: tuple[Square, ...]
    turn_number: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            piece_color=Color[data["piece_color"].upper()],
            offered_to=Color[data["offered_to"].upper()],
            blowable_pieces=tuple(Square.from_dict(sq) for sq in data["blowable_pieces"]),
            turn_number=int(data["turn_number"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "piece_color": self.piece_color.name.lower(),
            "offered_to": self.offered_to.name.lower(),
            "blowable_pieces": [square.to_dict() for square in self.blowable_pieces],
            "turn_number": self.turn_number,
        }

    def allows(self, square: Square) -> bool:
        return square in self.blowable_pieces

    def resolve_target(self, target: Optional[Square]) -> Optional[Square]:
        """Without an explicit target, the blow can only go ahead if there is exactly one candidate."""
        if target is not None:
            return target
        if len(self.blowable_pieces) == 1:
            return self.blowable_pieces[0]
        return None


def is_skipped_capture(move_set: MoveSet, move: Move) -> bool:
    """A capture was available, but the player made a plain move."""
    return len(move_set.pieces_with_capture) > 0 and not move.is_capture


def blowable_pieces(
    board: Board, pieces_with_capture: list[Square], move: Move, color: Color
) -> tuple[Square, ...]:
    """
    Where the pieces that could have captured stand after the move.
    ---

    * the piece that moved is found on its destination square
    * only squares that still hold a piece of the offending color are kept
    """
    positions: list[Square] = []
    for square in pieces_with_capture:
        current = move.to_square if square == move.from_square else square
        if board.piece(current).color == color and current not in positions:
            positions.append(current)
    return tuple(positions)


def missed_capture_after(
    board: Board, move_set: MoveSet, move: Move, color: Color, turn_number: int
) -> Optional[MissedCapture]:
    """`board` is the position AFTER the move was applied."""
    if not is_skipped_capture(move_set, move):
        return None
    return MissedCapture(
        by_color=color,
        blowable_pieces=blowable_pieces(board, move_set.pieces_with_capture, move, color),
        turn_number=turn_number,
    )


def offer_blow(missed: Optional[MissedCapture]) -> Optional[PendingBlow]:
    """The opponent of the offending color may blow, as long as there is something left to blow."""
    if missed is None or not missed.blowable_pieces:
        return None
    return PendingBlow(
        piece_color=missed.by_color,
        offered_to=opponent_of(missed.by_color),
        blowable_pieces=missed.blowable_pieces,
        turn_number=missed.turn_number,
    )


def blow_piece(board: Board, pending: PendingBlow, target: Square) -> Board:
    """Remove the blown piece. Nothing happens if the square no longer holds a piece of the offending color."""
    new_board = board.copy()
    if new_board.piece(target).color == pending.piece_color:
        new_board.remove_piece(target)
    return new_board


def terminal_outcome(board: Board, turn: Color, move_set: MoveSet) -> Optional[Outcome]:
    """
    Checks, in this order:
    1. the color to move has no legal move --> it loses
    2. a color has no pieces left --> the other color wins

    `move_set` must be the one computed for `turn` on `board`.
    """
    if not move_set.moves:
        return Outcome(winner=opponent_of(turn), reason=EndReason.NO_MOVES)

    for color in (Color.RED, Color.BLACK):
        if not board.has_any_pieces(color):
            return Outcome(winner=opponent_of(color), reason=EndReason.NO_PIECES)
    return None
