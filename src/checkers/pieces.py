"""Defines the checkers pieces: men and kings of either color"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.checkers.square import BOARD_DIMENSIONS, Vector


class PieceType(Enum):
    EMPTY = auto()
    MAN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    RED = auto()
    BLACK = auto()


AVAILABLE_COLOR_NAMES: list[str] = [
    color.name for color in Color if color != Color.NONE
]

# Integer encoding of a cell on the wire: the sign is the color, the magnitude the type
PIECE_TO_CODE: dict[tuple[PieceType, Color], int] = {
    (PieceType.MAN, Color.RED): 1,
    (PieceType.KING, Color.RED): 2,
    (PieceType.MAN, Color.BLACK): -1,
    (PieceType.KING, Color.BLACK): -2,
}

CODE_TO_PIECE: dict[int, tuple[PieceType, Color]] = {
    value: key for key, value in PIECE_TO_CODE.items()
}

KING_DIRECTIONS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

# Red starts at the bottom of the board and moves UP (decreasing row), black moves DOWN
FORWARD: dict[Color, int] = {Color.RED: -1, Color.BLACK: 1}

# A man promotes on the opponent's back rank
PROMOTION_ROW: dict[Color, int] = {Color.RED: 0, Color.BLACK: BOARD_DIMENSIONS[0] - 1}


def opponent_of(color: Color) -> Color:
    if color == Color.NONE:
        return Color.NONE
    return Color.RED if color == Color.BLACK else Color.BLACK


@dataclass
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def empty(cls) -> Self:
        return cls(PieceType.EMPTY, Color.NONE)

    @classmethod
    def from_code(cls, code: int) -> Self:
        if code == 0:
            return cls.empty()
        piece_type, color = CODE_TO_PIECE[code]
        return cls(piece_type, color)

    def to_code(self) -> int:
        return PIECE_TO_CODE.get((self.type, self.color), 0)

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    @property
    def is_king(self) -> bool:
        return self.type == PieceType.KING

    def directions(self) -> list[Vector]:
        """
        Kings move and capture along all four diagonals.
        Men only ever go forward: never a backward step and never a backward capture.
        """
        if self.is_empty:
            return []
        if self.is_king:
            return KING_DIRECTIONS
        forward = FORWARD[self.color]
        return [(forward, -1), (forward, 1)]

    def would_promote(self, row: int) -> bool:
        """Does a man of this color become a king when landing on the given row?"""
        return self.type == PieceType.MAN and row == PROMOTION_ROW[self.color]

    def promote(self) -> None:
        self.type = PieceType.KING
