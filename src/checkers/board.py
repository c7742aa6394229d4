"""The Game board implements all rules that effect the `position` (in checkers: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Self

from src.checkers.moves import (
    CAPTURE_RULES,
    MOVEMENT_RULES,
    CandidateMovesFn,
    CaptureSequencesFn,
    Move,
)
from src.checkers.pieces import Color, Piece, PieceType
from src.checkers.square import BOARD_DIMENSIONS, Square

# Each side starts with its men on the dark squares of the three rows closest to it
STARTING_ROWS: dict[Color, range] = {
    Color.BLACK: range(0, 3),
    Color.RED: range(BOARD_DIMENSIONS[0] - 3, BOARD_DIMENSIONS[0]),
}


@dataclass
class Board:
    position: dict[Square, Piece]

    @classmethod
    def empty(cls) -> Self:
        """All 64 squares present, none of them occupied. Insertion order is row-major."""
        return cls(
            {
                Square(row, col): Piece.empty()
                for row in range(BOARD_DIMENSIONS[0])
                for col in range(BOARD_DIMENSIONS[1])
            }
        )

    @classmethod
    def initial(cls) -> Self:
        """Standard starting position: 12 black men on rows 0-2, 12 red men on rows 5-7."""
        board = cls.empty()
        for color, rows in STARTING_ROWS.items():
            for square in board.position:
                if square.row in rows and square.is_dark():
                    board.place_piece(Piece(PieceType.MAN, color), square)
        return board

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Self:
        """
        Construct a board from the 8x8 integer grid that is sent over the wire / stored.

        0: empty, 1: red man, 2: red king, -1: black man, -2: black king
        """
        board = cls.empty()
        for row_idx, row in enumerate(rows):
            for col_idx, code in enumerate(row):
                board.place_piece(Piece.from_code(code), Square(row_idx, col_idx))
        return board

    def to_rows(self) -> list[list[int]]:
        return [
            [
                self.piece(Square(row, col)).to_code()
                for col in range(BOARD_DIMENSIONS[1])
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def piece(self, square: Square) -> Piece:
        return self.position[square]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = Piece.empty()

    def copy(self) -> Self:
        return deepcopy(self)

    def locate_color(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color, top row first."""
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def has_any_pieces(self, color: Color) -> bool:
        return any(piece.color == color for piece in self.position.values())

    def count_pieces(self) -> dict[Color, int]:
        return {
            color: len(self.locate_color(color))
            for color in Color
            if color != Color.NONE
        }

    def generate_normal_moves(self, color: Color) -> list[Move]:
        """Every non-capturing move for the pieces of the given color."""
        moves: list[Move] = []
        for starting_square in self.locate_color(color):
            piece_type = self.piece(starting_square).type
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece_type]
            moves.extend(movement_rule(starting_square, self))
        return moves

    def generate_captures(self, color: Color) -> list[Move]:
        """
        Every completed capture sequence for the pieces of the given color.

        No filtering happens here: all routes, of any length, are returned (see selection.py)
        """
        captures: list[Move] = []
        for starting_square in self.locate_color(color):
            piece_type = self.piece(starting_square).type
            capture_rule: CaptureSequencesFn = CAPTURE_RULES[piece_type]
            captures.extend(capture_rule(starting_square, self))
        return captures

    def move_piece(self, move: Move) -> None:
        """
        Update the position on the board
        ---

        1. lift the piece from its starting square
        2. remove every captured piece
        3. put the piece down on its final square, as a king if the move ends on its promotion row
        """
        piece_that_moved = self.piece(move.from_square)
        self.remove_piece(move.from_square)
        for captured in move.captures:
            self.remove_piece(captured.square)

        landed = Piece(piece_that_moved.type, piece_that_moved.color)
        if move.promotes or landed.would_promote(move.to_square.row):
            landed.promote()
        self.place_piece(landed, move.to_square)


def apply_move(board: Board, move: Move) -> Board:
    """Return the board after the move. The given board is left untouched."""
    new_board = board.copy()
    new_board.move_piece(move)
    return new_board
