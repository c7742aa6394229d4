"""Unit tests for /src/checkers/ai.py"""

import random

import pytest

from src.checkers.ai import pick_random_move
from src.checkers.board import Board
from src.checkers.pieces import Color, Piece, PieceType
from src.checkers.selection import compute_moves
from src.checkers.square import Square


def board_with(pieces: dict[tuple[int, int], Piece]) -> Board:
    board = Board.empty()
    for (row, col), piece in pieces.items():
        board.place_piece(Piece(piece.type, piece.color), Square(row, col))
    return board


@pytest.mark.parametrize("seed", range(10))
def test_ai_plays_a_legal_move(seed: int) -> None:
    board = Board.initial()
    move = pick_random_move(board, Color.BLACK, random.Random(seed))
    assert move is not None
    assert move in compute_moves(board, Color.BLACK).moves


@pytest.mark.parametrize("seed", range(10))
def test_ai_takes_the_recommended_capture(seed: int) -> None:
    """Capturing the king beats capturing the man, and any capture beats the plain moves."""
    board = board_with(
        {
            (5, 2): Piece(PieceType.MAN, Color.RED),
            (4, 1): Piece(PieceType.MAN, Color.BLACK),
            (4, 3): Piece(PieceType.KING, Color.BLACK),
            (6, 7): Piece(PieceType.MAN, Color.RED),
        }
    )
    move = pick_random_move(board, Color.RED, random.Random(seed))
    assert move is not None
    assert move.is_capture
    assert move.captures[0].square == Square(4, 3)


def test_ai_without_moves() -> None:
    board = board_with({(0, 1): Piece(PieceType.MAN, Color.RED)})
    # a red man on black's back rank cannot exist in a real game, but it can't move either
    assert pick_random_move(board, Color.RED, random.Random(0)) is None


def test_ai_is_reproducible_with_seed() -> None:
    board = Board.initial()
    first = pick_random_move(board, Color.RED, random.Random(42))
    second = pick_random_move(board, Color.RED, random.Random(42))
    assert first == second
