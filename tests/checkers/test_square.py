"""Unit tests for /src/checkers/square.py"""

import pytest

from src.checkers.square import BOARD_DIMENSIONS, Square


@pytest.mark.parametrize(
    "key, row, col",
    [("0,1", 0, 1), ("7,6", 7, 6), ("4,3", 4, 3)],
)
def test_square_from_key(key: str, row: int, col: int) -> None:
    square = Square.from_key(key)
    assert square == Square(row, col)
    assert square.to_key() == key


def test_square_to_dict() -> None:
    assert Square(5, 2).to_dict() == {"row": 5, "col": 2}
    assert Square.from_dict({"row": 5, "col": 2}) == Square(5, 2)


def test_all_squares_within_bounds() -> None:
    rows, cols = BOARD_DIMENSIONS
    assert all(Square(row, col).is_within_bounds() for row in range(rows) for col in range(cols))


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_dark_squares() -> None:
    """Half of the board is dark: (row + col) odd"""
    dark = [Square(row, col) for row in range(8) for col in range(8) if Square(row, col).is_dark()]
    assert len(dark) == 32
    assert Square(0, 1).is_dark()
    assert not Square(0, 0).is_dark()


def test_step_along_diagonal() -> None:
    origin = Square(5, 2)
    assert origin.step((-1, 1)) == Square(4, 3)
    assert origin.step((-1, 1), 2) == Square(3, 4)
    assert origin.step((1, -1), 3) == Square(8, -1)
    assert not origin.step((1, -1), 3).is_within_bounds()
