from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.api.models import (
    ChatRequest,
    CreateGameRequest,
    MoveRequest,
    SquarePayload,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, PieceRank


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_create_game_defaults_to_player_vs_player() -> None:
    request = CreateGameRequest(player_name="don't hate the player", color=Color.RED)
    assert request.mode == GameMode.PVP


def test_create_game_against_computer() -> None:
    request = CreateGameRequest(player_name="solo", color="black", mode="ai")
    assert request.color == Color.BLACK
    assert request.mode == GameMode.AI


def test_create_game_with_unknown_color() -> None:
    """Only red and black exist. Plain pydantic enum validation."""
    with pytest.raises(ValidationError):
        _ = CreateGameRequest(player_name="don't hate the player", color="white")


# -- Validation - SquarePayload --
@pytest.mark.parametrize("row, col", [(0, 1), (7, 6), (3, 4)])
def test_valid_square(row: int, col: int) -> None:
    square = SquarePayload(row=row, col=col)
    assert (square.row, square.col) == (row, col)


@pytest.mark.parametrize("row, col", [(-1, 0), (8, 1), (0, 8), (2, -3)])
def test_square_off_the_board(row: int, col: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SquarePayload(row=row, col=col)


# -- Validation - MoveRequest --
def test_valid_capture_move(mock_id: UUID) -> None:
    """A move with its path and captured pieces, as sent by the client."""
    request = MoveRequest(
        game_id=mock_id,
        player_name="bladiblidiboo",
        path=[{"row": 5, "col": 2}, {"row": 3, "col": 4}],
        captures=[
            {"square": {"row": 4, "col": 3}, "rank": "king", "color": "black"}
        ],
    )
    assert len(request.path) == 2
    assert request.captures[0].rank == PieceRank.KING
    assert request.captures[0].color == Color.BLACK
    assert request.promotes is False


@pytest.mark.parametrize(
    "path",
    [
        [],  # nothing at all
        [{"row": 5, "col": 2}],  # only a starting square
    ],
)
def test_move_path_too_short(mock_id: UUID, path: list[dict[str, int]]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_name="bladiblidiboo", path=path)


def test_move_path_off_the_board(mock_id: UUID) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id,
            player_name="bladiblidiboo",
            path=[{"row": 0, "col": 1}, {"row": -1, "col": 2}],
        )


# -- Validation - ChatRequest --
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_chat_message(mock_id: UUID, text: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = ChatRequest(game_id=mock_id, player_name="chatterbox", text=text)
