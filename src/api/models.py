"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, EndReason, GameMode, PieceRank, Status

PieceColor = str
PlayerName = str
SquareKey = str
MoveDict = dict[str, Any]

BOARD_SIZE = 8


# --- PAYLOAD MODELS ---
class SquarePayload(BaseModel):
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_bounds(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Square coordinate {value} is off the board (0-{BOARD_SIZE - 1})."
            )
        return value


class CapturePayload(BaseModel):
    square: SquarePayload
    rank: PieceRank
    color: Color


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Color
    mode: GameMode = GameMode.PVP


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    """A move as sent by the client. It only gets applied if it matches one of the server generated legal moves."""

    game_id: UUID
    player_name: str
    path: list[SquarePayload]
    captures: list[CapturePayload] = []
    promotes: bool = False

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: list[SquarePayload]) -> list[SquarePayload]:
        if len(value) < 2:
            raise InvalidRequestError(
                "A move path needs at least a starting and a target square."
            )
        return value


class BlowRequest(BaseModel):
    game_id: UUID
    player_name: str
    target: Optional[SquarePayload] = None


class ChatRequest(BaseModel):
    game_id: UUID
    player_name: str
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Cannot send an empty message.")
        return value


class DrawRequest(BaseModel):
    game_id: UUID
    player_name: str


class RespondDrawRequest(BaseModel):
    game_id: UUID
    player_name: str
    accept: bool


class ResignRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class ChatMessageResponse(BaseModel):
    id: str
    player: PlayerName
    text: str
    timestamp: float


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    mode: GameMode
    status: Status
    board: list[list[int]]
    turn: Color
    turn_count: int
    winner: Optional[Color] = None
    end_reason: Optional[EndReason] = None
    pending_blow: Optional[dict[str, Any]] = None
    missed_capture: Optional[dict[str, Any]] = None
    pending_draw: Optional[Color] = None
    last_move: Optional[dict[str, Any]] = None
    messages: list[ChatMessageResponse] = []
    moves: list[dict[str, Any]] = []


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    forced: bool
    move_map: dict[SquareKey, list[MoveDict]]
    capture_map: dict[SquareKey, list[MoveDict]]
    recommended_capture_map: dict[SquareKey, list[MoveDict]]
    pieces_with_capture: list[SquareKey]


class BlowResponse(BaseModel):
    blown: SquarePayload
    game: GameResponse


class RatingResponse(BaseModel):
    player_name: PlayerName
    rating: int
    wins: int
    losses: int
    draws: int
    games: int


class LeaderboardResponse(BaseModel):
    leaderboard: list[RatingResponse]
