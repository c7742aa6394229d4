"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str
JSONDict = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a checkers match used between API, Service, DB, and Game layers.

    The board is the 8x8 integer grid: 0 empty, 1 / 2 red man / king, -1 / -2 black man / king.
    `moves` is the history of played moves, oldest first.
    `version` is the revision of the stored record the game was read from: storing a game with an outdated version is refused.
    """

    board: list[list[int]]
    turn: PieceColor
    turn_count: int
    players: dict[PieceColor, PlayerName]
    status: str
    mode: str
    winner: Optional[PieceColor] = None
    end_reason: Optional[str] = None
    pending_blow: Optional[JSONDict] = None
    missed_capture: Optional[JSONDict] = None
    pending_draw: Optional[PieceColor] = None
    last_move: Optional[JSONDict] = None
    messages: list[JSONDict] = field(default_factory=list)
    moves: list[JSONDict] = field(default_factory=list)
    version: int = 1


@dataclass
class RatingModel:
    """Elo rating and game tally of a single player."""

    player_name: PlayerName
    rating: int = 1200
    wins: int = 0
    losses: int = 0
    draws: int = 0
    games: int = 0
    last_played: Optional[datetime] = None
