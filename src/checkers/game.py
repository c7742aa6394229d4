"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
import random
import time
from dataclasses import asdict, dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Self, TypeVar
from uuid import uuid4

from src.checkers.ai import pick_random_move
from src.checkers.board import Board, apply_move
from src.checkers.moves import Move
from src.checkers.pieces import AVAILABLE_COLOR_NAMES, Color, opponent_of
from src.checkers.selection import MoveSet, compute_moves, find_legal_move
from src.checkers.square import Square
from src.checkers.turn import (
    EndReason,
    MissedCapture,
    Outcome,
    PendingBlow,
    blow_piece,
    missed_capture_after,
    offer_blow,
    terminal_outcome,
)
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidBlowTargetError,
    InvalidRequestError,
    NotAPlayerError,
    NotYourTurnError,
)
from src.core.models import GameModel

logger = logging.getLogger(__name__)

AI_PLAYER_NAME = "AI"
STARTING_COLOR = Color.RED
MAX_ROOM_MESSAGES = 100
MAX_MESSAGE_LENGTH = 240

E = TypeVar("E", bound=Enum)


class Status(Enum):
    WAITING = auto()
    IN_GAME = auto()
    FINISHED = auto()


class GameMode(Enum):
    PVP = auto()
    AI = auto()


@dataclass
class LastMove:
    color: Color
    move: Move
    missed_capture: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            color=_parse_enum_name(Color, data["color"], "color"),
            move=Move.from_dict(data["move"]),
            missed_capture=bool(data.get("missed_capture", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": self.color.name.lower(),
            "move": self.move.to_dict(),
            "missed_capture": self.missed_capture,
        }


@dataclass
class ChatMessage:
    id: str
    player: str
    text: str
    timestamp: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _parse_enum_name(enum_cls: type[E], value: str, what: str) -> E:
    """'in_game' / 'in game' -> Status.IN_GAME etc."""
    name = value.replace(" ", "_").upper()
    if name not in enum_cls.__members__:
        raise GameStateError(
            f"Invalid {what}: {value!r}. \nPick one from {','.join([member.name.lower() for member in enum_cls])}"
        )
    return enum_cls[name]


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn: Color
    turn_count: int
    players: dict[Color, str]
    status: Status
    mode: GameMode
    outcome: Optional[Outcome] = None
    pending_blow: Optional[PendingBlow] = None
    missed_capture: Optional[MissedCapture] = None
    pending_draw: Optional[Color] = None
    last_move: Optional[LastMove] = None
    messages: list[ChatMessage] = field(default_factory=list)
    history: list[LastMove] = field(default_factory=list)
    # revision of the stored record this game was loaded from
    version: int = 1

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        status = _parse_enum_name(Status, model.status, "status code")
        mode = _parse_enum_name(GameMode, model.mode, "game mode")
        turn = _parse_enum_name(Color, model.turn, "color")

        outcome = None
        if model.end_reason is not None:
            outcome = Outcome(
                winner=(
                    _parse_enum_name(Color, model.winner, "color")
                    if model.winner
                    else None
                ),
                reason=_parse_enum_name(EndReason, model.end_reason, "end reason"),
            )

        return cls(
            board=Board.from_rows(model.board),
            turn=turn,
            turn_count=model.turn_count,
            players={
                color: model.players[color.name.lower()]
                for color in [Color.RED, Color.BLACK]
                if color.name.lower() in model.players.keys()
            },
            status=status,
            mode=mode,
            outcome=outcome,
            pending_blow=(
                PendingBlow.from_dict(model.pending_blow) if model.pending_blow else None
            ),
            missed_capture=(
                MissedCapture.from_dict(model.missed_capture)
                if model.missed_capture
                else None
            ),
            pending_draw=(
                _parse_enum_name(Color, model.pending_draw, "color")
                if model.pending_draw
                else None
            ),
            last_move=LastMove.from_dict(model.last_move) if model.last_move else None,
            messages=[ChatMessage.from_dict(message) for message in model.messages],
            history=[LastMove.from_dict(entry) for entry in model.moves],
            version=model.version,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board=self.board.to_rows(),
            turn=self.turn.name.lower(),
            turn_count=self.turn_count,
            players={color.name.lower(): name for color, name in self.players.items()},
            status=self.status.name.lower(),
            mode=self.mode.name.lower(),
            winner=(
                self.outcome.winner.name.lower()
                if self.outcome and self.outcome.winner
                else None
            ),
            end_reason=self.outcome.reason.name.lower() if self.outcome else None,
            pending_blow=self.pending_blow.to_dict() if self.pending_blow else None,
            missed_capture=self.missed_capture.to_dict() if self.missed_capture else None,
            pending_draw=self.pending_draw.name.lower() if self.pending_draw else None,
            last_move=self.last_move.to_dict() if self.last_move else None,
            messages=[message.to_dict() for message in self.messages],
            moves=[entry.to_dict() for entry in self.history],
            version=self.version,
        )

    @classmethod
    def new_game(
        cls, player: str, color: str, mode: str = "pvp", board: Optional[Board] = None
    ) -> Self:
        """
        To start a new game with the player using the pieces with the indicated color.

        Against the computer, the AI takes the other color right away and the game starts immediately.
        """
        if color.upper() not in AVAILABLE_COLOR_NAMES:
            raise GameStateError(
                f"Cannot create new game. Color {color} not in {','.join([c.lower() for c in AVAILABLE_COLOR_NAMES])}."
            )
        game_mode = _parse_enum_name(GameMode, mode, "game mode")
        player_color = Color[color.upper()]

        players = {player_color: player}
        status = Status.WAITING
        if game_mode == GameMode.AI:
            players[opponent_of(player_color)] = AI_PLAYER_NAME
            status = Status.IN_GAME

        return cls(
            board=board if board is not None else Board.initial(),
            turn=STARTING_COLOR,
            turn_count=1,
            players=players,
            status=status,
            mode=game_mode,
        )

    @property
    def winner(self) -> Optional[str]:
        """Name of the winning player. None while playing and for a draw."""
        if self.outcome is None or self.outcome.winner is None:
            return None
        return self.players.get(self.outcome.winner)

    @property
    def ai_color(self) -> Optional[Color]:
        if self.mode != GameMode.AI:
            return None
        return next(
            (color for color, name in self.players.items() if name == AI_PLAYER_NAME),
            None,
        )

    @property
    def is_over(self) -> bool:
        return self.status == Status.FINISHED

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"Player {player} already joined this game.")

        opponent_color = list(self.players.keys())[0]
        self.players[opponent_of(opponent_color)] = player
        self._change_status(Status.IN_GAME)

    def legal_moves(self, player: str) -> MoveSet:
        """
        Service will request the set of legal moves.
        ----

        ----
        These can be used to display to the user (including which captures are recommended).

        1. Check if it is your turn
        2. Yes? Generate the full move set for your color.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return compute_moves(self.board, self.turn)

    def make_move(self, move: Move, player: str) -> Move:
        """
        Attempt to make a move
        -----

        1. the game must be in progress and it must be your turn
        2. the move must be in the freshly generated set of legal moves (the submitted move is never applied directly)
        3. update the board
        4. note a missed capture and offer the blow to the opponent
        5. pass the turn and check for the end of the game

        Returns the move as it was generated by the server.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return self._play(move)

    def blow_piece(self, player: str, target: Optional[Square] = None) -> Square:
        """
        Remove one of the pieces of the opponent that ignored a capture on their last move.
        ---

        Does not pass the turn: after blowing, the same player still makes a regular move.
        Returns the square of the blown piece.
        """
        self._assert_in_progress()
        if self.pending_blow is None:
            raise GameStateError("There is no piece to blow.")

        player_color = self._get_player_color(player)
        if player_color != self.turn:
            raise NotYourTurnError("It is not your turn. You can only blow on your own turn.")
        if player_color != self.pending_blow.offered_to:
            raise GameStateError("The blow is not offered to you.")

        chosen = self.pending_blow.resolve_target(target)
        if chosen is None or not self.pending_blow.allows(chosen):
            raise InvalidBlowTargetError(
                f"Cannot blow the piece on {target.to_key() if target else 'an unspecified square'}."
            )

        self._blow(chosen)
        return chosen

    def play_ai_turn(self, rng: Optional[random.Random] = None) -> Optional[Move]:
        """
        Let the computer play, if it is its turn.
        ----

        A blow offered to the computer is always taken (on the first blowable piece) before it moves.
        """
        if self.mode != GameMode.AI or self.status != Status.IN_GAME:
            return None
        if self.turn != self.ai_color:
            return None

        if self.pending_blow is not None and self.pending_blow.offered_to == self.turn:
            self._blow(self.pending_blow.blowable_pieces[0])
            if self.is_over:
                return None

        move = pick_random_move(self.board, self.turn, rng)
        if move is None:
            return None
        return self._play(move)

    def request_draw(self, player: str) -> None:
        self._assert_in_progress()
        player_color = self._get_player_color(player)
        if self.pending_draw is not None:
            raise GameStateError("A draw offer is already pending.")
        self.pending_draw = player_color

    def respond_draw(self, player: str, accept: bool) -> None:
        """Accepting ends the game without a winner, declining just withdraws the offer."""
        self._assert_in_progress()
        player_color = self._get_player_color(player)
        if self.pending_draw is None:
            raise GameStateError("There is no draw offer to answer.")
        if self.pending_draw == player_color:
            raise GameStateError("You cannot answer your own draw offer.")

        if accept:
            self._finish(Outcome(winner=None, reason=EndReason.DRAW))
        else:
            self.pending_draw = None

    def resign(self, player: str) -> None:
        self._assert_in_progress()
        player_color = self._get_player_color(player)
        self._finish(Outcome(winner=opponent_of(player_color), reason=EndReason.RESIGN))

    def post_message(self, player: str, text: str) -> ChatMessage:
        """Room chat: players only, and only while the game is not over. Keeps the last 100 messages."""
        if self.is_over:
            raise GameStateError("The game is over. Chat is closed.")
        self._get_player_color(player)

        message_text = text.strip()[:MAX_MESSAGE_LENGTH]
        if not message_text:
            raise InvalidRequestError("Cannot send an empty message.")

        message = ChatMessage(
            id=uuid4().hex[:8],
            player=player,
            text=message_text,
            timestamp=time.time(),
        )
        self.messages.append(message)
        self.messages = self.messages[-MAX_ROOM_MESSAGES:]
        return message

    # -- PRIVATE HELPERS ---
    def _get_turn_player(self) -> str:
        return self.players[self.turn]

    def _get_player_color(self, player: str) -> Color:
        color = next(
            (color for color, name in self.players.items() if name == player), None
        )
        if color is None:
            raise NotAPlayerError(f"{player} is not playing in this game.")
        return color

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_GAME:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_color = self._get_player_color(player)
        if player_color != self.turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self._get_turn_player()} to make a move first."
            )

    def _play(self, move: Move) -> Move:
        """Validate and apply a move for the color on turn."""
        move_set = compute_moves(self.board, self.turn)
        accepted = find_legal_move(move, move_set.moves)
        if accepted is None:
            logger.info("Rejected move %s for %s", move.signature(), self.turn.name)
            raise IllegalMoveError(f"Move not allowed: {move.signature()}")

        # An unused blow expires as soon as the player it was offered to moves
        self.pending_blow = None
        self.pending_draw = None

        mover = self.turn
        self.board = apply_move(self.board, accepted)
        self.missed_capture = missed_capture_after(
            self.board, move_set, accepted, mover, self.turn_count
        )
        self.last_move = LastMove(
            color=mover, move=accepted, missed_capture=self.missed_capture is not None
        )
        self.history.append(self.last_move)
        if self.missed_capture is not None:
            logger.debug(
                "%s skipped a capture on turn %d, blowable: %s",
                mover.name,
                self.turn_count,
                [square.to_key() for square in self.missed_capture.blowable_pieces],
            )

        self.turn = opponent_of(mover)
        self.turn_count += 1
        self.pending_blow = offer_blow(self.missed_capture)

        self._update_game_status()
        return accepted

    def _blow(self, target: Square) -> None:
        # for the type checker: only called while a blow is pending
        assert self.pending_blow is not None

        self.board = blow_piece(self.board, self.pending_blow, target)
        self.pending_blow = None
        self.missed_capture = None

        outcome = self._terminal_outcome()
        if outcome is not None:
            self._finish(Outcome(winner=outcome.winner, reason=EndReason.BLOWN))

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already been passed. At this point the turn player is the opponent of the player that just moved.
        """
        outcome = self._terminal_outcome()
        if outcome is not None:
            self._finish(outcome)

    def _terminal_outcome(self) -> Optional[Outcome]:
        move_set = compute_moves(self.board, self.turn)
        return terminal_outcome(self.board, self.turn, move_set)

    def _finish(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.pending_blow = None
        self.pending_draw = None
        self._change_status(Status.FINISHED)
        logger.info(
            "Game finished: winner=%s reason=%s",
            outcome.winner.name if outcome.winner else None,
            outcome.reason.name,
        )

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
