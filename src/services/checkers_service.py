"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.api.models import (
    BlowRequest,
    BlowResponse,
    ChatRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DrawRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LeaderboardResponse,
    LegalMovesResponse,
    MoveRequest,
    RatingResponse,
    ResignRequest,
    RespondDrawRequest,
    SquarePayload,
)
from src.checkers.game import Game, GameMode
from src.checkers.moves import Move
from src.checkers.selection import serialize_move_map
from src.checkers.square import Square
from src.core.exceptions import RepositoryError
from src.core.models import GameModel, RatingModel
from src.core.shared_types import Color
from src.db.repository import GameRepository, RatingRepository
from src.services.rating import rate_game

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 50


class CheckersService:
    """Orchestration of layers for a checkers game."""

    def __init__(
        self,
        repository: GameRepository,
        ratings: Optional[RatingRepository] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.ratings = ratings
        self.rng = rng or random.Random()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (against another player or against the computer)."""

        new_game = Game.new_game(
            player=request.player_name, color=request.color, mode=request.mode
        )
        # Red always opens. If the computer plays red, it moves before anyone else gets to see the board
        new_game.play_ai_turn(self.rng)

        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Created %s game %s for %s (%s)",
            request.mode,
            game_id,
            request.player_name,
            request.color,
        )
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        game = self._load_game(request.game_id)
        game.register_player(request.player_name)
        logger.info("%s joined game %s", request.player_name, request.game_id)
        return self._store(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the full move set of the player on turn, grouped per starting square."""

        game = self._load_game(request.game_id)
        move_set = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=Color(game.turn.name.lower()),
            forced=move_set.forced,
            move_map=self._move_map(move_set.moves),
            capture_map=self._move_map(move_set.all_captures),
            recommended_capture_map=self._move_map(move_set.captures),
            pieces_with_capture=[
                square.to_key() for square in move_set.pieces_with_capture
            ],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. In a game against the computer, the computer answers right away."""

        game = self._load_game(request.game_id)
        proposed = Move.from_dict(
            request.model_dump(include={"path", "captures", "promotes"})
        )
        game.make_move(proposed, request.player_name)

        if game.mode == GameMode.AI:
            game.play_ai_turn(self.rng)

        return self._store(request.game_id, game)

    def blow_piece(self, request: BlowRequest) -> BlowResponse:
        """Remove a piece of the opponent that ignored a capture."""

        game = self._load_game(request.game_id)
        target = (
            Square(request.target.row, request.target.col) if request.target else None
        )
        blown = game.blow_piece(request.player_name, target)
        logger.info(
            "%s blew the piece on %s in game %s",
            request.player_name,
            blown.to_key(),
            request.game_id,
        )
        return BlowResponse(
            blown=SquarePayload(row=blown.row, col=blown.col),
            game=self._store(request.game_id, game),
        )

    def post_message(self, request: ChatRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.post_message(request.player_name, request.text)
        return self._store(request.game_id, game)

    def request_draw(self, request: DrawRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.request_draw(request.player_name)
        return self._store(request.game_id, game)

    def respond_draw(self, request: RespondDrawRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.respond_draw(request.player_name, request.accept)
        return self._store(request.game_id, game)

    def resign(self, request: ResignRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.resign(request.player_name)
        return self._store(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    def get_rating(self, player_name: str) -> RatingResponse:
        """Players that never finished a rated game get the default rating."""
        return self._create_rating_response(self._fetch_rating(player_name))

    def get_leaderboard(self, limit: int = LEADERBOARD_SIZE) -> LeaderboardResponse:
        """Best rated players first. Only players that finished a rated game are listed."""
        top = self.ratings.top_ratings(limit) if self.ratings else []
        return LeaderboardResponse(
            leaderboard=[self._create_rating_response(rating) for rating in top]
        )

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            players=model.players,
            mode=model.mode,
            status=model.status,
            board=model.board,
            turn=model.turn,
            turn_count=model.turn_count,
            winner=model.winner,
            end_reason=model.end_reason,
            pending_blow=model.pending_blow,
            missed_capture=model.missed_capture,
            pending_draw=model.pending_draw,
            last_move=model.last_move,
            messages=model.messages,
            moves=model.moves,
        )

    def _create_rating_response(self, rating: RatingModel) -> RatingResponse:
        return RatingResponse(
            player_name=rating.player_name,
            rating=rating.rating,
            wins=rating.wins,
            losses=rating.losses,
            draws=rating.draws,
            games=rating.games,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _store(self, game_id: UUID, game: Game) -> GameResponse:
        """
        Persist the game after an action. A game that just ended is rated once its record is saved.

        NOTE: every action refuses to run on a finished game, so a finished game here ended during this request.
        When another request stored the same game in the meantime, update_game raises StaleGameError and nothing gets rated.
        """
        stored = self.repo.update_game(game_id, game.to_model())
        if stored is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

        if game.is_over:
            logger.info(
                "Game %s over: winner=%s reason=%s",
                game_id,
                stored.winner,
                stored.end_reason,
            )
            self._rate_game(game)
        return self._create_game_response(game_id, stored)

    def _rate_game(self, game: Game) -> None:
        """Only finished games between two human players are rated."""
        if self.ratings is None or game.mode != GameMode.PVP:
            return
        model = game.to_model()
        if "red" not in model.players or "black" not in model.players:
            return

        red = self._fetch_rating(model.players["red"])
        black = self._fetch_rating(model.players["black"])
        new_red, new_black = rate_game(red, black, model.winner)
        self.ratings.save_rating(new_red)
        self.ratings.save_rating(new_black)

    def _fetch_rating(self, player_name: str) -> RatingModel:
        rating = self.ratings.get_rating(player_name) if self.ratings else None
        return rating or RatingModel(player_name=player_name)

    def _move_map(self, moves: list[Move]) -> dict[str, list[dict]]:
        return {
            key: [move.to_dict() for move in grouped]
            for key, grouped in serialize_move_map(moves).items()
        }
