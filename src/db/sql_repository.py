"""Implementation of (Game/Rating)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from src.core.exceptions import StaleGameError
from src.core.models import GameModel, RatingModel
from src.db.schema import DBGame, DBRating


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_fields(game, game_db)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Add new info to existing record.
        ----

        Only when the record is still at the version `game` was read from.
        A concurrent update of the same game in between raises StaleGameError and nothing is written.
        """
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        if game_db.version != game.version:
            raise StaleGameError(f"Game with {game_id=} was changed by another request.")

        self._copy_fields(game, game_db)
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise StaleGameError(
                f"Game with {game_id=} was changed by another request."
            ) from e
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_fields(self, game: GameModel, game_db: DBGame) -> None:
        """The version column is maintained by SQLAlchemy, it is never copied."""
        game_db.board = game.board
        game_db.turn = game.turn
        game_db.turn_count = game.turn_count
        game_db.players = game.players
        game_db.status = game.status
        game_db.mode = game.mode
        game_db.winner = game.winner
        game_db.end_reason = game.end_reason
        game_db.pending_blow = game.pending_blow
        game_db.missed_capture = game.missed_capture
        game_db.pending_draw = game.pending_draw
        game_db.last_move = game.last_move
        game_db.messages = game.messages
        game_db.moves = game.moves

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=game_db.board,
            turn=game_db.turn,
            turn_count=game_db.turn_count,
            players=game_db.players,
            status=game_db.status,
            mode=game_db.mode,
            winner=game_db.winner,
            end_reason=game_db.end_reason,
            pending_blow=game_db.pending_blow,
            missed_capture=game_db.missed_capture,
            pending_draw=game_db.pending_draw,
            last_move=game_db.last_move,
            messages=game_db.messages,
            moves=game_db.moves,
            version=game_db.version,
        )


class SQLRatingRepository:
    """Player ratings stored in the `ratings` table"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_rating(self, player_name: str) -> RatingModel | None:
        rating_db = self.db.get(DBRating, player_name)
        if rating_db:
            return self._to_model(rating_db)
        return None

    def save_rating(self, rating: RatingModel) -> RatingModel:
        rating_db = self.db.get(DBRating, rating.player_name)
        if rating_db is None:
            rating_db = DBRating(player_name=rating.player_name)
            self.db.add(rating_db)
        rating_db.rating = rating.rating
        rating_db.wins = rating.wins
        rating_db.losses = rating.losses
        rating_db.draws = rating.draws
        rating_db.games = rating.games
        rating_db.last_played = rating.last_played
        self.db.commit()
        self.db.refresh(rating_db)
        return self._to_model(rating_db)

    def top_ratings(self, limit: int = 50) -> list[RatingModel]:
        """Highest rating first, more wins first between equal ratings."""
        query = (
            select(DBRating)
            .order_by(DBRating.rating.desc(), DBRating.wins.desc())
            .limit(limit)
        )
        return [self._to_model(rating_db) for rating_db in self.db.scalars(query)]

    def _to_model(self, rating_db: DBRating) -> RatingModel:
        return RatingModel(
            player_name=rating_db.player_name,
            rating=rating_db.rating,
            wins=rating_db.wins,
            losses=rating_db.losses,
            draws=rating_db.draws,
            games=rating_db.games,
            last_played=rating_db.last_played,
        )
