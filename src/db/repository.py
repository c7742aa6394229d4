"""Protocol repositories (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, RatingModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record. Raises StaleGameError when `game.version` is no longer the stored version."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...


class RatingRepository(Protocol):
    """Player ratings"""

    def get_rating(self, player_name: str) -> RatingModel | None:
        """Get the rating of a player, if they played a rated game before."""
        ...

    def save_rating(self, rating: RatingModel) -> RatingModel:
        """Create or overwrite the rating of a player."""
        ...

    def top_ratings(self, limit: int = 50) -> list[RatingModel]:
        """Leaderboard: highest rating first, ties broken by the number of wins."""
        ...
