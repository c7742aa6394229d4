"""Elo rating of finished player-vs-player games."""

from datetime import datetime, timezone
from typing import Optional

from src.core.models import RatingModel

DEFAULT_RATING = 1200
K_FACTOR = 32


def elo_update(
    rating_a: int, rating_b: int, score_a: float, k: int = K_FACTOR
) -> tuple[int, int]:
    """
    New ratings of both players.

    score_a is 1 when A won, 0 when A lost, 0.5 for a draw.
    """
    expected_a = 1 / (1 + 10 ** ((rating_b - rating_a) / 400))
    expected_b = 1 - expected_a
    score_b = 1 - score_a
    return (
        round(rating_a + k * (score_a - expected_a)),
        round(rating_b + k * (score_b - expected_b)),
    )


def rate_game(
    red: RatingModel, black: RatingModel, winner: Optional[str]
) -> tuple[RatingModel, RatingModel]:
    """Return updated copies of both ratings. `winner` is "red", "black" or None for a draw."""
    score_red = {"red": 1.0, "black": 0.0}.get(winner or "", 0.5)
    new_red, new_black = elo_update(red.rating, black.rating, score_red)
    played_at = datetime.now(timezone.utc)
    return (
        _tally(red, new_red, score_red, played_at),
        _tally(black, new_black, 1 - score_red, played_at),
    )


def _tally(
    rating: RatingModel, new_rating: int, score: float, played_at: datetime
) -> RatingModel:
    return RatingModel(
        player_name=rating.player_name,
        rating=new_rating,
        wins=rating.wins + (score == 1.0),
        losses=rating.losses + (score == 0.0),
        draws=rating.draws + (score == 0.5),
        games=rating.games + 1,
        last_played=played_at,
    )
