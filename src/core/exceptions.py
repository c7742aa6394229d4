"""
Exceptions raised by the domain and service layers.

Every error carries a short `code` that the API layer sends back to the client (ex. "illegal_move").
"""


class GameError(Exception):
    """Base class for all expected errors while handling a game request."""

    code: str = "game_error"


class GameStateError(GameError):
    """The game is not in a state that allows the requested action."""

    code = "game_state"


class IllegalMoveError(GameError):
    """The submitted move is not in the set of legal moves for the current board."""

    code = "illegal_move"


class InvalidBlowTargetError(IllegalMoveError):
    """The piece chosen to blow is not one of the pieces that missed a capture."""

    code = "invalid_blow_target"


class NotYourTurnError(GameError):
    code = "not_your_turn"


class NotAPlayerError(GameError):
    """Only the two seated players can move, blow, chat, offer draws or resign."""

    code = "not_player"


class InvalidRequestError(GameError):
    code = "bad_request"


class RepositoryError(GameError):
    code = "not_found"


class StaleGameError(GameStateError):
    """The stored game changed after it was loaded for this request (another request got there first)."""

    code = "stale_game"
