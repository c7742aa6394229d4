"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    IN_GAME = "in_game"
    FINISHED = "finished"


class GameMode(StrEnum):
    PVP = "pvp"
    AI = "ai"


class EndReason(StrEnum):
    NO_MOVES = "no_moves"
    NO_PIECES = "no_pieces"
    DRAW = "draw"
    RESIGN = "resign"
    BLOWN = "blown"


# --- Color and PieceRank DO NOT contain options for empty squares. The domain versions live in src/checkers/pieces.py
# --- NOTE Same names are used on purpose. The imports show which version is used in what part of the code


class Color(StrEnum):
    RED = "red"
    BLACK = "black"


class PieceRank(StrEnum):
    MAN = "man"
    KING = "king"
