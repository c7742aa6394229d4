"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the move sets for each piece type (man / king),
once for plain moves and once for capture sequences.


Which of these a player should prefer (mandatory capture, capture quality) is decided later in selection.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, Self

from src.checkers.pieces import KING_DIRECTIONS, Color, Piece, PieceType, opponent_of
from src.checkers.square import Square, Vector


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Piece: ...
    def is_empty(self, square: Square) -> bool: ...
    def place_piece(self, piece: Piece, square: Square) -> None: ...
    def remove_piece(self, square: Square) -> None: ...
    def copy(self) -> Board: ...


@dataclass(frozen=True)
class CapturedPiece:
    """Snapshot of a piece at the moment it got jumped."""

    square: Square
    type: PieceType
    color: Color

    @classmethod
    def from_board(cls, square: Square, board: Board) -> Self:
        piece = board.piece(square)
        return cls(square, piece.type, piece.color)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            square=Square.from_dict(data["square"]),
            type=PieceType[str(data["rank"]).upper()],
            color=Color[str(data["color"]).upper()],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "square": self.square.to_dict(),
            "rank": self.type.name.lower(),
            "color": self.color.name.lower(),
        }


@dataclass(frozen=True)
class Move:
    """
    A plain step/slide or a full capture sequence.
    ---

    * `path`: the origin followed by every landing square (so at least two squares)
    * `captures`: the jumped pieces, in the order they were taken. Empty for a plain move.
    * `promotes`: the moving man becomes a king at the end of this move.

    NOTE: Two moves are equal when path and captures match. The promotion flag follows from those two,
    so it is left out of the comparison (a client might not bother sending it).
    """

    path: tuple[Square, ...]
    captures: tuple[CapturedPiece, ...] = ()
    promotes: bool = field(default=False, compare=False)

    @property
    def from_square(self) -> Square:
        return self.path[0]

    @property
    def to_square(self) -> Square:
        return self.path[-1]

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    @property
    def king_captures(self) -> int:
        return sum(1 for captured in self.captures if captured.type == PieceType.KING)

    def signature(self) -> str:
        """String identity of the move: full path + every captured piece (square, rank, color)"""
        path_sig = "|".join(square.to_key() for square in self.path)
        captures_sig = "|".join(
            f"{captured.square.to_key()},{captured.type.name.lower()},{captured.color.name.lower()}"
            for captured in self.captures
        )
        return f"{path_sig}#{captures_sig}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Parse a (client submitted) move. Only the shape is checked here, legality is decided by the Game."""
        return cls(
            path=tuple(Square.from_dict(square) for square in data["path"]),
            captures=tuple(
                CapturedPiece.from_dict(captured)
                for captured in data.get("captures") or []
            ),
            promotes=bool(data.get("promotes", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_square.to_dict(),
            "to": self.to_square.to_dict(),
            "path": [square.to_dict() for square in self.path],
            "captures": [captured.to_dict() for captured in self.captures],
            "is_capture": self.is_capture,
            "promotes": self.promotes,
        }


# --- MOVEMENT RULES ---
def single_step_move(square: Square, board: Board, directions: list[Vector]) -> list[Move]:
    """Men move a single square along one of their (forward) directions, onto an empty square."""
    piece = board.piece(square)
    moves: list[Move] = []
    for direction in directions:
        target_square = square.step(direction)
        if not target_square.is_within_bounds():
            continue
        if board.is_empty(target_square):
            moves.append(
                Move(
                    path=(square, target_square),
                    promotes=piece.would_promote(target_square.row),
                )
            )
    return moves


def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    Flying kings slide along a diagonal until they hit another piece or the edge of the board.
    Every empty square on the way is a separate move.
    """
    moves: list[Move] = []
    for direction in directions:
        target_square = square.step(direction)
        while target_square.is_within_bounds() and board.is_empty(target_square):
            moves.append(Move(path=(square, target_square)))
            target_square = target_square.step(direction)
    return moves


def candidate_man_moves(square: Square, board: Board) -> list[Move]:
    """A man steps diagonally forward (red up the board, black down the board)"""
    return single_step_move(square, board, board.piece(square).directions())


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """A king flies any distance along any of the four diagonals"""
    return raycasting_move(square, board, KING_DIRECTIONS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.MAN: candidate_man_moves,
    PieceType.KING: candidate_king_moves,
}


# --- CAPTURING RULES ---
@dataclass(frozen=True)
class CaptureNode:
    """
    One state of the depth-first capture search.

    Every node owns its board. Jumping never touches the parent's board, so sibling branches
    can never see each other's captured pieces.
    """

    square: Square
    board: Board
    path: tuple[Square, ...]
    captures: tuple[CapturedPiece, ...]

    @classmethod
    def start(cls, square: Square, board: Board) -> Self:
        return cls(square, board.copy(), (square,), ())

    def jump(self, over: Square, landing: Square) -> CaptureNode:
        """Take the piece on `over` and land on `landing`, on a fresh copy of the board."""
        board = self.board.copy()
        moving_piece = board.piece(self.square)
        captured = CapturedPiece.from_board(over, board)
        board.remove_piece(self.square)
        board.remove_piece(over)
        board.place_piece(moving_piece, landing)
        return CaptureNode(
            square=landing,
            board=board,
            path=self.path + (landing,),
            captures=self.captures + (captured,),
        )

    def to_move(self, piece: Piece) -> Move:
        return Move(
            path=self.path,
            captures=self.captures,
            promotes=piece.would_promote(self.square.row),
        )


def man_capture_sequences(square: Square, board: Board) -> list[Move]:
    """All completed capture sequences for the man standing on `square`."""
    man = board.piece(square)
    if man.type != PieceType.MAN:
        return []
    return _man_capture_search(CaptureNode.start(square, board), man)


def _man_capture_search(node: CaptureNode, man: Piece) -> list[Move]:
    """
    A man jumps an adjacent opponent piece (forward only) when the square right behind it is empty.

    Landing on the promotion row ends the sequence right there: the new king does not keep capturing this turn.
    """
    opponent_color = opponent_of(man.color)
    completed: list[Move] = []
    for direction in man.directions():
        over = node.square.step(direction)
        landing = node.square.step(direction, 2)
        if not landing.is_within_bounds():
            continue
        if node.board.piece(over).color != opponent_color:
            continue
        if not node.board.is_empty(landing):
            continue

        next_node = node.jump(over, landing)
        if man.would_promote(landing.row):
            completed.append(next_node.to_move(man))
            continue
        completed.extend(_man_capture_search(next_node, man))

    # nothing left to jump: the sequence so far is a finished capture
    if not completed and node.captures:
        return [node.to_move(man)]
    return completed


def king_capture_sequences(square: Square, board: Board) -> list[Move]:
    """All completed capture sequences for the king standing on `square`."""
    king = board.piece(square)
    if king.type != PieceType.KING:
        return []
    return _king_capture_search(CaptureNode.start(square, board), king)


def _king_capture_search(node: CaptureNode, king: Piece) -> list[Move]:
    """Every (pivot, landing) pair found along the diagonals spawns its own continuation."""
    completed: list[Move] = []
    for direction in KING_DIRECTIONS:
        for over, landing in king_jumps(node.square, node.board, king.color, direction):
            completed.extend(_king_capture_search(node.jump(over, landing), king))

    if not completed and node.captures:
        return [node.to_move(king)]
    return completed


def king_jumps(
    square: Square, board: Board, color: Color, direction: Vector
) -> list[tuple[Square, Square]]:
    """
    Raycasting for flying king captures.
    ---

    * empty squares are flown over, both before and after the captured piece
    * an own piece blocks the diagonal
    * the first opponent piece becomes the pivot. Every empty square behind it is a possible landing square
    * a second piece (of either color) ends the scan: two pieces in a row cannot be jumped

    Returns (pivot, landing) pairs.
    """
    jumps: list[tuple[Square, Square]] = []
    pivot: Square | None = None
    target_square = square.step(direction)
    while target_square.is_within_bounds():
        piece = board.piece(target_square)
        if piece.is_empty:
            if pivot is not None:
                jumps.append((pivot, target_square))
        elif piece.color == color or pivot is not None:
            break
        else:
            pivot = target_square
        target_square = target_square.step(direction)
    return jumps


# --- STRATEGY PATTERN: CAPTURING RULES ---
CaptureSequencesFn = Callable[[Square, Board], list[Move]]
CAPTURE_RULES: dict[PieceType, CaptureSequencesFn] = {
    PieceType.MAN: man_capture_sequences,
    PieceType.KING: king_capture_sequences,
}
