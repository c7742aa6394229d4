"""Unit tests for /src/checkers/selection.py"""

from src.checkers.board import Board, apply_move
from src.checkers.moves import CapturedPiece, Move
from src.checkers.pieces import Color, Piece, PieceType
from src.checkers.selection import (
    capture_sources,
    compute_moves,
    filter_by_quantity_and_quality,
    find_legal_move,
    pieces_that_can_capture,
    serialize_move_map,
)
from src.checkers.square import Square

RED_MAN = Piece(PieceType.MAN, Color.RED)
RED_KING = Piece(PieceType.KING, Color.RED)
BLACK_MAN = Piece(PieceType.MAN, Color.BLACK)
BLACK_KING = Piece(PieceType.KING, Color.BLACK)


def board_with(pieces: dict[tuple[int, int], Piece]) -> Board:
    board = Board.empty()
    for (row, col), piece in pieces.items():
        board.place_piece(Piece(piece.type, piece.color), Square(row, col))
    return board


def capture(origin: tuple[int, int], *taken: tuple[int, int, PieceType]) -> Move:
    """Build a capture move; the landing squares are irrelevant for the filters, so fake them."""
    path = (Square(*origin),) + tuple(Square(0, i) for i in range(len(taken)))
    return Move(
        path=path,
        captures=tuple(
            CapturedPiece(Square(row, col), piece_type, Color.BLACK)
            for row, col, piece_type in taken
        ),
    )


# --- QUALITY FILTER ---
def test_filter_keeps_longest_captures() -> None:
    short = capture((5, 2), (4, 3, PieceType.KING))
    long = capture((5, 6), (4, 5, PieceType.MAN), (2, 5, PieceType.MAN))
    assert filter_by_quantity_and_quality([short, long]) == [long]


def test_filter_prefers_kings_among_longest() -> None:
    men_only = capture((5, 2), (4, 3, PieceType.MAN), (2, 3, PieceType.MAN))
    one_king = capture((5, 6), (4, 5, PieceType.KING), (2, 5, PieceType.MAN))
    also_one_king = capture((7, 0), (6, 1, PieceType.MAN), (4, 3, PieceType.KING))
    assert filter_by_quantity_and_quality([men_only, one_king, also_one_king]) == [
        one_king,
        also_one_king,
    ]


def test_filter_without_captures() -> None:
    assert filter_by_quantity_and_quality([]) == []


def test_capture_sources_one_entry_per_piece() -> None:
    moves = [
        capture((6, 1), (5, 2, PieceType.MAN)),
        capture((6, 1), (5, 0, PieceType.MAN)),
        capture((7, 6), (6, 5, PieceType.MAN)),
    ]
    assert capture_sources(moves) == [Square(6, 1), Square(7, 6)]


# --- COMPUTE MOVES ---
def test_mandatory_capture_recommends_king_capture() -> None:
    """Two single captures, one takes a king: forced, and only the king capture is recommended."""
    board = board_with({(5, 2): RED_MAN, (4, 1): BLACK_MAN, (4, 3): BLACK_KING})
    move_set = compute_moves(board, Color.RED)

    assert move_set.forced is True
    assert len(move_set.all_captures) == 2
    assert len(move_set.captures) == 1
    assert move_set.captures[0].captures[0].square == Square(4, 3)
    assert move_set.captures[0].king_captures == 1
    assert move_set.pieces_with_capture == [Square(5, 2)]


def test_all_moves_stay_legal_when_captures_exist() -> None:
    """Recommending never shrinks the legal set: every capture and every plain move can be played."""
    board = board_with(
        {(5, 2): RED_MAN, (4, 1): BLACK_MAN, (4, 3): BLACK_KING, (6, 7): RED_MAN}
    )
    move_set = compute_moves(board, Color.RED)

    assert move_set.moves == move_set.all_captures + move_set.normals
    assert Move(path=(Square(6, 7), Square(5, 6))) in move_set.moves
    assert all(capture in move_set.moves for capture in move_set.all_captures)


def test_no_captures_not_forced() -> None:
    move_set = compute_moves(Board.initial(), Color.RED)
    assert move_set.forced is False
    assert move_set.captures == []
    assert move_set.all_captures == []
    assert move_set.pieces_with_capture == []
    assert len(move_set.moves) == len(move_set.normals) == 7


def test_backward_capture_only_for_kings() -> None:
    man_board = board_with({(4, 3): RED_MAN, (5, 4): BLACK_MAN})
    man_moves = compute_moves(man_board, Color.RED)
    assert man_moves.forced is False
    assert man_moves.all_captures == []

    king_board = board_with({(4, 3): RED_KING, (5, 4): BLACK_MAN})
    king_moves = compute_moves(king_board, Color.RED)
    assert king_moves.forced is True
    assert all(move.to_square.row > 5 for move in king_moves.all_captures)


def test_pieces_that_can_capture() -> None:
    board = board_with(
        {(5, 2): RED_MAN, (4, 3): BLACK_MAN, (5, 6): RED_MAN, (7, 0): RED_MAN}
    )
    assert pieces_that_can_capture(board, Color.RED) == [Square(5, 2)]


def test_apply_any_legal_move() -> None:
    """Applying a generated move removes exactly the captured pieces and leaves the rest in place."""
    board = board_with(
        {
            (7, 0): RED_KING,
            (6, 1): BLACK_MAN,
            (5, 4): BLACK_KING,
            (5, 6): RED_MAN,
            (1, 2): RED_MAN,
            (0, 7): BLACK_MAN,
        }
    )
    for move in compute_moves(board, Color.RED).moves:
        after = apply_move(board, move)
        captured = {c.square for c in move.captures}
        touched = set(move.path) | captured

        for square in captured:
            assert after.is_empty(square)
        for square, piece in board.position.items():
            if square not in touched:
                assert after.piece(square) == piece

        moved = board.piece(move.from_square)
        landed = after.piece(move.to_square)
        assert landed.color == moved.color
        assert landed.is_king == (moved.is_king or move.promotes or moved.would_promote(move.to_square.row))


# --- MOVE MAP / LOOKUP ---
def test_serialize_move_map() -> None:
    moves = compute_moves(Board.initial(), Color.RED).moves
    move_map = serialize_move_map(moves)

    assert set(move_map.keys()) == {"5,0", "5,2", "5,4", "5,6"}
    assert len(move_map["5,0"]) == 1
    assert len(move_map["5,2"]) == 2
    assert sum(len(grouped) for grouped in move_map.values()) == len(moves)


def test_find_legal_move_returns_server_move() -> None:
    """The client may omit the promotion flag: the server generated move (with the flag) is returned."""
    board = board_with({(1, 2): RED_MAN})
    legal = compute_moves(board, Color.RED).moves

    found = find_legal_move(Move(path=(Square(1, 2), Square(0, 1))), legal)
    assert found is not None
    assert found.promotes is True


def test_find_legal_move_rejects_wrong_captures() -> None:
    board = board_with({(5, 2): RED_MAN, (4, 3): BLACK_KING})
    legal = compute_moves(board, Color.RED).moves

    lying_about_rank = Move(
        path=(Square(5, 2), Square(3, 4)),
        captures=(CapturedPiece(Square(4, 3), PieceType.MAN, Color.BLACK),),
    )
    assert find_legal_move(lying_about_rank, legal) is None
    assert find_legal_move(Move(path=(Square(5, 2), Square(2, 5))), legal) is None
