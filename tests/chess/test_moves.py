"""Unit tests for /src/chess/moves.py"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.fen import EMPTY_POSITION
from src.chess.moves import (
    MOVEMENT_RULES,
    Color,
    Move,
    Piece,
    PieceType,
    Position,
    candidate_bishop_moves,
    candidate_king_moves,
    candidate_knight_moves,
    candidate_moves,
    candidate_pawn_moves,
    candidate_queen_moves,
    candidate_rook_moves,
    is_promotion_move,
    raycasting_move,
    single_step_move,
)
from src.chess.position import BOARD_DIMENSIONS

sq = Position.from_algebraic


def destinations(moves: list[Move]) -> set[str]:
    return {move.to_square.to_algebraic() for move in moves}


# -- MOVE CREATION, ENCODING/DECODING UCI NOTATION ---
@pytest.mark.parametrize(
    "uci_move, from_uci, to_uci",
    [
        ("e2e4", "e2", "e4"),
        ("a1a5", "a1", "a5"),
        ("d2e4", "d2", "e4"),
        ("g3a7", "g3", "a7"),
    ],
)
def test_creating_move_from_uci(uci_move: str, from_uci: str, to_uci: str) -> None:
    """Creating logic / parsing of UCI notation for the move should be <from_square><to_square>"""
    move = Move.from_uci(uci_move)
    assert move.from_square == sq(from_uci)
    assert move.to_square == sq(to_uci)
    assert move.promote_to is None
    assert move.to_uci() == uci_move


def test_creating_move_incl_promotion() -> None:
    """Creation logic including promotion"""
    move = Move.from_uci("e7e8q")
    assert move.from_square == sq("e7")
    assert move.to_square == sq("e8")
    assert move.promote_to == PieceType.QUEEN
    assert move.to_uci() == "e7e8q"


# --- GENERIC MOVEMENT RULES ---
def test_raycasting_move_empty_board() -> None:
    """On an empty board, movements should be unrestricted. Should only be restricted by board dimensions"""
    board = Board.from_fen("8/8/8/R7/8/8/8/8")
    starting_square = sq("a5")
    moves = raycasting_move(starting_square, board, [(0, 1), (0, -1)])
    assert len(moves) == BOARD_DIMENSIONS[1] - 1
    assert all(move.to_square.row == starting_square.row for move in moves)

    moves = raycasting_move(starting_square, board, [(1, 0), (-1, 0)])
    assert len(moves) == BOARD_DIMENSIONS[0] - 1
    assert all(move.to_square.column == starting_square.column for move in moves)


def test_raycasting_move_w_enemy_blocker() -> None:
    """
    When running into enemy piece, still include in list of moves (but nothing behind it)

    NOTE: The piece type does not matter here, only the color.
    """
    # white piece on d2 and black piece on d5
    board = Board.from_fen("/".join(["8", "8", "8", "3p4", "8", "8", "3P4", "8"]))
    moves = raycasting_move(sq("d2"), board, [(1, 0), (-1, 0)])
    assert destinations(moves) == {"d1", "d3", "d4", "d5"}

    # Similar test for diagonal moves. Enemy piece is placed on f4 (same diagonal as d2)
    board = Board.from_fen("/".join(["8", "8", "8", "8", "5p2", "8", "3P4", "8"]))
    diagonals = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
    moves = raycasting_move(sq("d2"), board, diagonals)
    assert destinations(moves) == {"c1", "e3", "f4", "c3", "b4", "a5", "e1"}


def test_raycasting_move_w_friendly_blocker() -> None:
    """When your own piece is blocking, do not include a move to that square in the move list"""
    board = Board.from_fen("/".join(["8", "8", "8", "3P4", "8", "8", "3P4", "8"]))
    moves = raycasting_move(sq("d2"), board, [(1, 0), (-1, 0)])
    assert destinations(moves) == {"d1", "d3", "d4"}


def test_raycasting_move_w_mixed_blockers() -> None:
    """Blockers of both your own pieces (cannot move past) as well as your opponent's pieces (capture first one in sight)."""
    # white pieces on a7 and a5, black piece on a1
    board = Board.from_fen("/".join(["8", "P7", "8", "P7", "8", "8", "8", "p7"]))
    moves = raycasting_move(sq("a5"), board, [(1, 0), (-1, 0)])
    assert destinations(moves) == {"a4", "a3", "a2", "a1", "a6"}


def test_single_step_in_bounds() -> None:
    board = Board.from_fen("8/8/8/8/3N4/8/8/8")
    moves = single_step_move(sq("d4"), board, [(-4, -2)])
    assert destinations(moves) == {"b8"}


def test_single_step_out_of_bounds() -> None:
    """Attempt to move your piece outside of the board: Should return empty list"""
    board = Board.from_fen("8/8/8/8/3N4/8/8/8")
    moves = single_step_move(sq("d4"), board, [(42, 23)])
    assert moves == []


def test_single_step_w_blockers() -> None:
    """Opponent's piece can be taken, your own piece cannot"""
    board = Board.from_fen("8/8/8/3pP3/3K4/8/8/8")
    moves = single_step_move(sq("d4"), board, [(-1, 0), (-1, 1)])
    assert destinations(moves) == {"d5"}


# --- PIECE SPECIFIC RULES ---
@pytest.mark.parametrize(
    "fen_char, square, expected_count",
    [
        ("N", "d4", 8),
        ("N", "a1", 2),
        ("N", "h8", 2),
        ("N", "b1", 3),
        ("B", "d4", 13),
        ("B", "a1", 7),
        ("R", "d4", 14),
        ("R", "h8", 14),
        ("Q", "d4", 27),
        ("Q", "a1", 21),
        ("K", "d4", 8),
        ("K", "a1", 3),
        ("K", "e1", 5),
    ],
)
def test_move_count_on_empty_board(
    fen_char: str,
    square: str,
    expected_count: int,
    board_with_pieces: Callable[..., Board],
) -> None:
    """A single piece on an otherwise empty board"""
    board = board_with_pieces(**{square: fen_char})
    assert len(candidate_moves(sq(square), board)) == expected_count


def test_knight_jumps_over_pieces() -> None:
    """Starting position: knights can move although they are surrounded"""
    board = Board.standard()
    assert destinations(candidate_knight_moves(sq("g1"), board)) == {"f3", "h3"}
    assert destinations(candidate_knight_moves(sq("b8"), board)) == {"a6", "c6"}


def test_sliding_pieces_blocked_in_starting_position() -> None:
    board = Board.standard()
    assert candidate_bishop_moves(sq("c1"), board) == []
    assert candidate_rook_moves(sq("a8"), board) == []
    assert candidate_queen_moves(sq("d1"), board) == []
    assert candidate_king_moves(sq("e8"), board) == []


def test_queen_combines_rook_and_bishop(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces(d4="Q", d6="p", f6="P", b2="p")
    queen = destinations(candidate_queen_moves(sq("d4"), board))
    rook = destinations(candidate_rook_moves(sq("d4"), board))
    bishop = destinations(candidate_bishop_moves(sq("d4"), board))
    assert queen == rook | bishop
    assert "d6" in queen and "d7" not in queen
    assert "f6" not in queen and "e5" in queen
    assert "b2" in queen and "a1" not in queen


def test_king_moves_capture_and_blocked(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces(e1="K", d2="p", f2="P")
    assert destinations(candidate_king_moves(sq("e1"), board)) == {"d1", "f1", "d2", "e2"}


# --- PAWNS ---
@pytest.mark.parametrize(
    "fen_char, square, expected",
    [
        ("P", "e2", {"e3", "e4"}),  # white double step from its starting rank
        ("P", "e3", {"e4"}),  # single step only once moved
        ("p", "e7", {"e6", "e5"}),  # black moves down the board
        ("p", "e6", {"e5"}),
        ("P", "a7", {"a8"}),  # reaching the final rank
    ],
)
def test_pawn_pushes(
    fen_char: str,
    square: str,
    expected: set[str],
    board_with_pieces: Callable[..., Board],
) -> None:
    board = board_with_pieces(**{square: fen_char})
    assert destinations(candidate_pawn_moves(sq(square), board)) == expected


def test_pawn_blocked_straight_ahead(board_with_pieces: Callable[..., Board]) -> None:
    """Pawns never capture straight ahead: an occupied square in front blocks both pushes"""
    board = board_with_pieces(e2="P", e3="p")
    assert candidate_pawn_moves(sq("e2"), board) == []


def test_pawn_double_step_blocked(board_with_pieces: Callable[..., Board]) -> None:
    """The destination of the double step must be empty as well"""
    board = board_with_pieces(e2="P", e4="n")
    assert destinations(candidate_pawn_moves(sq("e2"), board)) == {"e3"}


def test_pawn_captures_diagonally(board_with_pieces: Callable[..., Board]) -> None:
    """Only onto an opponent's piece; not onto an own piece and not onto an empty square"""
    board = board_with_pieces(e4="P", d5="p", f5="N")
    assert destinations(candidate_pawn_moves(sq("e4"), board)) == {"e5", "d5"}


def test_black_pawn_captures_downwards(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces(d5="p", c4="P", e4="P", d6="P")
    assert destinations(candidate_pawn_moves(sq("d5"), board)) == {"d4", "c4", "e4"}


def test_pawn_capture_on_edge_of_board(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces(a2="P", b3="p")
    assert destinations(candidate_pawn_moves(sq("a2"), board)) == {"a3", "a4", "b3"}


# -- STRATEGY PATTERN ---
def test_every_piece_type_has_a_movement_rule() -> None:
    assert set(MOVEMENT_RULES) == set(PieceType)


def test_candidate_moves_empty_square() -> None:
    assert candidate_moves(sq("d4"), Board.from_fen(EMPTY_POSITION)) == []


# -- PROMOTION --
@pytest.mark.parametrize(
    "piece, from_name, to_name, expected",
    [
        (Piece(PieceType.PAWN, Color.WHITE), "a7", "a8", True),
        (Piece(PieceType.PAWN, Color.WHITE), "b7", "a8", True),
        (Piece(PieceType.PAWN, Color.WHITE), "a6", "a7", False),
        (Piece(PieceType.PAWN, Color.BLACK), "h2", "h1", True),
        (Piece(PieceType.PAWN, Color.BLACK), "h3", "h2", False),
        (Piece(PieceType.ROOK, Color.WHITE), "a7", "a8", False),
    ],
)
def test_is_promotion_move(
    piece: Piece, from_name: str, to_name: str, expected: bool
) -> None:
    board = Board()
    board.set(sq(from_name), piece)
    assert is_promotion_move(sq(from_name), sq(to_name), board) is expected


def test_is_promotion_move_empty_square() -> None:
    assert not is_promotion_move(sq("a7"), sq("a8"), Board())
