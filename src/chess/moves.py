"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.
(Pseudo-legal: respects the movement pattern and the occupancy of the board, but ignores whether your own king is left in check.)

Legality is checked later by Game
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, Color, Piece, PieceType
from src.chess.position import BOARD_DIMENSIONS, Position


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def get(self, square: Position) -> Optional[Piece]: ...


# (row, column) step
Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Position
    to_square: Position
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        from_sq = Position.from_algebraic(uci[:2])
        to_sq = Position.from_algebraic(uci[2:4])
        promote_to = FEN_TO_PIECE[uci[4]] if len(uci) == 5 else None
        return cls(from_sq, to_sq, promote_to)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_FEN[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Position, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    An opponent's piece ends the ray but is still included (capture), your own piece ends the ray and is excluded.
    """
    player_color = board.get(square).color

    moves: list[Move] = []
    for d_row, d_column in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_column)
            if not target_square.is_within_bounds():
                break

            occupant = board.get(target_square)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.color != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(
    square: Position, board: Board, deltas: list[Vector]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = board.get(square).color

    moves: list[Move] = []
    for d_row, d_column in deltas:
        target_square = square.offset(d_row, d_column)
        if not target_square.is_within_bounds():
            continue

        occupant = board.get(target_square)
        if occupant is None or occupant.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN the board (towards row 7)"""
    return -1 if color == Color.WHITE else 1


def pawn_starting_row(color: Color) -> int:
    return BOARD_DIMENSIONS[0] - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The farthest rank for a pawn of the given color"""
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[0] - 1


def candidate_pawn_moves(square: Position, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, but only onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (and only ever moves diagonally when taking)

    NOTE: No en passant.
    """
    player_color = board.get(square).color
    forward = pawn_direction(player_color)

    moves: list[Move] = []
    # Pawn pushes
    one_step = square.offset(forward, 0)
    if one_step.is_within_bounds() and board.get(one_step) is None:
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * forward, 0)
        if square.row == pawn_starting_row(player_color) and board.get(two_steps) is None:
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    for d_column in (-1, 1):
        target_square = square.offset(forward, d_column)
        if not target_square.is_within_bounds():
            continue

        occupant = board.get(target_square)
        if occupant is not None and occupant.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def candidate_knight_moves(square: Position, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_column| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Position, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_column|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Position, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Position, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: Position, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    NOTE: No castling.
    """
    return single_step_move(square, board, DIAGONALS + STRAIGHTS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(square: Position, board: Board) -> list[Move]:
    """Pseudo-legal moves of whatever piece stands on the square (nothing for an empty square)"""
    piece = board.get(square)
    if piece is None:
        return []
    return MOVEMENT_RULES[piece.type](square, board)


# -- PAWN PROMOTION MOVES --
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
]


def is_promotion_move(from_square: Position, to_square: Position, board: Board) -> bool:
    """check if the piece moving is a pawn and if it reaches the farthest rank for its color"""
    moving_piece = board.get(from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return to_square.row == promotion_row(moving_piece.color)
