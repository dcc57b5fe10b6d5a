"""The Game board: storage of the `position` (in chess: the configuration of pieces on the board). No knowledge of turns or history."""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.fen import STARTING_POSITION, parse_position, position_to_fen
from src.chess.moves import MOVEMENT_RULES, CandidateMovesFn, Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.position import BOARD_DIMENSIONS, Position


@dataclass
class Board:
    # sparse: empty squares are simply absent
    position: dict[Position, Piece] = field(default_factory=dict)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string (see fen.py)."""
        return cls(parse_position(fen_str))

    @classmethod
    def standard(cls) -> Self:
        board = cls()
        board.reset_to_standard_start()
        return board

    def to_fen(self) -> str:
        return position_to_fen(self.position)

    # --- STORAGE PRIMITIVES ---
    def get(self, square: Position) -> Optional[Piece]:
        return self.position.get(square)

    def set(self, square: Position, piece: Optional[Piece]) -> None:
        """Replace the occupant of the square. Passing None empties it."""
        if piece is None:
            self.position.pop(square, None)
        else:
            self.position[square] = piece

    def reset_to_standard_start(self) -> None:
        self.position = parse_position(STARTING_POSITION)

    def copy(self) -> Self:
        # pieces are immutable, copying the mapping is enough
        return type(self)(dict(self.position))

    # --- QUERIES ---
    def locate_color(self, color: Color) -> list[Position]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def king_square(self, color: Color) -> Optional[Position]:
        """None if that king is not on the board (only possible on externally constructed boards)"""
        return next(
            (
                square
                for square, piece in self.position.items()
                if piece == Piece(PieceType.KING, color)
            ),
            None,
        )

    def rows(self) -> list[str]:
        """Text snapshot, one string per row (row 0 = 8th rank), FEN letters for pieces and '.' for empty squares"""
        return [
            "".join(
                piece.to_fen() if (piece := self.get(Position(row, column))) else "."
                for column in range(BOARD_DIMENSIONS[1])
            )
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def generate_candidate_moves(self, color: Color) -> list[Move]:
        """
        Before knowing the set of legal moves, we use raycasting to find candidate moves, which will later be tested for legality
        (making sure it does not put yourself in check.)
        """
        candidate_moves: list[Move] = []
        for starting_square in self.locate_color(color):
            piece_type = self.position[starting_square].type
            movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece_type]
            candidate_moves.extend(movement_rule(starting_square, self))
        return candidate_moves

    def is_attacked(self, square: Position, by_color: Color) -> bool:
        """
        Scan all pseudo-legal moves of the attacking color for the square.

        NOTE: These moves are not filtered for legality. A pinned piece still gives check.
        """
        return any(
            move.to_square == square
            for move in self.generate_candidate_moves(by_color)
        )

    def is_check(self, color: Color) -> bool:
        """Is the king of the given color under attack? (False if there is no such king)"""
        king_square = self.king_square(color)
        if king_square is None:
            return False
        return self.is_attacked(king_square, color.opponent)

    # --- UPDATES ---
    def move_piece(self, move: Move) -> Optional[Piece]:
        """
        Update the position on the board. Returns the captured piece (if any).
        If the move carries a promotion, the piece arriving at the target square is of the promoted type.
        """
        piece_that_moved = self.position.pop(move.from_square)
        if move.promote_to is not None:
            piece_that_moved = piece_that_moved.promote_to(move.promote_to)
        captured = self.position.get(move.to_square)
        self.position[move.to_square] = piece_that_moved
        return captured
