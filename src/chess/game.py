"""
The Game class is the entrypoint into the domain layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game:
turn order, legality of moves (king safety), applying moves (incl. promotion), the move history and detecting the end of the game.

NOTE: A Game is not thread safe. Calls that mutate it (`new_game`, `move`) must be serialized by the caller.
"""

import logging
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import (
    PROMOTION_OPTIONS,
    Move,
    candidate_moves,
    is_promotion_move,
)
from src.chess.notation import move_notation
from src.chess.pieces import Color, PieceType
from src.chess.position import Position
from src.core.exceptions import IllegalMoveError, InvalidSquareError
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


class Game:
    # --- DOMAIN LAYER API ---

    def __init__(self) -> None:
        self._board = Board()
        self._white_to_move = True
        self._history: list[str] = []
        self._status = Status.NOT_STARTED

    @classmethod
    def from_fen(cls, position: str, white_to_move: bool = True) -> Self:
        """
        Start a game from a custom piece placement (the first field of a FEN string).
        The status is evaluated right away, so a constructed mate/stalemate is recognized before any move is made.
        """
        game = cls()
        game._start(Board.from_fen(position), white_to_move)
        return game

    def new_game(self) -> None:
        """(Re)start from the standard starting position with white to move. Can be called at any time."""
        self._start(Board.standard(), white_to_move=True)

    # --- ACCESSORS ---
    @property
    def white_to_move(self) -> bool:
        return self._white_to_move

    @property
    def color_to_move(self) -> Color:
        return Color.WHITE if self._white_to_move else Color.BLACK

    @property
    def board(self) -> Board:
        """A copy: changing it does not affect the game."""
        return self._board.copy()

    @property
    def history(self) -> list[str]:
        return list(self._history)

    @property
    def white_started(self) -> bool:
        """False for a game set up with black to move (turns strictly alternate from there)"""
        return self._white_to_move == (len(self._history) % 2 == 0)

    @property
    def status(self) -> Status:
        return self._status

    @property
    def winner(self) -> Optional[Color]:
        """
        For now only works for checkmate.
        Given we know it is checkmate, the player who is to move just got mated and the opponent must be the winner
        """
        if self._status != Status.CHECKMATE:
            return None
        return self.color_to_move.opponent

    # --- QUERIES ---
    def legal_moves_from(self, square: Position) -> set[Position]:
        """
        Destination squares for the piece standing on the square.
        ----

        ----
        Empty set (not an error) if the square is empty, holds a piece of the side not to move,
        or the piece simply has no legal move (pinned / cannot help against a check).
        """
        self._assert_on_board(square)
        piece = self._board.get(square)
        if piece is None or piece.color != self.color_to_move:
            return set()
        return {move.to_square for move in self._legal_moves_from(self._board, square)}

    def legal_moves(self) -> list[Move]:
        """
        All legal moves of the side to move.
        A pawn push to the promotion rank is listed once for every piece type the pawn can promote into.
        """
        legal_moves: list[Move] = []
        for move in self._generate_legal_moves(self._board, self.color_to_move):
            if is_promotion_move(move.from_square, move.to_square, self._board):
                legal_moves.extend(self._expand_pawn_promotion_moves(move))
            else:
                legal_moves.append(move)
        return legal_moves

    def is_promotion(self, from_square: Position, to_square: Position) -> bool:
        """True iff a pawn stands on from_square and to_square is on its farthest rank."""
        self._assert_on_board(from_square)
        self._assert_on_board(to_square)
        return is_promotion_move(from_square, to_square, self._board)

    def in_check(self, color: Color) -> bool:
        return self._board.is_check(color)

    def is_game_over(self) -> bool:
        """The side to move has no legal move left (checkmate or stalemate)."""
        return self._status in (Status.CHECKMATE, Status.STALEMATE)

    def is_checkmate(self) -> bool:
        return self._status == Status.CHECKMATE

    def is_stalemate(self) -> bool:
        return self._status == Status.STALEMATE

    # --- MUTATION ---
    def move(
        self,
        from_square: Position,
        to_square: Position,
        promotion: Optional[PieceType] = None,
    ) -> None:
        """
        Attempt to make a move
        -----

        1. check the move is legal (else IllegalMoveError, nothing changes)
        2. make the move on a copy of the board (capture and promotion included)
        3. work out the new game status and the notation of the move
        4. commit: board, history, turn and status all change together
        """
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            raise IllegalMoveError(
                f"Move not allowed: {from_square} -> {to_square} is not on the board."
            )

        if to_square not in self.legal_moves_from(from_square):
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
            )

        promote_to = self._promotion_for(from_square, to_square, promotion)
        new_move = Move(from_square, to_square, promote_to)
        player_color = self.color_to_move
        next_color = player_color.opponent

        board_after = self._board.copy()
        moving_piece = board_after.get(from_square)
        captured = board_after.move_piece(new_move)
        status_after = self._evaluate_status(board_after, next_color)
        notation = move_notation(
            new_move,
            moving_piece,
            captured,
            gives_check=board_after.is_check(next_color),
            is_checkmate=status_after == Status.CHECKMATE,
        )

        self._board = board_after
        self._history.append(notation)
        self._white_to_move = next_color == Color.WHITE
        self._change_status(status_after)
        logger.debug("%s played %s", player_color.name.lower(), notation)

    # -- PRIVATE HELPERS ---
    def _start(self, board: Board, white_to_move: bool) -> None:
        self._board = board
        self._white_to_move = white_to_move
        self._history = []
        self._change_status(self._evaluate_status(board, self.color_to_move))

    def _assert_on_board(self, square: Position) -> None:
        if not square.is_within_bounds():
            raise InvalidSquareError(f"Square {square} is not on the board.")

    def _change_status(self, new_status: Status) -> None:
        if new_status in (Status.CHECKMATE, Status.STALEMATE):
            logger.info(
                "Game over: %s (%s to move)", new_status, self.color_to_move.name.lower()
            )
        self._status = new_status

    def _promotion_for(
        self,
        from_square: Position,
        to_square: Position,
        promotion: Optional[PieceType],
    ) -> Optional[PieceType]:
        """Piece type the pawn turns into: queen unless told otherwise. None if the move is no promotion at all."""
        if not is_promotion_move(from_square, to_square, self._board):
            return None
        promote_to = promotion or PieceType.QUEEN
        if promote_to not in PROMOTION_OPTIONS:
            raise IllegalMoveError(f"Cannot promote a pawn into {promote_to!r}.")
        return promote_to

    # -- LEGAL MOVES HELPERS ---
    def _legal_moves_from(self, board: Board, square: Position) -> list[Move]:
        """keep those candidate moves that do not put (or leave) you in check"""
        return [
            move
            for move in candidate_moves(square, board)
            if not self._is_putting_yourself_in_check(board, move)
        ]

    def _generate_legal_moves(self, board: Board, color: Color) -> list[Move]:
        legal_moves: list[Move] = []
        for square in board.locate_color(color):
            legal_moves.extend(self._legal_moves_from(board, square))
        return legal_moves

    def _is_putting_yourself_in_check(self, board: Board, move: Move) -> bool:
        """Return True if the move puts you in check

        plan:
        1. Copy the board
        2. make the candidate move
        3. determine if king is in check on the new board
        (the copy is thrown away, the board passed in never changes)
        """
        player_color = board.get(move.from_square).color
        scratch_board = board.copy()
        scratch_board.move_piece(move)
        return scratch_board.is_check(player_color)

    def _expand_pawn_promotion_moves(self, pawn_push: Move) -> list[Move]:
        """Create multiple legal moves --> One for every piece type the pawn can promote into."""
        return [
            Move(pawn_push.from_square, pawn_push.to_square, promote_to=piece_type)
            for piece_type in PROMOTION_OPTIONS
        ]

    # --- CHECKS FOR ENDING THE GAME ---
    def _has_legal_move(self, board: Board, color: Color) -> bool:
        return any(
            self._legal_moves_from(board, square) for square in board.locate_color(color)
        )

    def _evaluate_status(self, board: Board, color: Color) -> Status:
        """Status of the game when it is `color`'s turn on the given board"""
        if self._has_legal_move(board, color):
            return Status.IN_PROGRESS
        if board.is_check(color):
            return Status.CHECKMATE
        return Status.STALEMATE

