"""Orchestration of communication from a presentation layer to the chess engine (and the reverse direction)."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
)
from src.chess.game import Game
from src.chess.notation import format_history
from src.chess.position import Position
from src.core.exceptions import GameStateError
from src.services.computer_player import ComputerPlayer

logger = logging.getLogger(__name__)


class ChessService:
    """
    Owns exactly one Game (no global game instance). Whoever needs the game holds the service or the game itself.
    """

    def __init__(
        self, game: Optional[Game] = None, computer: Optional[ComputerPlayer] = None
    ) -> None:
        self.game = game if game is not None else Game()
        self.computer = computer

    # -- presentation layer logic ---
    def new_game(self) -> GameResponse:
        """Start (or restart) a game from the standard starting position."""
        self.game.new_game()
        logger.info("New game started")
        return self._create_game_response()

    def get_game_state(self) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by a frontend after every action to redraw the board, history and status line.
        """
        return self._create_game_response()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destination squares (algebraic, sorted) for the piece on the requested square."""
        square = Position.from_algebraic(request.square)
        destinations = self.game.legal_moves_from(square)
        return LegalMovesResponse(
            square=request.square,
            legal_moves=sorted(destination.to_algebraic() for destination in destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. IllegalMoveError propagates, the game is then unchanged."""
        self.game.move(
            Position.from_algebraic(request.from_square),
            Position.from_algebraic(request.to_square),
            request.promotion_type(),
        )
        return self._create_game_response()

    def play_computer_move(self) -> GameResponse:
        """Let the computer player make a move for the side to move."""
        if self.computer is None:
            raise GameStateError("No computer player configured for this game.")
        if self.game.is_game_over():
            raise GameStateError(f"Game is over. status: {self.game.status}")

        self.computer.play(self.game)
        return self._create_game_response()

    # -- Internal helpers --
    def _create_game_response(self) -> GameResponse:
        """Snapshot of everything a frontend needs to draw the game."""
        history = self.game.history
        return GameResponse(
            status=self.game.status,
            white_to_move=self.game.white_to_move,
            in_check=self.game.in_check(self.game.color_to_move),
            game_over=self.game.is_game_over(),
            board=self.game.board.rows(),
            move_history=history,
            history_lines=format_history(history, self.game.white_started),
        )
