"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.fen import EMPTY_POSITION
from src.chess.game import Game
from src.chess.pieces import Piece
from src.chess.position import Position

sq = Position.from_algebraic


@pytest.fixture
def started_game() -> Game:
    """A game in the standard starting position, white to move."""
    game = Game()
    game.new_game()
    return game


@pytest.fixture
def kings_only_board() -> Board:
    """
    Create a board with only kings on their canonical starting squares.
    Because legality involves inferring if a king is under attack, most positions want both kings on the board.
    """
    board = Board.from_fen(EMPTY_POSITION)
    board.set(sq("e1"), Piece.from_fen("K"))
    board.set(sq("e8"), Piece.from_fen("k"))
    return board


@pytest.fixture
def board_with_pieces() -> Callable[..., Board]:
    """Call the inner function with square names mapped to FEN letters, ex. board_with_pieces(d4="Q", e8="k")"""

    def _create_board(**pieces: str) -> Board:
        board = Board()
        for square_name, fen_char in pieces.items():
            board.set(sq(square_name), Piece.from_fen(fen_char))
        return board

    return _create_board
