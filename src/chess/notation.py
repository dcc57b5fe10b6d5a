"""
Human readable move notation for the move history.

Long algebraic style, one token per move:
* the piece symbol (left out for pawns)
* the square the piece came from
* '-' for a quiet move, 'x' for a capture
* the square the piece went to
* '=Q' (etc.) when a pawn promotes
* '+' when the move gives check, '#' when it is checkmate

ex) "e2-e4", "Ng1-f3", "Qd8-h4#", "e7xd8=N+"
"""

from typing import Optional

from src.chess.moves import Move
from src.chess.pieces import PIECE_TO_FEN, Piece, PieceType


def move_notation(
    move: Move,
    moving_piece: Piece,
    captured: Optional[Piece],
    gives_check: bool = False,
    is_checkmate: bool = False,
) -> str:
    piece_char = "" if moving_piece.type == PieceType.PAWN else moving_piece.symbol
    separator = "x" if captured is not None else "-"
    promotion = f"={PIECE_TO_FEN[move.promote_to].upper()}" if move.promote_to else ""

    suffix = ""
    if is_checkmate:
        suffix = "#"
    elif gives_check:
        suffix = "+"

    return (
        f"{piece_char}{move.from_square.to_algebraic()}{separator}"
        f"{move.to_square.to_algebraic()}{promotion}{suffix}"
    )


def format_history(history: list[str], white_started: bool = True) -> list[str]:
    """
    Display helper: group the history two moves per line, "N. white black".
    The last line only holds white's move if black has not answered yet.
    A game set up with black to move opens with "1. ... <black move>".
    """
    moves = history if white_started or not history else ["...", *history]
    return [
        " ".join([f"{idx // 2 + 1}.", *moves[idx : idx + 2]])
        for idx in range(0, len(moves), 2)
    ]
