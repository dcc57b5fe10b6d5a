"""
Parsing of the piece placement field of a FEN string.

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
Only the first field (the piece placement) is used here: the engine tracks the side to move itself and
knows nothing about castling rights, en passant squares or move clocks.

ex) The standard starting position reads
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
* ranks are separated by slashes, starting with the 8th rank (row 0) and ending with the 1st rank (row 7)
* each rank is read from the a-file to the h-file
* letters are pieces (capital letters for white, small letters for black)
* a digit denotes that many consecutive empty squares
"""

from src.chess.pieces import FEN_TO_PIECE, Piece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import InvalidFENError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[0])


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_rows, num_columns = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_rows:
        return False

    for rank_fen in rank_fens:
        column_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdigit():
                column_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                column_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if column_count != num_columns:
            return False
    return True


def parse_position(position: str) -> dict[Position, Piece]:
    """Occupied squares only. Raises InvalidFENError for anything that is not a proper placement string."""
    if not is_valid_position(position):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN placement: {position!r}")

    pieces: dict[Position, Piece] = {}
    for row, fen_one_rank in enumerate(position.split("/")):
        column = 0
        for character in fen_one_rank:
            if character.isalpha():
                # simple case: a letter directly denotes the piece that should be created
                pieces[Position(row, column)] = Piece.from_fen(character)
                column += 1
            else:
                # A number denotes the amount of empty squares after each other
                column += int(character)
    return pieces


def position_to_fen(pieces: dict[Position, Piece]) -> str:
    """Reverse operation. Ranks are separated by slashes."""
    return "/".join(_rank_to_fen(pieces, row) for row in range(BOARD_DIMENSIONS[0]))


def _rank_to_fen(pieces: dict[Position, Piece], row: int) -> str:
    """FEN string of a single rank"""
    fen_characters: list[str] = []
    empty_count = 0
    for column in range(BOARD_DIMENSIONS[1]):
        piece = pieces.get(Position(row, column))

        if piece is not None:
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        fen_characters.append(str(empty_count))
    return "".join(fen_characters)
