"""Requests and Response models exchanged with a presentation layer"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.pieces import FEN_TO_PIECE, PieceType
from src.chess.position import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Status

PROMOTION_CHARACTERS = {"q", "r", "b", "n"}


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    file_character, rank_character = value[0], value[1]
    num_rows, num_columns = BOARD_DIMENSIONS
    if not file_character.isalpha():
        return False
    if not (rank_character.isascii() and rank_character.isdigit()):
        return False
    if not (ord("a") <= ord(file_character) < ord("a") + num_columns):
        return False
    return 1 <= int(rank_character) <= num_rows


# --- REQUEST MODELS ---
class LegalMovesRequest(BaseModel):
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class MoveRequest(BaseModel):
    from_square: str
    to_square: str
    promote_to: Optional[str] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[str]) -> Optional[str]:
        """Single letter, any case: q, r, b or n"""
        if value is None:
            return value

        if value.lower() not in PROMOTION_CHARACTERS:
            raise InvalidRequestError(
                f"Cannot promote into {value!r}. Pick one of {', '.join(sorted(PROMOTION_CHARACTERS))}."
            )
        return value.lower()

    def promotion_type(self) -> Optional[PieceType]:
        return FEN_TO_PIECE[self.promote_to] if self.promote_to else None


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    status: Status
    white_to_move: bool
    in_check: bool
    game_over: bool
    # one string per rank, 8th rank first. FEN letters for pieces, '.' for empty squares
    board: list[str]
    move_history: list[str]
    history_lines: list[str]


class LegalMovesResponse(BaseModel):
    square: str
    legal_moves: list[str]
