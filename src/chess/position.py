"""
A square on the board, addressed by (row, column)

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Position:
    """
    Row 0 is the 8th rank (black's back rank), row 7 the 1st rank (white's back rank).
    Column 0 is the a-file.

    NOTE: Out of bounds positions can be created on purpose. The movement rules step off the board and then ask `is_within_bounds()`.
    """

    row: int
    column: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        column = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1:])
        return cls(row, column)

    def to_algebraic(self) -> str:
        return f"{chr(self.column + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.column < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_column: int) -> Position:
        return Position(self.row + d_row, self.column + d_column)
