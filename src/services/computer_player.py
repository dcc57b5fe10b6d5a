"""
Computer controlled side.

Not part of the rules engine: it only uses the public surface of Game
(`white_to_move`, `board`, `legal_moves_from`, `is_promotion`, `move`), exactly like a human player's UI would.

Levels
* 1: pick any legal move at random
* 2: greedy scoring of every legal move (no search!), then pick at random among the near-best ones
* anything else: same as level 1
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from src.chess.game import Game
from src.chess.pieces import Color, PieceType
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.config import SETTINGS

logger = logging.getLogger(__name__)

# --- SCORING WEIGHTS (level 2) ---
CAPTURE_WEIGHT = 2.0
PROMOTION_BONUS = 9000.0
CENTER_WEIGHT = 10.0
MOBILITY_WEIGHT = 3.0
MAX_JITTER = 5.0
# only the best few moves are considered, and only if they score close enough to the best one
TOP_CANDIDATES = 8
SCORE_MARGIN = 50.0


@dataclass(frozen=True)
class CandidateMove:
    from_square: Position
    to_square: Position


@dataclass(frozen=True)
class ScoredMove:
    move: CandidateMove
    score: float


def center_bonus(square: Position) -> int:
    """15 for the four central squares, 5 for the ring around them, 0 elsewhere"""
    row, column = square.row, square.column
    if row in (3, 4) and column in (3, 4):
        return 15
    if 2 <= row <= 5 and 2 <= column <= 5:
        return 5
    return 0


class ComputerPlayer:
    def __init__(
        self, level: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.level = level if level is not None else SETTINGS.computer_level
        self.rng = rng if rng is not None else random.Random(SETTINGS.computer_seed)

    def collect_legal_moves(self, game: Game) -> list[CandidateMove]:
        """Every legal (from, to) pair of the side to move, scanning the board square by square"""
        color = Color.WHITE if game.white_to_move else Color.BLACK
        board = game.board
        moves: list[CandidateMove] = []
        for row in range(BOARD_DIMENSIONS[0]):
            for column in range(BOARD_DIMENSIONS[1]):
                from_square = Position(row, column)
                piece = board.get(from_square)
                if piece is None or piece.color != color:
                    continue
                for to_square in sorted(
                    game.legal_moves_from(from_square),
                    key=lambda sq: (sq.row, sq.column),
                ):
                    moves.append(CandidateMove(from_square, to_square))
        return moves

    def choose_move(self, game: Game) -> Optional[CandidateMove]:
        """None if the side to move has no legal move (game over)"""
        moves = self.collect_legal_moves(game)
        if not moves:
            return None

        if self.level == 2:
            choice = self._pick_greedy(game, moves)
        else:
            choice = self.rng.choice(moves)
        logger.debug(
            "level %s picked %s%s out of %d moves",
            self.level,
            choice.from_square.to_algebraic(),
            choice.to_square.to_algebraic(),
            len(moves),
        )
        return choice

    def play(self, game: Game) -> Optional[CandidateMove]:
        """Choose a move and make it on the game. Pawns always promote to a queen."""
        choice = self.choose_move(game)
        if choice is None:
            return None

        promotion = (
            PieceType.QUEEN
            if game.is_promotion(choice.from_square, choice.to_square)
            else None
        )
        game.move(choice.from_square, choice.to_square, promotion)
        return choice

    def score_move(self, game: Game, move: CandidateMove) -> float:
        """Heuristic value of a single move. Higher is better."""
        board = game.board
        captured = board.get(move.to_square)

        score = 0.0
        if captured is not None:
            score += captured.value * CAPTURE_WEIGHT

        if game.is_promotion(move.from_square, move.to_square):
            score += PROMOTION_BONUS

        score += center_bonus(move.to_square) * CENTER_WEIGHT

        mobility = len(game.legal_moves_from(move.from_square))
        score += mobility * MOBILITY_WEIGHT

        score += self.rng.random() * MAX_JITTER
        return score

    def _pick_greedy(self, game: Game, moves: list[CandidateMove]) -> CandidateMove:
        scored = sorted(
            (ScoredMove(move, self.score_move(game, move)) for move in moves),
            key=lambda scored_move: scored_move.score,
            reverse=True,
        )
        best_score = scored[0].score
        top_candidates = [
            scored_move
            for scored_move in scored[:TOP_CANDIDATES]
            if scored_move.score >= best_score - SCORE_MARGIN
        ]
        return self.rng.choice(top_candidates).move
