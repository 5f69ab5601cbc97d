# chess_grader/grader.py
"""
A facade that wires the evaluator, classifier and aggregator together.

`GameGrader` is the entry point for callers that want a whole game graded in
one call. It owns no mutable state: every method reads its inputs and returns
fresh value objects, so a single instance can be shared across threads.
"""

from typing import Iterable, List, Optional, Sequence, TYPE_CHECKING

import chess
import chess.pgn
import structlog

from chess_grader.config.settings import settings as app_settings
from chess_grader.core.key_moments import find_key_moments
from chess_grader.core.move_classifier import MoveClassifier
from chess_grader.core.position_evaluator import PositionEvaluator
from chess_grader.core.summary_aggregator import calculate_game_score
from chess_grader.exceptions import RulesEngineError
from chess_grader.types import GradedGame
from chess_grader.utils.logging_config import game_log_context

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings
    from chess_grader.types import (EnhancedMoveQuality, GameScore,
                                    MoveClassificationContext, PositionEvaluation)

logger = structlog.get_logger(__name__)


class GameGrader:
    """Grades positions, moves and whole games."""

    def __init__(
        self,
        evaluator: PositionEvaluator,
        classifier: MoveClassifier,
        settings: Optional["AnalysisSettings"] = None,
    ):
        self._evaluator = evaluator
        self._classifier = classifier
        self._settings = settings or app_settings.analysis_settings

    def evaluate(self, position) -> "PositionEvaluation":
        """Evaluates a single position (a `chess.Board` or FEN string)."""
        return self._evaluator.evaluate(position)

    def evaluate_mainline(self, game: chess.pgn.Game) -> List["PositionEvaluation"]:
        """
        Evaluates the starting position and every position reached along a game's main line.

        Args:
            game: A game loaded by `python-chess`; a custom starting FEN is honoured.

        Returns:
            One `PositionEvaluation` per position, starting position first.

        Raises:
            RulesEngineError: If the main line contains an illegal move.
        """
        # game.board() honours a FEN header; a plain chess.Board() would not.
        board = game.board()
        evaluations = [self._evaluator.evaluate(board)]
        for move in game.mainline_moves():
            # push() does not verify legality.
            if not board.is_legal(move):
                ply = len(board.move_stack)
                logger.warning("Illegal move in game main line.", ply=ply, move=move.uci(), fen=board.fen())
                raise RulesEngineError(f"Illegal move {move.uci()} in main line at ply {ply}.")
            board.push(move)
            evaluations.append(self._evaluator.evaluate(board))
        logger.info("Main line evaluated.", positions=len(evaluations))
        return evaluations

    def classify(self, context: "MoveClassificationContext") -> "EnhancedMoveQuality":
        return self._classifier.classify_move(context)

    def classify_game(self, contexts: Iterable["MoveClassificationContext"]) -> List["EnhancedMoveQuality"]:
        return self._classifier.classify_moves(contexts)

    def score_game(
        self, moves: Sequence["EnhancedMoveQuality"], total_moves: Optional[int] = None
    ) -> "GameScore":
        return calculate_game_score(moves, total_moves, self._settings)

    def grade_game(
        self,
        contexts: Sequence["MoveClassificationContext"],
        total_moves: Optional[int] = None,
        game_id: Optional[str] = None,
    ) -> GradedGame:
        """
        Classifies every move of a game, then scores it and extracts its key moments.

        Args:
            contexts: One classifier input per half-move, White first, in ply order.
            total_moves: Half-move count for normalisation; defaults to `len(contexts)`.
            game_id: Optional identifier attached to every log event of this run.

        Returns:
            A `GradedGame` holding the classified moves, the score and the key moments.
        """
        with game_log_context(game_id=game_id):
            moves = self.classify_game(contexts)
            score = self.score_game(moves, total_moves)
            key_moments = find_key_moments(moves)
            logger.info(
                "Game graded.",
                moves=len(moves),
                white_accuracy=score.white.accuracy,
                black_accuracy=score.black.accuracy,
                key_moments=len(key_moments),
            )
        return GradedGame(moves=tuple(moves), score=score, key_moments=tuple(key_moments))
