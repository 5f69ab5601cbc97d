# chess_grader/core/move_classifier.py
"""
Contains the central classification engine of the package.

This module provides the `MoveClassifier`, a pure component that runs a
classification pipeline by executing a chain of composable `Heuristic` objects.
This "Chain of Responsibility" pattern keeps each rule isolated; the order of
the chain is the tie-break policy when several rules would match.
"""
import math
from typing import Iterable, List, Optional, TYPE_CHECKING

import structlog

from chess_grader.config.settings import settings as app_settings
from chess_grader.core.heuristics import (BookMoveHeuristic,
                                          BrilliantMoveHeuristic,
                                          CpLossLadderHeuristic,
                                          ForcedMoveHeuristic,
                                          MissedTacticHeuristic)
from chess_grader.core.win_probability import calculate_move_accuracy
from chess_grader.exceptions import InvalidMoveInputError
from chess_grader.types import EnhancedMoveQuality
from chess_grader.utils import metrics

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings
    from chess_grader.types import Heuristic, MoveClassificationContext

logger = structlog.get_logger(__name__)


def _validate_context(context: "MoveClassificationContext") -> None:
    if not math.isfinite(context.cp_loss):
        raise InvalidMoveInputError(f"cp_loss must be finite, got {context.cp_loss}.")
    for name in ("win_prob_before", "win_prob_after"):
        value = getattr(context, name)
        if math.isnan(value) or not 0.0 <= value <= 100.0:
            raise InvalidMoveInputError(f"{name} must be within [0, 100], got {value}.")


class MoveClassifier:
    """
    A stateless classifier that runs a chain of heuristics to classify a single chess move.

    The chain is ordered by priority: forced, book, brilliant, miss, and finally
    the CPL ladder, which always assigns a label.
    """

    def __init__(self, settings: Optional["AnalysisSettings"] = None):
        """Initializes the classifier and defines the ordered heuristic chain."""
        self._settings = settings or app_settings.analysis_settings
        self._heuristic_chain: List["Heuristic"] = [
            ForcedMoveHeuristic(),                     # 1. Only legal move
            BookMoveHeuristic(),                       # 2. Opening theory
            BrilliantMoveHeuristic(self._settings),    # 3. Sound sacrifice that gains
            MissedTacticHeuristic(),                   # 4. Tactic available, none played
            CpLossLadderHeuristic(self._settings),     # 5. Baseline ladder
        ]

    def classify_move(self, context: "MoveClassificationContext") -> EnhancedMoveQuality:
        """
        Runs the full classification pipeline for a single move.

        Args:
            context: A `MoveClassificationContext` holding the move's analysis inputs.

        Returns:
            A new `EnhancedMoveQuality` carrying exactly one quality label.

        Raises:
            InvalidMoveInputError: If the CPL is not finite or a probability is out of range.
        """
        _validate_context(context)

        # A move that improved on the reference line cannot be less than perfect.
        if context.cp_loss < 0:
            accuracy = 100.0
        else:
            accuracy = calculate_move_accuracy(context.win_prob_before, context.win_prob_after, self._settings)

        current_result = EnhancedMoveQuality(
            quality=None,
            accuracy=accuracy,
            cp_loss=context.cp_loss,
            win_probability_loss=max(0.0, context.win_prob_before - context.win_prob_after),
            is_theoretical=context.is_theoretical,
            is_critical=context.is_critical,
            tactics_missed=tuple(context.tactics_missed),
            tactics_executed=tuple(context.tactics_executed),
        )

        for heuristic in self._heuristic_chain:
            current_result = heuristic.apply(context, current_result)

        metrics.MOVES_CLASSIFIED_TOTAL.labels(quality=current_result.quality.value).inc()
        logger.debug("Move classified.", quality=current_result.quality.value,
                     cp_loss=context.cp_loss, accuracy=round(accuracy, 2))
        return current_result

    def classify_moves(self, contexts: Iterable["MoveClassificationContext"]) -> List[EnhancedMoveQuality]:
        """Classifies a sequence of moves, preserving ply order."""
        return [self.classify_move(context) for context in contexts]
