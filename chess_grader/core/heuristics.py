# chess_grader/core/heuristics.py
"""
Contains a collection of concrete `Heuristic` implementations.

Each heuristic is a single, composable rule in the move classification
pipeline, adhering to the `Heuristic` protocol defined in `types.py`. The
classifier runs them in priority order and the first heuristic that assigns a
quality wins; every heuristic therefore leaves an already-classified result
untouched.
"""

from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from chess_grader.config.settings import settings as app_settings
from chess_grader.types import GamePhase, Heuristic, MoveQualityType

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings
    from chess_grader.types import EnhancedMoveQuality, MoveClassificationContext


class ForcedMoveHeuristic(Heuristic):
    """Labels the only legal move as 'Forced', whatever it cost."""
    def apply(
        self, context: "MoveClassificationContext", result: "EnhancedMoveQuality"
    ) -> "EnhancedMoveQuality":
        if result.quality is not None or not context.has_only_one_legal_move:
            return result
        return replace(result, quality=MoveQualityType.FORCED)


class BookMoveHeuristic(Heuristic):
    """Labels a theoretical move as 'Book' while the game is still in the opening."""
    def apply(
        self, context: "MoveClassificationContext", result: "EnhancedMoveQuality"
    ) -> "EnhancedMoveQuality":
        if result.quality is not None:
            return result
        if context.is_theoretical and context.phase == GamePhase.OPENING:
            return replace(result, quality=MoveQualityType.BOOK)
        return result


class BrilliantMoveHeuristic(Heuristic):
    """
    Identifies 'Brilliant' (!!) moves.

    A brilliant move improves the evaluation well beyond the expected best line.
    When the sacrifice gate is enabled it must also have given up a significant
    amount of material; the sacrificed amount is supplied by upstream analysis.
    """
    def __init__(self, settings: Optional["AnalysisSettings"] = None):
        self._criteria = (settings or app_settings.analysis_settings).brilliant_move

    def apply(
        self, context: "MoveClassificationContext", result: "EnhancedMoveQuality"
    ) -> "EnhancedMoveQuality":
        if result.quality is not None or context.cp_loss > self._criteria.max_cp_loss:
            return result
        if self._criteria.require_sacrifice and context.material_sacrificed < self._criteria.min_sacrifice_cp:
            return result
        return replace(result, quality=MoveQualityType.BRILLIANT)


class MissedTacticHeuristic(Heuristic):
    """Labels a move as a 'Miss' when a tactic was available and none was executed."""
    def apply(
        self, context: "MoveClassificationContext", result: "EnhancedMoveQuality"
    ) -> "EnhancedMoveQuality":
        if result.quality is not None:
            return result
        if context.tactics_missed and not context.tactics_executed:
            return replace(result, quality=MoveQualityType.MISS)
        return result


class CpLossLadderHeuristic(Heuristic):
    """
    The fallback heuristic that assigns a quality from CPL thresholds.

    It runs last and always assigns a label, so every move leaves the chain
    classified.
    """
    def __init__(self, settings: Optional["AnalysisSettings"] = None):
        self._thresholds = (settings or app_settings.analysis_settings).classification_thresholds

    def apply(
        self, context: "MoveClassificationContext", result: "EnhancedMoveQuality"
    ) -> "EnhancedMoveQuality":
        if result.quality is not None:
            return result

        cpl = context.cp_loss
        t = self._thresholds
        if cpl <= t.great:
            quality = MoveQualityType.GREAT
        elif cpl <= t.best:
            quality = MoveQualityType.BEST
        elif cpl <= t.excellent:
            quality = MoveQualityType.EXCELLENT
        elif cpl <= t.good:
            quality = MoveQualityType.GOOD
        elif cpl <= t.inaccuracy:
            quality = MoveQualityType.INACCURACY
        elif cpl <= t.mistake:
            quality = MoveQualityType.MISTAKE
        else:
            quality = MoveQualityType.BLUNDER

        return replace(result, quality=quality)
