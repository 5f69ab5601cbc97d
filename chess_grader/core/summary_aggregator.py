# chess_grader/core/summary_aggregator.py
"""
Provides a pure function to create a game-level score.

This module contains the business logic for all game-wide statistical
aggregations. It folds the ordered list of classified moves into side-by-side
statistics (accuracy, CPL totals, quality counts, tactics), two game-level
indices (complexity and sharpness) and an estimated rating per player.
"""

import math
import statistics
from collections import Counter
from typing import Optional, Sequence, TYPE_CHECKING

import structlog

from chess_grader.config.settings import settings as app_settings
from chess_grader.core.quality_info import ENHANCED_QUALITY_INFO
from chess_grader.core.win_probability import estimate_rating, rating_category
from chess_grader.exceptions import InvalidMoveSequenceError
from chess_grader.types import GameScore, RatingEstimate, SideScore
from chess_grader.utils import metrics

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings
    from chess_grader.types import EnhancedMoveQuality

logger = structlog.get_logger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """Rounds half away from zero for positive values (2.5 -> 3, 0.25 -> 0.3 at one digit)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _aggregate_side(moves: Sequence["EnhancedMoveQuality"]) -> SideScore:
    """
    Aggregates the moves of one player.

    Improvements (negative CPL) are never summed, so they cannot offset
    blunders in the CPL total.
    """
    if not moves:
        return SideScore.empty()

    accuracy = statistics.fmean(m.accuracy for m in moves)
    quality_score = statistics.fmean(ENHANCED_QUALITY_INFO[m.quality].weight for m in moves)
    return SideScore(
        accuracy=round_half_up(accuracy, 1),
        cp_loss=int(round_half_up(sum(max(0.0, m.cp_loss) for m in moves))),
        move_count=len(moves),
        move_counts=dict(Counter(m.quality for m in moves)),
        tactics_executed=sum(len(m.tactics_executed) for m in moves),
        tactics_missed=sum(len(m.tactics_missed) for m in moves),
        quality_score=round_half_up(quality_score, 1),
    )


def calculate_game_score(
    moves: Sequence["EnhancedMoveQuality"],
    total_moves: Optional[int] = None,
    settings: Optional["AnalysisSettings"] = None,
) -> GameScore:
    """
    Aggregates a game's classified moves into a `GameScore`.

    Moves are partitioned by index parity: even indices are White's, odd
    indices Black's. The list must be gapless and in ply order.

    Args:
        moves: One `EnhancedMoveQuality` per half-move, in ply order.
        total_moves: The half-move count used to normalise complexity and
                     sharpness. Defaults to `len(moves)`.
        settings: Optional analysis settings; the package defaults are used if omitted.

    Returns:
        The game score. An empty move list yields `GameScore.empty()`.

    Raises:
        InvalidMoveSequenceError: If `total_moves` is not positive or is smaller
                                  than the number of supplied moves.
    """
    settings = settings or app_settings.analysis_settings
    if not moves:
        return GameScore.empty(floor_rating=settings.rating.floor_rating)

    if total_moves is None:
        total_moves = len(moves)
    if total_moves <= 0 or total_moves < len(moves):
        raise InvalidMoveSequenceError(
            f"total_moves must be at least the number of moves ({len(moves)}), got {total_moves}."
        )
    if any(m.quality is None for m in moves):
        raise InvalidMoveSequenceError("Every move must be classified before the game can be scored.")

    white = _aggregate_side(moves[0::2])
    black = _aggregate_side(moves[1::2])

    # Ratings are read from the unrounded means.
    white_accuracy = statistics.fmean(m.accuracy for m in moves[0::2])
    black_accuracy = statistics.fmean(m.accuracy for m in moves[1::2]) if len(moves) > 1 else 0.0
    white_rating = estimate_rating(white_accuracy, settings)
    black_rating = estimate_rating(black_accuracy, settings)

    scales = settings.aggregation
    tactics_total = sum(len(m.tactics_executed) for m in moves)
    critical_moments = sum(1 for m in moves if m.is_critical)
    complexity = min(100.0, scales.complexity_scale * tactics_total / total_moves)
    sharpness = min(100.0, scales.sharpness_scale * critical_moments / total_moves)

    score = GameScore(
        white=white,
        black=black,
        overall_accuracy=round_half_up((white_accuracy + black_accuracy) / 2, 1),
        complexity=int(round_half_up(complexity)),
        sharpness=int(round_half_up(sharpness)),
        rating=RatingEstimate(
            white=white_rating,
            black=black_rating,
            category=rating_category(white_rating, black_rating, settings),
        ),
        total_moves=total_moves,
    )
    metrics.GAMES_SCORED_TOTAL.inc()
    logger.debug("Game scored.", total_moves=total_moves, white_accuracy=white.accuracy,
                 black_accuracy=black.accuracy, category=score.rating.category.value)
    return score
