# chess_grader/core/win_probability.py
"""
Converts centipawn evaluations into win probabilities, accuracies and ratings.

All functions here are pure. The win-probability transform is a logistic curve
centred on 0 cp (50%); the accuracy formula maps a drop in win probability onto
a 0-100 scale; the rating table is a simple step function of accuracy.
"""

import math
from typing import Optional, TYPE_CHECKING

from chess_grader.config.settings import settings as app_settings
from chess_grader.exceptions import InvalidInputError
from chess_grader.types import RatingCategory

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _require_number(value: float, name: str) -> None:
    if math.isnan(value):
        raise InvalidInputError(f"{name} must be a number, got NaN.")


def saturate_centipawns(centipawns: float, settings: Optional["AnalysisSettings"] = None) -> float:
    """
    Clamps an evaluation to the range where the win-probability curve is not yet flat.

    The bound is `max_exponent / scaling_factor` (about 190,000 cp with the
    defaults), so infinite evaluations become large finite ones.

    Raises:
        InvalidInputError: If `centipawns` is NaN.
    """
    _require_number(centipawns, "centipawns")
    consts = (settings or app_settings.analysis_settings).win_probability
    limit = consts.max_exponent / consts.scaling_factor
    return _clamp(centipawns, -limit, limit)


def cp_to_win_probability(centipawns: float, settings: Optional["AnalysisSettings"] = None) -> float:
    """
    Converts a centipawn evaluation to a win probability percentage.

    Formula: 50 + 50 * (2 / (1 + exp(-k * cp)) - 1), with k = 0.00368208.

    The exponent is clamped so that extreme (or infinite) evaluations saturate
    at 0% or 100% instead of overflowing.

    Args:
        centipawns: The evaluation, positive for the side whose probability is wanted.
        settings: Optional analysis settings; the package defaults are used if omitted.

    Returns:
        The win probability in the range [0, 100].

    Raises:
        InvalidInputError: If `centipawns` is NaN.
    """
    _require_number(centipawns, "centipawns")
    consts = (settings or app_settings.analysis_settings).win_probability
    exponent = _clamp(-consts.scaling_factor * centipawns, -consts.max_exponent, consts.max_exponent)
    return _clamp(50 + 50 * (2 / (1 + math.exp(exponent)) - 1))


def calculate_move_accuracy(
    win_prob_before: float, win_prob_after: float, settings: Optional["AnalysisSettings"] = None
) -> float:
    """
    Calculates a move's accuracy from the mover's win probability before and after it.

    A move that does not lower the win probability is exactly 100% accurate.
    Otherwise: clamp(103.1668 * exp(-0.04354 * loss) - 3.1669, 0, 100).

    Raises:
        InvalidInputError: If either probability is NaN.
    """
    _require_number(win_prob_before, "win_prob_before")
    _require_number(win_prob_after, "win_prob_after")
    if win_prob_after >= win_prob_before:
        return 100.0

    consts = (settings or app_settings.analysis_settings).accuracy
    prob_loss = win_prob_before - win_prob_after
    # An infinite loss drives exp() to 0, which the clamp handles.
    raw_accuracy = consts.const_a * math.exp(consts.const_b * prob_loss) + consts.const_c
    return _clamp(raw_accuracy)


def estimate_rating(accuracy: float, settings: Optional["AnalysisSettings"] = None) -> int:
    """Maps an accuracy percentage onto an estimated rating using a step table."""
    bands = (settings or app_settings.analysis_settings).rating
    for floor, rating in bands.accuracy_to_rating:
        if accuracy >= floor:
            return rating
    return bands.floor_rating


def rating_category(
    white_rating: int, black_rating: int, settings: Optional["AnalysisSettings"] = None
) -> RatingCategory:
    """Categorizes a game by the average of both players' estimated ratings."""
    bands = (settings or app_settings.analysis_settings).rating
    average = (white_rating + black_rating) / 2
    for floor, category in bands.category_floors:
        if average >= floor:
            return RatingCategory(category)
    return RatingCategory.BEGINNER
