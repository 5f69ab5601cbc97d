# chess_grader/core/chess_utils.py
"""
Provides a collection of pure, stateless functions for chess-related calculations.

These helpers translate White-relative evaluations into the perspective of the
player who moved, which is the frame every classifier input is expressed in.
"""

from typing import Any, Optional, TYPE_CHECKING

import chess

from chess_grader.core.win_probability import cp_to_win_probability, saturate_centipawns
from chess_grader.types import MoveClassificationContext

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings


def from_mover_perspective(eval_cp: float, mover: chess.Color) -> float:
    """Converts a White-relative evaluation into the mover's perspective."""
    return eval_cp if mover == chess.WHITE else -eval_cp


def calculate_cp_loss(best_eval: float, played_eval: float, mover: chess.Color) -> float:
    """
    Calculates the centipawn loss of a played move relative to the best move.

    Both evaluations are White-relative scores of the positions reached after
    the best move and after the played move. Unlike a clamped CPL, the result
    may be negative when the played move scored better than the reference line.

    Args:
        best_eval: Evaluation after the best available move.
        played_eval: Evaluation after the move that was played.
        mover: The colour of the player who made the move.

    Returns:
        The signed centipawn loss from the mover's perspective.
    """
    return from_mover_perspective(best_eval, mover) - from_mover_perspective(played_eval, mover)


def win_probability_for(
    eval_cp: float, mover: chess.Color, settings: Optional["AnalysisSettings"] = None
) -> float:
    """Returns the mover's win probability for a White-relative evaluation."""
    return cp_to_win_probability(from_mover_perspective(eval_cp, mover), settings)


def get_move_number(ply: int) -> int:
    """Calculates the 1-indexed move number from a 0-indexed ply."""
    return ply // 2 + 1


def color_for_ply(ply: int) -> chess.Color:
    """White moves on even plies, Black on odd plies."""
    return chess.WHITE if ply % 2 == 0 else chess.BLACK


def build_classification_context(
    best_eval: float,
    played_eval: float,
    mover: chess.Color,
    settings: Optional["AnalysisSettings"] = None,
    **flags: Any,
) -> MoveClassificationContext:
    """
    Builds a classifier input from White-relative evaluations.

    The win probabilities compare the mover's chances after the best move with
    their chances after the move that was played. Both evaluations are
    saturated first, so an infinite (mate) score yields a finite CPL.

    Args:
        best_eval: Evaluation after the best available move.
        played_eval: Evaluation after the move that was played.
        mover: The colour of the player who made the move.
        settings: Optional analysis settings for the win-probability transform.
        **flags: Any remaining `MoveClassificationContext` fields (phase,
                 is_theoretical, tactics_missed, ...).

    Returns:
        A `MoveClassificationContext` ready for the `MoveClassifier`.

    Raises:
        InvalidInputError: If either evaluation is NaN.
    """
    best_eval = saturate_centipawns(best_eval, settings)
    played_eval = saturate_centipawns(played_eval, settings)
    return MoveClassificationContext(
        cp_loss=calculate_cp_loss(best_eval, played_eval, mover),
        win_prob_before=win_probability_for(best_eval, mover, settings),
        win_prob_after=win_probability_for(played_eval, mover, settings),
        **flags,
    )
