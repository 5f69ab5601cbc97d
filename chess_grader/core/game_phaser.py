# chess_grader/core/game_phaser.py
"""
Provides a pure function for determining the phase of a chess game.

The phase is derived from material alone: the number of non-king pieces left
on the board and whether any queens remain. The result gates several parts of
the evaluator (material table, king safety, development).
"""

from typing import Optional, Tuple, TYPE_CHECKING

import chess

from chess_grader.config.settings import settings as app_settings
from chess_grader.types import GamePhase

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings
    from chess_grader.core.board_census import BoardCensus


def count_material(census: "BoardCensus") -> Tuple[int, int]:
    """
    Counts the non-king pieces and the queens of both sides.

    Args:
        census: The board census to inspect.

    Returns:
        A `(piece_count, queen_count)` tuple.
    """
    piece_count = 0
    queen_count = 0
    for _, piece in census.pieces():
        if piece.piece_type == chess.KING:
            continue
        piece_count += 1
        if piece.piece_type == chess.QUEEN:
            queen_count += 1
    return piece_count, queen_count


def determine_game_phase(
    census: "BoardCensus", settings: Optional["AnalysisSettings"] = None
) -> GamePhase:
    """
    Classifies the game phase based on material count.

    The heuristics are checked in order of precedence:
    1. Opening: at least `opening_min_piece_count` non-king pieces remain.
    2. Endgame: at most `endgame_max_piece_count` remain, or no queens are left.
    3. Middlegame: otherwise.

    Args:
        census: The board census representing the position to classify.
        settings: Optional analysis settings; the package defaults are used if omitted.

    Returns:
        The determined `GamePhase` enum member.
    """
    phaser = (settings or app_settings.analysis_settings).phaser
    piece_count, queen_count = count_material(census)

    if piece_count >= phaser.opening_min_piece_count:
        return GamePhase.OPENING
    if piece_count <= phaser.endgame_max_piece_count or queen_count == 0:
        return GamePhase.ENDGAME
    return GamePhase.MIDDLEGAME
