# chess_grader/core/position_evaluator.py
"""
Contains the static, multi-factor position evaluator.

The evaluation is the sum of eight independent sub-scores, each computed by its
own pure function over a `BoardCensus`:

    material, pawn structure, king safety, piece activity,
    center control, development, space, threats

Every sub-score is an integer in centipawns where positive values favour White.
Several factors are phase-aware: the endgame uses a different material table
and ignores king safety, and development only counts in the opening. There is
no search; the evaluator only looks at the position it is given.
"""

import time
from typing import List, Optional, TYPE_CHECKING

import chess
import structlog

from chess_grader.config.settings import settings as app_settings
from chess_grader.core.board_census import BoardCensus, PythonChessRulesEngine
from chess_grader.core.game_phaser import determine_game_phase
from chess_grader.core.piece_values import values_for_phase
from chess_grader.types import GamePhase, PositionEvaluation
from chess_grader.utils import metrics

if TYPE_CHECKING:
    from chess_grader.config.settings import AnalysisSettings, EvaluationWeightsModel
    from chess_grader.types import RulesEngine

logger = structlog.get_logger(__name__)

CENTER_SQUARES = (chess.D4, chess.D5, chess.E4, chess.E5)
EXTENDED_CENTER_SQUARES = (
    chess.C3, chess.C4, chess.C5, chess.C6, chess.D3, chess.D6,
    chess.E3, chess.E6, chess.F3, chess.F4, chess.F5, chess.F6,
)

# Squares a minor piece starts on; still occupying one counts as undeveloped.
_MINOR_PIECE_HOMES = {
    chess.WHITE: ((chess.B1, chess.KNIGHT), (chess.G1, chess.KNIGHT), (chess.C1, chess.BISHOP), (chess.F1, chess.BISHOP)),
    chess.BLACK: ((chess.B8, chess.KNIGHT), (chess.G8, chess.KNIGHT), (chess.C8, chess.BISHOP), (chess.F8, chess.BISHOP)),
}

# Castled king files: c (queenside) and g (kingside).
_CASTLED_FILES = (2, 6)


def _sign(color: chess.Color) -> int:
    return 1 if color == chess.WHITE else -1


def _home_rank(color: chess.Color) -> int:
    return 0 if color == chess.WHITE else 7


def _advancement(square: chess.Square, color: chess.Color) -> int:
    """Distance of a square from the given side's own back rank."""
    rank = chess.square_rank(square)
    return rank if color == chess.WHITE else 7 - rank


def _weights(settings: Optional["AnalysisSettings"]) -> "EvaluationWeightsModel":
    return (settings or app_settings.analysis_settings).evaluation


# --- Sub-score functions ---

def evaluate_material(census: BoardCensus, phase: GamePhase) -> int:
    """Sums piece values from the phase-appropriate table, signed by colour."""
    values = values_for_phase(phase)
    return sum(_sign(piece.color) * values[piece.piece_type] for _, piece in census.pieces())


def is_passed_pawn(census: BoardCensus, square: chess.Square, color: chess.Color) -> bool:
    """
    Checks whether a pawn has no enemy pawn ahead of it on its own or an adjacent file.

    Every rank between the pawn and the promotion rank is inspected, the
    promotion rank included.
    """
    file = chess.square_file(square)
    rank = chess.square_rank(square)
    ranks_ahead = range(rank + 1, 8) if color == chess.WHITE else range(rank - 1, -1, -1)

    for r in ranks_ahead:
        for f in range(max(0, file - 1), min(7, file + 1) + 1):
            piece = census.piece_at(chess.square(f, r))
            if piece is not None and piece.piece_type == chess.PAWN and piece.color != color:
                return False
    return True


def evaluate_pawn_structure(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> int:
    """
    Scores doubled, isolated and passed pawns.

    Doubled and isolated pawns are penalties for their owner; passed pawns earn
    a bonus that grows with their advancement from the owner's back rank.
    """
    w = _weights(settings)
    pawns_per_file = {chess.WHITE: [0] * 8, chess.BLACK: [0] * 8}
    pawns: List[tuple] = []
    for square, piece in census.pieces():
        if piece.piece_type == chess.PAWN:
            pawns_per_file[piece.color][chess.square_file(square)] += 1
            pawns.append((square, piece.color))

    score = 0
    for color, files in pawns_per_file.items():
        sign = _sign(color)
        for file, count in enumerate(files):
            if count == 0:
                continue
            if count > 1:
                score -= sign * w.doubled_pawn_penalty * (count - 1)
            has_left = file > 0 and files[file - 1] > 0
            has_right = file < 7 and files[file + 1] > 0
            if not has_left and not has_right:
                score -= sign * w.isolated_pawn_penalty * count

    for square, color in pawns:
        if is_passed_pawn(census, square, color):
            bonus = w.passed_pawn_base_bonus + w.passed_pawn_rank_bonus * _advancement(square, color)
            score += _sign(color) * bonus

    return score


def _count_pawn_shield(census: BoardCensus, king_square: chess.Square, color: chess.Color) -> int:
    """Counts friendly pawns on the rank in front of the king, across three files."""
    shield_rank = chess.square_rank(king_square) + (1 if color == chess.WHITE else -1)
    if not 0 <= shield_rank <= 7:
        return 0
    king_file = chess.square_file(king_square)
    count = 0
    for f in range(max(0, king_file - 1), min(7, king_file + 1) + 1):
        piece = census.piece_at(chess.square(f, shield_rank))
        if piece is not None and piece.piece_type == chess.PAWN and piece.color == color:
            count += 1
    return count


def evaluate_king_safety(
    census: BoardCensus, phase: GamePhase, settings: Optional["AnalysisSettings"] = None
) -> int:
    """
    Rewards castled, pawn-shielded kings and penalises a king stuck in the centre.

    King safety is ignored entirely in the endgame. The centre penalty only
    applies in the middlegame and only to a king that has not castled.
    """
    if phase == GamePhase.ENDGAME:
        return 0

    w = _weights(settings)
    score = 0
    for color in chess.COLORS:
        king_square = census.king_square(color)
        file = chess.square_file(king_square)
        on_home_rank = chess.square_rank(king_square) == _home_rank(color)
        castled = on_home_rank and file in _CASTLED_FILES

        side_score = 0
        if castled:
            side_score += w.castled_king_bonus
            side_score += w.pawn_shield_bonus * _count_pawn_shield(census, king_square, color)
        elif on_home_rank and 2 <= file <= 5 and phase == GamePhase.MIDDLEGAME:
            side_score -= w.central_king_penalty
        score += _sign(color) * side_score

    return score


def evaluate_piece_activity(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> int:
    """Mobility relative to a neutral baseline, from the legal moves of the side to move."""
    w = _weights(settings)
    return (census.legal_move_count - w.mobility_baseline) * w.mobility_weight


def evaluate_center_control(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> int:
    """Scores occupation of the four central squares and the twelve extended-centre squares."""
    w = _weights(settings)
    score = 0
    for square in CENTER_SQUARES:
        piece = census.piece_at(square)
        if piece is None or piece.piece_type == chess.KING:
            continue
        bonus = w.center_pawn_bonus if piece.piece_type == chess.PAWN else w.center_piece_bonus
        score += _sign(piece.color) * bonus

    for square in EXTENDED_CENTER_SQUARES:
        piece = census.piece_at(square)
        if piece is None or piece.piece_type in (chess.KING, chess.PAWN):
            continue
        score += _sign(piece.color) * w.extended_center_bonus

    return score


def evaluate_development(
    census: BoardCensus, phase: GamePhase, settings: Optional["AnalysisSettings"] = None
) -> int:
    """Penalises knights and bishops still on their starting squares. Opening only."""
    if phase != GamePhase.OPENING:
        return 0

    w = _weights(settings)
    score = 0
    for color, homes in _MINOR_PIECE_HOMES.items():
        for square, piece_type in homes:
            piece = census.piece_at(square)
            if piece is not None and piece.piece_type == piece_type and piece.color == color:
                score -= _sign(color) * w.undeveloped_minor_penalty
    return score


def evaluate_space(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> int:
    """Net pawn advancement of White over Black, weighted per rank."""
    w = _weights(settings)
    advancement = 0
    for square, piece in census.pieces():
        if piece.piece_type == chess.PAWN:
            advancement += _sign(piece.color) * _advancement(square, piece.color)
    return advancement * w.space_rank_weight


def evaluate_threats(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> int:
    """Being in check is bad for the side to move."""
    if not census.is_check:
        return 0
    return -_sign(census.turn) * _weights(settings).in_check_penalty


# --- Composition ---

def evaluate_position(census: BoardCensus, settings: Optional["AnalysisSettings"] = None) -> PositionEvaluation:
    """
    Evaluates a position by combining all eight sub-scores.

    Args:
        census: The validated board census.
        settings: Optional analysis settings; the package defaults are used if omitted.

    Returns:
        A new `PositionEvaluation` whose `total` is the exact sum of its sub-scores.
    """
    phase = determine_game_phase(census, settings)

    material = evaluate_material(census, phase)
    pawn_structure = evaluate_pawn_structure(census, settings)
    king_safety = evaluate_king_safety(census, phase, settings)
    piece_activity = evaluate_piece_activity(census, settings)
    center_control = evaluate_center_control(census, settings)
    development = evaluate_development(census, phase, settings)
    space = evaluate_space(census, settings)
    threats = evaluate_threats(census, settings)

    total = (material + pawn_structure + king_safety + piece_activity +
             center_control + development + space + threats)

    return PositionEvaluation(
        material=material,
        pawn_structure=pawn_structure,
        king_safety=king_safety,
        piece_activity=piece_activity,
        center_control=center_control,
        development=development,
        space=space,
        threats=threats,
        total=total,
        phase=phase,
    )


class PositionEvaluator:
    """
    Evaluates positions handed over in the rules engine's own representation.

    The evaluator holds no mutable state: it reads a census from the rules
    engine, runs `evaluate_position` and records metrics.
    """

    def __init__(self, rules_engine: Optional["RulesEngine"] = None, settings: Optional["AnalysisSettings"] = None):
        self._rules_engine = rules_engine or PythonChessRulesEngine()
        self._settings = settings or app_settings.analysis_settings

    def evaluate(self, position) -> PositionEvaluation:
        """
        Evaluates a position given as a `chess.Board` or FEN string.

        Raises:
            RulesEngineError: If the rules engine cannot read the position.
            InvalidCensusError: If the position is structurally invalid.
        """
        started = time.perf_counter()
        census = self._rules_engine.take_census(position)
        evaluation = evaluate_position(census, self._settings)
        metrics.EVALUATION_DURATION_SECONDS.observe(time.perf_counter() - started)
        metrics.POSITIONS_EVALUATED_TOTAL.labels(phase=evaluation.phase.value).inc()
        logger.debug("Position evaluated.", total=evaluation.total, phase=evaluation.phase.value)
        return evaluation
