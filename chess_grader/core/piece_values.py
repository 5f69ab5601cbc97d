# chess_grader/core/piece_values.py
"""
Static centipawn values for each piece type.

Two read-only tables are provided: one for the opening and middlegame and one
for the endgame, where pawns and rooks gain value and knights lose some. The
king is always worth 0 for material accounting.
"""

from types import MappingProxyType
from typing import Final, Mapping

import chess

from chess_grader.types import GamePhase

CENTIPAWN_VALUES: Final[Mapping[chess.PieceType, int]] = MappingProxyType({
    chess.PAWN: 100,
    chess.KNIGHT: 305,
    chess.BISHOP: 333,
    chess.ROOK: 563,
    chess.QUEEN: 950,
    chess.KING: 0,
})

ENDGAME_VALUES: Final[Mapping[chess.PieceType, int]] = MappingProxyType({
    chess.PAWN: 120,
    chess.KNIGHT: 290,
    chess.BISHOP: 340,
    chess.ROOK: 590,
    chess.QUEEN: 980,
    chess.KING: 0,
})


def values_for_phase(phase: GamePhase) -> Mapping[chess.PieceType, int]:
    """Returns the value table that applies in the given phase."""
    return ENDGAME_VALUES if phase == GamePhase.ENDGAME else CENTIPAWN_VALUES


def piece_value(piece_type: chess.PieceType, phase: GamePhase = GamePhase.MIDDLEGAME) -> int:
    """Looks up the centipawn value of a piece type in the given phase."""
    return values_for_phase(phase)[piece_type]
