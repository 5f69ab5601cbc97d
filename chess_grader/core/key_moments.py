# chess_grader/core/key_moments.py
"""
Picks out the moments of a game worth highlighting.

Given the classified moves of a game, this module returns the brilliant moves,
blunders, missed tactics and critical moments, each tagged with its ply, move
number and side. A move is reported once, under its most notable kind.
"""

from typing import List, Optional, Sequence

import chess

from chess_grader.core.chess_utils import color_for_ply, get_move_number
from chess_grader.types import EnhancedMoveQuality, KeyMoment, KeyMomentKind, MoveQualityType

_QUALITY_TO_KIND = {
    MoveQualityType.BRILLIANT: KeyMomentKind.BRILLIANT,
    MoveQualityType.BLUNDER: KeyMomentKind.BLUNDER,
    MoveQualityType.MISS: KeyMomentKind.MISS,
}


def _describe(kind: KeyMomentKind, side: str, move_number: int, move: EnhancedMoveQuality) -> str:
    if kind == KeyMomentKind.BRILLIANT:
        return f"{side} found a brilliant move on move {move_number}."
    if kind == KeyMomentKind.BLUNDER:
        return f"{side} blundered on move {move_number}, losing {move.cp_loss:.0f} centipawns."
    if kind == KeyMomentKind.MISS:
        missed = ", ".join(t.value.replace("_", " ") for t in move.tactics_missed)
        return f"{side} missed a tactic on move {move_number} ({missed})."
    return f"Critical moment for {side} on move {move_number}."


def _kind_for(move: EnhancedMoveQuality) -> Optional[KeyMomentKind]:
    kind = _QUALITY_TO_KIND.get(move.quality) if move.quality else None
    if kind is None and move.is_critical:
        kind = KeyMomentKind.CRITICAL
    return kind


def find_key_moments(moves: Sequence[EnhancedMoveQuality]) -> List[KeyMoment]:
    """
    Lists the notable moves of a game in ply order.

    Args:
        moves: One classified move per half-move, White first.

    Returns:
        A list of `KeyMoment` objects; empty if nothing stood out.
    """
    moments: List[KeyMoment] = []
    for ply, move in enumerate(moves):
        kind = _kind_for(move)
        if kind is None:
            continue
        color = color_for_ply(ply)
        side = chess.COLOR_NAMES[color].capitalize()
        move_number = get_move_number(ply)
        moments.append(KeyMoment(
            ply=ply,
            move_number=move_number,
            color=chess.COLOR_NAMES[color],
            kind=kind,
            quality=move.quality,
            description=_describe(kind, side, move_number, move),
        ))
    return moments
