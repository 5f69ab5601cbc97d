# chess_grader/core/quality_info.py
"""
Display metadata for move qualities and tactic types.

These tables are data, not logic: a symbol, colour, label and description per
label, plus a display weight per move quality. The weight is only ever read by
the aggregator when computing a side's quality score; the classifier never
branches on it.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from chess_grader.types import MoveQualityType, TacticType


@dataclass(frozen=True, slots=True)
class QualityInfo:
    symbol: str; color: str; label: str; description: str; weight: int


@dataclass(frozen=True, slots=True)
class TacticInfo:
    name: str; description: str; value: int


ENHANCED_QUALITY_INFO: Final[Mapping[MoveQualityType, QualityInfo]] = MappingProxyType({
    MoveQualityType.BRILLIANT: QualityInfo("!!", "#26C9A2", "Brilliant", "An exceptional move, often a sound sacrifice, that improves the position", 100),
    MoveQualityType.GREAT: QualityInfo("!", "#81B64C", "Great", "A strong move that is better than the expected best line", 95),
    MoveQualityType.BEST: QualityInfo("✓", "#96BC4B", "Best", "The objectively best move available", 90),
    MoveQualityType.EXCELLENT: QualityInfo("⊛", "#A8D08D", "Excellent", "Very close to the best move", 85),
    MoveQualityType.GOOD: QualityInfo("○", "#A3A3A3", "Good", "A solid move that maintains the position", 75),
    MoveQualityType.BOOK: QualityInfo("\U0001F4D6", "#769656", "Book Move", "A standard opening theory move", 85),
    MoveQualityType.INACCURACY: QualityInfo("?!", "#F7C631", "Inaccuracy", "Slightly imprecise, gives up some advantage", 50),
    MoveQualityType.MISTAKE: QualityInfo("?", "#E58F2A", "Mistake", "A clear error that loses significant advantage", 25),
    MoveQualityType.BLUNDER: QualityInfo("??", "#CA3431", "Blunder", "A severe error that often loses the game", 0),
    MoveQualityType.MISS: QualityInfo("⊘", "#E63946", "Missed Win", "A winning tactic was available but not played", 20),
    MoveQualityType.FORCED: QualityInfo("⊡", "#9CA3AF", "Forced", "The only legal move", 90),
})

TACTIC_DESCRIPTIONS: Final[Mapping[TacticType, TacticInfo]] = MappingProxyType({
    TacticType.FORK: TacticInfo("Fork", "One piece attacks two or more pieces simultaneously", 5),
    TacticType.PIN: TacticInfo("Pin", "A piece cannot move without exposing a more valuable piece behind it", 4),
    TacticType.SKEWER: TacticInfo("Skewer", "A valuable piece is attacked and must move, exposing a less valuable piece", 4),
    TacticType.DISCOVERED_ATTACK: TacticInfo("Discovered Attack", "Moving a piece reveals an attack from another piece", 5),
    TacticType.DISCOVERED_CHECK: TacticInfo("Discovered Check", "Moving a piece reveals a check from another piece", 6),
    TacticType.DOUBLE_CHECK: TacticInfo("Double Check", "The king is attacked by two pieces at once; only a king move escapes", 8),
    TacticType.BACK_RANK_THREAT: TacticInfo("Back Rank Threat", "Threatening checkmate on the back rank", 6),
    TacticType.DEFLECTION: TacticInfo("Deflection", "Forcing a defender away from a key piece or square", 5),
    TacticType.DECOY: TacticInfo("Decoy", "Luring a piece to a vulnerable square", 5),
    TacticType.X_RAY: TacticInfo("X-Ray", "A piece attacks through another piece", 3),
    TacticType.INTERFERENCE: TacticInfo("Interference", "Placing a piece between an enemy piece and the square it defends", 4),
    TacticType.REMOVING_DEFENDER: TacticInfo("Removing the Defender", "Eliminating a piece that defends a target", 5),
    TacticType.OVERLOADING: TacticInfo("Overloading", "A piece has too many defensive duties", 4),
    TacticType.ZUGZWANG: TacticInfo("Zugzwang", "Any move worsens the position", 7),
    TacticType.DESPERADO: TacticInfo("Desperado", "A doomed piece captures as much as it can before being taken", 3),
    TacticType.ZWISCHENZUG: TacticInfo("Zwischenzug", "An unexpected in-between move before the expected recapture", 6),
    TacticType.CLEARANCE: TacticInfo("Clearance", "Moving a piece to clear a line or square for another", 3),
    TacticType.CHECK: TacticInfo("Check", "The king is under direct attack", 2),
    TacticType.CHECKMATE: TacticInfo("Checkmate", "The king is in check and cannot escape", 100),
    TacticType.STALEMATE_THREAT: TacticInfo("Stalemate Threat", "Threatening to force a draw by stalemate", 4),
})
