# chess_grader/types.py
"""
A central module for shared data structures and component interfaces (Protocols).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, TYPE_CHECKING, runtime_checkable

from chess_grader.exceptions import InvalidMoveInputError

if TYPE_CHECKING:
    from chess_grader.core.board_census import BoardCensus
    from chess_grader.core.quality_info import QualityInfo


class GamePhase(str, Enum):
    OPENING = "opening"; MIDDLEGAME = "middlegame"; ENDGAME = "endgame"

class MoveQualityType(str, Enum):
    BRILLIANT = "brilliant"; GREAT = "great"; BEST = "best"; EXCELLENT = "excellent"
    GOOD = "good"; BOOK = "book"; INACCURACY = "inaccuracy"; MISTAKE = "mistake"
    BLUNDER = "blunder"; MISS = "miss"; FORCED = "forced"

class TacticType(str, Enum):
    FORK = "fork"; PIN = "pin"; SKEWER = "skewer"
    DISCOVERED_ATTACK = "discovered_attack"; DISCOVERED_CHECK = "discovered_check"
    DOUBLE_CHECK = "double_check"; BACK_RANK_THREAT = "back_rank_threat"
    DEFLECTION = "deflection"; DECOY = "decoy"; X_RAY = "x_ray"
    INTERFERENCE = "interference"; REMOVING_DEFENDER = "removing_defender"
    OVERLOADING = "overloading"; ZUGZWANG = "zugzwang"; DESPERADO = "desperado"
    ZWISCHENZUG = "zwischenzug"; CLEARANCE = "clearance"; CHECK = "check"
    CHECKMATE = "checkmate"; STALEMATE_THREAT = "stalemate_threat"

class RatingCategory(str, Enum):
    BEGINNER = "beginner"; INTERMEDIATE = "intermediate"; ADVANCED = "advanced"
    MASTER = "master"; GRANDMASTER = "grandmaster"

class KeyMomentKind(str, Enum):
    BRILLIANT = "brilliant"; BLUNDER = "blunder"; MISS = "miss"; CRITICAL = "critical"


# --- DATA CONTRACTS ---

@dataclass(frozen=True, slots=True)
class PositionEvaluation:
    """A multi-factor evaluation in centipawns. Positive values favour White."""
    material: int; pawn_structure: int; king_safety: int; piece_activity: int
    center_control: int; development: int; space: int; threats: int
    total: int; phase: GamePhase

@dataclass(frozen=True, slots=True)
class MoveClassificationContext:
    """Everything the classifier needs to label one half-move."""
    cp_loss: float; win_prob_before: float; win_prob_after: float
    phase: GamePhase = GamePhase.MIDDLEGAME
    is_theoretical: bool = False; is_critical: bool = False
    has_only_one_legal_move: bool = False; material_sacrificed: int = 0
    tactics_missed: Tuple[TacticType, ...] = ()
    tactics_executed: Tuple[TacticType, ...] = ()

@dataclass(frozen=True, slots=True)
class EnhancedMoveQuality:
    quality: Optional[MoveQualityType]; accuracy: float; cp_loss: float
    win_probability_loss: float; is_theoretical: bool; is_critical: bool
    tactics_missed: Tuple[TacticType, ...] = ()
    tactics_executed: Tuple[TacticType, ...] = ()

    @property
    def info(self) -> "QualityInfo":
        """The display record (symbol, colour, label, weight) for this move's quality."""
        from chess_grader.core.quality_info import ENHANCED_QUALITY_INFO
        if self.quality is None:
            raise InvalidMoveInputError("Move has not been classified yet.")
        return ENHANCED_QUALITY_INFO[self.quality]

@dataclass(frozen=True, slots=True)
class SideScore:
    accuracy: float; cp_loss: int; move_count: int
    move_counts: Mapping[MoveQualityType, int]
    tactics_executed: int; tactics_missed: int; quality_score: float

    def __post_init__(self) -> None:
        # Copied into a read-only view so the score cannot change after aggregation.
        object.__setattr__(self, "move_counts", MappingProxyType(dict(self.move_counts)))

    @property
    def brilliant_moves(self) -> int:
        return self.move_counts.get(MoveQualityType.BRILLIANT, 0)

    @property
    def great_moves(self) -> int:
        return self.move_counts.get(MoveQualityType.GREAT, 0)

    @property
    def blunders(self) -> int:
        return self.move_counts.get(MoveQualityType.BLUNDER, 0)

    @property
    def mistakes(self) -> int:
        return self.move_counts.get(MoveQualityType.MISTAKE, 0)

    @property
    def inaccuracies(self) -> int:
        return self.move_counts.get(MoveQualityType.INACCURACY, 0)

    @classmethod
    def empty(cls) -> "SideScore":
        return cls(accuracy=0.0, cp_loss=0, move_count=0, move_counts={},
                   tactics_executed=0, tactics_missed=0, quality_score=0.0)

@dataclass(frozen=True, slots=True)
class RatingEstimate:
    white: int; black: int; category: RatingCategory

@dataclass(frozen=True)
class GameScore:
    white: SideScore; black: SideScore; overall_accuracy: float
    complexity: int; sharpness: int; rating: RatingEstimate; total_moves: int = 0

    @classmethod
    def empty(cls, floor_rating: int = 900) -> "GameScore":
        """The score of a game with no moves: every figure at its zero/default value."""
        return cls(
            white=SideScore.empty(), black=SideScore.empty(), overall_accuracy=0.0,
            complexity=0, sharpness=0,
            rating=RatingEstimate(white=floor_rating, black=floor_rating, category=RatingCategory.BEGINNER),
            total_moves=0,
        )

    def as_dict(self) -> Dict[str, Any]:
        """Flattens the score into the side-by-side layout used by presentation layers."""
        def pair(attr: str) -> Dict[str, Any]:
            return {"white": getattr(self.white, attr), "black": getattr(self.black, attr)}

        return {
            "white_accuracy": self.white.accuracy, "black_accuracy": self.black.accuracy,
            "overall_accuracy": self.overall_accuracy,
            "white_cp_loss": self.white.cp_loss, "black_cp_loss": self.black.cp_loss,
            "brilliant_moves": pair("brilliant_moves"), "great_moves": pair("great_moves"),
            "blunders": pair("blunders"), "mistakes": pair("mistakes"),
            "inaccuracies": pair("inaccuracies"),
            "tactics_executed": pair("tactics_executed"), "tactics_missed": pair("tactics_missed"),
            "complexity": self.complexity, "sharpness": self.sharpness,
            "rating": {
                "estimated": {"white": self.rating.white, "black": self.rating.black},
                "category": self.rating.category.value,
            },
        }

@dataclass(frozen=True, slots=True)
class KeyMoment:
    ply: int; move_number: int; color: str; kind: KeyMomentKind
    quality: Optional[MoveQualityType]; description: str

@dataclass(frozen=True)
class GradedGame:
    moves: Tuple[EnhancedMoveQuality, ...]; score: GameScore
    key_moments: Tuple[KeyMoment, ...] = field(default_factory=tuple)


# --- PROTOCOLS: Abstract Interfaces for Components ---
# These define the "contracts" that concrete implementations must adhere to.
# They allow the rules engine to be swapped or mocked in tests.

class Heuristic(Protocol):
    """Protocol defining the interface for a single, composable classification heuristic."""
    def apply(self, context: "MoveClassificationContext", result: "EnhancedMoveQuality") -> "EnhancedMoveQuality": ...

@runtime_checkable
class RulesEngine(Protocol):
    """Defines the read-only capability the evaluator consumes from a chess-rules library."""
    def take_census(self, position: Any) -> "BoardCensus": ...
