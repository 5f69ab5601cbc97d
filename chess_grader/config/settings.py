# chess_grader/config/settings.py
"""
Configuration settings for the Chess Grader package, powered by Pydantic.

This module centralizes all tunable thresholds and formula constants used by the
evaluator, classifier and aggregator. Using Pydantic allows for type-safe,
self-documenting configuration that can be loaded from environment variables,
providing a clear separation of configuration from code.
"""
from typing import List, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Nested Models for Configuration Schemas ---

class ClassificationThresholdsModel(BaseModel):
    """
    Defines the Centipawn Loss (CPL) ladder for move classification.

    Each value is the maximum CPL for a move to earn that label. A move with
    CPL above the `mistake` threshold is implicitly a 'Blunder'.
    """
    great: float = Field(0, description="Maximum CPL for a move to be classified as 'Great'.")
    best: float = Field(5, description="Maximum CPL for a move to be classified as 'Best'.")
    excellent: float = Field(15, description="Maximum CPL for a move to be classified as 'Excellent'.")
    good: float = Field(30, description="Maximum CPL for a move to be classified as 'Good'.")
    inaccuracy: float = Field(75, description="Maximum CPL for a move to be classified as 'Inaccuracy'.")
    mistake: float = Field(200, description="Maximum CPL for a move to be classified as 'Mistake'.")

    @model_validator(mode='after')
    def validate_thresholds_are_sorted(self) -> 'ClassificationThresholdsModel':
        """Ensures that CPL thresholds are logically sorted in ascending order."""
        values = [self.great, self.best, self.excellent, self.good, self.inaccuracy, self.mistake]
        if not all(values[i] <= values[i + 1] for i in range(len(values) - 1)):
            raise ValueError("Configuration error: Classification CPL thresholds must be sorted.")
        return self

class BrilliantMoveCriteriaModel(BaseModel):
    """Defines the criteria for a move to be classified as 'Brilliant' (!!)."""
    max_cp_loss: float = Field(-50.0, description="The move must improve the evaluation by at least this much (CPL at or below this value).")
    min_sacrifice_cp: int = Field(300, description="Net material, in centipawns, that must have been given up for the move to be brilliant.")
    require_sacrifice: bool = Field(True, description="When False, the sacrifice gate is dropped and brilliance depends on CPL alone.")

class WinProbabilityModel(BaseModel):
    """Constants of the logistic centipawn-to-win-probability transform."""
    scaling_factor: float = Field(0.00368208, description="Logistic slope applied to the centipawn evaluation.")
    max_exponent: float = Field(700.0, description="Exponent arguments are clamped to this magnitude to avoid float overflow.")

class AccuracyConstantsModel(BaseModel):
    """Constants used to convert a win-probability loss into a move accuracy percentage."""
    const_a: float = 103.1668
    const_b: float = -0.04354
    const_c: float = -3.1669

class RatingBandsModel(BaseModel):
    """
    Step tables mapping accuracy to an estimated rating and ratings to a category.

    Each entry is a (minimum, result) pair checked from the top down.
    """
    accuracy_to_rating: List[Tuple[float, int]] = Field(
        default_factory=lambda: [(98, 2700), (95, 2400), (90, 2100), (85, 1800), (80, 1500), (70, 1200)],
        description="Accuracy floors and the rating they imply.",
    )
    floor_rating: int = Field(900, description="Rating assigned below the lowest accuracy floor.")
    category_floors: List[Tuple[int, str]] = Field(
        default_factory=lambda: [(2500, "grandmaster"), (2200, "master"), (1800, "advanced"), (1400, "intermediate")],
        description="Average-rating floors for each category; anything lower is 'beginner'.",
    )

    @model_validator(mode='after')
    def validate_bands_are_descending(self) -> 'RatingBandsModel':
        """Ensures the step tables are ordered from the highest floor to the lowest."""
        for table in (self.accuracy_to_rating, self.category_floors):
            floors = [floor for floor, _ in table]
            if floors != sorted(floors, reverse=True):
                raise ValueError("Configuration error: Rating bands must be sorted in descending order.")
        return self

class GamePhaserSettingsModel(BaseModel):
    """Encapsulates thresholds for determining the phase of a chess game."""
    opening_min_piece_count: int = Field(28, description="Positions with at least this many non-king pieces are in the 'Opening'.")
    endgame_max_piece_count: int = Field(14, description="Positions with at most this many non-king pieces are in the 'Endgame'.")

class EvaluationWeightsModel(BaseModel):
    """Centipawn weights for each positional factor of the static evaluator."""
    doubled_pawn_penalty: int = 15
    isolated_pawn_penalty: int = 20
    passed_pawn_base_bonus: int = 20
    passed_pawn_rank_bonus: int = 10
    castled_king_bonus: int = 30
    pawn_shield_bonus: int = 10
    central_king_penalty: int = 50
    mobility_baseline: int = Field(30, description="Legal-move count treated as neutral mobility.")
    mobility_weight: int = 2
    center_pawn_bonus: int = 20
    center_piece_bonus: int = 10
    extended_center_bonus: int = 5
    undeveloped_minor_penalty: int = 15
    space_rank_weight: int = 3
    in_check_penalty: int = 30

class AggregationSettingsModel(BaseModel):
    """Scaling factors for the game-level complexity and sharpness indices."""
    complexity_scale: float = Field(200.0, description="Multiplier applied to executed tactics per move.")
    sharpness_scale: float = Field(150.0, description="Multiplier applied to critical moments per move.")

class AnalysisSettings(BaseModel):
    """Groups all settings related to the core grading logic."""
    classification_thresholds: ClassificationThresholdsModel = Field(default_factory=ClassificationThresholdsModel)
    brilliant_move: BrilliantMoveCriteriaModel = Field(default_factory=BrilliantMoveCriteriaModel)
    win_probability: WinProbabilityModel = Field(default_factory=WinProbabilityModel)
    accuracy: AccuracyConstantsModel = Field(default_factory=AccuracyConstantsModel)
    rating: RatingBandsModel = Field(default_factory=RatingBandsModel)
    phaser: GamePhaserSettingsModel = Field(default_factory=GamePhaserSettingsModel)
    evaluation: EvaluationWeightsModel = Field(default_factory=EvaluationWeightsModel)
    aggregation: AggregationSettingsModel = Field(default_factory=AggregationSettingsModel)

# --- Main Settings Class ---

class Settings(BaseSettings):
    """
    Main configuration class for the package.

    It loads settings from environment variables with the prefix 'CHESS_GRADER_'.
    Nested models can be configured using a double underscore delimiter, e.g.,
    `CHESS_GRADER_ANALYSIS_SETTINGS__PHASER__ENDGAME_MAX_PIECE_COUNT=12`.
    """
    model_config = SettingsConfigDict(env_prefix='CHESS_GRADER_', env_nested_delimiter='__')

    analysis_settings: AnalysisSettings = Field(default_factory=AnalysisSettings)
    default_log_level: str = "INFO"

# A singleton instance of the settings, accessible throughout the package.
settings = Settings()
