# tests/core/test_quality_info.py
import pytest

from chess_grader.core.quality_info import ENHANCED_QUALITY_INFO, TACTIC_DESCRIPTIONS
from chess_grader.exceptions import InvalidMoveInputError
from chess_grader.types import EnhancedMoveQuality, MoveQualityType, TacticType


def test_every_label_has_display_info():
    assert set(ENHANCED_QUALITY_INFO) == set(MoveQualityType)
    assert set(TACTIC_DESCRIPTIONS) == set(TacticType)


def test_move_info_lookup():
    # Arrange
    move = EnhancedMoveQuality(quality=MoveQualityType.BLUNDER, accuracy=0.0, cp_loss=400,
                               win_probability_loss=40.0, is_theoretical=False, is_critical=False)

    # Act
    info = move.info

    # Assert
    assert info.symbol == "??"
    assert info.weight == 0


def test_unclassified_move_has_no_info():
    move = EnhancedMoveQuality(quality=None, accuracy=100.0, cp_loss=0, win_probability_loss=0.0,
                               is_theoretical=False, is_critical=False)

    with pytest.raises(InvalidMoveInputError):
        move.info
