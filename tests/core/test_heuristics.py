# tests/core/test_heuristics.py
from chess_grader.core.heuristics import (BookMoveHeuristic,
                                          BrilliantMoveHeuristic,
                                          CpLossLadderHeuristic,
                                          ForcedMoveHeuristic,
                                          MissedTacticHeuristic)
from chess_grader.types import (EnhancedMoveQuality, GamePhase,
                                MoveClassificationContext, MoveQualityType,
                                TacticType)


def _unclassified(quality=None) -> EnhancedMoveQuality:
    return EnhancedMoveQuality(
        quality=quality, accuracy=100.0, cp_loss=0.0, win_probability_loss=0.0,
        is_theoretical=False, is_critical=False,
    )


def test_heuristics_leave_classified_results_untouched():
    # Arrange
    context = MoveClassificationContext(
        cp_loss=-100, win_prob_before=50.0, win_prob_after=50.0, phase=GamePhase.OPENING,
        is_theoretical=True, has_only_one_legal_move=True, material_sacrificed=900,
        tactics_missed=(TacticType.SKEWER,),
    )
    already_classified = _unclassified(MoveQualityType.GOOD)
    heuristics = [ForcedMoveHeuristic(), BookMoveHeuristic(), BrilliantMoveHeuristic(),
                  MissedTacticHeuristic(), CpLossLadderHeuristic()]

    # Act / Assert
    for heuristic in heuristics:
        assert heuristic.apply(context, already_classified) is already_classified


def test_only_the_ladder_always_assigns_a_label():
    # Arrange
    context = MoveClassificationContext(cp_loss=12, win_prob_before=50.0, win_prob_after=49.0)
    result = _unclassified()

    # Act / Assert
    assert ForcedMoveHeuristic().apply(context, result).quality is None
    assert BookMoveHeuristic().apply(context, result).quality is None
    assert BrilliantMoveHeuristic().apply(context, result).quality is None
    assert MissedTacticHeuristic().apply(context, result).quality is None
    assert CpLossLadderHeuristic().apply(context, result).quality == MoveQualityType.EXCELLENT


def test_heuristic_returns_new_object():
    # Arrange
    context = MoveClassificationContext(cp_loss=0, win_prob_before=50.0, win_prob_after=50.0,
                                        has_only_one_legal_move=True)
    result = _unclassified()

    # Act
    forced = ForcedMoveHeuristic().apply(context, result)

    # Assert
    assert forced is not result
    assert result.quality is None
    assert forced.quality == MoveQualityType.FORCED
