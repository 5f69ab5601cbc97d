# tests/core/test_key_moments.py
from chess_grader.core.key_moments import find_key_moments
from chess_grader.types import EnhancedMoveQuality, KeyMomentKind, MoveQualityType, TacticType


def _move(quality, cp_loss=0.0, missed=(), is_critical=False) -> EnhancedMoveQuality:
    return EnhancedMoveQuality(
        quality=quality, accuracy=100.0, cp_loss=cp_loss, win_probability_loss=0.0,
        is_theoretical=False, is_critical=is_critical, tactics_missed=tuple(missed),
    )


def test_find_key_moments():
    # Arrange
    moves = [
        _move(MoveQualityType.BRILLIANT),
        _move(MoveQualityType.GOOD, is_critical=True),
        _move(MoveQualityType.BLUNDER, cp_loss=350),
        _move(MoveQualityType.MISS, missed=(TacticType.FORK, TacticType.DISCOVERED_ATTACK)),
        _move(MoveQualityType.BEST),
    ]

    # Act
    moments = find_key_moments(moves)

    # Assert
    assert [(m.ply, m.move_number, m.color, m.kind) for m in moments] == [
        (0, 1, "white", KeyMomentKind.BRILLIANT),
        (1, 1, "black", KeyMomentKind.CRITICAL),
        (2, 2, "white", KeyMomentKind.BLUNDER),
        (3, 2, "black", KeyMomentKind.MISS),
    ]
    assert moments[2].description == "White blundered on move 2, losing 350 centipawns."
    assert moments[3].description == "Black missed a tactic on move 2 (fork, discovered attack)."


def test_critical_blunder_is_reported_once():
    moments = find_key_moments([_move(MoveQualityType.BLUNDER, cp_loss=400, is_critical=True)])

    assert len(moments) == 1
    assert moments[0].kind == KeyMomentKind.BLUNDER


def test_quiet_game_has_no_key_moments():
    assert find_key_moments([_move(MoveQualityType.BEST), _move(MoveQualityType.BOOK)]) == []
