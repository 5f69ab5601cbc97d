# tests/test_containers.py
from unittest.mock import MagicMock

import chess

from chess_grader.config.settings import AnalysisSettings, EvaluationWeightsModel
from chess_grader.containers import get_container
from chess_grader.core.board_census import BoardCensus, PythonChessRulesEngine
from chess_grader.core.move_classifier import MoveClassifier
from chess_grader.core.position_evaluator import PositionEvaluator
from chess_grader.grader import GameGrader
from chess_grader.types import RulesEngine


def test_container_resolves_singletons():
    # Arrange
    container = get_container()

    # Act
    grader = container.resolve(GameGrader)

    # Assert
    assert grader is container.resolve(GameGrader)
    assert container.resolve(PositionEvaluator) is container.resolve(PositionEvaluator)
    assert isinstance(container.resolve(MoveClassifier), MoveClassifier)
    assert isinstance(container.resolve(RulesEngine), PythonChessRulesEngine)


def test_container_uses_given_settings():
    # Arrange
    settings = AnalysisSettings(evaluation=EvaluationWeightsModel(mobility_baseline=20))
    container = get_container(analysis_settings=settings)

    # Act
    evaluation = container.resolve(GameGrader).evaluate(chess.Board())

    # Assert
    assert container.resolve(AnalysisSettings) is settings
    assert evaluation.piece_activity == 0


def test_container_uses_given_rules_engine():
    # Arrange
    mock_rules_engine = MagicMock(spec=RulesEngine)
    mock_rules_engine.take_census.return_value = BoardCensus.from_board(chess.Board())
    container = get_container(rules_engine=mock_rules_engine)

    # Act
    container.resolve(PositionEvaluator).evaluate("start")

    # Assert
    mock_rules_engine.take_census.assert_called_once_with("start")
