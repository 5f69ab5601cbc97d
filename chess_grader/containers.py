# chess_grader/containers.py
"""
Defines the Dependency Injection (DI) container for the package.

This module uses the `punq` library to manage the creation and wiring of the
rules engine, evaluator, classifier and grader. This centralizes the dependency
graph, so a caller (or a test) can swap the rules engine or the settings in a
single place.
"""

from typing import Optional

import punq

from chess_grader.config.settings import AnalysisSettings, settings as app_settings
from chess_grader.core.board_census import PythonChessRulesEngine
from chess_grader.core.move_classifier import MoveClassifier
from chess_grader.core.position_evaluator import PositionEvaluator
from chess_grader.grader import GameGrader
from chess_grader.types import RulesEngine


def get_container(
    analysis_settings: Optional[AnalysisSettings] = None,
    rules_engine: Optional[RulesEngine] = None,
) -> punq.Container:
    """
    Initializes and returns a DI container configured with the given settings.

    Args:
        analysis_settings: Settings shared by every component; defaults to the
                           package settings loaded from the environment.
        rules_engine: An alternative rules engine; defaults to `python-chess`.
    """
    container = punq.Container()
    analysis_settings = analysis_settings or app_settings.analysis_settings

    # Register instances that are created outside the container's control.
    container.register(AnalysisSettings, instance=analysis_settings)
    container.register(RulesEngine, instance=rules_engine or PythonChessRulesEngine())

    # The components are stateless, so one instance per container is enough.
    container.register(
        PositionEvaluator,
        factory=lambda: PositionEvaluator(container.resolve(RulesEngine), analysis_settings),
        scope=punq.Scope.singleton,
    )
    container.register(
        MoveClassifier, factory=lambda: MoveClassifier(analysis_settings), scope=punq.Scope.singleton
    )
    container.register(
        GameGrader,
        factory=lambda: GameGrader(
            container.resolve(PositionEvaluator), container.resolve(MoveClassifier), analysis_settings
        ),
        scope=punq.Scope.singleton,
    )

    return container
