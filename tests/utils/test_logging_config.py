# tests/utils/test_logging_config.py
import json
import logging

import pytest
import structlog

from chess_grader.utils.logging_config import game_log_context, setup_logging


@pytest.fixture
def restore_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(handlers=[logging.NullHandler()], level=logging.WARNING, force=True)


def test_setup_logging_writes_json_lines(tmp_path, restore_logging):
    # Arrange
    log_file = tmp_path / "grader.log"
    setup_logging(log_level="debug", log_to_console=False, log_file=log_file)

    # Act
    structlog.get_logger("chess_grader.test").info("Game graded.", moves=4)
    logging.getLogger("third_party").warning("Foreign record.")
    for handler in logging.getLogger().handlers:
        handler.flush()

    # Assert
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert records[0]["event"] == "Game graded."
    assert records[0]["moves"] == 4
    assert records[0]["level"] == "info"
    assert records[1]["event"] == "Foreign record."
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_defaults_to_configured_level(restore_logging):
    setup_logging(log_to_console=True)

    assert logging.getLogger().level == logging.INFO


def test_game_log_context_binds_fields(tmp_path, restore_logging):
    # Arrange
    log_file = tmp_path / "grader.log"
    setup_logging(log_level="INFO", log_to_console=False, log_file=log_file)
    logger = structlog.get_logger("chess_grader.test")

    # Act
    with game_log_context(game_id="round-3"):
        logger.info("Inside.")
    logger.info("Outside.")
    for handler in logging.getLogger().handlers:
        handler.flush()

    # Assert
    inside, outside = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert inside["game_id"] == "round-3"
    assert "game_id" not in outside
