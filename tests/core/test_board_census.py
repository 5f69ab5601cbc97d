# tests/core/test_board_census.py
import dataclasses
from unittest.mock import patch

import chess
import pytest

from chess_grader.core.board_census import BoardCensus, PythonChessRulesEngine, _validate_squares
from chess_grader.exceptions import InvalidCensusError, InvalidInputError, RulesEngineError
from chess_grader.types import RulesEngine


def test_census_from_starting_board():
    # Arrange
    board = chess.Board()

    # Act
    census = BoardCensus.from_board(board)

    # Assert
    assert len(census.squares) == 64
    assert census.turn == chess.WHITE
    assert census.is_check is False
    assert census.legal_move_count == 20
    assert census.piece_at(chess.E1) == chess.Piece(chess.KING, chess.WHITE)
    assert census.king_square(chess.BLACK) == chess.E8
    assert len(list(census.pieces())) == 32


def test_census_does_not_mutate_board():
    # Arrange
    board = chess.Board()
    board.push_uci("e2e4")
    fen_before = board.fen()

    # Act
    BoardCensus.from_board(board)

    # Assert
    assert board.fen() == fen_before


def test_rules_engine_accepts_fen():
    # Arrange
    engine = PythonChessRulesEngine()

    # Act
    census = engine.take_census("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")

    # Assert
    assert isinstance(engine, RulesEngine)
    assert census.is_check is True
    assert census.turn == chess.WHITE


def test_rules_engine_rejects_unparsable_fen():
    engine = PythonChessRulesEngine()

    with pytest.raises(RulesEngineError):
        engine.take_census("not a fen")


def test_rules_engine_rejects_unsupported_type():
    engine = PythonChessRulesEngine()

    with pytest.raises(RulesEngineError):
        engine.take_census(42)


def test_two_white_kings_are_rejected():
    # Arrange
    board = chess.Board("4k3/8/8/8/8/8/8/3KK3 w - - 0 1")

    # Act / Assert
    with pytest.raises(InvalidCensusError) as exc_info:
        BoardCensus.from_board(board)
    assert exc_info.value.invariant == "king_count"


def test_missing_king_is_rejected():
    engine = PythonChessRulesEngine()

    with pytest.raises(InvalidCensusError) as exc_info:
        engine.take_census("8/8/8/8/8/8/8/4K3 w - - 0 1")
    assert exc_info.value.invariant == "king_count"


def test_pawn_on_back_rank_is_rejected():
    board = chess.Board("P3k3/8/8/8/8/8/8/4K3 w - - 0 1")

    with pytest.raises(InvalidCensusError) as exc_info:
        BoardCensus.from_board(board)
    assert exc_info.value.invariant == "pawn_on_back_rank"


def test_wrong_square_count_is_rejected():
    with pytest.raises(InvalidCensusError) as exc_info:
        BoardCensus(squares=(None,) * 63, turn=chess.WHITE, is_check=False, legal_move_count=0)
    assert exc_info.value.invariant == "square_count"


def test_negative_legal_move_count_is_rejected():
    # Arrange
    census = BoardCensus.from_board(chess.Board())

    # Act / Assert
    with pytest.raises(InvalidCensusError) as exc_info:
        dataclasses.replace(census, legal_move_count=-1)
    assert exc_info.value.invariant == "legal_move_count"


def test_census_errors_are_value_errors():
    assert issubclass(InvalidCensusError, InvalidInputError)
    assert issubclass(InvalidCensusError, ValueError)


def test_from_board_validates_squares_once():
    # Arrange
    board = chess.Board()

    # Act
    with patch("chess_grader.core.board_census._validate_squares", wraps=_validate_squares) as validate:
        BoardCensus.from_board(board)

    # Assert
    assert validate.call_count == 1


def test_direct_construction_still_validates():
    # Arrange
    squares = BoardCensus.from_board(chess.Board()).squares

    # Act
    with patch("chess_grader.core.board_census._validate_squares", wraps=_validate_squares) as validate:
        BoardCensus(squares=squares, turn=chess.WHITE, is_check=False, legal_move_count=20)

    # Assert
    assert validate.call_count == 1
