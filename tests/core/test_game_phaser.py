# tests/core/test_game_phaser.py
import chess

from chess_grader.config.settings import AnalysisSettings, GamePhaserSettingsModel
from chess_grader.core.board_census import BoardCensus
from chess_grader.core.game_phaser import count_material, determine_game_phase
from chess_grader.types import GamePhase


def _census(fen: str = chess.STARTING_FEN) -> BoardCensus:
    return BoardCensus.from_board(chess.Board(fen))


def test_count_material_starting_position():
    assert count_material(_census()) == (30, 2)


def test_determine_game_phase_opening():
    # Arrange
    census = _census()

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert phase == GamePhase.OPENING


def test_thirty_pieces_after_quiet_moves_is_opening():
    # Arrange: 1. e4 e5 2. Nf3 Nc6, nothing captured
    census = _census("r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert count_material(census)[0] == 30
    assert phase == GamePhase.OPENING


def test_twenty_eight_pieces_is_still_opening():
    # Arrange: both d-pawns gone
    census = _census("rnbqkbnr/ppp1pppp/8/8/8/8/PPP1PPPP/RNBQKBNR w KQkq - 0 1")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert count_material(census)[0] == 28
    assert phase == GamePhase.OPENING


def test_twenty_seven_pieces_with_queens_is_middlegame():
    # Arrange: white d-pawn and black d/e-pawns gone
    census = _census("rnbqkbnr/ppp2ppp/8/8/8/8/PPP1PPPP/RNBQKBNR w KQkq - 0 1")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert count_material(census) == (27, 2)
    assert phase == GamePhase.MIDDLEGAME


def test_determine_game_phase_middlegame():
    # Arrange: 15 non-king pieces, one queen
    census = _census("r3k2r/pp3ppp/8/8/8/8/PP3PPP/R2QK2R w KQkq - 0 1")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert count_material(census) == (15, 1)
    assert phase == GamePhase.MIDDLEGAME


def test_ten_pieces_with_queens_is_endgame():
    # Arrange
    census = _census("3qk3/pppp4/8/8/8/8/PPPP4/3QK3 w - - 0 1")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert count_material(census) == (10, 2)
    assert phase == GamePhase.ENDGAME


def test_queenless_position_is_endgame():
    # Arrange: 16 non-king pieces but no queens
    census = _census("r3k2r/ppp2ppp/8/8/8/8/PPP2PPP/R3K2R w KQkq - 0 1")

    # Act
    phase = determine_game_phase(census)

    # Assert
    assert phase == GamePhase.ENDGAME


def test_phase_thresholds_come_from_settings():
    # Arrange
    census = _census("r3k2r/pp3ppp/8/8/8/8/PP3PPP/R2QK2R w KQkq - 0 1")
    settings = AnalysisSettings(phaser=GamePhaserSettingsModel(opening_min_piece_count=28, endgame_max_piece_count=16))

    # Act
    phase = determine_game_phase(census, settings)

    # Assert
    assert phase == GamePhase.ENDGAME
