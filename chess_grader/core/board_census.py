# chess_grader/core/board_census.py
"""
Translates positions from the `python-chess` rules engine into a `BoardCensus`.

This module acts as an Anti-Corruption Layer between the external rules library
and the evaluator. The evaluator only ever reads a `BoardCensus`: an immutable
snapshot of the 64 squares, the side to move, check status and the number of
legal moves. Structural invariants are validated once, at construction, so every
downstream function can assume a well-formed board.
"""

from dataclasses import InitVar, dataclass
from typing import Iterator, Optional, Tuple, Union

import chess
import structlog

from chess_grader.exceptions import InvalidCensusError, RulesEngineError
from chess_grader.types import RulesEngine

logger = structlog.get_logger(__name__)

Position = Union[chess.Board, str]


@dataclass(frozen=True, slots=True)
class BoardCensus:
    """
    A read-only view of a position.

    Attributes:
        squares: 64 entries indexed by `chess.Square` (a1 = 0, h8 = 63), each
                 holding a `chess.Piece` or None.
        turn: The side to move.
        is_check: Whether the side to move is in check.
        legal_move_count: The number of legal moves available to the side to move.
        squares_validated: Init-only. `from_board` sets it because it has
                           already validated the squares before move generation.
    """
    squares: Tuple[Optional[chess.Piece], ...]
    turn: chess.Color
    is_check: bool
    legal_move_count: int
    squares_validated: InitVar[bool] = False

    def __post_init__(self, squares_validated: bool) -> None:
        if not squares_validated:
            _validate_squares(self.squares)
        if self.legal_move_count < 0:
            raise InvalidCensusError("Legal move count cannot be negative.", invariant="legal_move_count")

    def piece_at(self, square: chess.Square) -> Optional[chess.Piece]:
        return self.squares[square]

    def pieces(self) -> Iterator[Tuple[chess.Square, chess.Piece]]:
        """Yields (square, piece) for every occupied square, a1 first."""
        for square, piece in enumerate(self.squares):
            if piece is not None:
                yield square, piece

    def king_square(self, color: chess.Color) -> chess.Square:
        return next(sq for sq, p in self.pieces() if p.piece_type == chess.KING and p.color == color)

    @classmethod
    def from_board(cls, board: chess.Board) -> "BoardCensus":
        """Builds a census from a `chess.Board` without mutating it."""
        squares = tuple(board.piece_at(square) for square in chess.SQUARES)
        # Move generation assumes one king per side.
        _validate_squares(squares)
        return cls(
            squares=squares,
            turn=board.turn,
            is_check=board.is_check(),
            legal_move_count=board.legal_moves.count(),
            squares_validated=True,
        )


def _validate_squares(squares: Tuple[Optional[chess.Piece], ...]) -> None:
    """Raises `InvalidCensusError` for boards no legal game can reach."""
    if len(squares) != 64:
        raise InvalidCensusError(
            f"A board census must describe 64 squares, got {len(squares)}.", invariant="square_count"
        )

    occupied = [(sq, p) for sq, p in enumerate(squares) if p is not None]
    for color in chess.COLORS:
        kings = sum(1 for _, p in occupied if p.piece_type == chess.KING and p.color == color)
        if kings != 1:
            raise InvalidCensusError(
                f"{chess.COLOR_NAMES[color].capitalize()} must have exactly one king, found {kings}.",
                invariant="king_count",
            )

    for square, piece in occupied:
        if piece.piece_type == chess.PAWN and chess.square_rank(square) in (0, 7):
            raise InvalidCensusError(
                f"Pawn found on back rank at {chess.square_name(square)}.", invariant="pawn_on_back_rank"
            )


class PythonChessRulesEngine(RulesEngine):
    """A `RulesEngine` backed by `python-chess`, accepting boards or FEN strings."""

    def take_census(self, position: Position) -> BoardCensus:
        """
        Reads a position into a `BoardCensus`.

        Args:
            position: A `chess.Board` or a FEN string.

        Returns:
            The validated census of the position.

        Raises:
            RulesEngineError: If the FEN cannot be parsed or the type is unsupported.
            InvalidCensusError: If the position violates a structural invariant.
        """
        if isinstance(position, chess.Board):
            board = position
        elif isinstance(position, str):
            try:
                board = chess.Board(position)
            except ValueError as e:
                raise RulesEngineError(f"Could not parse FEN '{position}': {e}") from e
        else:
            raise RulesEngineError(f"Unsupported position type: {type(position).__name__}")

        census = BoardCensus.from_board(board)
        logger.debug("Census taken.", fen=board.fen(), legal_moves=census.legal_move_count)
        return census
