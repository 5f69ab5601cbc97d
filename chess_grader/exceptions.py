# chess_grader/exceptions.py
"""
Defines custom exceptions for the Chess Grader package.

Centralizing exceptions in this module prevents circular dependencies between
the evaluator, classifier and aggregator, which all need to raise errors defined
in a shared place. A common `ChessGraderError` base allows callers to catch
every package-specific failure in one clause.
"""

from typing import Optional


class ChessGraderError(Exception):
    """Base class for all package-specific, catchable errors."""
    pass


class InvalidInputError(ChessGraderError, ValueError):
    """
    Base class for caller contract violations.

    Raised synchronously when an input is malformed. The grading core never
    substitutes a default value for malformed input.
    """
    pass


class InvalidCensusError(InvalidInputError):
    """
    Raised when a board census violates a structural invariant.

    Attributes:
        invariant: A short identifier of the violated rule (e.g. "king_count"),
                   allowing callers to react to specific failures.
    """
    def __init__(self, message: str, invariant: Optional[str] = None):
        super().__init__(message)
        self.invariant = invariant


class InvalidMoveInputError(InvalidInputError):
    """Raised when the analysis inputs for a single move are not usable (e.g. NaN cp loss)."""
    pass


class InvalidMoveSequenceError(InvalidInputError):
    """
    Raised when a list of classified moves cannot be aggregated.

    This covers a declared total move count that is not positive or is smaller
    than the number of supplied moves.
    """
    pass


class RulesEngineError(ChessGraderError):
    """
    Raised when the rules engine cannot read a position.

    This typically wraps a lower-level `ValueError` from `python-chess`, such as
    an unparsable FEN string or an unsupported position object.
    """
    pass
