"""
Centralized Prometheus metrics definitions for the Chess Grader package.

This module uses the prometheus-client library to define all metrics exposed by
the grading components. Grouping them here provides a single, clear overview of
the package's instrumentation points.
"""
from prometheus_client import Counter, Histogram

# A common prefix for all package-specific metrics.
PREFIX = "chess_grader"

# --- Evaluation Metrics ---

POSITIONS_EVALUATED_TOTAL = Counter(
    f"{PREFIX}_positions_evaluated_total",
    "Total number of positions statically evaluated.",
    ["phase"],  # e.g., phase="opening", "middlegame", "endgame"
)

EVALUATION_DURATION_SECONDS = Histogram(
    f"{PREFIX}_evaluation_duration_seconds",
    "Histogram of the time taken to evaluate a single position, census included.",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, float("inf"))
)

# --- Classification & Aggregation Metrics ---

MOVES_CLASSIFIED_TOTAL = Counter(
    f"{PREFIX}_moves_classified_total",
    "Total number of moves classified.",
    ["quality"],  # e.g., quality="best", "blunder"
)

GAMES_SCORED_TOTAL = Counter(
    f"{PREFIX}_games_scored_total",
    "Total number of games aggregated into a game score.",
)
