# chess_grader/utils/logging_config.py
"""
Structured logging for the grading package, built on structlog.

structlog events and plain `logging` records from other libraries pass through
the same processor chain and end up on the same root-logger handlers. Per-game
fields (a game id, the number of moves) can be bound for the duration of a
grading run with `game_log_context`, so every event emitted by the evaluator,
classifier and aggregator inside that run carries them.
"""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

import structlog
from structlog.types import Processor

from chess_grader.config.settings import settings as app_settings


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _handler(handler: logging.Handler, renderer: Processor, pre_chain: List[Processor]) -> logging.Handler:
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processor=renderer))
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_to_console: bool = True,
    log_file: Optional[Union[str, Path]] = None,
    force_json_console: bool = False,
    extra_processors: Optional[List[Processor]] = None,
) -> None:
    """
    Routes structlog and standard-library logging through one set of handlers.

    Args:
        log_level: Root level name, case-insensitive. Falls back to
                   `default_log_level` from the package settings.
        log_to_console: Attach a stdout handler using the coloured dev renderer.
        log_file: Append JSON lines to this file.
        force_json_console: Render the console handler as JSON as well.
        extra_processors: Appended to the chain for structlog events only.
    """
    level = (log_level or app_settings.default_log_level).upper()
    pre_chain = _shared_processors()

    structlog.configure(
        processors=pre_chain + list(extra_processors or []) + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: List[logging.Handler] = []
    if log_to_console:
        console_renderer: Processor = (
            structlog.processors.JSONRenderer() if force_json_console
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        handlers.append(_handler(logging.StreamHandler(sys.stdout), console_renderer, pre_chain))
    if log_file:
        handlers.append(_handler(
            logging.FileHandler(Path(log_file), mode="a", encoding="utf-8"),
            structlog.processors.JSONRenderer(),
            pre_chain,
        ))

    logging.basicConfig(handlers=handlers, level=level, force=True)


@contextmanager
def game_log_context(**fields: Any) -> Iterator[None]:
    """Binds `fields` to every log event emitted inside the block (context-local)."""
    with structlog.contextvars.bound_contextvars(**fields):
        yield
