"""Structured logging for the interpreter.

Game text owns stdout, so log events go to stderr unless a log file is
given. Loaded-game context (adventure number, seed) is bound through
structlog contextvars and merged into every event.
"""

import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

LOG_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

MAX_TEXT_FIELD = 60


def truncate_text_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Shorten action descriptions and message text in log events."""
    for key in ("description", "text"):
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > MAX_TEXT_FIELD:
            event_dict[key] = value[: MAX_TEXT_FIELD - 3] + "..."
    return event_dict


def _open_stream(log_file: Path | None) -> TextIO:
    if log_file is None:
        return sys.stderr
    return open(log_file, "a")


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Set up structlog once at startup. Unknown level names mean WARNING."""
    stream = _open_stream(log_file)
    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(
                fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
            ),
            truncate_text_processor,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            LOG_LEVELS.get(log_level.upper(), LOG_LEVELS["WARNING"])
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def bind_game_context(**values: Any) -> None:
    """Attach values such as the adventure number to all later events."""
    structlog.contextvars.bind_contextvars(**values)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
