"""
Logging management module.

Everything goes to stderr as one JSON object per line; stdout carries the
MCP stdio protocol and must stay clean.
"""
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

# Third-party loggers bound to the same handlers so their output never reaches stdout.
SDK_LOGGERS = ("mcp", "mcp.server", "elastic_transport", "elasticsearch", "urllib3")


class JsonLineFormatter(logging.Formatter):
    """Render a record as `{"level": ..., "message": ...}` on a single line."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message} | {self.formatException(record.exc_info)}"
        return json.dumps(
            {"level": record.levelname.lower(), "message": message},
            ensure_ascii=False,
        )


def setup_logger(
    name: str = "propsearch",
    level: str = "INFO",
    log_file: Optional[Path] = None,
    stream=None,
) -> logging.Logger:
    """
    Setup and configure logger.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        stream: Console stream, defaults to sys.stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Remove existing handlers
    logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    logger.propagate = False

    formatter = JsonLineFormatter()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def bind_loggers(logger: logging.Logger, names: Iterable[str] = SDK_LOGGERS) -> None:
    """
    Route other libraries' loggers through `logger`'s handlers.

    The root logger gets the same handlers too, so records from loggers not
    listed in `names` (asyncio, anyio, ...) still come out as JSON lines.
    """
    for name in names:
        other = logging.getLogger(name)
        other.setLevel(logger.level)
        other.handlers.clear()
        for handler in logger.handlers:
            other.addHandler(handler)
        other.propagate = False

    root = logging.getLogger()
    # drop handlers left by an earlier bind before adding the current ones
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonLineFormatter):
            root.removeHandler(handler)
    for handler in logger.handlers:
        root.addHandler(handler)

