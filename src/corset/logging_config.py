"""Logging setup for applications embedding the corset engine.

The engine modules only create loggers under the ``corset`` hierarchy and
emit DEBUG records; installing handlers is left to the application:

    from corset.logging_config import setup_logging, get_logger

    setup_logging(level=logging.DEBUG)
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator

ROOT_LOGGER_NAME = "corset"

_RESERVED_KEYS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "asctime", "taskName",
    }
)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter.

    Format: [TIME] LEVEL logger: message [extra_key=value ...]
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True, show_extra: bool = True):
        super().__init__()
        self.use_colors = use_colors
        self.show_extra = show_extra

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level_str = f"{self.COLORS[level]}{level:8}{self.COLORS['RESET']}"
        else:
            level_str = f"{level:8}"

        logger_name = record.name
        prefix = ROOT_LOGGER_NAME + "."
        if logger_name.startswith(prefix):
            logger_name = logger_name[len(prefix):]

        extra_str = ""
        if self.show_extra:
            extras = []
            for key, value in record.__dict__.items():
                if key in _RESERVED_KEYS:
                    continue
                if isinstance(value, float):
                    extras.append(f"{key}={value:.3g}")
                elif isinstance(value, (list, tuple)) and len(value) > 3:
                    extras.append(f"{key}=[...{len(value)} items]")
                else:
                    extras.append(f"{key}={value}")
            if extras:
                extra_str = " [" + ", ".join(extras) + "]"

        result = f"[{time_str}] {level_str} {logger_name}: {record.getMessage()}{extra_str}"
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def setup_logging(
    level: int = logging.INFO,
    console: bool = True,
    use_colors: bool = True,
) -> logging.Logger:
    """Configure the ``corset`` logger and return it.

    Existing handlers are replaced, so calling this twice does not duplicate
    output. Records do not propagate to the root logger.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ConsoleFormatter(use_colors=use_colors))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    **extra_fields: Any,
) -> Iterator[Dict[str, Any]]:
    """Log start, completion and failure of ``operation`` with elapsed time.

    Exceptions are logged and re-raised unchanged.
    """

    timing_info: Dict[str, Any] = {}
    start_time = time.perf_counter()

    logger.log(level, f"Starting: {operation}", extra={
        "event": "start",
        "operation": operation,
        **extra_fields,
    })

    try:
        yield timing_info
    except Exception as exc:
        elapsed = time.perf_counter() - start_time
        logger.error(f"Failed: {operation} ({elapsed:.3f}s) - {exc}", extra={
            "event": "error",
            "operation": operation,
            "elapsed_seconds": elapsed,
            "error": str(exc),
            **extra_fields,
        })
        raise

    elapsed = time.perf_counter() - start_time
    timing_info["elapsed_seconds"] = elapsed
    logger.log(level, f"Completed: {operation} ({elapsed:.3f}s)", extra={
        "event": "complete",
        "operation": operation,
        **extra_fields,
        **timing_info,
    })


__all__ = [
    "ConsoleFormatter",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "log_timing",
    "setup_logging",
]
