"""
Structured logging configuration for the length_calc package.

Provides:
- JSON formatter writing one object per line, for log collection on the host machine
- Console formatter for the tool's own diagnostics
- Timing context manager for calculation runs
- Centralized logging setup

Per-element resolution is logged at DEBUG with the fields ``element``,
``parameter``, ``source`` and ``length_feet``. Enum values such as
``LengthSource.TYPE`` are written by value ("Type").

Usage:
    from length_calc.logging_config import setup_logging, get_logger

    # Setup once, when the host loads the tool
    setup_logging(level="INFO", json_file="length_calc.log.json")

    # Get logger in any module
    logger = get_logger(__name__)
    logger.debug("Resolved length", extra={"element": "Pipe : 50mm", "source": LengthSource.INSTANCE})
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

PACKAGE_LOGGER = "length_calc"

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'message', 'asctime', 'taskName',
})


def _field_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    return value


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: _field_value(value)
        for key, value in record.__dict__.items()
        if key not in _RESERVED_KEYS
    }


def _coerce_level(level: Union[int, str]) -> int:
    """Numeric level for a number or a level name; unknown names give INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


class JSONFormatter(logging.Formatter):
    """One JSON object per log record.

    Output format:
        {"timestamp": "...", "level": "DEBUG", "logger": "length_calc.calculator",
         "message": "...", "element": "Pipe : 50mm", "source": "Instance", ...}

    Location is added for DEBUG and WARNING-or-above records. Extra fields that
    do not serialize are written as their ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING or record.levelno <= logging.DEBUG:
            log_entry["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in _extra_fields(record).items():
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Format: [TIME] LEVEL module: message [key=value, ...]

    The ``length_calc.`` prefix is dropped from logger names.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def _level(self, levelname: str) -> str:
        color = self.COLORS.get(levelname) if self.use_colors else None
        if color:
            return f"{color}{levelname:8}{self.RESET}"
        return f"{levelname:8}"

    @staticmethod
    def _extras(record: logging.LogRecord) -> str:
        parts = []
        for key, value in _extra_fields(record).items():
            if isinstance(value, float):
                parts.append(f"{key}={value:.4g}")
            elif isinstance(value, (list, tuple)) and len(value) > 3:
                parts.append(f"{key}=[...{len(value)} items]")
            else:
                parts.append(f"{key}={value}")
        return " [" + ", ".join(parts) + "]" if parts else ""

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        name = record.name
        if name.startswith(PACKAGE_LOGGER + "."):
            name = name[len(PACKAGE_LOGGER) + 1:]

        result = (
            f"[{time_str}] {self._level(record.levelname)} {name}: "
            f"{record.getMessage()}{self._extras(record)}"
        )
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


def setup_logging(
    level: Union[int, str] = logging.INFO,
    json_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    use_colors: bool = True,
) -> logging.Logger:
    """Configure the ``length_calc`` logger.

    Existing handlers are replaced, so calling this again (for example after
    the configuration file changes) does not duplicate output. The package
    logger stops propagating to the host application's root logger.

    Args:
        level: Minimum log level, as a number or a level name ("DEBUG")
        json_file: Optional path for JSON log file
        console: Log to stderr (default True)
        use_colors: Use ANSI colors on the console (default True)

    Returns:
        The package logger
    """
    level = _coerce_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ConsoleFormatter(use_colors=use_colors))
        logger.addHandler(console_handler)

    if json_file:
        json_handler = logging.FileHandler(Path(json_file), encoding='utf-8')
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    **extra_fields: Any
) -> Iterator[Dict[str, Any]]:
    """Log the start, completion and duration of an operation.

    Example:
        with log_timing(logger, "Calculating lengths", elements=len(elements)) as info:
            ...
            info["with_length"] = count

    Yields:
        dict merged into the completion record; ``elapsed_seconds`` is
        added on success
    """
    timing_info: Dict[str, Any] = {}
    fields = {"operation": operation, **extra_fields}
    start_time = time.perf_counter()

    logger.log(level, "Starting: %s", operation, extra={"event": "start", **fields})

    try:
        yield timing_info
    except Exception as e:
        elapsed = time.perf_counter() - start_time
        logger.error(
            "Failed: %s (%.3fs) - %s", operation, elapsed, e,
            extra={"event": "error", "elapsed_seconds": elapsed, "error": str(e), **fields},
        )
        raise

    timing_info["elapsed_seconds"] = time.perf_counter() - start_time
    logger.log(
        level, "Completed: %s (%.3fs)", operation, timing_info["elapsed_seconds"],
        extra={"event": "complete", **fields, **timing_info},
    )


def configure_default_logging(verbose: bool = False) -> logging.Logger:
    """Configure console logging: DEBUG if verbose, INFO otherwise."""
    return setup_logging(level=logging.DEBUG if verbose else logging.INFO)
