"""Logging setup for the doctidy command line.

Three output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] message
- CI/JSON mode: {"level":"...","ts":"...","logger":"...","msg":"...", ...extra}

Library modules log through logging.getLogger(__name__), so their records
flow into the "doctidy" logger configured here.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

ROOT_LOGGER = "doctidy"


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.GRAY,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


def _is_tty(stream: TextIO | None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    return stream is not None and hasattr(stream, "isatty") and stream.isatty()


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output: ``[LEVEL] message``."""

    def __init__(self, use_colors: bool = False) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _label(self, record: logging.LogRecord) -> str:
        label = f"[{record.levelname}]"
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            label = f"{color}{label}{Colors.RESET}"
        return label

    def format(self, record: logging.LogRecord) -> str:
        return f"{self._label(record)} {record.getMessage()}"


class VerboseFormatter(HumanFormatter):
    """Formatter adding a wall-clock timestamp: ``[LEVEL][HH:MM:SS] message``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"{self._label(record)}[{timestamp}] {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable)."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as one JSON object."""
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            log_entry.update(extra_data)

        return json.dumps(log_entry, default=str)


class DocTidyLogger(logging.Logger):
    """Logger with structured logging support for per-file events."""

    def structured(self, level: int, msg: str, **fields: Any) -> None:
        """Log a message with additional structured data.

        In JSON mode the fields become top-level keys; other modes show
        only the message.

        Args:
            level: Log level
            msg: Log message
            **fields: Additional data to include in JSON output
        """
        if not self.isEnabledFor(level):
            return
        self._log(level, msg, (), extra={"extra_data": fields} if fields else None)


logging.setLoggerClass(DocTidyLogger)


def get_logger(name: str = ROOT_LOGGER) -> DocTidyLogger:
    """Get a DocTidy logger instance.

    Args:
        name: Logger name

    Returns:
        DocTidyLogger instance
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure the doctidy logger.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stderr, keeping stdout for results)
    """
    stream = stream or sys.stderr
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    if mode == LogMode.JSON:
        formatter: logging.Formatter = JSONFormatter()
    elif mode == LogMode.VERBOSE:
        formatter = VerboseFormatter(use_colors=_is_tty(stream))
    else:
        formatter = HumanFormatter(use_colors=_is_tty(stream))

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging based on CLI flags.

    Args:
        verbose: Enable verbose mode with timestamps and debug messages
        quiet: Suppress info messages (warnings and errors only)
        ci: Enable JSON output for CI/CD
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(mode=mode, level=level)
