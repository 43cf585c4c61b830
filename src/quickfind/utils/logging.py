"""Logging for quickfind.

Everything logs under the ``quickfind`` logger. Deep walks run on worker
threads named ``quickfind-walk_N``; both formatters show the thread so
interleaved per-root messages can be told apart.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from quickfind.config.schema import LoggingConfig

PACKAGE_LOGGER = "quickfind"
MAIN_THREAD = "MainThread"

logger = logging.getLogger(PACKAGE_LOGGER)


def _short_name(name: str) -> str:
    prefix = PACKAGE_LOGGER + "."
    return name[len(prefix) :] if name.startswith(prefix) else name


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }

        # Structured fields from log_with_context
        context = getattr(record, "extra", None)
        if isinstance(context, dict):
            entry.update(context)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["location"] = f"{record.module}:{record.funcName}:{record.lineno}"
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Compact, optionally colored, single-line stderr output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        source = _short_name(record.name)
        if record.threadName and record.threadName != MAIN_THREAD:
            source = f"{source} [{record.threadName}]"

        line = f"{level} {source}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure the package logger.

    Replaces any handlers from an earlier call. Console output goes to
    stderr so it never mixes with results on stdout; a log file, when
    given, always receives JSON.

    Args:
        level: Level name; unknown names mean WARNING.
        log_file: Optional file that also receives every record.
        json_format: Emit JSON on stderr instead of console lines.
        use_color: Color the level name on stderr.

    Returns:
        The ``quickfind`` logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        JSONFormatter() if json_format else ConsoleFormatter(use_color=use_color)
    )
    logger.addHandler(stderr_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def setup_from_config(
    config: LoggingConfig,
    verbose: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure logging from the ``[logging]`` section; verbose forces DEBUG."""
    return setup_logging(
        level="DEBUG" if verbose else config.level,
        log_file=config.file,
        json_format=config.json_format,
        use_color=use_color,
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)


def log_with_context(
    target: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log a message with structured fields.

    The fields are attached as ``record.extra``; :class:`JSONFormatter`
    merges them into its output and the console formatter ignores them.
    """
    if not target.isEnabledFor(level):
        return
    record = target.makeRecord(target.name, level, "(unknown)", 0, message, (), None)
    record.extra = context
    target.handle(record)
