"""Structured logging configuration for Calculi.

Every module logs under the ``calculi`` hierarchy (``calculi.parser``,
``calculi.solver``, ...). ``setup_logging`` sets one level for the whole tree
and can raise or lower individual modules, e.g. ``{"solver": "DEBUG"}`` to
trace inversion steps without the parser's per-literal debug lines.
"""

import logging
import sys
from datetime import datetime
from typing import Mapping, Optional

ROOT_LOGGER = "calculi"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Child loggers whose level was set by the last setup_logging call
_module_overrides: set = set()


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured log entries with timestamp, module, level, and message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def to_level(name: str) -> int:
    """Map a level name to its ``logging`` constant.

    Raises:
        ValueError: If ``name`` is not one of ``LEVEL_NAMES``.
    """
    upper = name.strip().upper()
    if upper not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level '{name}' (expected one of {', '.join(LEVEL_NAMES)})")
    return getattr(logging, upper)


def parse_module_levels(entries) -> dict:
    """Parse ``["solver=DEBUG", "parser=ERROR,api=INFO"]`` into ``{module: level}``.

    Raises:
        ValueError: If an entry is not ``module=LEVEL`` or names an unknown level.
    """
    levels = {}
    for entry in entries:
        for part in entry.split(","):
            if not part.strip():
                continue
            module, sep, level = part.partition("=")
            if not sep or not module.strip():
                raise ValueError(f"Invalid module level '{part.strip()}' (expected module=LEVEL)")
            to_level(level)
            levels[module.strip()] = level.strip().upper()
    return levels


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    module_levels: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """Set up structured logging for the application.

    Args:
        level: Logging level for the whole ``calculi`` tree
        log_file: Optional file path to write logs (if None, logs to stderr)
        module_levels: Per-module levels overriding ``level``, keyed by the
            name passed to ``get_logger``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(to_level(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for name in _module_overrides:
        get_logger(name).setLevel(logging.NOTSET)
    _module_overrides.clear()
    for name, module_level in (module_levels or {}).items():
        get_logger(name).setLevel(to_level(module_level))
        _module_overrides.add(name)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
