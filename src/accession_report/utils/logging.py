"""Logging helpers shared by the CLI and library modules."""

import logging
import os
import sys

LOG_LEVEL_ENV = "ACCESSION_REPORT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_ROOT_LOGGER_NAME = "accession_report"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if name != _ROOT_LOGGER_NAME and not name.startswith(f"{_ROOT_LOGGER_NAME}."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> None:
    """
    Attach a stderr handler to the package root logger.

    Args:
        level: Level name (DEBUG, INFO, ...). Falls back to the
            ACCESSION_REPORT_LOG_LEVEL environment variable, then WARNING.

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)
    # Repeated CLI invocations in one process must not stack handlers
    if not any(getattr(h, "_accession_report", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._accession_report = True  # type: ignore[attr-defined]
        root.addHandler(handler)
