# fincalc/logging_config.py
"""
Logging setup for fincalc entry points.

Library modules only create module loggers (logging.getLogger(__name__)); handlers
are attached here, once, by whoever runs the program (CLI, notebook, tests).

Environment
-----------
- FINCALC_DEBUG=1      → DEBUG level unless a level is passed explicitly
- FINCALC_LOG_FILE     → also write to a rotating file at this path
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

ROOT_LOGGER = "fincalc"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def debug_enabled() -> bool:
    return os.getenv("FINCALC_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.DEBUG if debug_enabled() else logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str | int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Attach a stderr handler (and optionally a rotating file handler) to the package logger.

    Safe to call repeatedly: handlers are added once and only the level is updated.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_resolve_level(level))
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    # Avoid duplicate handlers if reloaded in REPL/tests
    if not any(getattr(h, "_fincalc_console", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        console._fincalc_console = True  # type: ignore[attr-defined]
        logger.addHandler(console)

    log_path = log_file or os.getenv("FINCALC_LOG_FILE")
    if log_path and not any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == os.path.abspath(log_path) for h in logger.handlers
    ):
        directory = os.path.dirname(log_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
