"""
Logging for the CLI and the Streamlit client.

Everything under the ``ratings`` package logger goes to a rotating file
(path, level and format from ``Settings``) and to the console.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from ratings.config.settings import Settings, load_settings
from ratings.data.io.paths import resolve

PACKAGE_LOGGER = "ratings"
MAX_BYTES = 2 * 1024 * 1024
BACKUPS = 5


def setup_logging(settings: Settings | None = None, *, console: bool = True) -> logging.Logger:
    """Attach file (+ console) handlers to the package logger.

    Safe to call again: handlers from an earlier call are closed first,
    which Streamlit needs because it re-runs the script on every change.
    """
    settings = settings or load_settings()
    log_path = resolve(settings.log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(settings.log_format, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_path, maxBytes=MAX_BYTES, backupCount=BACKUPS, encoding="utf-8")
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"logging to {log_path} at {settings.log_level}")
    return logger
