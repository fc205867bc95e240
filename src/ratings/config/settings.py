from __future__ import annotations

"""Runtime settings from environment variables (GitHub secrets or .env).

All knobs are optional. Unset or malformed values fall back to defaults so
a plain checkout runs without any configuration.
"""

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from ratings.data.io.paths import configs_dir

logger = logging.getLogger(__name__)

# load a local .env if present
load_dotenv()

DEFAULT_MAX_WORKERS = 4
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def get_setting(key: str, default: str | None = None) -> str | None:
    """Read a setting from the environment; blank counts as unset."""
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip()


def _float_or_none(key: str) -> float | None:
    raw = get_setting(key)
    if raw is None:
        return None
    try:
        v = float(raw)
    except ValueError:
        logger.warning(f"{key}={raw!r} is not a number, using transport default")
        return None
    if v <= 0:
        logger.warning(f"{key}={raw!r} must be > 0, using transport default")
        return None
    return v


def _int_or_default(key: str, default: int) -> int:
    raw = get_setting(key)
    if raw is None:
        return default
    try:
        v = int(raw)
    except ValueError:
        logger.warning(f"{key}={raw!r} is not an integer, using {default}")
        return default
    return v if v > 0 else default


@dataclass(frozen=True)
class Settings:
    categories_path: Path
    published_base: str | None
    http_timeout: float | None
    max_workers: int
    log_level: str
    log_path: Path
    log_format: str = DEFAULT_LOG_FORMAT


def load_settings() -> Settings:
    categories = get_setting("RATINGS_CATEGORIES_PATH")
    return Settings(
        categories_path=Path(categories) if categories else configs_dir() / "categories.json",
        published_base=get_setting("RATINGS_PUBLISHED_BASE"),
        http_timeout=_float_or_none("RATINGS_HTTP_TIMEOUT"),
        max_workers=_int_or_default("RATINGS_MAX_WORKERS", DEFAULT_MAX_WORKERS),
        log_level=(get_setting("RATINGS_LOG_LEVEL", "INFO") or "INFO").upper(),
        log_path=Path(get_setting("RATINGS_LOG_PATH", "logs/ratings.log") or "logs/ratings.log"),
        log_format=get_setting("RATINGS_LOG_FORMAT", DEFAULT_LOG_FORMAT) or DEFAULT_LOG_FORMAT,
    )
