"""Application-wide configuration helpers and constants."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent

try:  # pragma: no cover - optional dependency for local development
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - python-dotenv is optional
    load_dotenv = None  # type: ignore[assignment]

if load_dotenv is not None:
    load_dotenv(BASE_DIR / ".env")


logger = logging.getLogger(__name__)


def _clean_text(value: str | None) -> str:
    """Return ``value`` stripped of surrounding whitespace."""

    if value is None:
        return ""
    return value.strip()


def _path_from(env_value: str | None, default: str | Path) -> Path:
    """Resolve a filesystem path using an environment override when provided."""

    text = _clean_text(env_value)
    candidate = Path(text) if text else Path(default)
    candidate = candidate.expanduser()
    if candidate.is_absolute():
        try:
            return candidate.resolve()
        except (OSError, RuntimeError):  # pragma: no cover - fallback for exotic paths
            return candidate
    return candidate


def _coerce_positive_float(value: str | None, default: float) -> float:
    """Return ``value`` coerced to a positive float or ``default`` when invalid."""

    text = _clean_text(value)
    if not text:
        return default
    try:
        numeric = float(text)
    except (TypeError, ValueError):
        return default
    return numeric if numeric > 0 else default


def _coerce_truthy_env(value: str | None) -> bool:
    """Return ``True`` when ``value`` represents an affirmative flag."""

    if value is None:
        return False
    text = value.strip().lower()
    return text in {"1", "true", "yes", "on"}


LOG_DIR_PATH: Final[Path] = _path_from(os.environ.get("LOG_DIR"), BASE_DIR / "logs")
LOG_DIR: Final[str] = os.fspath(LOG_DIR_PATH)
LOG_FILE_PATH: Final[Path] = _path_from(
    os.environ.get("LOG_FILE"), LOG_DIR_PATH / "app.log"
)
LOG_FILE: Final[str] = os.fspath(LOG_FILE_PATH)

DEFAULT_DATA_SOURCE: Final[str] = "data"

DATA_FETCH_TIMEOUT_SECONDS: Final[float] = _coerce_positive_float(
    os.environ.get("DATA_FETCH_TIMEOUT"), 10.0
)

DEFAULT_USER_AGENT: Final[str] = "AchievementDashboard/1.0"
USER_AGENT: Final[str] = _clean_text(os.environ.get("USER_AGENT")) or DEFAULT_USER_AGENT

APP_SECRET_KEY: Final[str] = _clean_text(os.environ.get("APP_SECRET_KEY")) or "dev-secret"


def is_remote_source(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def get_data_source() -> str:
    """Return the directory or base URL holding the per-platform JSON files.

    Read on every call so the source can be switched between app loads.
    """

    text = _clean_text(os.environ.get("DATA_SOURCE"))
    if not text:
        return DEFAULT_DATA_SOURCE
    if is_remote_source(text):
        return text.rstrip("/")
    return os.fspath(_path_from(text, DEFAULT_DATA_SOURCE))


def sample_data_fallback_enabled() -> bool:
    """Return whether the bundled sample data replaces a failed load."""

    return _coerce_truthy_env(os.environ.get("SAMPLE_DATA_FALLBACK"))


def _validate_settings() -> None:
    """Sanity-check critical configuration values."""

    if not APP_SECRET_KEY:
        raise RuntimeError("APP_SECRET_KEY must not be empty")


_validate_settings()


__all__ = [
    "APP_SECRET_KEY",
    "BASE_DIR",
    "DATA_FETCH_TIMEOUT_SECONDS",
    "DEFAULT_DATA_SOURCE",
    "DEFAULT_USER_AGENT",
    "LOG_DIR",
    "LOG_DIR_PATH",
    "LOG_FILE",
    "LOG_FILE_PATH",
    "USER_AGENT",
    "get_data_source",
    "is_remote_source",
    "sample_data_fallback_enabled",
]
