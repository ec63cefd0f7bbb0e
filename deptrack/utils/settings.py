"""Runtime knobs for SQL echo and log verbosity, read from ``DEPTRACK_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SQL_ECHO_ENV = "DEPTRACK_SQL_ECHO"
LOG_LEVEL_ENV = "DEPTRACK_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    sql_echo: bool = False
    log_level: str = "INFO"


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    # unrecognised words keep the default
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _FALSY:
        return False
    if normalized in _TRUTHY:
        return True
    return default


def _normalize_level(value: str | None, default: str = "INFO") -> str:
    if not value or not value.strip():
        return default
    return value.strip().upper()


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Read the environment once; call ``refresh_settings_cache`` to re-read it."""
    return Settings(
        sql_echo=_normalize_bool(os.getenv(SQL_ECHO_ENV), default=Settings.sql_echo),
        log_level=_normalize_level(os.getenv(LOG_LEVEL_ENV), default=Settings.log_level),
    )


def sql_echo_enabled() -> bool:
    return get_settings().sql_echo


def log_level_name() -> str:
    return get_settings().log_level


def refresh_settings_cache() -> None:
    get_settings.cache_clear()
