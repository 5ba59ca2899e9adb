"""Unified configuration layer.

Goals
-----
* Centralize defaults (chunk size, database location, log level).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external JSON config file pointed to by LATENCY_STATS_CONFIG_FILE
    3. Environment variables (LATENCY_STATS_DB_PATH, LATENCY_STATS_CHUNK_SIZE,
       LATENCY_STATS_LOG_LEVEL)
    4. In-code overrides passed to the helper
* Validate the merged result once, through a pydantic model.

External Config File (Optional)
-------------------------------
```
{
  "db_path": "~/bench/latency_stats.db",
  "chunk_size": 250,
  "log_level": "DEBUG"
}
```

Public API
----------
* get_settings(overrides: dict | None = None) -> StatsSettings
* reset_settings_cache() -> None
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..base.errors import ErrorCode, StatsError
from .defaults import DEFAULT_CHUNK_SIZE, DEFAULT_DB_FILENAME, DEFAULT_LOG_LEVEL
from .env import ENV_CONFIG_FILE, get_env, read_env_overrides

_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL")

_FILE_CACHE: Optional[Dict[str, Any]] = None


class StatsSettings(BaseModel):
    """Validated runtime settings.

    Attributes
    ----------
    db_path:
        SQLite database file used by ``open_metric_store`` when the caller does
        not pass one explicitly.
    chunk_size:
        Samples per chunk for windowed statistics; ``0`` disables chunking.
    log_level:
        Level name for the shared ``latency_stats`` logger.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    db_path: str = DEFAULT_DB_FILENAME
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=0)
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


def _load_external_config() -> Dict[str, Any]:
    """Load (once) the JSON config file named by ``LATENCY_STATS_CONFIG_FILE``.

    A missing variable or file yields an empty mapping. A file that cannot be
    read or is not a JSON object is a configuration error.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = get_env(ENV_CONFIG_FILE)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path).expanduser()
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StatsError(
            code=ErrorCode.VALIDATION,
            message=f"config file {p} cannot be read: {getattr(exc, 'strerror', None) or exc}",
            source="config",
            raw=exc,
        ) from exc
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise StatsError(
            code=ErrorCode.VALIDATION,
            message=f"config file {p} is not valid JSON: {exc}",
            source="config",
            raw=exc,
        ) from exc
    if not isinstance(data, dict):
        raise StatsError(
            code=ErrorCode.VALIDATION,
            message=f"config file {p} must contain a JSON object",
            source="config",
        )
    _FILE_CACHE = data
    return data


def reset_settings_cache() -> None:
    """Forget the cached config file contents (used by tests and long-lived hosts)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def get_settings(overrides: Optional[Dict[str, Any]] = None) -> StatsSettings:
    """Return merged, validated settings.

    Merge order (later wins): defaults -> config file -> env vars -> overrides

    Raises
    ------
    StatsError
        With ``ErrorCode.VALIDATION`` when the merged values fail validation.
    """
    cfg: Dict[str, Any] = {}
    cfg |= _load_external_config()
    cfg |= read_env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    try:
        return StatsSettings.model_validate(cfg)
    except ValidationError as exc:
        raise StatsError(
            code=ErrorCode.VALIDATION,
            message=f"invalid settings: {exc.errors(include_url=False)}",
            source="config",
            raw=exc,
        ) from exc


__all__ = [
    "StatsSettings",
    "get_settings",
    "reset_settings_cache",
]
