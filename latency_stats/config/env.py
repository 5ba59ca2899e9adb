"""latency_stats.config.env
========================

Centralized environment variable names and helpers.

Purpose
-------
- Provide a single source of truth for the environment variables the package
  honours.
- Offer a small helper that collects the ones that are set into a settings
  override mapping.

Failure Modes
-------------
- Helpers never raise on unset variables; values are returned as raw strings
  and validated later by the ``StatsSettings`` model.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

ENV_DB_PATH = "LATENCY_STATS_DB_PATH"
ENV_CHUNK_SIZE = "LATENCY_STATS_CHUNK_SIZE"
ENV_LOG_LEVEL = "LATENCY_STATS_LOG_LEVEL"
ENV_CONFIG_FILE = "LATENCY_STATS_CONFIG_FILE"

# settings field -> environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "db_path": ENV_DB_PATH,
    "chunk_size": ENV_CHUNK_SIZE,
    "log_level": ENV_LOG_LEVEL,
}


def get_env(name: str) -> Optional[str]:
    """Return a stripped environment value, or ``None`` when unset or blank."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def read_env_overrides() -> Dict[str, str]:
    """Collect settings overrides from the process environment.

    Returns
    -------
    Dict[str, str]
        Mapping of settings field name to the raw environment string, only for
        variables that are set to a non-blank value.
    """
    out: Dict[str, str] = {}
    for field, env_name in ENV_FIELD_MAP.items():
        if (val := get_env(env_name)) is not None:
            out[field] = val
    return out


__all__ = [
    "ENV_DB_PATH",
    "ENV_CHUNK_SIZE",
    "ENV_LOG_LEVEL",
    "ENV_CONFIG_FILE",
    "ENV_FIELD_MAP",
    "get_env",
    "read_env_overrides",
]
