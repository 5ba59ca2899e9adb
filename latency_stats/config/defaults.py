"""latency_stats.config.defaults
=============================

Central place for small, stable default values used across the latency_stats
package and its CLI. These defaults can be overridden via environment
variables, an external JSON config file, or explicit overrides passed to
``get_settings``.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the computation, persistence and CLI layers free of magic literals.

This module intentionally avoids importing from other latency_stats packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Computation ----
# Number of consecutive samples aggregated into one chunk.
DEFAULT_CHUNK_SIZE = 100


# ---- Persistence ----
SUMMARY_TABLE = "latencies"
CHUNKS_TABLE = "latencies_chunks"
# Database file used when no explicit path is configured.
DEFAULT_DB_FILENAME = "latency_stats.db"


# ---- SQLite config (infrastructure) ----
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
# Journal and sync mode optimized for local benchmark runs.
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"
# SQLite INTEGER columns hold signed 64-bit values.
SQLITE_MAX_INTEGER = 2**63 - 1
SQLITE_MIN_INTEGER = -(2**63)


# ---- Logging ----
DEFAULT_LOG_LEVEL = "INFO"
BASE_LOGGER_NAME = "latency_stats"


__all__ = [
    # Computation
    "DEFAULT_CHUNK_SIZE",
    # Persistence
    "SUMMARY_TABLE",
    "CHUNKS_TABLE",
    "DEFAULT_DB_FILENAME",
    # SQLite
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
    "SQLITE_MAX_INTEGER",
    "SQLITE_MIN_INTEGER",
    # Logging
    "DEFAULT_LOG_LEVEL",
    "BASE_LOGGER_NAME",
]
