"""CLI action handlers for ``latency-stats``.

Purpose
-------
Subcommand handlers plus the samples-file reader, keeping the entrypoint in
``__init__`` minimal. This module has no top-level side effects and is safe to
import in tests.

Fallback & Error Semantics
--------------------------
- Unreadable or malformed input and invalid settings are printed as JSON to
  stderr and yield exit code ``2``.
- A failed save is best-effort: it is logged by the persistence service and the
  command still exits ``0``.
- ``show`` exits ``1`` when no summary is stored for the label and ``2`` when
  pointed at ``:memory:``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import IO, List, Optional

from ...base.errors import ErrorCode, StatsError
from ...base.logging import LogContext, get_logger, log_event
from ...base.stats import Duration, compute
from ...config import get_settings
from ...persistence.sqlite import open_metric_store
from ...persistence.sqlite.engine import MEMORY_DB, get_db_path

_STDIN = "-"


def parse_samples(lines: IO[str], source: str = "<input>") -> List[int]:
    """Parse one integer nanosecond sample per line.

    Blank lines and ``#`` comments are ignored.

    Raises
    ------
    StatsError
        ``ErrorCode.VALIDATION`` for a line that is not a non-negative integer.
    """
    samples: List[int] = []
    for lineno, raw in enumerate(lines, start=1):
        text = raw.split("#", 1)[0].strip()
        if not text:
            continue
        try:
            value = int(text)
        except ValueError as exc:
            raise StatsError(
                code=ErrorCode.VALIDATION,
                message=f"{source}:{lineno}: not an integer: {text!r}",
                source="cli",
                raw=exc,
            ) from exc
        if value < 0:
            raise StatsError(
                code=ErrorCode.VALIDATION,
                message=f"{source}:{lineno}: negative latency: {value}",
                source="cli",
            )
        samples.append(value)
    return samples


def read_samples(path: str) -> List[int]:
    """Read samples from ``path`` (``-`` reads stdin)."""
    if path == _STDIN:
        return parse_samples(sys.stdin, source="<stdin>")
    try:
        with open(path, encoding="utf-8") as fh:
            return parse_samples(fh, source=path)
    except (OSError, UnicodeDecodeError) as exc:
        raise StatsError(
            code=ErrorCode.UNAVAILABLE,
            message=f"cannot read samples file {path}: {getattr(exc, 'strerror', None) or exc}",
            source="cli",
            raw=exc,
        ) from exc


def _print_error(err: StatsError) -> None:
    print(json.dumps({"error": err.message, "code": err.code.value}), file=sys.stderr)


def _chunk_size(args: argparse.Namespace) -> int:
    overrides = {"chunk_size": getattr(args, "chunk_size", None)}
    return get_settings(overrides).chunk_size


def handle_summarize(args: argparse.Namespace) -> int:
    """Execute the ``summarize`` subcommand.

    Prints the one-line report, or the full ``to_dict()`` JSON with ``--json``.
    """
    try:
        chunk_size = _chunk_size(args)
        samples = read_samples(args.file)
    except StatsError as err:
        _print_error(err)
        return 2
    stats = compute(samples, chunk_size=chunk_size)
    if args.json:
        print(json.dumps(stats.to_dict()))
    else:
        print(stats)
    return 0


def handle_save(args: argparse.Namespace) -> int:
    """Execute the ``save`` subcommand.

    Returns
    -------
    int
        ``0`` once statistics were computed (whether or not the write
        succeeded); ``2`` on unreadable input or invalid settings.
    """
    try:
        chunk_size = _chunk_size(args)
        samples = read_samples(args.file)
    except StatsError as err:
        _print_error(err)
        return 2
    stats = compute(samples, chunk_size=chunk_size)
    print(stats)

    logger = get_logger("latency_stats.cli")
    try:
        store = open_metric_store(args.db)
    except Exception as exc:  # best-effort: losing telemetry never fails the run
        log_event(
            logger,
            "cli.store.open_failed",
            LogContext(run_label=args.label),
            level=logging.ERROR,
            error=str(exc),
        )
        stats.save(args.label, None)
        return 0
    with store:
        stats.save(args.label, store)
    return 0


def _format_summary(summary_dict: dict, num_chunks: int) -> str:
    parts = [f"type: {summary_dict['type']}", f"N: {summary_dict['num_operations']}"]
    for key in ("mean", "median", "stddev", "min", "max", "p90", "p95", "p97", "p99"):
        parts.append(f"{key}: {Duration(int(summary_dict[key]))}")
    parts.append(f"chunks: {num_chunks}")
    return ", ".join(parts)


def handle_show(args: argparse.Namespace) -> int:
    """Execute the ``show`` subcommand.

    Returns ``1`` when the database or the label does not exist, ``2`` for
    ``--db :memory:`` (a private in-memory database is always empty).
    """
    db_path: Optional[str] = args.db
    if db_path == MEMORY_DB:
        _print_error(
            StatsError(
                code=ErrorCode.VALIDATION,
                message="show needs a database file; ':memory:' is always empty",
                source="cli",
            )
        )
        return 2
    try:
        path = get_db_path(db_path)
    except StatsError as err:
        _print_error(err)
        return 2
    if not path.exists():
        print(json.dumps({"error": f"no database at {path}"}), file=sys.stderr)
        return 1
    with open_metric_store(db_path) as store:
        repo = store.repository()
        summary = repo.get_summary(args.label)
        if summary is None:
            print(json.dumps({"error": f"no statistics stored for '{args.label}'"}), file=sys.stderr)
            return 1
        num_chunks = len({c.chunk_index for c in repo.list_chunks(args.label)})
    data = asdict(summary)
    if args.json:
        print(json.dumps({**data, "chunks": num_chunks}))
    else:
        print(_format_summary(data, num_chunks))
    return 0


__all__ = [
    "parse_samples",
    "read_samples",
    "handle_summarize",
    "handle_save",
    "handle_show",
]
