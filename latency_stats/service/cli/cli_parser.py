"""CLI parser construction for ``latency-stats``.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _non_negative_int(value: str) -> int:
    """argparse ``type`` accepting integers >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {parsed}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``summarize``, ``save`` and ``show`` subcommands.
        ``--chunk-size`` and ``--db`` default to ``None`` so that configured
        settings apply unless overridden on the command line.
    """
    p = argparse.ArgumentParser(
        prog="latency-stats", description="Summarize and persist latency samples (nanoseconds)"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # summarize
    p_sum = sub.add_parser("summarize", help="Print statistics for a samples file")
    p_sum.add_argument("file", help="Samples file, one integer per line ('-' for stdin)")
    p_sum.add_argument("--chunk-size", type=_non_negative_int, default=None)
    p_sum.add_argument("--json", action="store_true")

    # save
    p_save = sub.add_parser("save", help="Compute statistics and store them under a label")
    p_save.add_argument("file", help="Samples file, one integer per line ('-' for stdin)")
    p_save.add_argument("--label", required=True, help="Run label (e.g. insert, update)")
    p_save.add_argument("--db", default=None, help="SQLite database path")
    p_save.add_argument("--chunk-size", type=_non_negative_int, default=None)

    # show
    p_show = sub.add_parser("show", help="Print the stored summary for a label")
    p_show.add_argument("--label", required=True)
    p_show.add_argument("--db", default=None, help="SQLite database path")
    p_show.add_argument("--json", action="store_true")

    return p


__all__ = ["build_parser"]
