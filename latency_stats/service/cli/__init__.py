"""Latency statistics CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no statistics or storage logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import json
import sys
from typing import Optional

from ...base.errors import StatsError
from ...base.logging import configure_logger
from ...config import get_settings
from .cli_actions import handle_save, handle_show, handle_summarize
from .cli_parser import build_parser

_HANDLERS = {
    "summarize": handle_summarize,
    "save": handle_save,
    "show": handle_show,
}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 not found, 2 invalid input).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    try:
        configure_logger(level=get_settings().log_level)
    except StatsError as err:
        print(json.dumps({"error": err.message, "code": err.code.value}), file=sys.stderr)
        return 2
    return _HANDLERS[args.cmd](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
