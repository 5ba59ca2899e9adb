"""Base structured logging utilities.

Rationale:
- One place that decides how package log lines look (JSON or plain text).
- Avoid sprinkling ad-hoc logger setup across the computation and persistence
  layers.

All package loggers are children of the shared ``latency_stats`` logger, which
owns a single stderr handler. The level is taken from
``LATENCY_STATS_LOG_LEVEL`` when set.
"""
from __future__ import annotations

import logging
import json
import sys
import os
import contextlib
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from ..config.defaults import BASE_LOGGER_NAME
from ..config.env import ENV_LOG_LEVEL
from .log_support import JsonFormatter, LogContext


_BASE_LOGGER_ATTR = "_latency_stats_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_latency_stats_console_handler"
_FILE_HANDLER_ATTR = "_latency_stats_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` or ``"WARN"`` to its numeric value.

    Unknown or empty names yield ``default``.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``latency_stats`` logger.

    On repeated calls the console handler is re-pointed at the current
    ``sys.stderr`` so stream swaps (test capture, daemonization) are honoured.
    A handler whose stream was closed underneath it is replaced.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = parse_level(os.getenv(ENV_LOG_LEVEL), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # setStream() would flush the dead stream and keep it
                logger.removeHandler(existing)
                existing.close()
                logger.addHandler(_console_handler(json_mode, desired_level))
                continue
            existing.setLevel(desired_level)
            if isinstance(existing, logging.StreamHandler):
                with contextlib.suppress(ValueError):
                    existing.setStream(sys.stderr)
            if json_mode != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_make_formatter(json_mode))
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(json_mode, desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger wired to the shared JSON handler.

    Child names (``latency_stats.<module>``) propagate to the base logger and
    carry no handlers of their own, avoiding duplicate lines.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Numeric level or level name; ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (replacing any previously managed one). When ``None``, any
        managed file handler is removed.
    json_mode: bool
        Whether the file handler uses the JSON formatter or plain text.

    Returns
    -------
    logging.Logger
        The configured base logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        numeric = parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for h in logger.handlers:
            h.setLevel(numeric)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_make_formatter(json_mode))
            h.setLevel(logger.level)
            abs_path = None
            continue
        logger.removeHandler(h)
        h.close()

    if abs_path is not None:
        os.makedirs(os.path.dirname(abs_path), exist_ok=True)
        # Rotate to avoid unbounded growth (10MB x 5 backups)
        fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(fh, _FILE_HANDLER_ATTR, True)
        fh.setLevel(logger.level)
        fh.setFormatter(_make_formatter(json_mode))
        logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON payload.

    Parameters
    ----------
    logger: logging.Logger
        Target logger, normally obtained from ``get_logger``.
    event: str
        Event name (e.g. ``stats.save.done``).
    ctx: LogContext | None
        Run/table context; merged shallowly.
    level: int
        Logging level for the emitted record.
    keep_none: bool
        Keep ``None``-valued fields instead of pruning them.
    **fields: Any
        Event fields; anything ``json.dumps`` cannot handle is stringified.
    """
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "parse_level",
]
