"""Structured logging for the relay client.

Layout:
- A single ``relay`` logger owns the output handler (stderr, JSON lines) and
  does not propagate to the root logger, so importing the package never
  changes an application's own logging.
- Every module logs through a child obtained with
  ``get_logger("relay.<area>")``; children carry no handlers of their own.

Event lines:
``log_event`` writes one JSON object per call: ``{"event": ..., <context>,
<fields>}``. ``normalized_log_event`` is what adapters and normalizers use; its
lines always carry ``structured``, ``phase``, ``attempt``, ``emitted`` and
``tokens`` (``error_code`` too when reporting a failure), whichever vendor
produced them.

Environment:
``RELAY_LOG_LEVEL`` (``DEBUG``/``INFO``/``WARNING``/``ERROR``) is re-read on
every ``get_logger`` call; the default is INFO.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional, Union

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "relay"
LEVEL_ENV = "RELAY_LOG_LEVEL"
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUPS = 5

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_READY_FLAG = "_relay_ready"
_FILE_FLAG = "_relay_file"

REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _level(value: Union[int, str, None], fallback: int) -> int:
    """Resolve a level given as a number or a name; unknown names use ``fallback``."""
    if isinstance(value, int):
        return value
    if not value:
        return fallback
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else fallback


def _make_formatter(json_mode: bool) -> logging.Formatter:
    if json_mode:
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _level(os.getenv(LEVEL_ENV), level)
    if not getattr(logger, _READY_FLAG, False):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_make_formatter(json_mode))
        logger.handlers[:] = [console]
        logger.propagate = False
        setattr(logger, _READY_FLAG, True)
        _apply_level(logger, wanted)
    elif logger.level != wanted:
        _apply_level(logger, wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` wired to the shared ``relay`` handler.

    Names outside the ``relay.`` namespace still work but will not reach the
    shared handler.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _file_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if getattr(h, _FILE_FLAG, False)]


def configure_logger(
    *,
    level: Union[int, str, None] = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Args:
        level: New level as a number or name; ``None`` leaves it unchanged.
        file_path: Mirror output into a rotating file at this path. ``None``
            detaches any file previously attached here.
        json_mode: Format of the file output (JSON lines or plain text).

    Returns:
        The shared ``relay`` logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        _apply_level(logger, _level(level, logger.level))

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    keep: Optional[logging.Handler] = None
    for handler in _file_handlers(logger):
        if target is not None and getattr(handler, "baseFilename", None) == target:
            keep = handler
            continue
        logger.removeHandler(handler)
        handler.close()
    if target is None:
        return logger

    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(target, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_FLAG, True)
        logger.addHandler(keep)
    keep.setFormatter(_make_formatter(json_mode))
    keep.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write one JSON event line at INFO.

    ``None`` values in ``fields`` are skipped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    for key, value in fields.items():
        if value is not None or keep_none:
            payload[key] = value
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))


def _tokens_field(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, (int, str)):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if callable(getattr(tokens, "to_dict", None)):
        return tokens.to_dict()
    return repr(tokens)


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    phase: str,
    attempt: Optional[int] = None,
    error_code: Optional[str] = None,
    emitted: Union[bool, int, None] = None,
    tokens: Any = None,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Write an event line carrying the canonical key set.

    Canonical keys are always present (``null`` when unknown) except
    ``error_code``, which only appears on failures. Extra fields cannot
    shadow a canonical key, and ``None`` extras are skipped.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    fields.update(
        {k: v for k, v in extra_fields.items() if v is not None and k not in fields}
    )
    log_event(logger, event, ctx, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
