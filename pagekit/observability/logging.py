"""Centralised logging helpers for pagekit."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = "pagekit") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def log_push_event(
    event: str,
    message: str,
    *,
    level: int = logging.DEBUG,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured log entry for registry and environment activity."""

    payload: Dict[str, Any] = {}
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("pagekit.push")
    target_logger.log(
        level,
        message,
        extra={"pagekit_event": event, "pagekit_data": payload},
    )
