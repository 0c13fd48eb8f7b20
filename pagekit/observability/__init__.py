"""Logging helpers shared by the push registries and the template layer."""

from __future__ import annotations

from .logging import get_logger, log_push_event

__all__ = [
    "get_logger",
    "log_push_event",
]
