"""Registry of browser-side calls, per request and global."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Sequence

from ..observability import log_push_event
from .compiler import CallRegistration, check_arguments, compile_calls
from .request import CALLS_ATTRIBUTE, request_list

logger = logging.getLogger(__name__)


class CallRegistry:
    """Holds pending calls and compiles them into JavaScript.

    Request calls are stored on the request carrier and vanish with it.
    Global calls are grouped by an activation key ("when"), for example
    ``"always"`` or ``"user"``, and are emitted every time that key is
    flushed. The global lists only grow.
    """

    def __init__(self, *, indent: str = "  ", strict: bool = True):
        self.indent = indent
        self.strict = strict
        self._global: Dict[str, List[CallRegistration]] = {}
        self._lock = threading.Lock()

    def registration(self, pattern: str, args: Sequence[Any]) -> CallRegistration:
        if self.strict:
            check_arguments(pattern, args)
        return CallRegistration(pattern=pattern, arguments=tuple(args))

    def compile(self, registrations: Sequence[CallRegistration]) -> str:
        return compile_calls(registrations, indent=self.indent, strict=self.strict)

    def push_request_call(self, request: Any, pattern: str, *args: Any) -> None:
        registration = self.registration(pattern, args)
        request_list(request, CALLS_ATTRIBUTE, create=True).append(registration)

    def request_calls(self, request: Any) -> str:
        return self.compile(request_list(request, CALLS_ATTRIBUTE) or [])

    def push_global_call_when(self, when: str, pattern: str, *args: Any) -> None:
        registration = self.registration(pattern, args)
        with self._lock:
            self._global.setdefault(when, []).append(registration)
        log_push_event(
            "global_call",
            "Registered global call",
            logger=logger,
            extras={"when": when, "pattern": pattern},
        )

    def global_calls_when(self, when: str) -> str:
        with self._lock:
            registrations = list(self._global.get(when, ()))
        return self.compile(registrations)

    def whens(self) -> List[str]:
        with self._lock:
            return list(self._global)


__all__ = ["CallRegistry"]
