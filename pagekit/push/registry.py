"""Process-wide push registry.

A :class:`PushRegistry` is created once at startup and handed to whatever
handles requests. It owns the global call and data lists, installs the
framework's baseline calls, and turns everything pushed for a request into
the strings a page template embeds in its inline script.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import PageKitConfig
from .calls import CallRegistry
from .data import DataRegistry, merge_data
from .request import RequestPush

logger = logging.getLogger(__name__)

WHEN_ALWAYS = "always"
WHEN_USER = "user"


class PushRegistry:
    """Request-scoped and global calls and data for browser-side code."""

    def __init__(self, config: Optional[PageKitConfig] = None, *, install_defaults: bool = True):
        self.config = config or PageKitConfig()
        self.calls = CallRegistry(indent=self.config.indent, strict=self.config.strict_patterns)
        self.data = DataRegistry(
            namespace=self.config.client_namespace,
            merge_function=self.config.merge_function,
            indent=self.config.indent,
        )
        if install_defaults:
            self._install_default_calls()

    def _install_default_calls(self) -> None:
        namespace = self.config.client_namespace
        self.push_global_call_when(WHEN_USER, f"{namespace}.enableAreas()")
        self.push_global_call_when(WHEN_ALWAYS, f"{namespace}.enablePlayers()")

    def for_request(self, request: Any) -> RequestPush:
        return RequestPush(self, request)

    # -- calls -------------------------------------------------------------

    def push_call(self, request: Any, pattern: str, *args: Any) -> None:
        """Queue ``pattern`` for the page served by ``request``.

        Each ``?`` in ``pattern`` is replaced by the JSON encoding of the next
        argument and each ``@`` by its literal text::

            registry.push_call(request, "my.browserSide.method(?, ?)", arg1, arg2)
            registry.push_call(request, "new @(?)", "Gallery", {"id": 3})
        """
        self.calls.push_request_call(request, pattern, *args)

    def get_calls(self, request: Any) -> str:
        return self.calls.request_calls(request)

    def push_global_call_when(self, when: str, pattern: str, *args: Any) -> None:
        """Queue a call emitted on every page where ``when`` applies.

        ``"always"`` applies to every page and ``"user"`` to pages served to a
        logged-in user. This is global configuration, not request data.
        """
        self.calls.push_global_call_when(when, pattern, *args)

    def get_global_calls_when(self, when: str) -> str:
        return self.calls.global_calls_when(when)

    # -- data --------------------------------------------------------------

    def push_data(self, request: Any, datum: Any) -> None:
        self.data.push_request_data(request, datum)

    def get_data(self, request: Any) -> str:
        return self.data.request_data(request)

    def push_global_data(self, datum: Any) -> None:
        self.data.push_global_data(datum)

    def get_global_data(self) -> str:
        return self.data.global_data()

    def resolved_data(self, request: Optional[Any] = None) -> Dict[str, Any]:
        """Return the namespace data the page for ``request`` will end up with."""
        fragments = self.data.global_fragments()
        if request is not None:
            fragments.extend(self.data.request_fragments(request))
        return merge_data(fragments)

    # -- page assembly -----------------------------------------------------

    def get_global_calls(self, *, user_present: bool = False) -> str:
        blocks = [self.get_global_calls_when(WHEN_ALWAYS)]
        if user_present:
            blocks.append(self.get_global_calls_when(WHEN_USER))
        return "\n".join(block for block in blocks if block)

    def page_context(self, request: Any, *, user_present: bool = False) -> Dict[str, str]:
        """Flush everything a page needs into template-ready script blocks."""
        context = {
            "calls": self.get_calls(request),
            "data": self.get_data(request),
            "global_calls": self.get_global_calls(user_present=user_present),
            "global_data": self.get_global_data(),
        }
        logger.debug(
            "Assembled page scripts",
            extra={"pagekit_event": "page_context", "pagekit_data": {"user_present": user_present}},
        )
        return context


__all__ = ["PushRegistry", "WHEN_ALWAYS", "WHEN_USER"]
