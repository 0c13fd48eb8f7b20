"""Registry of data passed to the browser, per request and global.

Each registered fragment is emitted as its own deep-merge statement into the
client namespace's ``data`` object, so independent contributors never need to
know about each other's keys::

    pagekit.data = pagekit.data || {};
    pagekit.merge = pagekit.merge || function merge(target, source) { ... };
    pagekit.merge(pagekit.data, {"user":{"id":7}});
    pagekit.merge(pagekit.data, {"user":{"name":"Ada"}});

The installed ``merge`` combines nested objects key by key and replaces
arrays and scalars, which is what :func:`merge_data` does on the server.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..observability import log_push_event
from .compiler import to_json
from .request import DATA_ATTRIBUTE, request_list

logger = logging.getLogger(__name__)

# Client-side counterpart of merge_data. Non-object sources are ignored.
MERGE_HELPER = (
    "function merge(target, source) {"
    " if (!source || typeof source !== 'object' || Array.isArray(source)) { return target; }"
    " for (var key in source) {"
    " if (!Object.prototype.hasOwnProperty.call(source, key)) { continue; }"
    " var value = source[key];"
    " if (value && typeof value === 'object' && !Array.isArray(value)) {"
    " var existing = target[key];"
    " if (!existing || typeof existing !== 'object' || Array.isArray(existing)) { existing = target[key] = {}; }"
    " merge(existing, value);"
    " } else { target[key] = value; }"
    " }"
    " return target; }"
)


def _deep_merge(target: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in update.items():
        if isinstance(value, dict):
            existing = target.get(key)
            if not isinstance(existing, dict):
                existing = {}
            target[key] = _deep_merge(existing, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def merge_data(fragments: Iterable[Any]) -> Dict[str, Any]:
    """Merge fragments the way the emitted script does in the browser.

    Nested dicts are combined key by key; lists and scalars are replaced; later
    fragments win. Fragments that are not dicts contribute nothing, as in
    the installed ``merge`` helper.
    """
    merged: Dict[str, Any] = {}
    for fragment in fragments:
        if isinstance(fragment, dict):
            _deep_merge(merged, fragment)
    return merged


class DataRegistry:
    """Holds data fragments and compiles them into a merge script.

    Without a ``merge_function`` the script installs ``<namespace>.merge``
    (see :data:`MERGE_HELPER`) and merges through it. A configured function
    is called jQuery-style instead, ``fn(true, target, datum)``; its own array
    handling then applies in the browser (``$.extend`` merges arrays index by
    index).
    """

    def __init__(self, *, namespace: str = "pagekit", merge_function: Optional[str] = None, indent: str = "  "):
        self.namespace = namespace
        self.merge_function = merge_function
        self.indent = indent
        self._global: List[Any] = []
        self._lock = threading.Lock()

    @property
    def target(self) -> str:
        return f"{self.namespace}.data"

    @property
    def helper(self) -> str:
        return f"{self.namespace}.merge"

    def compile(self, data: Sequence[Any]) -> str:
        lines = [f"{self.indent}{self.target} = {self.target} || {{}};"]
        if self.merge_function is None:
            lines.append(f"{self.indent}{self.helper} = {self.helper} || {MERGE_HELPER};")
            for datum in data:
                lines.append(f"{self.indent}{self.helper}({self.target}, {to_json(datum)});")
        else:
            for datum in data:
                lines.append(f"{self.indent}{self.merge_function}(true, {self.target}, {to_json(datum)});")
        return "\n".join(lines)

    def push_request_data(self, request: Any, datum: Any) -> None:
        request_list(request, DATA_ATTRIBUTE, create=True).append(datum)

    def request_data(self, request: Any) -> str:
        return self.compile(request_list(request, DATA_ATTRIBUTE) or [])

    def request_fragments(self, request: Any) -> List[Any]:
        return list(request_list(request, DATA_ATTRIBUTE) or [])

    def push_global_data(self, datum: Any) -> None:
        with self._lock:
            self._global.append(datum)
        keys = sorted(datum) if isinstance(datum, dict) else []
        log_push_event("global_data", "Registered global data", logger=logger, extras={"keys": keys})

    def global_data(self) -> str:
        return self.compile(self.global_fragments())

    def global_fragments(self) -> List[Any]:
        with self._lock:
            return list(self._global)


__all__ = ["DataRegistry", "MERGE_HELPER", "merge_data"]
