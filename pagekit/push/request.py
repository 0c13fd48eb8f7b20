"""Per-request storage for pending calls and data.

Registrations live on the request carrier itself so they are dropped when the
request is. A Starlette/FastAPI ``Request`` keeps them on ``request.state``;
any other object keeps them as plain attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .registry import PushRegistry

CALLS_ATTRIBUTE = "pagekit_calls"
DATA_ATTRIBUTE = "pagekit_data"


def request_store(request: Any) -> Any:
    """Return the object that holds per-request registrations."""
    state = getattr(request, "state", None)
    return state if state is not None else request


def request_list(request: Any, attribute: str, *, create: bool = False) -> Optional[List[Any]]:
    """Return the list stored under ``attribute``, creating it when asked."""
    store = request_store(request)
    items = getattr(store, attribute, None)
    if items is None and create:
        items = []
        setattr(store, attribute, items)
    return items


class RequestPush:
    """Push calls and data for one request.

    This is what request-handling code receives (for example through the
    FastAPI dependency in :mod:`pagekit.http`)::

        push.call("myFn.func(?)", {"age": 57})
        push.data({"user": {"id": 7}})
    """

    def __init__(self, registry: "PushRegistry", request: Any):
        self.registry = registry
        self.request = request

    def call(self, pattern: str, *args: Any) -> None:
        self.registry.push_call(self.request, pattern, *args)

    def data(self, datum: Any) -> None:
        self.registry.push_data(self.request, datum)

    def get_calls(self) -> str:
        return self.registry.get_calls(self.request)

    def get_data(self) -> str:
        return self.registry.get_data(self.request)


__all__ = [
    "CALLS_ATTRIBUTE",
    "DATA_ATTRIBUTE",
    "request_store",
    "request_list",
    "RequestPush",
]
