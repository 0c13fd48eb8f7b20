"""FastAPI integration.

Install a :class:`PageKit` on the application once, then ask for it, or for a
push helper bound to the current request, through dependencies::

    app = FastAPI()
    install(app, PageKit())

    @app.get("/", response_class=HTMLResponse)
    def home(request: Request, push: RequestPush = Depends(get_request_push)):
        push.call("gallery.start(?)", {"autoplay": True})
        return get_pagekit(request).render_page(request, "home")
"""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request

from .kit import PageKit
from .push import RequestPush

STATE_ATTRIBUTE = "pagekit"


def install(app: FastAPI, kit: PageKit) -> PageKit:
    setattr(app.state, STATE_ATTRIBUTE, kit)
    return kit


def get_pagekit(request: Request) -> PageKit:
    kit = getattr(request.app.state, STATE_ATTRIBUTE, None)
    if kit is None:
        raise RuntimeError("pagekit is not installed on this application; call pagekit.http.install(app, kit)")
    return kit


def get_request_push(request: Request, kit: PageKit = Depends(get_pagekit)) -> RequestPush:
    return kit.for_request(request)


__all__ = ["install", "get_pagekit", "get_request_push"]
