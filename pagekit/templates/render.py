"""Render facade: templates by name, with shared locals."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional, Protocol

from fastapi.responses import HTMLResponse
from markupsafe import Markup

from .environment import SearchDirs, TemplateEnvironmentCache, normalize_dirs


class ResponseSink(Protocol):
    def write(self, content: str) -> Any:
        ...


class Renderer:
    """Renders templates from a :class:`TemplateEnvironmentCache`.

    Every template sees the shared locals and a ``partial`` function, so a
    template can render another one by name: ``{{ partial("item", {"x": 1}) }}``.
    """

    def __init__(
        self,
        environments: TemplateEnvironmentCache,
        *,
        locals: Optional[Dict[str, Any]] = None,
        extension: str = ".html",
    ):
        self.environments = environments
        self.locals: Dict[str, Any] = dict(locals or {})
        self.extension = extension

    def add_local(self, name: str, value: Any) -> None:
        self.locals[name] = value

    def partial(self, name: str, data: Optional[Dict[str, Any]] = None, dirs: SearchDirs = None) -> str:
        """Render template ``name`` (extension implied) with ``data``.

        ``name`` is looked up in ``dirs``, then the configured partial paths,
        then the baseline views. An absolute ``name`` is looked up in its own
        directory first. Keys already in ``data`` are never overwritten by the
        shared locals.
        """
        if data is None:
            data = {}
        if "partial" not in data:
            data["partial"] = self.partial
        for key, value in self.locals.items():
            data.setdefault(key, value)

        search = normalize_dirs(dirs)
        if os.path.isabs(name):
            search.insert(0, os.path.dirname(name))
            name = os.path.basename(name)

        environment = self.environments.get_environment(search)
        output = environment.get_template(name + self.extension).render(data)
        if self.environments.autoescape:
            return Markup(output)
        return output

    def render(self, sink: ResponseSink, name: str, info: Optional[Dict[str, Any]] = None) -> None:
        sink.write(self.partial(name, info))

    def response(
        self,
        name: str,
        info: Optional[Dict[str, Any]] = None,
        *,
        dirs: SearchDirs = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        return HTMLResponse(self.partial(name, info, dirs), status_code=status_code)


__all__ = ["Renderer", "ResponseSink"]
