"""One object tying the push registry to the template layer."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .config import PageKitConfig
from .push import PushRegistry, RequestPush
from .templates import Renderer, TemplateEnvironmentCache, css_name
from .templates.environment import SearchDirs

logger = logging.getLogger(__name__)


class PageKit:
    """Push registry, template environments and renderer for one application.

    Create it once at startup::

        kit = PageKit(load_config(Path.cwd()))
        kit.registry.push_global_data({"uploadsUrl": "/uploads"})
    """

    def __init__(
        self,
        config: Optional[PageKitConfig] = None,
        *,
        build: Optional[Callable[..., Any]] = None,
        custom_filters: Optional[Dict[str, Any]] = None,
    ):
        self.config = config or PageKitConfig()
        self.registry = PushRegistry(self.config)
        self.environments = TemplateEnvironmentCache(
            views_dir=self.config.views_dir,
            partial_paths=self.config.partial_paths,
            autoescape=self.config.autoescape,
            date_format=self.config.date_format,
            build=build,
            custom_filters=custom_filters,
        )
        self.renderer = Renderer(self.environments, extension=self.config.template_extension)
        self.renderer.add_local("css_name", css_name)
        self.renderer.add_local("get_global_calls_when", self.registry.get_global_calls_when)
        self.renderer.add_local("get_global_data", self.registry.get_global_data)

    def for_request(self, request: Any) -> RequestPush:
        return self.registry.for_request(request)

    def partial(self, name: str, data: Optional[Dict[str, Any]] = None, dirs: SearchDirs = None) -> str:
        return self.renderer.partial(name, data, dirs)

    def render_page(
        self,
        request: Any,
        name: str,
        data: Optional[Dict[str, Any]] = None,
        *,
        dirs: SearchDirs = None,
        user_present: bool = False,
    ) -> str:
        """Render a full page with everything pushed for ``request``.

        The page receives ``calls``, ``data``, ``global_calls`` and
        ``global_data`` unless ``data`` already supplies them.
        """
        if data is None:
            data = {}
        for key, value in self.registry.page_context(request, user_present=user_present).items():
            data.setdefault(key, value)
        logger.debug("Rendering page %s", name)
        return self.renderer.partial(name, data, dirs)


__all__ = ["PageKit"]
