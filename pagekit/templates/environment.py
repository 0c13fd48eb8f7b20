"""
Cached Jinja2 environments keyed by template search path.

Building an environment means building a loader and registering every filter,
so pagekit builds one per distinct ordered list of search directories and
keeps it for the life of the process. The package's own ``views`` directory
is always searched last, which lets applications override any baseline
template by shipping one with the same name.
"""

from __future__ import annotations

import logging
import os
import threading
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader

from ..config import VIEWS_DIR
from ..observability import log_push_event
from .filters import build_url, default_filters, format_date

logger = logging.getLogger(__name__)

SearchDirs = Union[None, str, "os.PathLike[str]", Sequence[Union[str, "os.PathLike[str]"]]]


def normalize_dirs(dirs: Any) -> List[str]:
    """Return ``dirs`` as a list of directory strings.

    ``None`` means no directories; a single directory (or anything else that
    is not a list or tuple) is wrapped in a one-element list.
    """
    if dirs is None:
        return []
    if not isinstance(dirs, (list, tuple)):
        dirs = [dirs]
    return [os.fspath(entry) for entry in dirs]


class TemplateEnvironmentCache:
    """
    Hands out one Jinja2 environment per ordered template search path.

    Features:
    - ``get_environment(["/a", "/b"])`` twice returns the same instance
    - ``["/b", "/a"]`` is a different search path and a different instance
    - configured partial paths and the baseline views directory are appended
      to every search path
    - environments are created under a lock, so concurrent first renders for
      one search path still build a single environment
    """

    def __init__(
        self,
        *,
        views_dir: Union[str, Path] = VIEWS_DIR,
        partial_paths: Sequence[Union[str, Path]] = (),
        autoescape: bool = False,
        date_format: str = "%Y-%m-%d",
        build: Optional[Callable[..., Any]] = None,
        custom_filters: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the cache.

        Args:
            views_dir: Baseline template directory, always searched last
            partial_paths: Directories searched after the caller's own
            autoescape: Enable HTML auto-escaping in created environments
            date_format: Default format for the ``date`` filter
            build: Callable registered as the ``build`` filter
            custom_filters: Additional filters registered on every environment
        """
        self.views_dir = os.fspath(views_dir)
        self.partial_paths = normalize_dirs(list(partial_paths))
        self.autoescape = autoescape
        self.date_format = date_format
        self.build = build or build_url
        self.custom_filters = dict(custom_filters or {})
        self._environments: Dict[str, Environment] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._environments)

    def search_path(self, dirs: SearchDirs = None) -> List[str]:
        return normalize_dirs(dirs) + self.partial_paths + [self.views_dir]

    def get_environment(self, dirs: SearchDirs = None) -> Environment:
        """
        Get the environment whose loader searches ``dirs``.

        Args:
            dirs: A directory, a list of directories, or None

        Returns:
            Cached jinja2 Environment for the full search path
        """
        search_path = self.search_path(dirs)
        key = ":".join(search_path)
        with self._lock:
            environment = self._environments.get(key)
            if environment is None:
                environment = self.new_environment(search_path)
                self._environments[key] = environment
        return environment

    def new_environment(self, search_path: List[str]) -> Environment:
        """
        Create an uncached environment searching ``search_path``.

        Prefer :meth:`get_environment`, which avoids rebuilding an environment
        for a search path already seen.
        """
        environment = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=self.autoescape,
        )
        self._register_filters(environment)
        log_push_event(
            "template_environment",
            "Created template environment",
            logger=logger,
            extras={"search_path": list(search_path)},
        )
        return environment

    def _register_filters(self, environment: Environment) -> None:
        filters = default_filters()
        filters["date"] = partial(_format_date_default, default_format=self.date_format)
        filters["build"] = self.build
        filters.update(self.custom_filters)
        environment.filters.update(filters)


def _format_date_default(value: Any, format_str: Optional[str] = None, *, default_format: str) -> str:
    return format_date(value, format_str or default_format)


__all__ = ["TemplateEnvironmentCache", "normalize_dirs"]
