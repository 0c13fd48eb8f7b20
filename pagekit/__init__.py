"""
pagekit: browser-side calls and data for server-rendered pages.

Request handlers push JavaScript calls and data while a page request is being
handled; page assembly later flushes them into script blocks that the page
template embeds. Global calls and data registered at startup are emitted on
every page, optionally only when a logged-in user is present.

The package is organised into:

* ``push`` – the pattern compiler, call and data registries, and the
  process-wide :class:`~pagekit.push.PushRegistry`.
* ``templates`` – cached Jinja2 environments, shared filters and the
  render facade.
* ``kit`` – :class:`PageKit`, which wires the two together.
* ``http`` – FastAPI installation and dependencies.
"""

from .config import PageKitConfig, load_config
from .errors import ConfigError, PageKitError, PatternError
from .kit import PageKit
from .push import PushRegistry, RequestPush
from .templates import Renderer, TemplateEnvironmentCache

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "PageKit",
    "PageKitConfig",
    "PageKitError",
    "PatternError",
    "PushRegistry",
    "Renderer",
    "RequestPush",
    "TemplateEnvironmentCache",
    "load_config",
    "__version__",
]
