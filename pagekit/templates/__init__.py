"""Jinja2 template rendering with cached environments and shared filters."""

from .environment import TemplateEnvironmentCache, normalize_dirs
from .filters import (
    build_url,
    css_name,
    default_filters,
    format_date,
    json_attribute,
    nlbr,
    query_string,
    strip_tags,
    truncate_plaintext,
)
from .render import Renderer, ResponseSink

__all__ = [
    "Renderer",
    "ResponseSink",
    "TemplateEnvironmentCache",
    "build_url",
    "css_name",
    "default_filters",
    "format_date",
    "json_attribute",
    "nlbr",
    "normalize_dirs",
    "query_string",
    "strip_tags",
    "truncate_plaintext",
]
