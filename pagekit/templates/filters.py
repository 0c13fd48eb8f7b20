"""Filters registered on every pagekit template environment."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from markupsafe import Markup, escape

from ..push.compiler import to_json, to_text

TAG_RE = re.compile(r"<[^>]+>", re.IGNORECASE)
TRAILING_NON_WORD_RE = re.compile(r"\W+$")


def format_date(value: Any, format_str: str = "%Y-%m-%d") -> str:
    """Format datetimes, dates, ISO strings or epoch milliseconds.

    Unparseable input raises instead of passing through.
    """
    if isinstance(value, (datetime, date)):
        return value.strftime(format_str)
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(format_str)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc).strftime(format_str)
    raise TypeError(f"date filter cannot format {type(value).__name__}")


def _flatten_query(value: Any, prefix: str) -> Iterable[Tuple[str, str]]:
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _flatten_query(item, f"{prefix}[{key}]")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten_query(item, f"{prefix}[{index}]")
    elif value is None:
        yield prefix, ""
    elif isinstance(value, bool):
        yield prefix, "true" if value else "false"
    else:
        yield prefix, str(value)


def query_string(data: Mapping[str, Any]) -> str:
    """Encode ``data`` as a query string, nesting with bracket notation.

    ``{"a": {"b": 1}, "c": [1, 2]}`` becomes ``a%5Bb%5D=1&c%5B0%5D=1&c%5B1%5D=2``.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in data.items():
        pairs.extend(_flatten_query(value, str(key)))
    return urlencode(pairs, quote_via=quote)


def build_url(url: str, *params: Optional[Mapping[str, Any]]) -> str:
    """Merge query parameters into ``url``.

    Later mappings win; a ``None`` value removes the parameter.
    """
    parts = urlsplit(url)
    query: Dict[str, Any] = dict(parse_qsl(parts.query, keep_blank_values=True))
    for mapping in params:
        if not mapping:
            continue
        for key, value in mapping.items():
            if value is None:
                query.pop(key, None)
            else:
                query[key] = value
    return urlunsplit(parts._replace(query=query_string(query)))


def strip_tags(data: str) -> str:
    return TAG_RE.sub("", data)


def nlbr(data: str) -> str:
    return data.replace("\n", "<br />\n")


def css_name(name: str) -> str:
    """Turn ``name`` into a lowercase, hyphenated CSS identifier.

    ``"fooBar baz"`` becomes ``"foo-bar-baz"``. Runs of characters that are
    not ASCII letters or digits collapse into a single hyphen.
    """
    css: List[str] = []
    dash = False
    for index, char in enumerate(name):
        lower = "a" <= char <= "z"
        upper = "A" <= char <= "Z"
        digit = "0" <= char <= "9"
        if not (lower or upper or digit):
            dash = True
            continue
        if upper:
            if index > 0:
                dash = True
            char = char.lower()
        if dash and css:
            css.append("-")
        dash = False
        css.append(char)
    return "".join(css)


def truncate_plaintext(data: str, limit: int, suffix: str = "...") -> str:
    """Truncate plain text at a word boundary, appending ``suffix`` when cut."""
    if len(data) <= limit:
        return data
    cut = data[:limit]
    if not data[limit].isspace():
        boundary = cut.rfind(" ")
        if boundary > 0:
            cut = cut[:boundary]
    return TRAILING_NON_WORD_RE.sub("", cut) + suffix


def json_attribute(data: Any) -> Markup:
    # Dicts, lists and None become escaped JSON so client code can parse the attribute.
    if data is None or isinstance(data, (dict, list, tuple)):
        return escape(to_json(data))
    return escape(to_text(data))


def default_filters() -> Dict[str, Any]:
    return {
        "date": format_date,
        "query": query_string,
        "qs": query_string,
        "json": to_json,
        "build": build_url,
        "strip_tags": strip_tags,
        "nlbr": nlbr,
        "css": css_name,
        "truncate": truncate_plaintext,
        "json_attribute": json_attribute,
    }


__all__ = [
    "build_url",
    "css_name",
    "default_filters",
    "format_date",
    "json_attribute",
    "nlbr",
    "query_string",
    "strip_tags",
    "to_json",
    "truncate_plaintext",
]
