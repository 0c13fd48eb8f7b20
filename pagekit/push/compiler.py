"""Pattern compiler for browser-side calls.

A pattern is JavaScript source with two kinds of placeholder:

* ``?`` inserts the next argument JSON-encoded, so structured data is always
  self-quoting.
* ``@`` inserts the next argument literally, unquoted. This lets callers
  splice in identifiers such as a constructor name.

Arguments are consumed strictly in the order placeholders appear::

    compile_call(CallRegistration("new @(?)", ("Widget", {"x": 1})))
    # '  new Widget({"x":1});'
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import PatternError

JSON_PLACEHOLDER = "?"
LITERAL_PLACEHOLDER = "@"
PLACEHOLDERS = (JSON_PLACEHOLDER, LITERAL_PLACEHOLDER)

# Rendered for a placeholder with no argument when patterns are not strict.
UNDEFINED = "undefined"


def to_json(value: Any) -> str:
    """Serialize ``value`` the way ``JSON.stringify`` would."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def to_text(value: Any) -> str:
    """Coerce ``value`` to the text JavaScript would produce for it.

    ``None`` becomes ``null``, booleans ``true``/``false``, and integral
    floats drop their fraction (``1.0`` becomes ``1``).
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Text:
    """Pattern text copied verbatim."""

    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Json:
    """A ``?`` placeholder bound to its argument."""

    value: Any

    def render(self) -> str:
        return to_json(self.value)


@dataclass(frozen=True)
class Literal:
    """An ``@`` placeholder bound to its argument."""

    value: Any

    def render(self) -> str:
        return to_text(self.value)


@dataclass(frozen=True)
class Missing:
    """A placeholder with no argument left to consume."""

    placeholder: str

    def render(self) -> str:
        return UNDEFINED


Segment = Union[Text, Json, Literal, Missing]


@dataclass(frozen=True)
class CallRegistration:
    """One pending browser-side call."""

    pattern: str
    arguments: Tuple[Any, ...] = ()


def count_placeholders(pattern: str) -> int:
    return sum(1 for char in pattern if char in PLACEHOLDERS)


def check_arguments(pattern: str, arguments: Sequence[Any]) -> None:
    """Raise :class:`PatternError` unless every placeholder has exactly one argument."""
    expected = count_placeholders(pattern)
    if expected != len(arguments):
        raise PatternError(
            f"Pattern {pattern!r} has {expected} placeholder(s) but {len(arguments)} argument(s) were given",
            pattern=pattern,
            expected=expected,
            received=len(arguments),
            hint="Use ? for JSON-encoded arguments and @ for literal ones, one per argument.",
        )


class PatternScanner:
    """Walks a pattern one character at a time, binding arguments to placeholders."""

    def __init__(self, pattern: str, arguments: Sequence[Any]):
        self.pattern = pattern
        self.arguments = arguments
        self.pos = 0
        self.arg_index = 0
        self.segments: List[Segment] = []
        self._text: List[str] = []

    def peek(self) -> Optional[str]:
        if self.pos < len(self.pattern):
            return self.pattern[self.pos]
        return None

    def advance(self) -> Optional[str]:
        if self.pos >= len(self.pattern):
            return None
        char = self.pattern[self.pos]
        self.pos += 1
        return char

    def flush_text(self) -> None:
        if self._text:
            self.segments.append(Text("".join(self._text)))
            self._text = []

    def bind(self, placeholder: str) -> Segment:
        if self.arg_index >= len(self.arguments):
            self.arg_index += 1
            return Missing(placeholder)
        value = self.arguments[self.arg_index]
        self.arg_index += 1
        if placeholder == JSON_PLACEHOLDER:
            return Json(value)
        return Literal(value)

    def scan(self) -> List[Segment]:
        while self.peek() is not None:
            char = self.advance()
            if char in PLACEHOLDERS:
                self.flush_text()
                self.segments.append(self.bind(char))
            else:
                self._text.append(char)
        self.flush_text()
        return self.segments


def scan_pattern(pattern: str, arguments: Sequence[Any], *, strict: bool = True) -> List[Segment]:
    """Split ``pattern`` into segments with each placeholder bound to its argument.

    With ``strict`` the placeholder count must equal ``len(arguments)``.
    Otherwise surplus arguments are ignored and surplus placeholders become
    :class:`Missing` segments that render as ``undefined``.
    """
    if strict:
        check_arguments(pattern, arguments)
    return PatternScanner(pattern, arguments).scan()


def compile_call(registration: CallRegistration, *, indent: str = "  ", strict: bool = True) -> str:
    """Compile one registration into a single statement of JavaScript."""
    segments = scan_pattern(registration.pattern, registration.arguments, strict=strict)
    return indent + "".join(segment.render() for segment in segments) + ";"


def compile_calls(
    registrations: Iterable[CallRegistration],
    *,
    indent: str = "  ",
    strict: bool = True,
) -> str:
    """Compile registrations in order, one statement per line."""
    return "\n".join(
        compile_call(registration, indent=indent, strict=strict) for registration in registrations
    )


__all__ = [
    "JSON_PLACEHOLDER",
    "LITERAL_PLACEHOLDER",
    "CallRegistration",
    "Text",
    "Json",
    "Literal",
    "Missing",
    "Segment",
    "PatternScanner",
    "to_json",
    "to_text",
    "count_placeholders",
    "check_arguments",
    "scan_pattern",
    "compile_call",
    "compile_calls",
]
