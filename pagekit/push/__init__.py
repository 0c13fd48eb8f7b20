"""Registration and code generation for browser-side calls and data."""

from .calls import CallRegistry
from .compiler import (
    CallRegistration,
    Json,
    Literal,
    Missing,
    Text,
    compile_call,
    compile_calls,
    count_placeholders,
    scan_pattern,
)
from .data import DataRegistry, merge_data
from .registry import WHEN_ALWAYS, WHEN_USER, PushRegistry
from .request import RequestPush

__all__ = [
    "CallRegistration",
    "CallRegistry",
    "DataRegistry",
    "Json",
    "Literal",
    "Missing",
    "PushRegistry",
    "RequestPush",
    "Text",
    "WHEN_ALWAYS",
    "WHEN_USER",
    "compile_call",
    "compile_calls",
    "count_placeholders",
    "merge_data",
    "scan_pattern",
]
