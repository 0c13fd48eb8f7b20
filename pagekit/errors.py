"""Unified error model for pagekit."""

from __future__ import annotations

from typing import Optional


class PageKitError(Exception):
    """Base class for errors raised by pagekit itself."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        if self.code:
            components[-1] = f"{components[-1]} ({self.code})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class PatternError(PageKitError):
    """Raised when a call pattern and its arguments disagree."""

    code = "pattern-arguments"

    def __init__(
        self,
        message: str,
        *,
        pattern: str,
        expected: int,
        received: int,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.pattern = pattern
        self.expected = expected
        self.received = received


class ConfigError(PageKitError):
    """Raised when a pagekit configuration file cannot be used."""

    code = "config"

    def __init__(self, message: str, *, path: Optional[str] = None, hint: Optional[str] = None) -> None:
        super().__init__(message, hint=hint)
        self.path = path

    def format(self) -> str:
        base = super().format()
        if self.path:
            return f"{self.path}: {base}"
        return base


__all__ = [
    "PageKitError",
    "PatternError",
    "ConfigError",
]
