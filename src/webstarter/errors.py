"""Errors raised while building a project from a starter."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class WebstarterError(Exception):
    """Base class for all webstarter errors"""


class ValidationFailure(WebstarterError):
    """Raise when a project configuration or starter choice is malformed"""


class PolicyAmbiguity(WebstarterError):
    """Raise when two inclusion rules target the same entry name"""


class TemplateSyntaxError(WebstarterError):
    """Raise when a template contains a malformed or unterminated directive."""

    def __init__(
        self,
        message: str,
        snippet: str = "",
        line: Optional[int] = None,
        path: Optional[Path] = None,
    ) -> None:
        self.message = message
        self.snippet = snippet
        self.line = line
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        location = str(self.path) if self.path is not None else "<template>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        text = f"{location}: {self.message}"
        if self.snippet:
            text += f": {self.snippet!r}"
        return text


class IOFailure(WebstarterError):
    """Raise when a filesystem operation fails during materialization."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause.strerror or cause}")
