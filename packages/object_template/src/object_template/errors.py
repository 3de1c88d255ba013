from __future__ import annotations

from collections.abc import Hashable
from typing import Any


def _format_path(path: tuple[Hashable, ...]) -> str:
    return ".".join(str(part) for part in path) or "<root>"


class TemplateError(ValueError):
    """Base class for templates that were built or used incorrectly."""


class MalformedTemplateError(TemplateError):
    """A template leaf is neither a template node nor a mapping."""

    def __init__(self, *, path: tuple[Hashable, ...], value: Any) -> None:
        self.path = path
        self.value = value
        super().__init__(
            f"malformed template at {_format_path(path)!r}: "
            f"expected a template node or mapping, got {type(value).__name__}"
        )


class TemplateDepthError(TemplateError):
    """Template nesting exceeded the configured maximum depth."""

    def __init__(self, *, path: tuple[Hashable, ...], max_depth: int) -> None:
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"template nesting exceeds max depth {max_depth} at {_format_path(path)!r}"
        )
