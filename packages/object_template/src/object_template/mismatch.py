from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Literal, Union

from .nodes import TemplateNode


@dataclass(frozen=True)
class KeySetMismatch:
    # Path of the object whose key set did not match; () for the root.
    path: tuple[Hashable, ...]
    expected_keys: tuple[Hashable, ...]
    actual_keys: tuple[Hashable, ...]
    unexpected_keys: tuple[Hashable, ...]
    missing_keys: tuple[Hashable, ...]
    kind: Literal["keys"] = "keys"


@dataclass(frozen=True)
class ValueMismatch:
    path: tuple[Hashable, ...]
    key: Hashable
    template_node: TemplateNode
    object_node: Any
    kind: Literal["value"] = "value"


Mismatch = Union[KeySetMismatch, ValueMismatch]


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of one validation call.

    ``mismatch`` is None when the object matched, and also when the candidate
    was not a mapping at all (there is nothing more specific to report).
    """

    ok: bool
    mismatch: Mismatch | None = None

    def __bool__(self) -> bool:
        return self.ok
