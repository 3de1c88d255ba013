from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union


class _Missing:
    """Stands in for the value of a key the candidate object does not have."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class TplCheck:
    fn: Callable[[Any], bool]
    label: str

    def __call__(self, value: Any) -> bool:
        return bool(self.fn(value))


@dataclass(frozen=True)
class TplEquals:
    value: Any


@dataclass(frozen=True)
class TplOptional:
    inner: "TemplateNode"


@dataclass(frozen=True)
class TplNullable:
    inner: "TemplateNode"


@dataclass(frozen=True)
class TplExists:
    pass


@dataclass(frozen=True)
class TplObject:
    # Read-only view; key order is the declared order of the template.
    fields: Mapping[Any, "TemplateNode"]
    loose: bool = False


@dataclass(frozen=True)
class TplTuple:
    items: tuple["TemplateNode", ...]


@dataclass(frozen=True)
class TplArray:
    inner: "TemplateNode"
    min_items: int = 0
    max_items: int | None = None


@dataclass(frozen=True)
class TplMap:
    inner: "TemplateNode"
    min_items: int = 0
    max_items: int | None = None


@dataclass(frozen=True)
class TplAnd:
    args: tuple["TemplateNode", ...]


@dataclass(frozen=True)
class TplOr:
    args: tuple["TemplateNode", ...]


@dataclass(frozen=True)
class TplChoice:
    options: tuple[Any, ...]


TemplateNode = Union[
    TplCheck,
    TplEquals,
    TplOptional,
    TplNullable,
    TplExists,
    TplObject,
    TplTuple,
    TplArray,
    TplMap,
    TplAnd,
    TplOr,
    TplChoice,
]

TEMPLATE_NODE_TYPES = (
    TplCheck,
    TplEquals,
    TplOptional,
    TplNullable,
    TplExists,
    TplObject,
    TplTuple,
    TplArray,
    TplMap,
    TplAnd,
    TplOr,
    TplChoice,
)


def is_template_node(value: Any) -> bool:
    return isinstance(value, TEMPLATE_NODE_TYPES)
