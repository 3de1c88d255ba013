from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Set
from typing import Any

from .errors import TemplateError
from .nodes import (
    TplAnd,
    TplArray,
    TplChoice,
    TplCheck,
    TplEquals,
    TplExists,
    TplMap,
    TplNullable,
    TplObject,
    TplOptional,
    TplOr,
)
from .normalize import coerce_node, normalize


def _check_bounds(name: str, min_items: int, max_items: int | None) -> None:
    if min_items < 0:
        raise TemplateError(f"{name} min_items must be >= 0; got {min_items}")
    if max_items is not None and max_items < min_items:
        raise TemplateError(
            f"{name} max_items must be >= min_items ({min_items}); got {max_items}"
        )


def optional(inner: Any) -> TplOptional:
    """The key may be absent; when present its value must satisfy ``inner``."""
    return TplOptional(inner=coerce_node(inner))


def nullable(inner: Any) -> TplNullable:
    """The key must be present; ``None`` matches, anything else must satisfy ``inner``."""
    return TplNullable(inner=coerce_node(inner))


def exists() -> TplExists:
    return TplExists()


def obj(template: Mapping[Any, Any], loose: bool = False) -> TplObject:
    """
    The value must be a mapping congruent with ``template``.

    With ``loose`` the mapping may carry keys the template does not name.
    Nested raw mappings become object templates with the same ``loose``.
    """
    if not isinstance(template, Mapping):
        raise TemplateError(f"obj must be called on a mapping; got {type(template).__name__}")
    return normalize(template, loose=loose)


def recursive_object(template: Mapping[Any, Any], loose: bool = False) -> TplObject:
    """
    Same as ``obj``, but literal values nested in ``template`` are matched too.

    Nested mappings become object templates, lists are matched positionally
    (the candidate list must have the same length) and any other literal must
    be equal to the candidate value.
    """
    if not isinstance(template, Mapping):
        raise TemplateError(
            f"recursive_object must be called on a mapping; got {type(template).__name__}"
        )
    return normalize(template, loose=loose, literals=True)


def array(inner: Any, min_items: int = 0, max_items: int | None = None) -> TplArray:
    _check_bounds("array", min_items, max_items)
    return TplArray(inner=coerce_node(inner), min_items=min_items, max_items=max_items)


def map_of(inner: Any, min_items: int = 0, max_items: int | None = None) -> TplMap:
    _check_bounds("map_of", min_items, max_items)
    return TplMap(inner=coerce_node(inner), min_items=min_items, max_items=max_items)


def and_(*args: Any) -> TplAnd:
    if not args:
        raise TemplateError("and_ requires at least 1 arg")
    return TplAnd(args=tuple(coerce_node(arg) for arg in args))


def or_(*args: Any) -> TplOr:
    if not args:
        raise TemplateError("or_ requires at least 1 arg")
    return TplOr(args=tuple(coerce_node(arg) for arg in args))


def choice(options: Iterable[Any]) -> TplChoice:
    """The value must equal one of ``options``, which are kept in the given order."""
    if isinstance(options, (str, bytes, Mapping, Set)):
        raise TemplateError(f"choice options must be a sequence; got {type(options).__name__}")
    return TplChoice(options=tuple(options))


def predicate(fn: Callable[[Any], bool], label: str | None = None) -> TplCheck:
    if not callable(fn):
        raise TemplateError(f"predicate requires a callable; got {type(fn).__name__}")
    if label is None:
        label = getattr(fn, "__name__", None) or repr(fn)
    return TplCheck(fn=fn, label=label)


def equals(value: Any) -> TplEquals:
    return TplEquals(value=value)
