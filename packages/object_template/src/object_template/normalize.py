from __future__ import annotations

from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import Any

from .config import default_config
from .errors import MalformedTemplateError, TemplateDepthError, TemplateError
from .nodes import TEMPLATE_NODE_TYPES, TemplateNode, TplEquals, TplObject, TplTuple


def _coerce_fields(
    raw: Mapping[Any, Any],
    *,
    loose: bool,
    literals: bool,
    path: tuple[Hashable, ...],
    max_depth: int,
) -> Mapping[Any, TemplateNode]:
    fields: dict[Any, TemplateNode] = {}
    for key, value in raw.items():
        fields[key] = coerce_node(
            value, loose=loose, literals=literals, path=(*path, key), max_depth=max_depth
        )
    return MappingProxyType(fields)


def coerce_node(
    raw: Any,
    *,
    loose: bool = False,
    literals: bool = False,
    path: tuple[Hashable, ...] = (),
    max_depth: int | None = None,
) -> TemplateNode:
    """
    Turns one raw template value into a template node.

    Nodes pass through untouched. Mappings become object templates carrying
    ``loose``. With ``literals`` set, lists and tuples become positional
    tuple templates and any other value an equality leaf; without it those
    values are rejected. A mapping or list nested deeper than ``max_depth``
    raises ``TemplateDepthError``.
    """
    if isinstance(raw, TEMPLATE_NODE_TYPES):
        return raw
    if max_depth is None:
        max_depth = default_config().max_depth
    is_container = isinstance(raw, Mapping) or (literals and isinstance(raw, (list, tuple)))
    # the root object is level 1; each nested container adds one
    if is_container and len(path) + 1 > max_depth:
        raise TemplateDepthError(path=path, max_depth=max_depth)

    if isinstance(raw, Mapping):
        return TplObject(
            fields=_coerce_fields(
                raw, loose=loose, literals=literals, path=path, max_depth=max_depth
            ),
            loose=loose,
        )
    if not literals:
        raise MalformedTemplateError(path=path, value=raw)
    if isinstance(raw, (list, tuple)):
        return TplTuple(
            items=tuple(
                coerce_node(
                    item, loose=loose, literals=literals, path=(*path, idx), max_depth=max_depth
                )
                for idx, item in enumerate(raw)
            )
        )
    return TplEquals(value=raw)


def normalize(
    raw: Any,
    *,
    loose: bool = False,
    literals: bool = False,
    max_depth: int | None = None,
) -> TplObject:
    if isinstance(raw, TplObject):
        return raw
    if not isinstance(raw, Mapping):
        raise TemplateError(f"template must be a mapping; got {type(raw).__name__}")
    return coerce_node(raw, loose=loose, literals=literals, max_depth=max_depth)
