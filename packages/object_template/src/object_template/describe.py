from __future__ import annotations

import json
from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from .config import ObjectTemplateConfig, resolve_config
from .mismatch import KeySetMismatch, MatchResult, Mismatch
from .nodes import (
    MISSING,
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
    TplTuple,
)


def _json_literal(value: Any) -> str:
    if value is MISSING:
        return "<missing>"
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(value)


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def render_value(value: Any, *, config: ObjectTemplateConfig | None = None) -> str:
    return _truncate(_json_literal(value), resolve_config(config).max_value_chars)


def _call(name: str, *args: str) -> str:
    return f"{name}({','.join(args)})"


def _bounds(min_items: int, max_items: int | None) -> tuple[str, ...]:
    if max_items is None:
        return (str(min_items),) if min_items else ()
    return (str(min_items), str(max_items))


def _describe_fields(fields: Mapping[Any, Any]) -> str:
    items = [f"{key}: {describe_template(value)}" for key, value in fields.items()]
    return "{" + ",".join(items) + "}"


def _describe_items(items: Iterable[Any]) -> str:
    return "[" + ",".join(describe_template(item) for item in items) + "]"


def describe_template(template: Any) -> str:
    """
    Renders a template as a signature string.

    Nodes render as ``name(arg,...)``, object templates as
    ``{key: desc,key: desc}``, positional templates as ``[desc,desc]`` and
    literals as JSON.
    """
    if isinstance(template, TplCheck):
        return template.label
    if isinstance(template, TplEquals):
        return _json_literal(template.value)
    if isinstance(template, TplOptional):
        return _call("optional", describe_template(template.inner))
    if isinstance(template, TplNullable):
        return _call("nullable", describe_template(template.inner))
    if isinstance(template, TplExists):
        return _call("exists")
    if isinstance(template, TplObject):
        args = [_describe_fields(template.fields)]
        if template.loose:
            args.append("true")
        return _call("object", *args)
    if isinstance(template, TplTuple):
        return _describe_items(template.items)
    if isinstance(template, TplArray):
        return _call(
            "array",
            describe_template(template.inner),
            *_bounds(template.min_items, template.max_items),
        )
    if isinstance(template, TplMap):
        return _call(
            "map",
            describe_template(template.inner),
            *_bounds(template.min_items, template.max_items),
        )
    if isinstance(template, TplAnd):
        return _call("and", *(describe_template(arg) for arg in template.args))
    if isinstance(template, TplOr):
        return _call("or", *(describe_template(arg) for arg in template.args))
    if isinstance(template, TplChoice):
        return _call("choice", "[" + ",".join(_json_literal(o) for o in template.options) + "]")
    if isinstance(template, Mapping):
        return _describe_fields(template)
    if isinstance(template, (list, tuple)):
        return _describe_items(template)
    return _json_literal(template)


def _format_path(path: tuple[Hashable, ...]) -> str:
    return ".".join(str(part) for part in path)


def _where(path: tuple[Hashable, ...]) -> str:
    if not path:
        return ""
    return f" at '{_format_path(path)}'"


def _join_keys(keys: Iterable[Hashable]) -> str:
    return ",".join(str(key) for key in keys)


def describe_mismatch(mismatch: Mismatch, *, config: ObjectTemplateConfig | None = None) -> str:
    if isinstance(mismatch, KeySetMismatch):
        return (
            f"invalid keys{_where(mismatch.path)}, "
            f"expecting [{_join_keys(mismatch.expected_keys)}] "
            f"but got [{_join_keys(mismatch.actual_keys)}] "
            f"(unexpected: [{_join_keys(mismatch.unexpected_keys)}]) "
            f"(missing: [{_join_keys(mismatch.missing_keys)}])"
        )

    actual = render_value(mismatch.object_node, config=config)
    return (
        f"invalid value for key '{mismatch.key}'{_where(mismatch.path)}: '{actual}'; "
        f"expectation: {describe_template(mismatch.template_node)}"
    )


def describe_result(
    result: MatchResult,
    *,
    config: ObjectTemplateConfig | None = None,
) -> str | None:
    if result.ok or result.mismatch is None:
        return None
    return describe_mismatch(result.mismatch, config=config)
