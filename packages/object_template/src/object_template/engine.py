from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any

from .config import ObjectTemplateConfig, resolve_config
from .describe import describe_mismatch, describe_result
from .errors import MalformedTemplateError, TemplateDepthError
from .mismatch import KeySetMismatch, MatchResult, Mismatch, ValueMismatch
from .nodes import (
    MISSING,
    TemplateNode,
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
from .normalize import coerce_node, normalize

logger = logging.getLogger(__name__)

MismatchListener = Callable[[Mismatch], None]

# (matched, nested mismatch found below the evaluated value)
_Outcome = tuple[bool, "Mismatch | None"]


def _same_value(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    return a == b


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _within(count: int, min_items: int, max_items: int | None) -> bool:
    if count < min_items:
        return False
    return max_items is None or count <= max_items


def _evaluate(
    node: TemplateNode,
    value: Any,
    *,
    path: tuple[Hashable, ...],
    depth: int,
    max_depth: int,
) -> _Outcome:
    if depth > max_depth:
        raise TemplateDepthError(path=path, max_depth=max_depth)

    if isinstance(node, TplOptional):
        if value is MISSING:
            return True, None
        return _evaluate(node.inner, value, path=path, depth=depth, max_depth=max_depth)

    if isinstance(node, TplAnd):
        for arg in node.args:
            ok, detail = _evaluate(arg, value, path=path, depth=depth, max_depth=max_depth)
            if not ok:
                return False, detail
        return True, None

    if isinstance(node, TplOr):
        for arg in node.args:
            ok, _ = _evaluate(arg, value, path=path, depth=depth, max_depth=max_depth)
            if ok:
                return True, None
        return False, None

    if value is MISSING:
        return False, None

    if isinstance(node, TplNullable):
        if value is None:
            return True, None
        return _evaluate(node.inner, value, path=path, depth=depth, max_depth=max_depth)

    if isinstance(node, TplExists):
        return True, None

    if isinstance(node, TplCheck):
        return bool(node.fn(value)), None

    if isinstance(node, TplEquals):
        return _same_value(node.value, value), None

    if isinstance(node, TplChoice):
        return any(_same_value(option, value) for option in node.options), None

    if isinstance(node, TplObject):
        if not isinstance(value, Mapping):
            return False, None
        mismatch = _check_object(node, value, path=path, depth=depth + 1, max_depth=max_depth)
        return mismatch is None, mismatch

    if isinstance(node, TplTuple):
        if not _is_sequence(value) or len(value) != len(node.items):
            return False, None
        for idx, (item_node, item) in enumerate(zip(node.items, value)):
            ok, detail = _evaluate(
                item_node, item, path=(*path, idx), depth=depth + 1, max_depth=max_depth
            )
            if not ok:
                if detail is None:
                    detail = ValueMismatch(
                        path=path, key=idx, template_node=item_node, object_node=item
                    )
                return False, detail
        return True, None

    if isinstance(node, TplArray):
        if not _is_sequence(value) or not _within(len(value), node.min_items, node.max_items):
            return False, None
        return _evaluate_items(
            node.inner, enumerate(value), path=path, depth=depth, max_depth=max_depth
        )

    if isinstance(node, TplMap):
        if not isinstance(value, Mapping) or not _within(
            len(value), node.min_items, node.max_items
        ):
            return False, None
        return _evaluate_items(
            node.inner, value.items(), path=path, depth=depth, max_depth=max_depth
        )

    raise MalformedTemplateError(path=path, value=node)


def _evaluate_items(
    node: TemplateNode,
    items: Iterable[tuple[Hashable, Any]],
    *,
    path: tuple[Hashable, ...],
    depth: int,
    max_depth: int,
) -> _Outcome:
    for key, item in items:
        ok, detail = _evaluate(node, item, path=(*path, key), depth=depth + 1, max_depth=max_depth)
        if not ok:
            return False, detail
    return True, None


def _accepts_missing(
    node: TemplateNode,
    *,
    path: tuple[Hashable, ...],
    depth: int,
    max_depth: int,
) -> bool:
    ok, _ = _evaluate(node, MISSING, path=path, depth=depth, max_depth=max_depth)
    return ok


def _check_object(
    template: TplObject,
    obj: Mapping[Any, Any],
    *,
    path: tuple[Hashable, ...],
    depth: int,
    max_depth: int,
) -> Mismatch | None:
    if depth > max_depth:
        raise TemplateDepthError(path=path, max_depth=max_depth)

    template_keys = tuple(template.fields)
    object_keys = tuple(obj)
    missing = tuple(
        key
        for key in template_keys
        if key not in obj
        and not _accepts_missing(
            template.fields[key], path=(*path, key), depth=depth, max_depth=max_depth
        )
    )
    unexpected = tuple(key for key in object_keys if key not in template.fields)
    if missing or (unexpected and not template.loose):
        return KeySetMismatch(
            path=path,
            expected_keys=template_keys,
            actual_keys=object_keys,
            unexpected_keys=unexpected,
            missing_keys=missing,
        )

    for key, node in template.fields.items():
        value = obj[key] if key in obj else MISSING
        ok, detail = _evaluate(node, value, path=(*path, key), depth=depth, max_depth=max_depth)
        if not ok:
            if detail is not None:
                return detail
            return ValueMismatch(path=path, key=key, template_node=node, object_node=value)
    return None


def match(
    template: Any,
    obj: Any,
    *,
    loose: bool = False,
    recursive: bool = False,
    config: ObjectTemplateConfig | None = None,
) -> MatchResult:
    """
    Checks ``obj`` against ``template`` and returns the outcome.

    ``template`` is a mapping of keys to template nodes (or nested mappings),
    or an object template built with ``obj``/``recursive_object``; a built
    object template keeps its own ``loose`` flag. With ``recursive`` set,
    literal lists and scalars in the template are matched as values.

    Only the first mismatch is reported. Nested object mismatches are reported
    where they occur, with the path of the offending object.
    """
    config = resolve_config(config)
    root = normalize(template, loose=loose, literals=recursive, max_depth=config.max_depth)
    if not isinstance(obj, Mapping):
        logger.debug("candidate is not a mapping: %s", type(obj).__name__)
        return MatchResult(ok=False, mismatch=None)

    mismatch = _check_object(root, obj, path=(), depth=1, max_depth=config.max_depth)
    if mismatch is None:
        return MatchResult(ok=True)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("template mismatch: %s", describe_mismatch(mismatch, config=config))
    return MatchResult(ok=False, mismatch=mismatch)


def validate(
    template: Any,
    obj: Any,
    *,
    loose: bool = False,
    recursive: bool = False,
    config: ObjectTemplateConfig | None = None,
) -> bool:
    return match(template, obj, loose=loose, recursive=recursive, config=config).ok


def evaluate(
    template: Any,
    value: Any,
    *,
    config: ObjectTemplateConfig | None = None,
) -> bool:
    """Tests a single value against one template node; pass MISSING for an absent key."""
    config = resolve_config(config)
    node = coerce_node(template, max_depth=config.max_depth)
    ok, _ = _evaluate(node, value, path=(), depth=1, max_depth=config.max_depth)
    return ok


class TemplateValidator:
    """
    Validates objects and keeps the result of the most recent call.

    Every ``validate`` call replaces the retained result, so an instance must
    not be shared between threads. ``match`` keeps no state and can be called
    from anywhere.
    """

    def __init__(
        self,
        *,
        config: ObjectTemplateConfig | None = None,
        listeners: Iterable[MismatchListener] = (),
    ) -> None:
        self._config = resolve_config(config)
        self._listeners: list[MismatchListener] = list(listeners)
        self._last_result: MatchResult | None = None

    def add_listener(self, listener: MismatchListener) -> None:
        self._listeners.append(listener)
        logger.debug("registered mismatch listener %r", listener)

    @property
    def last_result(self) -> MatchResult | None:
        return self._last_result

    @property
    def last_mismatch(self) -> Mismatch | None:
        if self._last_result is None:
            return None
        return self._last_result.mismatch

    def validate(
        self,
        template: Any,
        obj: Any,
        *,
        loose: bool = False,
        recursive: bool = False,
    ) -> bool:
        self._last_result = None
        result = match(template, obj, loose=loose, recursive=recursive, config=self._config)
        self._last_result = result
        if result.mismatch is not None:
            for listener in self._listeners:
                listener(result.mismatch)
        return result.ok

    def describe_last_mismatch(self) -> str | None:
        if self._last_result is None:
            return None
        return describe_result(self._last_result, config=self._config)
