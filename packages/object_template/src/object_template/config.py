from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_MAX_DEPTH = 256
DEFAULT_MAX_VALUE_CHARS = 200
MIN_VALUE_CHARS = 16

MAX_DEPTH_ENV = "OBJECT_TEMPLATE_MAX_DEPTH"
MAX_VALUE_CHARS_ENV = "OBJECT_TEMPLATE_MAX_VALUE_CHARS"


def _read_limit(name: str, default: int, *, minimum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True)
class ObjectTemplateConfig:
    """Limits applied while matching templates and rendering mismatches."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_value_chars: int = DEFAULT_MAX_VALUE_CHARS

    @classmethod
    def from_env(cls) -> "ObjectTemplateConfig":
        return cls(
            max_depth=_read_limit(MAX_DEPTH_ENV, DEFAULT_MAX_DEPTH, minimum=1),
            max_value_chars=_read_limit(
                MAX_VALUE_CHARS_ENV, DEFAULT_MAX_VALUE_CHARS, minimum=MIN_VALUE_CHARS
            ),
        )


@lru_cache(maxsize=1)
def default_config() -> ObjectTemplateConfig:
    """Environment config, read once per process; ``cache_clear()`` re-reads it."""
    return ObjectTemplateConfig.from_env()


def resolve_config(config: ObjectTemplateConfig | None) -> ObjectTemplateConfig:
    if config is not None:
        return config
    return default_config()
