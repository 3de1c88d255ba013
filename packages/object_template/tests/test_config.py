from __future__ import annotations

from collections.abc import Iterator

import pytest
from object_template import (
    ObjectTemplateConfig,
    TemplateDepthError,
    TemplateValidator,
    default_config,
    is_string,
    match,
    validate,
)
from object_template.config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_VALUE_CHARS

_ENV_VARS = ("OBJECT_TEMPLATE_MAX_DEPTH", "OBJECT_TEMPLATE_MAX_VALUE_CHARS")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


def test_defaults_when_env_is_unset() -> None:
    config = ObjectTemplateConfig.from_env()
    assert config == ObjectTemplateConfig()
    assert config.max_depth == DEFAULT_MAX_DEPTH
    assert config.max_value_chars == DEFAULT_MAX_VALUE_CHARS


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_DEPTH", " 8 ")
    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_VALUE_CHARS", "32")
    assert ObjectTemplateConfig.from_env() == ObjectTemplateConfig(max_depth=8, max_value_chars=32)


@pytest.mark.parametrize(
    ("name", "raw", "message"),
    [
        ("OBJECT_TEMPLATE_MAX_DEPTH", "abc", "OBJECT_TEMPLATE_MAX_DEPTH must be an integer"),
        ("OBJECT_TEMPLATE_MAX_DEPTH", "0", "OBJECT_TEMPLATE_MAX_DEPTH must be >= 1"),
        (
            "OBJECT_TEMPLATE_MAX_VALUE_CHARS",
            "4",
            "OBJECT_TEMPLATE_MAX_VALUE_CHARS must be >= 16",
        ),
    ],
)
def test_invalid_env_values_raise(
    monkeypatch: pytest.MonkeyPatch, name: str, raw: str, message: str
) -> None:
    monkeypatch.setenv(name, raw)
    with pytest.raises(RuntimeError) as excinfo:
        ObjectTemplateConfig.from_env()
    assert str(excinfo.value) == message


def test_match_reads_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    template = {"a": {"b": is_string}}
    candidate = {"a": {"b": "x"}}
    assert validate(template, candidate) is True

    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_DEPTH", "1")
    assert validate(template, candidate) is True

    default_config.cache_clear()
    with pytest.raises(TemplateDepthError):
        match(template, candidate)


def test_env_config_is_read_once(monkeypatch: pytest.MonkeyPatch) -> None:
    assert default_config() == ObjectTemplateConfig()

    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_DEPTH", "abc")
    assert default_config() is default_config()
    assert validate({"a": is_string}, {"a": "x"}) is True

    default_config.cache_clear()
    with pytest.raises(RuntimeError, match="OBJECT_TEMPLATE_MAX_DEPTH must be an integer"):
        validate({"a": is_string}, {"a": "x"})


def test_validator_resolves_config_when_constructed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_DEPTH", "1")
    validator = TemplateValidator()

    monkeypatch.setenv("OBJECT_TEMPLATE_MAX_DEPTH", "64")
    default_config.cache_clear()

    with pytest.raises(TemplateDepthError):
        validator.validate({"a": {"b": is_string}}, {"a": {"b": "x"}})
    assert TemplateValidator().validate({"a": {"b": is_string}}, {"a": {"b": "x"}}) is True
