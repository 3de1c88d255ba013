from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .config import ObjectTemplateConfig, resolve_config
from .describe import describe_mismatch, describe_template, render_value
from .mismatch import KeySetMismatch, MatchResult

MismatchReportSchemaVersion = Literal["object_template.mismatch_report.v0"]
MismatchKind = Literal["keys", "value", "not_an_object"]

PathItem = Union[int, str]


class MismatchReport(BaseModel):
    model_config = ConfigDict(extra="forbid")
    schema_version: MismatchReportSchemaVersion = "object_template.mismatch_report.v0"
    ok: bool
    kind: MismatchKind | None = None
    path: list[PathItem] = Field(default_factory=list)
    key: PathItem | None = None
    expected_keys: list[str] = Field(default_factory=list)
    actual_keys: list[str] = Field(default_factory=list)
    unexpected_keys: list[str] = Field(default_factory=list)
    missing_keys: list[str] = Field(default_factory=list)
    expectation: str | None = Field(
        default=None, description="Signature of the template node that rejected the value"
    )
    actual: str | None = Field(default=None, description="JSON rendering of the rejected value")
    message: str | None = None


def _path_item(value: Hashable) -> PathItem:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return str(value)


def _key_texts(keys: Iterable[Hashable]) -> list[str]:
    return [str(key) for key in keys]


def build_mismatch_report(
    result: MatchResult,
    *,
    config: ObjectTemplateConfig | None = None,
) -> MismatchReport:
    if result.ok:
        return MismatchReport(ok=True)

    mismatch = result.mismatch
    if mismatch is None:
        return MismatchReport(
            ok=False,
            kind="not_an_object",
            message="candidate is not a mapping",
        )

    config = resolve_config(config)
    message = describe_mismatch(mismatch, config=config)
    path = [_path_item(part) for part in mismatch.path]
    if isinstance(mismatch, KeySetMismatch):
        return MismatchReport(
            ok=False,
            kind="keys",
            path=path,
            expected_keys=_key_texts(mismatch.expected_keys),
            actual_keys=_key_texts(mismatch.actual_keys),
            unexpected_keys=_key_texts(mismatch.unexpected_keys),
            missing_keys=_key_texts(mismatch.missing_keys),
            message=message,
        )

    return MismatchReport(
        ok=False,
        kind="value",
        path=path,
        key=_path_item(mismatch.key),
        expectation=describe_template(mismatch.template_node),
        actual=render_value(mismatch.object_node, config=config),
        message=message,
    )
