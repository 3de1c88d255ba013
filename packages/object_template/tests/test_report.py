from __future__ import annotations

import json
from pathlib import Path

import pytest
from jsonschema import Draft202012Validator
from object_template import (
    MismatchReport,
    array,
    build_mismatch_report,
    is_integer,
    is_string,
    match,
    obj,
)
from object_template.export_schema import MISMATCH_REPORT_SCHEMA_FILE, main


def _assert_schema_valid(report: MismatchReport) -> None:
    validator = Draft202012Validator(MismatchReport.model_json_schema())
    errors = sorted(
        validator.iter_errors(report.model_dump(mode="json")), key=lambda err: str(err.path)
    )
    assert errors == []


def test_report_for_successful_match() -> None:
    report = build_mismatch_report(match({"a": is_string}, {"a": "x"}))
    assert report.ok is True
    assert report.kind is None
    assert report.message is None
    _assert_schema_valid(report)


def test_report_for_key_set_mismatch() -> None:
    report = build_mismatch_report(match({"a": is_string, "b": is_string}, {"a": "x", "c": 1}))
    assert report.kind == "keys"
    assert report.path == []
    assert report.expected_keys == ["a", "b"]
    assert report.actual_keys == ["a", "c"]
    assert report.unexpected_keys == ["c"]
    assert report.missing_keys == ["b"]
    assert report.message == (
        "invalid keys, expecting [a,b] but got [a,c] (unexpected: [c]) (missing: [b])"
    )
    _assert_schema_valid(report)


def test_report_for_loose_key_set_mismatch_keeps_unexpected_keys() -> None:
    report = build_mismatch_report(
        match({"a": is_string, "b": is_string}, {"a": "x", "c": 1}, loose=True)
    )
    assert report.kind == "keys"
    assert report.unexpected_keys == ["c"]
    assert report.missing_keys == ["b"]
    _assert_schema_valid(report)


def test_report_for_value_mismatch() -> None:
    template = {"items": array(obj({"id": is_integer}))}
    report = build_mismatch_report(match(template, {"items": [{"id": 1}, {"id": "x"}]}))
    assert report.kind == "value"
    assert report.path == ["items", 1]
    assert report.key == "id"
    assert report.expectation == "is_integer"
    assert report.actual == '"x"'
    _assert_schema_valid(report)


def test_report_for_non_mapping_candidate() -> None:
    report = build_mismatch_report(match({"a": is_string}, ["a"]))
    assert report.ok is False
    assert report.kind == "not_an_object"
    _assert_schema_valid(report)


def test_report_round_trips_through_json() -> None:
    report = build_mismatch_report(match({"a": is_string}, {"a": 1}))
    payload = json.loads(report.model_dump_json())
    assert MismatchReport.model_validate(payload) == report


def test_export_schema_writes_report_schema(tmp_path: Path) -> None:
    out_dir = tmp_path / "schema"

    written = main(["--out-dir", str(out_dir)])

    assert written == out_dir / MISMATCH_REPORT_SCHEMA_FILE
    schema = json.loads(written.read_text(encoding="utf-8"))
    assert schema == MismatchReport.model_json_schema()
    assert "schema_version" in schema["properties"]


def test_export_schema_defaults_to_package_schema_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    written = main([])

    assert written == Path("packages/object_template/schema") / MISMATCH_REPORT_SCHEMA_FILE
    assert (tmp_path / written).is_file()
