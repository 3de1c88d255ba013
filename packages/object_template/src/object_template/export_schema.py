from __future__ import annotations

import argparse
import json
from collections.abc import Sequence
from pathlib import Path

from .report import MismatchReport

MISMATCH_REPORT_SCHEMA_FILE = "object_template.mismatch_report.v0.json"
DEFAULT_SCHEMA_DIR = Path("packages/object_template/schema")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export the JSON schema of object_template mismatch reports."
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=DEFAULT_SCHEMA_DIR,
        help="Directory the schema file is written to",
    )
    return parser.parse_args(argv)


def write_schema(out_dir: Path) -> Path:
    path = out_dir / MISMATCH_REPORT_SCHEMA_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = MismatchReport.model_json_schema()
    path.write_text(json.dumps(schema, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return path


def main(argv: Sequence[str] | None = None) -> Path:
    args = parse_args(argv)
    return write_schema(args.out_dir)


if __name__ == "__main__":
    main()
