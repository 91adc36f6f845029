#!/usr/bin/env python3
"""Validate raw event files written by `webhook-enrich process` against the published JSON schema."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable

from jsonschema import Draft202012Validator, FormatChecker, ValidationError

UNSTRUCT_EVENT_SCHEMA = "iglu:com.snowplowanalytics.snowplow/unstruct_event/jsonschema/1-0-0"


def _load_json(path: Path, what: str) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"Unable to read {what} {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{what} {path} is not valid JSON: {exc}") from exc


def _format_error_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "$"
    parts: Iterable[str] = ("$", *map(str, error.absolute_path))
    return ".".join(parts)


def _validate_ue_pr(event: dict) -> list[str]:
    ue_pr = event.get("parameters", {}).get("ue_pr")
    if ue_pr is None:
        return []
    try:
        envelope = json.loads(ue_pr)
    except json.JSONDecodeError as exc:
        return [f"$.parameters.ue_pr: not valid JSON ({exc})"]
    issues: list[str] = []
    if not isinstance(envelope, dict) or envelope.get("schema") != UNSTRUCT_EVENT_SCHEMA:
        issues.append("$.parameters.ue_pr: not an unstruct_event envelope")
    elif not isinstance(envelope.get("data"), dict) or "schema" not in envelope["data"]:
        issues.append("$.parameters.ue_pr.data: missing event schema")
    return issues


def validate_files(paths: list[Path], schema_path: Path, fail_fast: bool) -> int:
    if not paths:
        print("[webhook-enrich] No raw event files given", file=sys.stderr)
        return 2

    schema = _load_json(schema_path, "schema file")
    validator = Draft202012Validator(schema, format_checker=FormatChecker())

    failures = 0
    events_seen = 0
    vendor_counts: Counter[str] = Counter()

    for path in paths:
        try:
            events = _load_json(path, "raw event file")
        except RuntimeError as exc:
            failures += 1
            print(f"[FAIL] {path}", file=sys.stderr)
            print(f"  - {exc}", file=sys.stderr)
            if fail_fast:
                break
            continue

        if not isinstance(events, list):
            events = [events]

        errors: list[str] = []
        for index, event in enumerate(events):
            events_seen += 1
            try:
                validator.validate(event)
            except ValidationError as exc:
                errors.append(f"[{index}] {_format_error_path(exc)}: {exc.message}")
                continue
            vendor_counts[event["api"]["vendor"]] += 1
            errors.extend(f"[{index}] {issue}" for issue in _validate_ue_pr(event))

        if errors:
            failures += 1
            print(f"[FAIL] {path}", file=sys.stderr)
            for item in errors:
                print(f"  - {item}", file=sys.stderr)
            if fail_fast:
                break

    print(f"Validated {events_seen} raw events in {len(paths)} files, {failures} files failed")
    print(f"  Vendors: " + ", ".join(f"{vendor}={count}" for vendor, count in sorted(vendor_counts.items())))

    return 0 if failures == 0 else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate raw events against the JSON schema.")
    parser.add_argument(
        "files",
        type=Path,
        nargs="*",
        help="Raw event JSON files (arrays of events)",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=Path("docs/specs/raw-event.schema.json"),
        help="Path to raw-event JSON schema",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first validation failure",
    )

    args = parser.parse_args(argv)
    try:
        return validate_files(args.files, args.schema, args.fail_fast)
    except RuntimeError as exc:
        print(f"[webhook-enrich] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
