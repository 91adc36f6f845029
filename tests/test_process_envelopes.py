"""Tests for the envelope runner, the CLI and the raw event validator."""

import argparse
import importlib.util
import json
import logging
from pathlib import Path

import jsonschema
import pytest

from webhook_enrich import cli
from webhook_enrich.loaders.collector_payload import load_payload
from webhook_enrich.runners.process_envelopes import main as process_envelopes_main

REPO_ROOT = Path(__file__).resolve().parents[1]
SCHEMA_PATH = REPO_ROOT / "docs" / "specs" / "raw-event.schema.json"


def _load_validator_tool():
    spec = importlib.util.spec_from_file_location(
        "validate_raw_events", REPO_ROOT / "tools" / "validate_raw_events.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _process_args(envelopes, output=None, config=None):
    return argparse.Namespace(
        config=config,
        envelopes=[str(p) for p in envelopes],
        output=str(output) if output else None,
        fail_fast=False,
    )


def test_load_payload_accepts_querystring_object(write_envelope):
    path = write_envelope("one.json", "{}", querystring={"aid": "app", "p": "web"})
    payload = load_payload(path)
    assert payload.querystring == [("aid", "app"), ("p", "web")]
    assert payload.source.hostname == "collector.example.com"


def test_load_payload_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a JSON object"):
        load_payload(path)


def test_runner_counts_events_and_failures(write_envelope, tmp_path, caplog):
    good = write_envelope("good.json", '{"created_at": "2020-01-01 10:00:00"}')
    empty = write_envelope("empty.json", None)
    missing = tmp_path / "missing.json"

    with caplog.at_level(logging.WARNING):
        stats = process_envelopes_main([good, empty, missing])

    assert stats["processed"] == 3
    assert stats["events"] == 1
    assert stats["failed"] == 2
    assert stats["errors"][str(empty)] == ["Request body is empty: no Marketo event to process"]
    assert "Envelope file not found" in stats["errors"][str(missing)][0]
    assert "Rejected envelope" in caplog.text


def test_runner_fail_fast_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        process_envelopes_main([tmp_path / "missing.json"], fail_fast=True)


def test_cmd_process_output_matches_schema(write_envelope, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    envelope = write_envelope(
        "marketo.json",
        '{"lead": {"created_at": "2018-06-16 11:23:58"}, "name": "webhook"}',
        querystring=[["aid", "marketing"]],
    )
    output = tmp_path / "events.json"

    cli.cmd_process(_process_args([envelope], output=output))

    events = json.loads(output.read_text(encoding="utf-8"))
    assert len(events) == 1
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    jsonschema.validate(instance=events[0], schema=schema)
    assert events[0]["parameters"]["aid"] == "marketing"
    data = json.loads(events[0]["parameters"]["ue_pr"])["data"]["data"]
    assert data["lead"]["created_at"] == "2018-06-16T11:23:58.000Z"

    tool = _load_validator_tool()
    assert tool.main([str(output), "--schema", str(SCHEMA_PATH)]) == 0


def test_cmd_process_exits_on_failure(write_envelope, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    bad = write_envelope("bad.json", "[1,2,3]")

    with pytest.raises(SystemExit) as excinfo:
        cli.cmd_process(_process_args([bad]))

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert json.loads(captured.out) == []
    assert "Marketo event is not a json object" in captured.err


def test_cmd_process_respects_disabled_adapter(write_envelope, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("version: 1\nlogging:\n  level: DEBUG\nadapters:\n  - vendor: com.marketo\n    version: v1\n    enabled: false\n")
    envelope = write_envelope("marketo.json", "{}")

    with pytest.raises(SystemExit):
        cli.cmd_process(_process_args([envelope], config=str(cfg)))

    assert "not supported by this version of webhook-enrich" in capsys.readouterr().err


def test_cmd_adapters_list(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    cli.cmd_adapters_list(argparse.Namespace(config=None))
    out = capsys.readouterr().out
    assert "com.marketo" in out
    assert "Yes" in out


def test_validator_tool_reports_bad_events(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"api": {"vendor": "com.marketo"}}]), encoding="utf-8")

    tool = _load_validator_tool()
    assert tool.main([str(bad), "--schema", str(SCHEMA_PATH)]) == 1
    assert "[FAIL]" in capsys.readouterr().err
