"""Tests for time, JSON and validation utilities."""

import pytest
from datetime import datetime, timedelta, timezone

from webhook_enrich.schemas import SchemaKey
from webhook_enrich.utils.json_utils import compact_json, to_json_schema_date_time
from webhook_enrich.utils.time import to_utc_millis_z
from webhook_enrich.utils.validated import Invalid, invalid


def test_to_utc_millis_z_formats_milliseconds():
    dt = datetime(2025, 12, 23, 12, 34, 56, 123456, tzinfo=timezone.utc)
    assert to_utc_millis_z(dt) == "2025-12-23T12:34:56.123Z"


def test_to_utc_millis_z_pads_whole_seconds():
    dt = datetime(2020, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    assert to_utc_millis_z(dt) == "2020-01-01T10:00:00.000Z"


def test_to_utc_millis_z_converts_non_utc_timezone():
    est = timezone(timedelta(hours=-5))
    dt_est = datetime(2025, 12, 23, 12, 0, 0, tzinfo=est)
    assert to_utc_millis_z(dt_est) == "2025-12-23T17:00:00.000Z"


def test_to_utc_millis_z_raises_on_naive_datetime():
    with pytest.raises(ValueError, match="Naive datetime not allowed"):
        to_utc_millis_z(datetime(2020, 1, 1))


def test_to_json_schema_date_time_reads_utc():
    assert to_json_schema_date_time("2018-01-24 17:30:00", "%Y-%m-%d %H:%M:%S") == "2018-01-24T17:30:00.000Z"


@pytest.mark.parametrize("value", ["", "2018-01-24", "2018-01-24T17:30:00.000Z", "2018-02-30 10:00:00", "2018-01-24 17:30:00 extra"])
def test_to_json_schema_date_time_returns_none_on_mismatch(value):
    assert to_json_schema_date_time(value, "%Y-%m-%d %H:%M:%S") is None


def test_compact_json_has_no_whitespace():
    assert compact_json({"a": [1, 2], "b": {"c": "é"}}) == '{"a":[1,2],"b":{"c":"é"}}'


def test_invalid_requires_errors():
    with pytest.raises(ValueError):
        Invalid(())


def test_invalid_helper_keeps_order():
    assert invalid("b", "a").errors == ("b", "a")


def test_schema_key_round_trip():
    key = SchemaKey(vendor="com.marketo", name="event", format="jsonschema", version="2-0-0")
    assert key.to_schema_uri() == "iglu:com.marketo/event/jsonschema/2-0-0"
    assert SchemaKey.from_uri("iglu:com.marketo/event/jsonschema/2-0-0") == key


def test_schema_key_rejects_bad_uri():
    with pytest.raises(ValueError, match="Not a valid iglu schema URI"):
        SchemaKey.from_uri("com.marketo/event/2-0-0")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_compact_json_refuses_non_finite_numbers(value):
    with pytest.raises(ValueError):
        compact_json({"x": value})
