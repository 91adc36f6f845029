"""Pytest configuration and fixtures."""

import json

import pytest

from webhook_enrich.loaders.collector_payload import (
    CollectorApi,
    CollectorContext,
    CollectorPayload,
    CollectorSource,
)


@pytest.fixture
def make_payload():
    """Build a Marketo collector payload; keyword arguments override fields."""
    def _make(**overrides) -> CollectorPayload:
        fields = {
            "api": CollectorApi(vendor="com.marketo", version="v1"),
            "querystring": [],
            "content_type": "application/json",
            "body": None,
            "source": CollectorSource(name="clj-tomcat", encoding="UTF-8", hostname="collector.example.com"),
            "context": CollectorContext(
                timestamp="2020-01-01T10:00:05.000Z",
                ip_address="37.157.33.123",
                useragent="Marketo/1.0",
                headers=["Content-Type: application/json"],
            ),
        }
        fields.update(overrides)
        return CollectorPayload(**fields)
    return _make


@pytest.fixture
def write_envelope(tmp_path):
    """Write an envelope JSON file and return its path."""
    def _write(name: str, body, querystring=None, vendor="com.marketo", version="v1"):
        envelope = {
            "api": {"vendor": vendor, "version": version},
            "querystring": querystring or [],
            "content_type": "application/json",
            "body": body,
            "source": {"name": "clj-tomcat", "encoding": "UTF-8", "hostname": "collector.example.com"},
            "context": {"timestamp": "2020-01-01T10:00:05.000Z", "ip_address": "37.157.33.123"},
        }
        path = tmp_path / name
        path.write_text(json.dumps(envelope), encoding="utf-8")
        return path
    return _write
