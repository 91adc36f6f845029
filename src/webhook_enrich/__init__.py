"""Webhook adapters that turn vendor payloads into raw events."""

__version__ = "0.1.0"
