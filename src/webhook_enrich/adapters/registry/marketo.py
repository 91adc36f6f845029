"""Adapter for Marketo webhooks."""

import json
import math
import re
from typing import Any, List, Optional

from webhook_enrich.adapters.base import Adapter
from webhook_enrich.adapters.models import RawEvent
from webhook_enrich.loaders.collector_payload import CollectorPayload
from webhook_enrich.schemas.schema_key import SchemaKey
from webhook_enrich.utils.json_utils import to_json_schema_date_time
from webhook_enrich.utils.logging import get_logger
from webhook_enrich.utils.validated import Invalid, Valid, Validated, invalid

logger = get_logger(__name__)

VENDOR_NAME = "Marketo"

EXPECTED_CONTENT_TYPE = "application/json"

TRACKER_VERSION = "com.marketo-v1"

PLATFORM = "srv"

# Marketo sends no type field, so every event is looked up as this type
EVENT_TYPE = "event"

EVENT_SCHEMA_MAP = {
    EVENT_TYPE: SchemaKey(vendor="com.marketo", name="event", format="jsonschema", version="2-0-0").to_schema_uri(),
}

# yyyy-MM-dd HH:mm:ss, UTC
MARKETO_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime lets one space in the format match any run of whitespace
MARKETO_DATE_TIME_RE = re.compile(r"[0-9]{4}-[0-9]{1,2}-[0-9]{1,2} [0-9]{1,2}:[0-9]{1,2}:[0-9]{1,2}")

DATE_FIELDS = frozenset([
    "acquisition_date",
    "created_at",
    "email_suspended_at",
    "last_referred_enrollment",
    "last_referred_visit",
    "updated_at",
    "datetime",
    "last_interesting_moment_date",
])

# Characters of the body quoted back in parse errors
PARSE_ERROR_CONTEXT_CHARS = 20

NESTING_ERROR_DETAIL = "maximum nesting depth exceeded"


def reformat_parameters(json_value: Any) -> Any:
    """
    Rewrite Marketo date-time strings into JSON Schema date-time format.

    Walks nested objects only; list elements are left as they are.
    Strings that don't match the Marketo format are kept unchanged.

    Returns:
        A new object (the input is never mutated), or json_value itself if it is not a dict
    """
    if not isinstance(json_value, dict):
        return json_value

    updated = {}
    for key, value in json_value.items():
        if key in DATE_FIELDS and isinstance(value, str):
            reformatted = None
            if MARKETO_DATE_TIME_RE.fullmatch(value):
                reformatted = to_json_schema_date_time(value, MARKETO_DATE_TIME_FORMAT)
            updated[key] = value if reformatted is None else reformatted
        elif isinstance(value, dict):
            updated[key] = reformat_parameters(value)
        else:
            updated[key] = value
    return updated


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _parse_finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number {token} is out of range")
    return value


def _parse_json(body: str) -> Any:
    """json.loads restricted to strict JSON: no NaN/Infinity, no overflowing numbers."""
    return json.loads(body, parse_constant=_reject_constant, parse_float=_parse_finite_float)


def _describe_parse_error(error: ValueError) -> str:
    if not isinstance(error, json.JSONDecodeError):
        return str(error)
    fragment = error.doc[error.pos:error.pos + PARSE_ERROR_CONTEXT_CHARS]
    return f"{error}, got '{fragment}'"


class MarketoAdapter(Adapter):
    """Transforms a collector payload carrying a Marketo webhook into raw events."""

    vendor = "com.marketo"
    version = "v1"

    def payload_body_to_event(self, body: str, payload: CollectorPayload) -> Validated[RawEvent]:
        """
        Build a single raw event from a Marketo webhook body.
        
        Args:
            body: JSON body sent by Marketo
            payload: Collector payload the body came with
            
        Returns:
            Valid with the RawEvent, or Invalid with one message for the first failing step
        """
        try:
            parsed = _parse_json(body)
        except ValueError as e:
            return invalid(f"{VENDOR_NAME} event failed to parse into JSON: [{_describe_parse_error(e)}]")
        except RecursionError:
            return invalid(f"{VENDOR_NAME} event failed to parse into JSON: [{NESTING_ERROR_DETAIL}]")

        if not isinstance(parsed, dict):
            return invalid(f"{VENDOR_NAME} event is not a json object")

        schema = self.lookup_schema(EVENT_TYPE, VENDOR_NAME, EVENT_SCHEMA_MAP)
        if isinstance(schema, Invalid):
            return schema

        # A body that only just decoded can still be too deep to walk and re-serialize
        try:
            converted = reformat_parameters(parsed)
            params = self.to_unstruct_event_params(
                TRACKER_VERSION,
                self.to_map(payload.querystring),
                schema.value,
                converted,
                PLATFORM,
            )
        except RecursionError:
            return invalid(f"{VENDOR_NAME} event failed to parse into JSON: [{NESTING_ERROR_DETAIL}]")
        return Valid(RawEvent(
            api=payload.api,
            parameters=params,
            content_type=payload.content_type,
            source=payload.source,
            context=payload.context,
        ))

    def to_raw_events(
        self,
        payload: CollectorPayload,
        resolver: Optional[Any] = None,
    ) -> Validated[List[RawEvent]]:
        """
        Convert a Marketo webhook payload into raw events.
        
        Marketo posts exactly one event per request. The resolver is accepted
        for parity with other adapters and is not used.
        """
        if payload.body is None:
            return invalid(f"Request body is empty: no {VENDOR_NAME} event to process")

        if payload.content_type != EXPECTED_CONTENT_TYPE:
            logger.debug(f"Marketo payload with content type {payload.content_type!r}, processing anyway")

        event = self.payload_body_to_event(payload.body, payload)
        return self.raw_events_list_processor([event])
