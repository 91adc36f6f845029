"""Base class and shared helpers for webhook adapters."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from webhook_enrich.adapters.models import RawEvent
from webhook_enrich.loaders.collector_payload import CollectorPayload
from webhook_enrich.utils.json_utils import compact_json
from webhook_enrich.utils.validated import Invalid, Valid, Validated, invalid

UNSTRUCT_EVENT_SCHEMA = "iglu:com.snowplowanalytics.snowplow/unstruct_event/jsonschema/1-0-0"

EMPTY_EVENTS_ERROR = "List of events is empty (should never happen, not catching empty list properly)"


class Adapter(ABC):
    """Abstract base class for webhook adapters."""

    vendor: str
    version: str

    @abstractmethod
    def to_raw_events(
        self,
        payload: CollectorPayload,
        resolver: Optional[Any] = None,
    ) -> Validated[List[RawEvent]]:
        """
        Convert a collector payload into raw events.
        
        Args:
            payload: Collector payload holding one or more vendor events
            resolver: Schema resolver for adapters that validate against a
                schema registry (optional)
            
        Returns:
            Valid with a non-empty list of RawEvents, or Invalid with the error messages
        """
        pass

    @staticmethod
    def to_map(querystring: Iterable[Tuple[str, str]]) -> Dict[str, str]:
        """Querystring pairs to a dict; later duplicates win."""
        return {name: value for name, value in querystring}

    @staticmethod
    def lookup_schema(
        event_type: Optional[str],
        vendor: str,
        schema_map: Mapping[str, str],
    ) -> Validated[str]:
        """
        Find the schema URI for an event type.
        
        Args:
            event_type: Event type reported by (or assumed for) the vendor event
            vendor: Vendor name used in error messages
            schema_map: Event type to schema URI
            
        Returns:
            Valid with the schema URI, or Invalid with a single message
        """
        if event_type is None:
            return invalid(f"{vendor} event failed: type parameter not provided - cannot determine event type")
        schema = schema_map.get(event_type)
        if schema is None:
            return invalid(f"could not find schema for type {event_type}")
        return Valid(schema)

    @staticmethod
    def to_unstruct_event_params(
        tracker: str,
        parameters: Mapping[str, str],
        schema: str,
        event_json: Any,
        platform: str,
    ) -> Dict[str, str]:
        """
        Build the raw event parameters for a self-describing (unstructured) event.
        
        Querystring parameters are carried over. The tracker, event kind and
        event payload keys always come from the adapter; the platform only
        falls back to `platform` when the querystring has no `p`.
        
        Args:
            tracker: Tracker version marker, e.g. 'com.marketo-v1'
            parameters: Querystring parameters
            schema: Schema URI of the vendor event
            event_json: Event body (already normalized)
            platform: Default platform code
            
        Returns:
            Parameter dict for a RawEvent
        """
        ue_pr = compact_json({
            "schema": UNSTRUCT_EVENT_SCHEMA,
            "data": {
                "schema": schema,
                "data": event_json,
            },
        })
        params = dict(parameters)
        params.update({
            "tv": tracker,
            "e": "ue",
            "p": parameters.get("p", platform),
            "ue_pr": ue_pr,
        })
        return params

    @staticmethod
    def raw_events_list_processor(
        results: Sequence[Validated[RawEvent]],
    ) -> Validated[List[RawEvent]]:
        """
        Fold individual event results into one result for the whole payload.
        
        Any failure makes the payload fail with every collected message, in
        order. Otherwise all events are returned.
        """
        successes = [result.value for result in results if isinstance(result, Valid)]
        failures = [error for result in results if isinstance(result, Invalid) for error in result.errors]

        if failures:
            return Invalid(tuple(failures))
        if not successes:
            return invalid(EMPTY_EVENTS_ERROR)
        return Valid(successes)
