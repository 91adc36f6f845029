"""Adapter registry: routes collector payloads to the adapter for their vendor and version."""

from typing import Any, Collection, Dict, List, Optional, Tuple

from webhook_enrich.adapters.base import Adapter
from webhook_enrich.adapters.models import RawEvent
from webhook_enrich.adapters.registry.marketo import MarketoAdapter
from webhook_enrich.loaders.collector_payload import CollectorPayload
from webhook_enrich.utils.logging import get_logger
from webhook_enrich.utils.validated import Validated, invalid

logger = get_logger(__name__)

ADAPTERS: Dict[Tuple[str, str], Adapter] = {
    (adapter.vendor, adapter.version): adapter
    for adapter in (MarketoAdapter(),)
}


def create_adapter(vendor: str, version: str) -> Adapter:
    """
    Get the adapter registered for a vendor and version.
    
    Raises:
        ValueError: If no adapter is registered for the pair
    """
    adapter = ADAPTERS.get((vendor, version))
    if adapter is None:
        raise ValueError(f"Unknown adapter: {vendor}/{version}")
    return adapter


def to_raw_events(
    payload: CollectorPayload,
    enabled: Optional[Collection[Tuple[str, str]]] = None,
    resolver: Optional[Any] = None,
) -> Validated[List[RawEvent]]:
    """
    Convert a collector payload into raw events with the matching adapter.
    
    Args:
        payload: Collector payload
        enabled: Vendor/version pairs allowed to run (default: all registered)
        resolver: Schema resolver passed through to the adapter
        
    Returns:
        The adapter's result, or Invalid if no enabled adapter handles the payload
    """
    key = (payload.api.vendor, payload.api.version)
    adapter = ADAPTERS.get(key)
    if adapter is None or (enabled is not None and key not in enabled):
        logger.debug(f"No enabled adapter for {key[0]}/{key[1]}")
        return invalid(
            f"Payload with vendor {payload.api.vendor} and version {payload.api.version} "
            "not supported by this version of webhook-enrich"
        )
    return adapter.to_raw_events(payload, resolver)


__all__ = ["ADAPTERS", "Adapter", "RawEvent", "create_adapter", "to_raw_events"]
