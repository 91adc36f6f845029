"""Runner for turning collector envelope files into raw events."""

from pathlib import Path
from typing import Any, Collection, Dict, List, Optional, Tuple

from webhook_enrich.adapters import to_raw_events
from webhook_enrich.loaders.collector_payload import load_payload
from webhook_enrich.utils.logging import get_logger
from webhook_enrich.utils.validated import Invalid

logger = get_logger(__name__)


def main(
    paths: List[Path],
    enabled: Optional[Collection[Tuple[str, str]]] = None,
    fail_fast: bool = False,
) -> Dict[str, Any]:
    """
    Process collector envelope files.
    
    Each file holds one envelope. Envelopes that cannot be loaded are
    counted as failed, like envelopes the adapter rejects.
    
    Args:
        paths: Envelope JSON files
        enabled: Vendor/version pairs allowed to run (default: all registered)
        fail_fast: Raise on the first envelope that cannot be loaded
        
    Returns:
        Dict with counts (processed, events, failed), the raw events and the
        errors per file
    """
    stats: Dict[str, Any] = {
        "processed": 0,
        "events": 0,
        "failed": 0,
        "raw_events": [],
        "errors": {},
    }
    
    for path in paths:
        stats["processed"] += 1
        try:
            payload = load_payload(path)
        except (FileNotFoundError, ValueError) as e:
            if fail_fast:
                raise
            logger.warning(f"Could not load envelope {path}: {e}")
            stats["failed"] += 1
            stats["errors"][str(path)] = [str(e)]
            continue
        
        result = to_raw_events(payload, enabled=enabled)
        if isinstance(result, Invalid):
            logger.warning(f"Rejected envelope {path}: {'; '.join(result.errors)}")
            stats["failed"] += 1
            stats["errors"][str(path)] = list(result.errors)
            continue
        
        logger.debug(f"Envelope {path} produced {len(result.value)} raw events")
        stats["events"] += len(result.value)
        stats["raw_events"].extend(result.value)
    
    logger.info(
        f"Processed {stats['processed']} envelopes: "
        f"{stats['events']} raw events, {stats['failed']} failed"
    )
    return stats
