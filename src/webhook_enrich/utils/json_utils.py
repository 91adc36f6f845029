"""JSON helpers shared by the webhook adapters."""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from webhook_enrich.utils.time import to_utc_millis_z


def to_json_schema_date_time(value: str, date_format: str) -> Optional[str]:
    """
    Reformat a vendor date-time string into the JSON Schema date-time format.

    The vendor string is read as UTC.

    Args:
        value: Date-time string as sent by the vendor
        date_format: strptime pattern the vendor uses

    Returns:
        Timestamp like '2020-01-01T10:00:00.000Z', or None if value does not match date_format
    """
    try:
        parsed = datetime.strptime(value, date_format)
    except ValueError:
        return None
    return to_utc_millis_z(parsed.replace(tzinfo=timezone.utc))


def compact_json(value: Any) -> str:
    """Serialize as strict JSON without whitespace, keeping non-ASCII characters as-is."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
