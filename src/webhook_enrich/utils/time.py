"""Time utilities for UTC timestamp formatting."""

from datetime import datetime, timezone


def to_utc_millis_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with millisecond precision and Z suffix.
    
    Args:
        dt: Datetime object (must be timezone-aware)
        
    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2020-01-01T10:00:00.000Z')
        
    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use dt.replace(tzinfo=timezone.utc)"
        )
    
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat(timespec="milliseconds").replace('+00:00', 'Z')
