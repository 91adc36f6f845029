from .collector_payload import (
    CollectorApi,
    CollectorContext,
    CollectorPayload,
    CollectorSource,
    load_payload,
)

__all__ = [
    "CollectorApi",
    "CollectorContext",
    "CollectorPayload",
    "CollectorSource",
    "load_payload",
]
