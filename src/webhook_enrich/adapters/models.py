from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from webhook_enrich.loaders.collector_payload import (
    CollectorApi,
    CollectorContext,
    CollectorSource,
)


class RawEvent(BaseModel):
    """Vendor-neutral event handed to the enrichment stages."""

    model_config = ConfigDict(frozen=True)

    api: CollectorApi
    parameters: Dict[str, str]
    content_type: Optional[str] = None
    source: CollectorSource
    context: CollectorContext
