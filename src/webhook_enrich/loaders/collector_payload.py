"""Collector payload: the transport envelope handed to the adapters."""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CollectorApi(BaseModel):
    """Vendor and version the payload was sent to."""

    model_config = ConfigDict(frozen=True)

    vendor: str
    version: str


class CollectorSource(BaseModel):
    """Which collector received the payload."""

    model_config = ConfigDict(frozen=True)

    name: str
    encoding: str = "UTF-8"
    hostname: Optional[str] = None


class CollectorContext(BaseModel):
    """Network context of the request."""

    model_config = ConfigDict(frozen=True)

    timestamp: Optional[str] = None  # ISO 8601 string
    ip_address: Optional[str] = None
    useragent: Optional[str] = None
    referer_uri: Optional[str] = None
    headers: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None


class CollectorPayload(BaseModel):
    """Raw webhook request as produced by the collector."""

    model_config = ConfigDict(frozen=True)

    api: CollectorApi
    querystring: List[Tuple[str, str]] = Field(default_factory=list)
    content_type: Optional[str] = None
    body: Optional[str] = None
    source: CollectorSource
    context: CollectorContext = Field(default_factory=CollectorContext)


def load_payload(path: Path) -> CollectorPayload:
    """
    Load a collector payload from a JSON file.
    
    The querystring may be given either as a list of [name, value] pairs or
    as an object; an object keeps its key order.
    
    Args:
        path: Path to the envelope JSON file
        
    Returns:
        CollectorPayload
        
    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a valid envelope
    """
    if not path.exists():
        raise FileNotFoundError(f"Envelope file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    
    if not isinstance(data, dict):
        raise ValueError(f"Envelope in {path} must be a JSON object")
    
    querystring = data.get("querystring")
    if isinstance(querystring, dict):
        data["querystring"] = [(str(k), str(v)) for k, v in querystring.items()]
    
    return CollectorPayload.model_validate(data)
