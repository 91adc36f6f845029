"""Self-describing schema keys (iglu URIs)."""

import re

from pydantic import BaseModel, ConfigDict

IGLU_URI_RE = re.compile(
    r"^iglu:(?P<vendor>[a-zA-Z0-9\-_.]+)/(?P<name>[a-zA-Z0-9\-_]+)/"
    r"(?P<format>[a-zA-Z0-9\-_]+)/(?P<version>\d+-\d+-\d+)$"
)


class SchemaKey(BaseModel):
    """Identifies one version of a schema, e.g. iglu:com.marketo/event/jsonschema/2-0-0."""

    model_config = ConfigDict(frozen=True)

    vendor: str
    name: str
    format: str
    version: str

    def to_schema_uri(self) -> str:
        return f"iglu:{self.vendor}/{self.name}/{self.format}/{self.version}"

    @classmethod
    def from_uri(cls, uri: str) -> "SchemaKey":
        """
        Parse an iglu URI.

        Raises:
            ValueError: If uri is not a valid iglu URI
        """
        match = IGLU_URI_RE.match(uri)
        if not match:
            raise ValueError(f"Not a valid iglu schema URI: {uri}")
        return cls(**match.groupdict())
