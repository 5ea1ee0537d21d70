"""Result event produced by crawl workers."""

from dataclasses import dataclass
from datetime import datetime

# Schema field name -> (attribute, JSON key)
SCHEMA = {
    "Timestamp": ("timestamp", "timestamp"),
    "Method": ("method", "method"),
    "Body": ("body", "body"),
    "URL": ("url", "endpoint"),
    "Source": ("source", "source"),
    "Tag": ("tag", "tag"),
    "Attribute": ("attribute", "attribute"),
}


@dataclass
class Result:
    """A discovered endpoint with its provenance."""

    timestamp: datetime | None = None
    method: str = ""
    body: str = ""
    url: str = ""
    source: str = ""
    tag: str = ""
    attribute: str = ""

    def to_dict(self, fields: list[str] | None = None) -> dict:
        """Return a JSON-ready dict, leaving out unset fields.

        If fields is given, only those schema fields are considered.
        """
        names = fields if fields else list(SCHEMA)
        output = {}
        for name in names:
            attr, key = SCHEMA[name]
            value = getattr(self, attr)
            if value is None or value == "":
                continue
            if isinstance(value, datetime):
                value = value.isoformat()
            output[key] = value
        return output

    @classmethod
    def from_dict(cls, data: dict) -> "Result":
        """Build a Result from a structured record, ignoring unknown keys."""
        kwargs = {}
        for attr, key in SCHEMA.values():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if attr == "timestamp":
                value = datetime.fromisoformat(value)
            else:
                value = str(value)
            kwargs[attr] = value
        return cls(**kwargs)
