"""Records of the composite SObject tree API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Attributes:
    """The SObject type and reference ID of a tree record."""

    type: str = ""
    reference_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the attributes in their JSON form."""
        return {"type": self.type, "referenceId": self.reference_id}


@dataclass
class Record:
    """A record of the composite tree, with its nested child records."""

    attributes: Attributes = field(default_factory=Attributes)
    fields: dict[str, Any] = field(default_factory=dict)
    records: dict[str, list[Record]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as the JSON object the tree API expects."""
        result: dict[str, Any] = {"attributes": self.attributes.to_dict()}
        result.update(self.fields)
        for name, children in self.records.items():
            result[name] = {"records": [child.to_dict() for child in children]}
        return result

    def to_json(self) -> str:
        """Return the record encoded as JSON."""
        return json.dumps(self.to_dict())