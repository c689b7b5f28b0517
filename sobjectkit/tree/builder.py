"""Builder of records for the composite SObject tree API."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from sobjectkit.tree.record import Attributes, Record

_WORD = re.compile(r"\w", re.ASCII)


class Builder(Protocol):
    """What is needed to start a tree record: SObject, fields and reference ID."""

    sobject: str
    fields: Mapping[str, Any]
    reference_id: str


@dataclass
class RecordBuilder:
    """Assembles a tree record and its child records."""

    record: Record

    @classmethod
    def from_builder(cls, builder: Builder | None) -> RecordBuilder:
        """Start a record from ``builder``.

        Raises ValueError when the builder is missing, the SObject name holds
        no word character, or the reference ID is empty.
        """
        if builder is None:
            raise ValueError("sobject tree: the builder can not be nil")
        sobject = builder.sobject
        if not _WORD.search(sobject):
            raise ValueError(f"tree builder: {sobject} is not a valid sobject")
        if not builder.reference_id:
            raise ValueError("tree builder: reference id must be present")
        return cls(
            record=Record(
                attributes=Attributes(type=sobject, reference_id=builder.reference_id),
                fields=dict(builder.fields),
                records={},
            )
        )

    def sub_records(self, sobjects: str, *args: Record) -> None:
        """Append the given records under the child relationship ``sobjects``."""
        self.record.records.setdefault(sobjects, []).extend(args)

    def build(self) -> Record:
        """Return the assembled record."""
        return self.record