"""Client for the composite SObject tree API."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from sobjectkit.client import ErrorDetail, SalesforceError, ServiceFormatter, handle_error
from sobjectkit.tree.record import Record

_OBJECT_ENDPOINT = "/composite/tree/"
_WORD = re.compile(r"\w", re.ASCII)


class Inserter(Protocol):
    """The SObject name and the tree records to insert under it."""

    sobject: str
    records: Sequence[Record]


def _mapping(data: Any, name: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object for {name}, got {type(data).__name__}")
    return data


def _array(data: Any, name: str) -> list[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array for {name}, got {type(data).__name__}")
    return data


@dataclass
class InsertValue:
    """Outcome for one record of the tree."""

    reference_id: str = ""
    id: str = ""
    errors: list[ErrorDetail] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> InsertValue:
        """Build the outcome from its decoded JSON object."""
        mapping = _mapping(data, cls.__name__)
        return cls(
            reference_id=mapping.get("referenceId") or "",
            id=mapping.get("id") or "",
            errors=[ErrorDetail.from_json(item) for item in _array(mapping.get("errors"), "errors")],
        )


@dataclass
class Value:
    """Outcome of a composite tree insert."""

    has_errors: bool = False
    results: list[InsertValue] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> Value:
        """Build the outcome from its decoded JSON object."""
        mapping = _mapping(data, cls.__name__)
        return cls(
            has_errors=bool(mapping.get("hasErrors", False)),
            results=[
                InsertValue.from_json(item) for item in _array(mapping.get("results"), "results")
            ],
        )


class Resource:
    """The composite tree API bound to a session."""

    def __init__(self, session: ServiceFormatter) -> None:
        if session is None:
            raise ValueError("sobject tree: session can not be nil")
        try:
            session.refresh()
        except Exception as exc:
            raise SalesforceError(f"session refresh: {exc}") from exc
        self.session = session

    def insert(self, inserter: Inserter | None) -> Value:
        """Insert the inserter's records as one tree under its SObject."""
        if inserter is None:
            raise ValueError("tree resourse: inserter can not be nil")
        sobject = inserter.sobject
        if not _WORD.search(sobject):
            raise ValueError(f"tree resourse: {sobject} is not a valid sobject")

        url = self.session.data_service_url() + _OBJECT_ENDPOINT + sobject
        body = json.dumps({"records": [record.to_dict() for record in inserter.records]})
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        self.session.authorization_header(headers)
        with self.session.client.post(url, data=body, headers=headers) as response:
            if response.status_code != 201:
                raise handle_error(response)
            return Value.from_json(response.json())