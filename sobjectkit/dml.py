"""Insert, update, upsert and delete of single SObject records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from sobjectkit.client import (
    ErrorDetail,
    SalesforceError,
    ServiceFormatter,
    handle_error,
)

_OBJECT_ENDPOINT = "/sobjects/"
_ACCEPT = "application/json, */*"


class Inserter(Protocol):
    """What is needed to insert a record: the SObject name and field values."""

    sobject: str
    fields: Mapping[str, Any]


class Updater(Inserter, Protocol):
    """What is needed to update a record: an Inserter plus the record's ID."""

    id: str


class Upserter(Updater, Protocol):
    """What is needed to upsert a record: the external ID field and its value."""

    external_field: str


class Deleter(Protocol):
    """What is needed to delete a record: the SObject name and the record's ID."""

    sobject: str
    id: str


def _object(data: Any, name: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object for {name}, got {type(data).__name__}")
    return data


def _insert_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    errors = data.get("errors") or []
    if not isinstance(errors, list):
        raise TypeError(f"expected a JSON array of errors, got {type(errors).__name__}")
    return {
        "success": bool(data.get("success", False)),
        "id": data.get("id") or "",
        "errors": [ErrorDetail.from_json(item) for item in errors],
    }


@dataclass
class InsertValue:
    """Outcome of inserting a record."""

    success: bool = False
    id: str = ""
    errors: list[ErrorDetail] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> InsertValue:
        """Build the outcome from its decoded JSON object."""
        return cls(**_insert_fields(_object(data, cls.__name__)))


@dataclass
class UpsertValue(InsertValue):
    """Outcome of upserting a record; ``created`` tells whether it was inserted."""

    created: bool = False

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> UpsertValue:
        """Build the outcome from its decoded JSON object."""
        mapping = _object(data, cls.__name__)
        return cls(created=bool(mapping.get("created", False)), **_insert_fields(mapping))


def _json_headers(session: ServiceFormatter) -> dict[str, str]:
    headers = {"Accept": _ACCEPT, "Content-Type": "application/json"}
    session.authorization_header(headers)
    return headers


def _record_url(session: ServiceFormatter, *parts: str) -> str:
    return session.data_service_url() + _OBJECT_ENDPOINT + "/".join(parts)


def insert(session: ServiceFormatter, inserter: Inserter) -> InsertValue:
    """Create a new record."""
    url = _record_url(session, inserter.sobject)
    body = json.dumps(dict(inserter.fields))
    with session.client.post(url, data=body, headers=_json_headers(session)) as response:
        if response.status_code != 201:
            raise handle_error(response)
        return InsertValue.from_json(response.json())


def update(session: ServiceFormatter, updater: Updater) -> None:
    """Update an existing record."""
    url = _record_url(session, updater.sobject, updater.id)
    body = json.dumps(dict(updater.fields))
    with session.client.patch(url, data=body, headers=_json_headers(session)) as response:
        if response.status_code != 204:
            raise handle_error(response)


def upsert(session: ServiceFormatter, upserter: Upserter) -> UpsertValue:
    """Insert or update a record matched on an external ID field."""
    url = _record_url(session, upserter.sobject, upserter.external_field, upserter.id)
    body = json.dumps(dict(upserter.fields))
    with session.client.patch(url, data=body, headers=_json_headers(session)) as response:
        if response.status_code in (200, 201):
            return UpsertValue.from_json(response.json())
        if response.status_code == 204:
            return UpsertValue()
        raise handle_error(response)


def delete(session: ServiceFormatter, deleter: Deleter) -> None:
    """Delete an existing record."""
    url = _record_url(session, deleter.sobject, deleter.id)
    headers: dict[str, str] = {}
    session.authorization_header(headers)
    with session.client.delete(url, headers=headers) as response:
        if response.status_code != 204:
            raise SalesforceError(
                f"delete has failed {response.status_code} {response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )