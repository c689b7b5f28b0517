"""Record retrieval, deleted/updated record listings and content blobs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Protocol
from urllib.parse import urlencode

from sobjectkit.client import (
    SalesforceError,
    ServiceFormatter,
    handle_error,
    parse_time,
)

_OBJECT_ENDPOINT = "/sobjects/"
_ACCEPT = "application/json, */*"
_DELETED_ROUTE = "deleted"
_UPDATED_ROUTE = "updated"
_CONTENT_BODY = "body"


class Querier(Protocol):
    """What is needed to fetch a record by its ID.

    An empty ``fields`` sequence asks for every field.
    """

    sobject: str
    id: str
    fields: Sequence[str]


class ExternalQuerier(Querier, Protocol):
    """What is needed to fetch a record by an external ID field."""

    external_field: str


class ContentType(str, Enum):
    """SObjects whose records carry a content blob."""

    ATTACHMENT = "Attachment"
    DOCUMENT = "Document"


def _mapping(data: Any, name: str) -> Mapping[str, Any]:
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
class DeletedRecord:
    """One deleted record and the time it was deleted."""

    id: str = ""
    deleted_date_str: str = ""
    deleted_date: datetime | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> DeletedRecord:
        """Build the entry from its decoded JSON object, parsing its date."""
        mapping = _mapping(data, cls.__name__)
        date_str = mapping.get("deletedDate") or ""
        return cls(
            id=mapping.get("id") or "",
            deleted_date_str=date_str,
            deleted_date=parse_time(date_str),
        )


@dataclass
class DeletedRecords:
    """Records deleted within a date range."""

    records: list[DeletedRecord] = field(default_factory=list)
    earliest_date_str: str = ""
    latest_date_str: str = ""
    earliest_date: datetime | None = None
    latest_date: datetime | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> DeletedRecords:
        """Build the listing from its decoded JSON object, parsing every date."""
        mapping = _mapping(data, cls.__name__)
        records = [
            DeletedRecord.from_json(item)
            for item in _array(mapping.get("deletedRecords"), "deletedRecords")
        ]
        earliest = mapping.get("earliestDateAvailable") or ""
        latest = mapping.get("latestDateCovered") or ""
        return cls(
            records=records,
            earliest_date_str=earliest,
            latest_date_str=latest,
            earliest_date=parse_time(earliest),
            latest_date=parse_time(latest),
        )


@dataclass
class UpdatedRecords:
    """IDs of records updated within a date range."""

    records: list[str] = field(default_factory=list)
    latest_date_str: str = ""
    latest_date: datetime | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> UpdatedRecords:
        """Build the listing from its decoded JSON object, parsing its date."""
        mapping = _mapping(data, cls.__name__)
        latest = mapping.get("latestDateCovered") or ""
        return cls(
            records=[str(item) for item in _array(mapping.get("ids"), "ids")],
            latest_date_str=latest,
            latest_date=parse_time(latest),
        )


def _rfc3339(moment: datetime) -> str:
    """Format ``moment`` as RFC 3339 to the second; naive values are UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.replace(microsecond=0).isoformat()
    if moment.utcoffset() == timedelta(0):
        text = text[: -len("+00:00")] + "Z"
    return text


def _json_headers(session: ServiceFormatter) -> dict[str, str]:
    headers = {"Accept": _ACCEPT}
    session.authorization_header(headers)
    return headers


def _with_fields(url: str, fields: Sequence[str]) -> str:
    if fields:
        url += "?" + urlencode({"fields": ",".join(fields)})
    return url


def _fetch_record(session: ServiceFormatter, url: str) -> dict[str, Any]:
    with session.client.get(url, headers=_json_headers(session)) as response:
        if response.status_code != 200:
            raise handle_error(response)
        data = response.json()
    if data is None:
        return {}
    return dict(_mapping(data, "record"))


def query_record(session: ServiceFormatter, querier: Querier) -> dict[str, Any]:
    """Fetch a record by its ID, limited to ``querier.fields`` if any are given."""
    url = session.data_service_url() + _OBJECT_ENDPOINT + querier.sobject + "/" + querier.id
    return _fetch_record(session, _with_fields(url, querier.fields))


def external_query_record(session: ServiceFormatter, querier: ExternalQuerier) -> dict[str, Any]:
    """Fetch a record by the value of an external ID field."""
    url = (
        session.data_service_url()
        + _OBJECT_ENDPOINT
        + querier.sobject
        + "/"
        + querier.external_field
        + "/"
        + querier.id
    )
    return _fetch_record(session, _with_fields(url, querier.fields))


def _operation(
    session: ServiceFormatter,
    sobject: str,
    operation: str,
    start_date: datetime,
    end_date: datetime,
) -> Any:
    date_range = urlencode([("end", _rfc3339(end_date)), ("start", _rfc3339(start_date))])
    url = (
        session.data_service_url()
        + _OBJECT_ENDPOINT
        + sobject
        + "/"
        + operation
        + "/?"
        + date_range
    )
    with session.client.get(url, headers=_json_headers(session)) as response:
        if response.status_code != 200:
            raise SalesforceError(
                f"deleted records response err: {response.status_code} "
                f"{response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )
        return response.json()


def deleted_records(
    session: ServiceFormatter, sobject: str, start_date: datetime, end_date: datetime
) -> DeletedRecords:
    """List the records of ``sobject`` deleted between the two dates."""
    return DeletedRecords.from_json(
        _operation(session, sobject, _DELETED_ROUTE, start_date, end_date)
    )


def updated_records(
    session: ServiceFormatter, sobject: str, start_date: datetime, end_date: datetime
) -> UpdatedRecords:
    """List the records of ``sobject`` updated between the two dates."""
    return UpdatedRecords.from_json(
        _operation(session, sobject, _UPDATED_ROUTE, start_date, end_date)
    )


def get_content(
    session: ServiceFormatter, record_id: str, content: ContentType | str
) -> bytes:
    """Download the content blob of an Attachment or Document record."""
    kind = content.value if isinstance(content, ContentType) else str(content)
    url = (
        session.data_service_url()
        + _OBJECT_ENDPOINT
        + kind
        + "/"
        + record_id
        + "/"
        + _CONTENT_BODY
    )
    headers: dict[str, str] = {}
    session.authorization_header(headers)
    with session.client.get(url, headers=headers) as response:
        if response.status_code != 200:
            raise SalesforceError(
                f"deleted records response err: {response.status_code} "
                f"{response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )
        return response.content