"""SObject describe and SObject list calls."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import requests

from sobjectkit.client import (
    ErrorDetail,
    NotModifiedError,
    SalesforceError,
    ServiceFormatter,
    format_if_modified_since,
    handle_error,
)
from sobjectkit.models import DescribeValue

_OBJECT_ENDPOINT = "/sobjects/"
_DESCRIBE_ENDPOINT = "/describe"
_ACCEPT = "application/json, */*"


@dataclass
class ListValue:
    """The SObjects available to the session."""

    sobjects: list[DescribeValue] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ListValue:
        """Build the list from its decoded JSON object; null gives an empty list."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a JSON object for ListValue, got {type(data).__name__}")
        items = data.get("sobjects") or []
        if not isinstance(items, list):
            raise TypeError(f"expected a JSON array of sobjects, got {type(items).__name__}")
        return cls(sobjects=[DescribeValue.from_json(item) for item in items])


def _get(
    session: ServiceFormatter, url: str, if_modified_since: datetime | None
) -> requests.Response:
    headers = {"Accept": _ACCEPT}
    if if_modified_since is not None:
        headers["If-Modified-Since"] = format_if_modified_since(if_modified_since)
    session.authorization_header(headers)
    return session.client.get(url, headers=headers)


def _response_error(response: requests.Response) -> SalesforceError:
    """Build the error for a failed describe or metadata response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    details = []
    if isinstance(payload, list):
        details = [ErrorDetail.from_json(item) for item in payload if isinstance(item, Mapping)]
    if details:
        last = details[-1]
        message = f"metadata response err: {last.error_code}: {last.message}"
    else:
        message = f"metadata response err: {response.status_code} {response.reason or ''}".rstrip()
    return SalesforceError(message, status_code=response.status_code, errors=details)


def describe(
    session: ServiceFormatter, sobject: str, if_modified_since: datetime | None = None
) -> DescribeValue:
    """Fetch the describe document of ``sobject``.

    Raises :class:`NotModifiedError` when the server answers 304.
    """
    url = session.data_service_url() + _OBJECT_ENDPOINT + sobject + _DESCRIBE_ENDPOINT
    with _get(session, url, if_modified_since) as response:
        if response.status_code == 304:
            raise NotModifiedError()
        if response.status_code != 200:
            raise _response_error(response)
        return DescribeValue.from_json(response.json())


def list_sobjects(
    session: ServiceFormatter, if_modified_since: datetime | None = None
) -> ListValue:
    """Fetch the list of SObjects available to the session.

    Raises :class:`NotModifiedError` when the server answers 304.
    """
    url = session.data_service_url() + _OBJECT_ENDPOINT
    with _get(session, url, if_modified_since) as response:
        if response.status_code == 304:
            raise NotModifiedError()
        if response.status_code != 200:
            raise handle_error(response)
        return ListValue.from_json(response.json())