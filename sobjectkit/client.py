"""Session contract, error types and wire helpers shared by the API modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import requests

DEFAULT_API_VERSION = "42.0"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_TIME_FORMATS = ("%Y-%m-%dT%H:%M:%S.%f%z", "%Y-%m-%dT%H:%M:%S%z")


class ServiceFormatter:
    """Holds the instance URL, credentials and HTTP client used for API calls.

    ``refresher`` is an optional callable that renews the credentials; it is
    invoked with the session by :meth:`refresh` and may raise to signal failure.
    """

    def __init__(
        self,
        url: str,
        access_token: str = "",
        *,
        token_type: str = "Bearer",
        version: str = DEFAULT_API_VERSION,
        client: requests.Session | None = None,
        refresher: Callable[[ServiceFormatter], None] | None = None,
    ) -> None:
        self.url = url
        self.access_token = access_token
        self.token_type = token_type
        self.version = version
        self.client = client if client is not None else requests.Session()
        self._refresher = refresher

    def data_service_url(self) -> str:
        """Return the base URL of the REST data service."""
        return f"{self.url}/services/data/v{self.version}"

    def authorization_header(self, headers: MutableMapping[str, str]) -> None:
        """Set the Authorization header in ``headers``."""
        headers["Authorization"] = f"{self.token_type} {self.access_token}"

    def refresh(self) -> None:
        """Renew the session's credentials through the configured refresher."""
        if self._refresher is not None:
            self._refresher(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r}, version={self.version!r})"


@dataclass
class ErrorDetail:
    """One error entry as reported by the API."""

    error_code: str = ""
    message: str = ""
    fields: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ErrorDetail:
        """Build an error entry from its decoded JSON object."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a JSON object for an error, got {type(data).__name__}")
        code = data.get("errorCode")
        if code is None:
            code = data.get("statusCode")
        return cls(
            error_code=code or "",
            message=data.get("message") or "",
            fields=list(data.get("fields") or []),
        )


class SalesforceError(Exception):
    """An error reported by the API or raised while talking to it."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[ErrorDetail] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = list(errors or [])


class NotModifiedError(SalesforceError):
    """The resource has not changed since the If-Modified-Since time."""

    def __init__(self, message: str = "sobject describe: not modified") -> None:
        super().__init__(message, status_code=304)


def handle_error(response: requests.Response) -> SalesforceError:
    """Turn an unsuccessful response into a :class:`SalesforceError`."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, Mapping):
        payload = [payload]
    details = []
    if isinstance(payload, list):
        details = [ErrorDetail.from_json(item) for item in payload if isinstance(item, Mapping)]
    summary = f"{response.status_code} {response.reason or ''}".rstrip()
    if details:
        listed = "; ".join(f"{d.error_code}: {d.message}" for d in details)
        message = f"{summary}: {listed}"
    else:
        message = summary
    return SalesforceError(message, status_code=response.status_code, errors=details)


def parse_time(value: str) -> datetime:
    """Parse a timestamp in the API's format, e.g. 2013-05-03T15:57:00.000+0000."""
    for pattern in _TIME_FORMATS:
        try:
            return datetime.strptime(value, pattern)
        except (ValueError, TypeError):
            continue
    raise ValueError(f"unable to parse salesforce time {value!r}")


def format_if_modified_since(moment: datetime) -> str:
    """Format ``moment`` for an If-Modified-Since header (RFC 1123 layout).

    Naive datetimes are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    zone = moment.tzname() or ""
    if not zone or (zone.startswith("UTC") and len(zone) > 3):
        offset = moment.utcoffset()
        minutes = int(offset.total_seconds() // 60) if offset is not None else 0
        sign = "-" if minutes < 0 else "+"
        hours, mins = divmod(abs(minutes), 60)
        zone = f"{sign}{hours:02d}{mins:02d}"
    return (
        f"{_WEEKDAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} {zone}"
    )