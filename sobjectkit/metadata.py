"""SObject basic metadata call."""

from __future__ import annotations

from sobjectkit.client import ServiceFormatter
from sobjectkit.describe import _response_error
from sobjectkit.models import MetadataValue


def fetch_metadata(session: ServiceFormatter, sobject: str) -> MetadataValue:
    """Fetch the basic metadata of ``sobject``; any status but 200 raises."""
    headers = {"Accept": "application/json, */*"}
    session.authorization_header(headers)
    target = f"{session.data_service_url()}/sobjects/{sobject}"
    with session.client.get(target, headers=headers) as reply:
        if reply.status_code == 200:
            return MetadataValue.from_json(reply.json())
        raise _response_error(reply)