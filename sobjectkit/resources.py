"""Entry point bundling the SObject APIs behind one session."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from sobjectkit import describe as _describe
from sobjectkit import dml as _dml
from sobjectkit import query as _query
from sobjectkit.client import SalesforceError, ServiceFormatter
from sobjectkit.describe import ListValue
from sobjectkit.dml import Deleter, Inserter, InsertValue, Updater, Upserter, UpsertValue
from sobjectkit.metadata import fetch_metadata
from sobjectkit.models import DescribeValue, MetadataValue
from sobjectkit.query import (
    ContentType,
    DeletedRecords,
    ExternalQuerier,
    Querier,
    UpdatedRecords,
)

_WORD = re.compile(r"\w", re.ASCII)


def _check_sobject(sobject: str) -> None:
    if not _WORD.search(sobject or ""):
        raise ValueError(f"sobject salesforce api: {sobject} is not a valid sobject")


def _require(value: Any, name: str) -> None:
    if value is None:
        raise ValueError(f"{name} can not be nil")


class Resources:
    """The SObject REST APIs bound to a refreshed session."""

    def __init__(self, session: ServiceFormatter) -> None:
        if session is None:
            raise ValueError("sobject resource: session can not be nil")
        try:
            session.refresh()
        except Exception as exc:
            raise SalesforceError(f"session refresh: {exc}") from exc
        self.session = session

    def list(self, if_modified_since: datetime | None = None) -> ListValue:
        """Return the SObjects available to the session."""
        return _describe.list_sobjects(self.session, if_modified_since)

    def metadata(self, sobject: str) -> MetadataValue:
        """Return the basic metadata of ``sobject``."""
        _check_sobject(sobject)
        return fetch_metadata(self.session, sobject)

    def describe(self, sobject: str, if_modified_since: datetime | None = None) -> DescribeValue:
        """Return the describe document of ``sobject``."""
        _check_sobject(sobject)
        return _describe.describe(self.session, sobject, if_modified_since)

    def insert(self, inserter: Inserter | None) -> InsertValue:
        """Create a new record."""
        _require(inserter, "inserter")
        return _dml.insert(self.session, inserter)

    def update(self, updater: Updater | None) -> None:
        """Update an existing record."""
        _require(updater, "updater")
        _dml.update(self.session, updater)

    def upsert(self, upserter: Upserter | None) -> UpsertValue:
        """Insert or update a record matched on an external ID field."""
        _require(upserter, "upserter")
        return _dml.upsert(self.session, upserter)

    def delete(self, deleter: Deleter | None) -> None:
        """Delete an existing record."""
        _require(deleter, "deleter")
        _dml.delete(self.session, deleter)

    def query(self, querier: Querier | None) -> dict[str, Any]:
        """Fetch a record by its ID."""
        _require(querier, "querier")
        return _query.query_record(self.session, querier)

    def external_query(self, querier: ExternalQuerier | None) -> dict[str, Any]:
        """Fetch a record by an external ID field."""
        _require(querier, "querier")
        return _query.external_query_record(self.session, querier)

    def deleted_records(
        self, sobject: str, start_date: datetime, end_date: datetime
    ) -> DeletedRecords:
        """List the records of ``sobject`` deleted between the two dates."""
        _check_sobject(sobject)
        return _query.deleted_records(self.session, sobject, start_date, end_date)

    def updated_records(
        self, sobject: str, start_date: datetime, end_date: datetime
    ) -> UpdatedRecords:
        """List the records of ``sobject`` updated between the two dates."""
        _check_sobject(sobject)
        return _query.updated_records(self.session, sobject, start_date, end_date)

    def get_content(self, record_id: str, content: ContentType | str) -> bytes:
        """Download the content blob of an Attachment or Document record."""
        if not record_id:
            raise ValueError(f"sobject salesforce api: {record_id} can not be empty")
        try:
            kind = ContentType(content)
        except ValueError:
            raise ValueError(
                f"sobject salesforce: content type ({content}) is not supported"
            ) from None
        return _query.get_content(self.session, record_id, kind)