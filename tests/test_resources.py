import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

import pytest
import responses

from sobjectkit.client import NotModifiedError, SalesforceError, ServiceFormatter
from sobjectkit.query import ContentType
from sobjectkit.resources import Resources

BASE = "https://test.salesforce.com"
DATA = BASE + "/services/data/v42.0"


@dataclass
class _Dml:
    sobject: str
    id: str = ""
    fields: dict = field(default_factory=dict)
    external_field: str = ""


@dataclass
class _Query:
    sobject: str
    id: str
    fields: list = field(default_factory=list)
    external_field: str = ""


def _resources():
    return Resources(ServiceFormatter(BASE, "token"))


def test_new_resources_keeps_session_and_refreshes():
    calls = []
    session = ServiceFormatter(BASE, "token", refresher=calls.append)
    resources = Resources(session)
    assert resources.session is session
    assert calls == [session]


def test_new_resources_without_session():
    with pytest.raises(ValueError, match="session can not be nil"):
        Resources(None)


def test_new_resources_refresh_failure():
    def refresher(session):
        raise RuntimeError("failed to refresh session")

    with pytest.raises(SalesforceError, match="session refresh: failed to refresh session"):
        Resources(ServiceFormatter(BASE, "token", refresher=refresher))


@pytest.mark.parametrize(
    "call",
    [
        lambda r: r.metadata(""),
        lambda r: r.describe(""),
        lambda r: r.deleted_records("", datetime(2020, 1, 1), datetime(2020, 1, 8)),
        lambda r: r.updated_records("", datetime(2020, 1, 1), datetime(2020, 1, 8)),
    ],
)
def test_invalid_sobject(call):
    with responses.RequestsMock():
        with pytest.raises(ValueError, match="is not a valid sobject"):
            call(_resources())


@pytest.mark.parametrize(
    "call, name",
    [
        (lambda r: r.insert(None), "inserter"),
        (lambda r: r.update(None), "updater"),
        (lambda r: r.upsert(None), "upserter"),
        (lambda r: r.delete(None), "deleter"),
        (lambda r: r.query(None), "querier"),
        (lambda r: r.external_query(None), "querier"),
    ],
)
def test_missing_argument(call, name):
    with responses.RequestsMock():
        with pytest.raises(ValueError, match=f"{name} can not be nil"):
            call(_resources())


def test_get_content_empty_id():
    with pytest.raises(ValueError, match="can not be empty"):
        _resources().get_content("", ContentType.DOCUMENT)


def test_get_content_invalid_content():
    with pytest.raises(ValueError, match=r"content type \(Invalid\) is not supported"):
        _resources().get_content("12345", "Invalid")


def test_get_content_document():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/Document/001D000000INjVe/body",
            body=b"This is the content body",
            status=200,
        )
        got = _resources().get_content("001D000000INjVe", "Document")
    assert got == b"This is the content body"


def test_describe_with_if_modified_since():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/Account/describe",
            json={"name": "Account", "label": "Account", "keyPrefix": "001"},
            status=200,
        )
        got = _resources().describe(
            "Account", datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        )
        request = rsps.calls[0].request
    assert (got.name, got.label, got.key_prefix) == ("Account", "Account", "001")
    assert request.headers["If-Modified-Since"] == "Thu, 02 Jan 2020 03:04:05 UTC"


def test_describe_not_modified():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DATA + "/sobjects/Account/describe", status=304)
        with pytest.raises(NotModifiedError):
            _resources().describe("Account")


def test_list():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/",
            json={"sobjects": [{"name": "Account"}, {"name": "Contact"}]},
            status=200,
        )
        got = _resources().list()
    assert [item.name for item in got.sobjects] == ["Account", "Contact"]


def test_metadata():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/Account",
            json={"objectDescribe": {"name": "Account", "labelPlural": "Accounts"}, "recentItems": []},
            status=200,
        )
        got = _resources().metadata("Account")
    assert got.object_describe.label_plural == "Accounts"
    assert got.recent_items == []


def test_insert():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            DATA + "/sobjects/Account",
            json={"id": "001EXAMPLE0000001", "errors": [], "success": True},
            status=201,
        )
        got = _resources().insert(_Dml(sobject="Account", fields={"Name": "Test Account"}))
    assert (got.success, got.id, got.errors) == (True, "001EXAMPLE0000001", [])


def test_update_and_delete():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PATCH, DATA + "/sobjects/Account/someid", status=204)
        rsps.add(responses.DELETE, DATA + "/sobjects/Account/someid", status=204)
        resources = _resources()
        updated = resources.update(
            _Dml(sobject="Account", id="someid", fields={"Active": False})
        )
        deleted = resources.delete(_Dml(sobject="Account", id="someid"))
        methods = [call.request.method for call in rsps.calls]
        patch_body = json.loads(rsps.calls[0].request.body)
    assert (updated, deleted) == (None, None)
    assert methods == ["PATCH", "DELETE"]
    assert patch_body == {"Active": False}


def test_delete_failure():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, DATA + "/sobjects/Account/12345", status=500)
        with pytest.raises(SalesforceError, match="delete has failed 500"):
            _resources().delete(_Dml(sobject="Account", id="12345"))


def test_upsert_created():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.PATCH,
            DATA + "/sobjects/Account/external__c/12345",
            json={"created": True, "id": "001EXAMPLE0000001", "errors": [], "success": True},
            status=201,
        )
        got = _resources().upsert(
            _Dml(sobject="Account", id="12345", external_field="external__c", fields={"Name": "x"})
        )
    assert (got.created, got.success, got.id) == (True, True, "001EXAMPLE0000001")


def test_query_with_fields():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/Account/SomeID",
            json={"AccountNumber": "EXAMPLE1", "BillingPostalCode": "00000"},
            status=200,
        )
        got = _resources().query(
            _Query(sobject="Account", id="SomeID", fields=["AccountNumber", "BillingPostalCode"])
        )
        url = rsps.calls[0].request.url
    assert got == {"AccountNumber": "EXAMPLE1", "BillingPostalCode": "00000"}
    assert url.endswith("?fields=AccountNumber%2CBillingPostalCode")


def test_external_query():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            DATA + "/sobjects/Account/ExternalField/SomeID",
            json={"AccountNumber": "EXAMPLE1"},
            status=200,
        )
        got = _resources().external_query(
            _Query(sobject="Account", id="SomeID", external_field="ExternalField")
        )
    assert got == {"AccountNumber": "EXAMPLE1"}


def test_deleted_records():
    payload = {
        "deletedRecords": [
            {"id": "a00EXAMPLE0000001", "deletedDate": "2013-05-03T15:57:00.000+0000"}
        ],
        "earliestDateAvailable": "2013-05-03T15:57:00.000+0000",
        "latestDateCovered": "2013-05-08T21:20:00.000+0000",
    }
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DATA + "/sobjects/Account/deleted/", json=payload, status=200)
        got = _resources().deleted_records(
            "Account", datetime(2013, 5, 1, tzinfo=timezone.utc), datetime(2013, 5, 8, tzinfo=timezone.utc)
        )
    assert got.records[0].id == "a00EXAMPLE0000001"
    assert got.records[0].deleted_date == datetime(2013, 5, 3, 15, 57, tzinfo=timezone.utc)
    assert got.latest_date == datetime(2013, 5, 8, 21, 20, tzinfo=timezone.utc)


def test_updated_records():
    payload = {
        "ids": ["a00EXAMPLE0000001", "a00EXAMPLE0000002"],
        "latestDateCovered": "2013-05-08T21:20:00.000+0000",
    }
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, DATA + "/sobjects/Account/updated/", json=payload, status=200)
        got = _resources().updated_records(
            "Account", datetime(2013, 5, 1, tzinfo=timezone.utc), datetime(2013, 5, 8, tzinfo=timezone.utc)
        )
    assert got.records == ["a00EXAMPLE0000001", "a00EXAMPLE0000002"]
    assert got.latest_date_str == "2013-05-08T21:20:00.000+0000"