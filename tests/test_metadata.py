import pytest
import requests
import responses

from sobjectkit.client import SalesforceError, ServiceFormatter
from sobjectkit.metadata import fetch_metadata
from sobjectkit.models import MetadataValue, ObjectDescribe, ObjectURLs

INSTANCE = "https://test.salesforce.com"
ENDPOINT = INSTANCE + "/services/data/v42.0/sobjects/someobject"
ACCOUNT = "/services/data/v44.0/sobjects/Account"

# (JSON key, attribute, path below the Account resource)
URL_TABLE = [
    ("compactLayouts", "compact_layouts", "/describe/compactLayouts"),
    ("rowTemplate", "row_template", "/{ID}"),
    ("approvalLayouts", "approval_layouts", "/describe/approvalLayouts"),
    ("defaultValues", "default_values", "/defaultValues?recordTypeId&fields"),
    ("listviews", "list_views", "/listviews"),
    ("describe", "describe", "/describe"),
    ("quickActions", "quick_actions", "/quickActions"),
    ("layouts", "layouts", "/describe/layouts"),
    ("sobject", "sobject", ""),
]

# (JSON key, attribute, value)
FLAG_TABLE = [
    ("activateable", "activateable", False),
    ("createable", "createable", True),
    ("custom", "custom", False),
    ("customSetting", "custom_setting", False),
    ("deletable", "deletable", True),
    ("deprecatedAndHidden", "deprecated_and_hidden", False),
    ("feedEnabled", "feed_enabled", True),
    ("hasSubtypes", "has_subtypes", True),
    ("isSubtype", "is_subtype", False),
    ("layoutable", "layoutable", True),
    ("mergeable", "mergeable", True),
    ("mruEnabled", "mru_enabled", True),
    ("queryable", "queryable", True),
    ("replicateable", "replicateable", True),
    ("retrieveable", "retrieveable", True),
    ("searchable", "searchable", True),
    ("triggerable", "triggerable", True),
    ("undeletable", "undeletable", True),
    ("updateable", "updateable", True),
]

PAYLOAD = {
    "objectDescribe": {
        **{key: value for key, _, value in FLAG_TABLE},
        "keyPrefix": "001",
        "label": "Account",
        "labelPlural": "Accounts",
        "name": "Account",
        "urls": {key: ACCOUNT + path for key, _, path in URL_TABLE},
    },
    "recentItems": [],
}

WANTED = MetadataValue(
    object_describe=ObjectDescribe(
        key_prefix="001",
        label="Account",
        label_plural="Accounts",
        name="Account",
        urls=ObjectURLs(**{attr: ACCOUNT + path for _, attr, path in URL_TABLE}),
        **{attr: value for _, attr, value in FLAG_TABLE},
    ),
    recent_items=[],
)


@pytest.fixture
def api():
    with responses.RequestsMock() as mock:
        yield mock


def test_request_error():
    with pytest.raises(requests.RequestException):
        fetch_metadata(ServiceFormatter("123://wrong", "token"), "someobject")


@pytest.mark.parametrize(
    ("reply", "status", "error", "pattern"),
    [
        (
            {
                "json": [
                    {
                        "message": "Email: invalid email address: Not a real email address",
                        "errorCode": "INVALID_EMAIL_ADDRESS",
                        "fields": ["Email"],
                    }
                ]
            },
            500,
            SalesforceError,
            "^metadata response err: INVALID_EMAIL_ADDRESS: "
            "Email: invalid email address: Not a real email address$",
        ),
        ({"body": "resp"}, 500, SalesforceError, "metadata response err: 500"),
        ({"body": "\n{"}, 200, ValueError, None),
    ],
    ids=["http-error-json", "http-error-text", "bad-json"],
)
def test_failures(api, reply, status, error, pattern):
    api.add(responses.GET, ENDPOINT, status=status, **reply)
    with pytest.raises(error, match=pattern):
        fetch_metadata(ServiceFormatter(INSTANCE, "token"), "someobject")


def test_error_keeps_details(api):
    api.add(
        responses.GET,
        ENDPOINT,
        json=[{"message": "bad", "errorCode": "INVALID_EMAIL_ADDRESS", "fields": ["Email"]}],
        status=500,
    )
    with pytest.raises(SalesforceError) as caught:
        fetch_metadata(ServiceFormatter(INSTANCE, "token"), "someobject")
    assert caught.value.errors[0].fields == ["Email"]


def test_passing(api):
    api.add(responses.GET, ENDPOINT, json=PAYLOAD, status=200)
    assert fetch_metadata(ServiceFormatter(INSTANCE, "token"), "someobject") == WANTED
    sent = api.calls[0].request.headers
    assert (sent["Authorization"], sent["Accept"]) == ("Bearer token", "application/json, */*")