# sobjectkit

A small client for the Salesforce SObject REST resources, built on `requests`:

- list the SObjects of an org and describe a single SObject, with
  `If-Modified-Since` support;
- read an SObject's basic metadata;
- insert, update, upsert and delete single records;
- fetch a record by Salesforce ID or by an external ID field;
- list records deleted or updated within a date range;
- download the body of an `Attachment` or `Document` record;
- create whole record trees in one call through the composite SObject Tree API.

## Installation

```
pip install sobjectkit
```

Python 3.10 or later is required. The only runtime dependency is `requests`.

## Sessions

Every call goes through a `sobjectkit.client.ServiceFormatter`:

```python
from sobjectkit.client import ServiceFormatter

session = ServiceFormatter(
    "https://instance.example.com",
    access_token="token",
    version="42.0",           # the default
    token_type="Bearer",      # the default
)
```

- `data_service_url()` returns `<url>/services/data/v<version>`.
- `authorization_header(headers)` sets `Authorization: <token_type> <access_token>`
  in a headers mapping.
- `refresh()` calls the optional `refresher` callable given to the
  constructor, passing it the session; without one it does nothing.
- `client` is the `requests.Session` used for every request; one is created
  if none is passed.

Both `Resources` and the tree `Resource` call `refresh()` once when they are
created. If the refresher raises, the error is re-raised as a
`SalesforceError` whose message starts with `session refresh:`.

## SObject resources

```python
from datetime import datetime, timezone

from sobjectkit.client import NotModifiedError
from sobjectkit.resources import Resources

resources = Resources(session)

account = resources.describe("Account")
for field in account.fields:
    print(field.name, field.type)

last_seen = datetime(2024, 1, 1, tzinfo=timezone.utc)
try:
    resources.describe("Account", if_modified_since=last_seen)
except NotModifiedError:
    print("Account has not changed")
```

Methods of `Resources`:

| Method | Returns |
| --- | --- |
| `list(if_modified_since=None)` | `ListValue` (`sobjects`: list of `DescribeValue`) |
| `metadata(sobject)` | `MetadataValue` |
| `describe(sobject, if_modified_since=None)` | `DescribeValue` |
| `insert(inserter)` | `InsertValue` |
| `update(updater)` | `None` |
| `upsert(upserter)` | `UpsertValue` |
| `delete(deleter)` | `None` |
| `query(querier)` | the record as a `dict` |
| `external_query(querier)` | the record as a `dict` |
| `deleted_records(sobject, start_date, end_date)` | `DeletedRecords` |
| `updated_records(sobject, start_date, end_date)` | `UpdatedRecords` |
| `get_content(record_id, content)` | the body as `bytes` |

The same calls are available as plain functions taking the session first:
`sobjectkit.describe.describe` and `list_sobjects`,
`sobjectkit.metadata.fetch_metadata`, `sobjectkit.dml.insert`, `update`,
`upsert` and `delete`, and `sobjectkit.query.query_record`,
`external_query_record`, `deleted_records`, `updated_records` and
`get_content`. The `Resources` methods add argument checks in front of them.

### Arguments

The record operations take any object with the right attributes (they are
typing protocols):

- `sobjectkit.dml.Inserter`: `sobject`, `fields` (a mapping sent as the JSON body);
- `Updater`: an `Inserter` plus `id`;
- `Upserter`: an `Updater` plus `external_field`;
- `Deleter`: `sobject`, `id`;
- `sobjectkit.query.Querier`: `sobject`, `id`, `fields` (a sequence of field
  names; empty asks for all fields);
- `ExternalQuerier`: a `Querier` plus `external_field`.

```python
from dataclasses import dataclass, field

@dataclass
class NewAccount:
    sobject: str = "Account"
    fields: dict = field(default_factory=lambda: {"Name": "Test Account"})

result = resources.insert(NewAccount())
print(result.success, result.id)
```

`upsert` returns an `UpsertValue` whose `created` tells whether a record was
inserted; a 204 answer gives an empty `UpsertValue`.

Dates passed to `deleted_records` and `updated_records` are sent in RFC 3339
form; naive datetimes are taken as UTC. The dates in the answer are kept both
as the server's strings and as parsed `datetime` values (see
`sobjectkit.client.parse_time`).

`get_content` accepts `ContentType.ATTACHMENT`, `ContentType.DOCUMENT` or
their string values `"Attachment"` and `"Document"`.

### Errors

- `ValueError` for bad arguments: a `None` inserter, updater, upserter,
  deleter or querier; an SObject name without any word character; an empty
  record ID or an unsupported content type.
- `NotModifiedError` (a `SalesforceError`) when `list` or `describe` get a 304
  answer to an `If-Modified-Since` request.
- `SalesforceError` for any other unsuccessful answer. It carries
  `status_code` and `errors`, a list of `ErrorDetail` (`error_code`,
  `message`, `fields`) decoded from the response body when it holds them.
  `sobjectkit.client.handle_error(response)` builds such an error from a
  `requests.Response`.
- An answer with the expected status but a body that is not valid JSON raises
  the decoding error from `requests`.

## Describe and metadata models

`sobjectkit.models` holds the dataclasses for the describe and metadata
documents: `DescribeValue`, `Field`, `PickListValue`, `ChildRelationship`,
`ActionOverride`, `RecordTypeInfo`, `RecordTypeURL`, `SupportedScope`,
`ObjectURLs`, `ObjectDescribe` and `MetadataValue`. Each has a
`from_json(data)` class method; attribute names are the snake-case forms of
the JSON keys, JSON `null` gives the field's default, and a value of the wrong
JSON type raises `TypeError`.

## Composite record trees

```python
from dataclasses import dataclass, field

from sobjectkit.tree.builder import RecordBuilder
from sobjectkit.tree.composite import Resource
from sobjectkit.tree.record import Attributes, Record

@dataclass
class AccountSource:
    sobject: str = "Account"
    reference_id: str = "ref1"
    fields: dict = field(default_factory=lambda: {"name": "SampleAccount"})

builder = RecordBuilder.from_builder(AccountSource())
builder.sub_records(
    "Contacts",
    Record(Attributes("Contact", "ref2"), {"lastname": "Smith"}),
)
account = builder.build()

@dataclass
class TreeInsert:
    sobject: str
    records: list

tree = Resource(session)
value = tree.insert(TreeInsert("Account", [account]))
for result in value.results:
    print(result.reference_id, result.id, result.errors)
```

`RecordBuilder.from_builder` raises `ValueError` when the builder is `None`,
its SObject name has no word character, or its reference ID is empty.
`Record.to_dict()` and `Record.to_json()` give the shape the SObject Tree API
expects: an `attributes` object, the record's fields, and child records
grouped as `{"<relationship>": {"records": [...]}}`. `Resource.insert` posts
them to `/composite/tree/<sobject>` and returns a `Value` (`has_errors`,
`results`); any status but 201 raises `SalesforceError`.

## What it does not do

The package does not log in: it has no OAuth or password flow and no way of
obtaining an access token. The caller supplies the instance URL and token, and
may supply a `refresher` that renews them. There is no command-line tool, no
SOQL query or search endpoint, no Bulk API, and no retrying of failed
requests.

## Running the tests

```
pip install "sobjectkit[test]"
pytest
```