from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from aclvault.config.settings import Settings
from aclvault.exceptions import TableNotFoundError
from aclvault.storage import DynamoDbDocumentStore, TableSpec
from aclvault.storage.dynamodb_store import DynamoDbTableAccessor


def _client_error(code: str, operation: str = "GetItem") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, operation)


@pytest.fixture
def dynamo_table():
    return MagicMock()


@pytest.fixture
def accessor(dynamo_table):
    return DynamoDbTableAccessor(dynamo_table, "AclVault.User")


def test_get_passes_consistency_flag(accessor, dynamo_table):
    dynamo_table.get_item.return_value = {"Item": {"uid": "1"}}

    assert accessor.get({"uid": "1"}, consistent_read=True) == {"uid": "1"}
    dynamo_table.get_item.assert_called_once_with(Key={"uid": "1"}, ConsistentRead=True)


def test_get_defaults_to_eventual_consistency(accessor, dynamo_table):
    dynamo_table.get_item.return_value = {}

    assert accessor.get({"uid": "1"}) is None
    dynamo_table.get_item.assert_called_once_with(Key={"uid": "1"}, ConsistentRead=False)


def test_put_and_delete(accessor, dynamo_table):
    accessor.put({"uid": "1", "name": "n"})
    accessor.delete({"uid": "1"})

    dynamo_table.put_item.assert_called_once_with(Item={"uid": "1", "name": "n"})
    dynamo_table.delete_item.assert_called_once_with(Key={"uid": "1"})


def test_scan_follows_last_evaluated_key(dynamo_table):
    accessor = DynamoDbTableAccessor(dynamo_table, "AclVault.User", page_size=25)
    dynamo_table.scan.side_effect = [
        {"Items": [{"uid": "1"}], "LastEvaluatedKey": {"uid": "1"}},
        {"Items": [], "LastEvaluatedKey": {"uid": "7"}},
        {"Items": [{"uid": "9"}]},
    ]

    items = list(accessor.scan("name", "alice"))

    assert items == [{"uid": "1"}, {"uid": "9"}]
    assert dynamo_table.scan.call_count == 3
    first_kwargs = dynamo_table.scan.call_args_list[0].kwargs
    last_kwargs = dynamo_table.scan.call_args_list[2].kwargs
    assert first_kwargs["Limit"] == 25
    assert "ExclusiveStartKey" not in first_kwargs
    assert last_kwargs["ExclusiveStartKey"] == {"uid": "7"}


def test_scan_is_lazy(accessor, dynamo_table):
    dynamo_table.scan.return_value = {"Items": []}

    results = accessor.scan("name", "alice")

    dynamo_table.scan.assert_not_called()
    assert list(results) == []


def test_missing_table_maps_to_table_not_found(accessor, dynamo_table):
    dynamo_table.put_item.side_effect = _client_error("ResourceNotFoundException", "PutItem")

    with pytest.raises(TableNotFoundError) as exc:
        accessor.put({"uid": "1"})
    assert "Requested resource not found: Table" in exc.value.message
    assert exc.value.table_name == "AclVault.User"


def test_other_client_errors_propagate(accessor, dynamo_table):
    dynamo_table.get_item.side_effect = _client_error("ProvisionedThroughputExceededException")

    with pytest.raises(ClientError):
        accessor.get({"uid": "1"})


def test_store_resolves_tables_through_resource():
    resource = MagicMock()
    store = DynamoDbDocumentStore(resource, page_size=10)

    table = store.table("AclVault.Group")

    resource.Table.assert_called_once_with("AclVault.Group")
    assert table.name == "AclVault.Group"
    assert table.page_size == 10


def test_ensure_table_creates_missing_table():
    resource = MagicMock()
    client = resource.meta.client
    client.describe_table.side_effect = _client_error("ResourceNotFoundException", "DescribeTable")
    store = DynamoDbDocumentStore(resource)

    created = store.ensure_table(TableSpec("AclVault.GroupMembership", "group_uid", "member_uid"))

    assert created is True
    kwargs = client.create_table.call_args.kwargs
    assert kwargs["KeySchema"] == [
        {"AttributeName": "group_uid", "KeyType": "HASH"},
        {"AttributeName": "member_uid", "KeyType": "RANGE"},
    ]
    assert kwargs["BillingMode"] == "PAY_PER_REQUEST"
    assert "ProvisionedThroughput" not in kwargs
    client.get_waiter.assert_called_once_with("table_exists")


def test_ensure_table_provisioned_billing():
    resource = MagicMock()
    client = resource.meta.client
    client.describe_table.side_effect = _client_error("ResourceNotFoundException", "DescribeTable")
    store = DynamoDbDocumentStore(resource, billing_mode="PROVISIONED")

    store.ensure_table(TableSpec("AclVault.User", "uid"))

    kwargs = client.create_table.call_args.kwargs
    assert kwargs["ProvisionedThroughput"] == {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}


def test_ensure_table_skips_existing_table():
    resource = MagicMock()
    store = DynamoDbDocumentStore(resource)

    assert store.ensure_table(TableSpec("AclVault.User", "uid")) is False
    resource.meta.client.create_table.assert_not_called()


def test_from_settings_builds_resource(monkeypatch):
    calls = {}

    def fake_resource(service_name, **kwargs):
        calls["service_name"] = service_name
        calls.update(kwargs)
        return MagicMock()

    monkeypatch.setattr("aclvault.storage.dynamodb_store.boto3.resource", fake_resource)
    settings = Settings(
        DYNAMODB_ENDPOINT_URL="http://localhost:8000",
        DYNAMODB_REGION_NAME="eu-west-1",
        SCAN_PAGE_SIZE=50,
    )

    store = DynamoDbDocumentStore.from_settings(settings)

    assert calls["service_name"] == "dynamodb"
    assert calls["endpoint_url"] == "http://localhost:8000"
    assert calls["region_name"] == "eu-west-1"
    assert calls["aws_access_key_id"] is None
    assert store.page_size == 50
