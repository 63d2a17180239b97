import pytest

from aclvault.config.settings import Settings
from aclvault.exceptions import ConfigurationError
from aclvault.storage import (
    DynamoDbDocumentStore,
    MemoryDocumentStore,
    get_document_store,
)


def test_memory_store_has_every_configured_table():
    settings = Settings(STORE_TYPE="memory", SCAN_PAGE_SIZE=5, GROUP_TABLE="custom.groups")

    store = get_document_store(settings)

    assert isinstance(store, MemoryDocumentStore)
    assert sorted(store.table_names()) == sorted(
        [
            "AclVault.User",
            "custom.groups",
            "AclVault.GroupMembership",
            "AclVault.SecureObject",
        ]
    )


def test_dynamodb_store_is_built_from_settings(monkeypatch):
    calls = {}

    def fake_resource(service_name, **kwargs):
        calls["service_name"] = service_name
        calls.update(kwargs)
        return object()

    monkeypatch.setattr("aclvault.storage.dynamodb_store.boto3.resource", fake_resource)
    settings = Settings(
        STORE_TYPE="dynamodb",
        DYNAMODB_ENDPOINT_URL="http://localhost:8000",
        DYNAMODB_REGION_NAME="eu-west-1",
    )

    store = get_document_store(settings)

    assert isinstance(store, DynamoDbDocumentStore)
    assert calls["service_name"] == "dynamodb"
    assert calls["endpoint_url"] == "http://localhost:8000"
    assert calls["region_name"] == "eu-west-1"


def test_unsupported_store_type_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        get_document_store(Settings(STORE_TYPE="cassandra"))

    assert exc.value.details["config_key"] == "STORE_TYPE"
    assert "cassandra" in exc.value.message
