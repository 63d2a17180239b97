"""
DynamoDB Document Store
Implements DocumentStore on the boto3 DynamoDB resource API.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from aclvault.config.settings import Settings
from aclvault.exceptions.handlers import TableNotFoundError
from aclvault.storage.store_interface import DocumentStore, TableAccessor, TableSpec

logger = logging.getLogger(__name__)

_TABLE_MISSING = "ResourceNotFoundException"


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


class DynamoDbTableAccessor(TableAccessor):
    def __init__(self, table: Any, name: str, page_size: int = 0):
        self._table = table
        self.name = name
        self.page_size = page_size

    def _call(self, operation: str, fn: Callable[..., Dict[str, Any]], **kwargs: Any) -> Dict[str, Any]:
        try:
            return fn(**kwargs)
        except ClientError as e:
            if _error_code(e) == _TABLE_MISSING:
                logger.error(f"DynamoDB table {self.name} not found during {operation}")
                raise TableNotFoundError(self.name) from e
            logger.error(f"DynamoDB {operation} on table {self.name} failed: {e}")
            raise

    def get(
        self, key: Dict[str, Any], *, consistent_read: bool = False
    ) -> Optional[Dict[str, Any]]:
        response = self._call(
            "get_item", self._table.get_item, Key=key, ConsistentRead=consistent_read
        )
        return response.get("Item")

    def put(self, document: Dict[str, Any]) -> None:
        self._call("put_item", self._table.put_item, Item=document)
        logger.info(f"Item written to DynamoDB table {self.name}")

    def delete(self, key: Dict[str, Any]) -> None:
        self._call("delete_item", self._table.delete_item, Key=key)
        logger.info(f"Item {key} deleted from DynamoDB table {self.name}")

    def scan(self, attribute_name: str, value: Any) -> Iterator[Dict[str, Any]]:
        scan_kwargs: Dict[str, Any] = {"FilterExpression": Attr(attribute_name).eq(value)}
        if self.page_size:
            scan_kwargs["Limit"] = self.page_size

        pages = 0
        while True:
            response = self._call("scan", self._table.scan, **scan_kwargs)
            pages += 1
            for item in response.get("Items", []):
                yield item
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key
        logger.debug(f"Scanned {self.name} for {attribute_name} in {pages} page(s)")


class DynamoDbDocumentStore(DocumentStore):
    def __init__(self, resource: Any, *, page_size: int = 0, billing_mode: str = "PAY_PER_REQUEST"):
        self.resource = resource
        self.page_size = page_size
        self.billing_mode = billing_mode

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDbDocumentStore":
        resource = boto3.resource(
            "dynamodb",
            endpoint_url=settings.DYNAMODB_ENDPOINT_URL or None,
            aws_access_key_id=settings.DYNAMODB_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.DYNAMODB_SECRET_ACCESS_KEY or None,
            region_name=settings.DYNAMODB_REGION_NAME,
        )
        return cls(
            resource,
            page_size=settings.SCAN_PAGE_SIZE,
            billing_mode=settings.BILLING_MODE,
        )

    def table(self, name: str) -> TableAccessor:
        # Table() is lazy; a missing table surfaces on the first request
        return DynamoDbTableAccessor(self.resource.Table(name), name, self.page_size)

    def ensure_table(self, spec: TableSpec) -> bool:
        client = self.resource.meta.client
        try:
            client.describe_table(TableName=spec.name)
            return False
        except ClientError as e:
            if _error_code(e) != _TABLE_MISSING:
                logger.error(f"Error checking DynamoDB table {spec.name}: {e}")
                raise

        key_schema = [{"AttributeName": spec.hash_key, "KeyType": "HASH"}]
        if spec.range_key:
            key_schema.append({"AttributeName": spec.range_key, "KeyType": "RANGE"})
        create_kwargs: Dict[str, Any] = {
            "TableName": spec.name,
            "KeySchema": key_schema,
            "AttributeDefinitions": [
                {"AttributeName": attr, "AttributeType": "S"} for attr in spec.key_attributes
            ],
            "BillingMode": self.billing_mode,
        }
        if self.billing_mode == "PROVISIONED":
            create_kwargs["ProvisionedThroughput"] = {
                "ReadCapacityUnits": 5,
                "WriteCapacityUnits": 5,
            }

        try:
            client.create_table(**create_kwargs)
            client.get_waiter("table_exists").wait(TableName=spec.name)
        except ClientError as e:
            logger.error(f"Failed to create DynamoDB table {spec.name}: {e}")
            raise
        logger.info(f"Created DynamoDB table {spec.name}")
        return True
