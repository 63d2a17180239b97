from aclvault.storage.dynamodb_store import DynamoDbDocumentStore, DynamoDbTableAccessor
from aclvault.storage.factory import get_document_store
from aclvault.storage.memory_store import MemoryDocumentStore, MemoryTableAccessor
from aclvault.storage.store_interface import DocumentStore, TableAccessor, TableSpec

__all__ = [
    "DocumentStore",
    "TableAccessor",
    "TableSpec",
    "DynamoDbDocumentStore",
    "DynamoDbTableAccessor",
    "MemoryDocumentStore",
    "MemoryTableAccessor",
    "get_document_store",
]
