from typing import Optional

from aclvault.config import get_settings
from aclvault.config.settings import Settings
from aclvault.exceptions.handlers import ConfigurationError
from aclvault.storage.dynamodb_store import DynamoDbDocumentStore
from aclvault.storage.memory_store import MemoryDocumentStore
from aclvault.storage.store_interface import DocumentStore
from aclvault.storage.tables import table_specs


def get_document_store(settings: Optional[Settings] = None) -> DocumentStore:
    """Factory function to get the configured DocumentStore."""
    settings = settings or get_settings()
    if settings.STORE_TYPE == "memory":
        # A fresh, empty store per call, with every configured table created
        return MemoryDocumentStore(
            table_specs(settings), page_size=settings.SCAN_PAGE_SIZE or 100
        )
    elif settings.STORE_TYPE == "dynamodb":
        return DynamoDbDocumentStore.from_settings(settings)
    else:
        raise ConfigurationError(
            f"Unsupported STORE_TYPE: {settings.STORE_TYPE}", config_key="STORE_TYPE"
        )
