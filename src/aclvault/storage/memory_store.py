"""
Memory Document Store
Implements DocumentStore with in-process tables, for development and tests.

Documents are copied on the way in and out, and integers come back as
``Decimal`` the way DynamoDB returns them, so callers see the same shapes
they would against the real store.
"""

import copy
import logging
import threading
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from aclvault.exceptions.handlers import TableNotFoundError
from aclvault.storage.store_interface import DocumentStore, TableAccessor, TableSpec

logger = logging.getLogger(__name__)


def _to_store_value(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        raise TypeError("Float types are not supported. Use Decimal types instead.")
    if isinstance(value, list):
        return [_to_store_value(item) for item in value]
    if isinstance(value, dict):
        return {k: _to_store_value(v) for k, v in value.items()}
    return value


class _MemoryTable:
    def __init__(self, spec: TableSpec):
        self.spec = spec
        self.items: Dict[Tuple[Any, ...], Dict[str, Any]] = {}

    def key_tuple(self, key: Dict[str, Any]) -> Tuple[Any, ...]:
        if set(key) != set(self.spec.key_attributes):
            raise ValueError(
                f"The provided key does not match the schema of table {self.spec.name}"
            )
        return tuple(key[attr] for attr in self.spec.key_attributes)


class MemoryTableAccessor(TableAccessor):
    def __init__(self, store: "MemoryDocumentStore", name: str):
        self._store = store
        self.name = name

    def get(
        self, key: Dict[str, Any], *, consistent_read: bool = False
    ) -> Optional[Dict[str, Any]]:
        # Every read is consistent here
        with self._store.lock:
            table = self._store.resolve(self.name)
            item = table.items.get(table.key_tuple(key))
            return copy.deepcopy(item) if item is not None else None

    def put(self, document: Dict[str, Any]) -> None:
        with self._store.lock:
            table = self._store.resolve(self.name)
            key = table.key_tuple(table.spec.key_of(document))
            table.items[key] = _to_store_value(copy.deepcopy(document))

    def delete(self, key: Dict[str, Any]) -> None:
        with self._store.lock:
            table = self._store.resolve(self.name)
            table.items.pop(table.key_tuple(key), None)

    def scan(self, attribute_name: str, value: Any) -> Iterator[Dict[str, Any]]:
        with self._store.lock:
            keys = list(self._store.resolve(self.name).items)

        # One lock acquisition per page, like one request per page
        page_size = self._store.page_size
        for start in range(0, len(keys), page_size):
            with self._store.lock:
                table = self._store.resolve(self.name)
                page: List[Dict[str, Any]] = [
                    copy.deepcopy(table.items[k])
                    for k in keys[start : start + page_size]
                    if k in table.items
                ]
            for item in page:
                if item.get(attribute_name) == value:
                    yield item


class MemoryDocumentStore(DocumentStore):
    def __init__(self, specs: Iterable[TableSpec] = (), *, page_size: int = 100):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.lock = threading.RLock()
        self.page_size = page_size
        self._tables: Dict[str, _MemoryTable] = {}
        for spec in specs:
            self.create_table(spec)

    def create_table(self, spec: TableSpec) -> None:
        with self.lock:
            if spec.name in self._tables:
                raise ValueError(f"Table already exists: {spec.name}")
            self._tables[spec.name] = _MemoryTable(spec)
        logger.info(f"Created in-memory table {spec.name}")

    def ensure_table(self, spec: TableSpec) -> bool:
        with self.lock:
            if spec.name in self._tables:
                return False
            self.create_table(spec)
            return True

    def drop_table(self, name: str) -> None:
        with self.lock:
            self.resolve(name)
            del self._tables[name]

    def resolve(self, name: str) -> _MemoryTable:
        table = self._tables.get(name)
        if table is None:
            raise TableNotFoundError(name)
        return table

    def table(self, name: str) -> TableAccessor:
        return MemoryTableAccessor(self, name)

    def table_names(self) -> List[str]:
        with self.lock:
            return sorted(self._tables)
