"""
Document Store Interface
Abstract base classes for the key-value document stores the DAL runs on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional


@dataclass(frozen=True)
class TableSpec:
    """Name and key schema of one logical table."""

    name: str
    hash_key: str
    range_key: Optional[str] = None

    @property
    def key_attributes(self) -> tuple:
        if self.range_key:
            return (self.hash_key, self.range_key)
        return (self.hash_key,)

    def key_of(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Extracts the primary key from a full document."""
        missing = [attr for attr in self.key_attributes if document.get(attr) in (None, "")]
        if missing:
            raise ValueError(
                f"Document for table {self.name} is missing key attribute(s): {', '.join(missing)}"
            )
        return {attr: document[attr] for attr in self.key_attributes}


class TableAccessor(ABC):
    """Point and scan primitives bound to one named table."""

    name: str

    @abstractmethod
    def get(
        self, key: Dict[str, Any], *, consistent_read: bool = False
    ) -> Optional[Dict[str, Any]]:
        """
        Reads a single document.
        Args:
            key: Primary key attributes of the document.
            consistent_read: Request a strongly consistent read where the store
                defaults to eventually consistent reads.
        Returns:
            The document, or None if no document is stored under ``key``.
        """
        pass

    @abstractmethod
    def put(self, document: Dict[str, Any]) -> None:
        """
        Writes a document, fully replacing any document with the same key.
        Args:
            document: The document, including its key attributes.
        """
        pass

    @abstractmethod
    def delete(self, key: Dict[str, Any]) -> None:
        """
        Deletes a document. Deleting a missing key is not an error.
        Args:
            key: Primary key attributes of the document.
        """
        pass

    @abstractmethod
    def scan(self, attribute_name: str, value: Any) -> Iterator[Dict[str, Any]]:
        """
        Full-table scan for documents whose ``attribute_name`` equals ``value``.

        Lazily walks every page of the table. Cost is linear in the table
        size; results come back in no particular order.
        """
        pass


class DocumentStore(ABC):
    """Resolves table names to accessors."""

    @abstractmethod
    def table(self, name: str) -> TableAccessor:
        """
        Returns an accessor for ``name``.

        A table that does not exist raises ``TableNotFoundError``, either here
        or on the first operation against the accessor.
        """
        pass

    @abstractmethod
    def ensure_table(self, spec: TableSpec) -> bool:
        """
        Creates the table described by ``spec`` if it does not exist.
        Returns:
            True if the table was created, False if it already existed.
        """
        pass
