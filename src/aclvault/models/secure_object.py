"""
Secure objects - hierarchical nodes carrying a security descriptor.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from aclvault.models.acl import SecurityDescriptor


class SecureObjectBase(ABC):
    """
    Capability interface for secure object nodes.

    Implementations must expose ``uid``, ``unique_name``, ``parent_uid``,
    ``security`` and ``children`` as plain attributes.
    """

    uid: uuid.UUID
    unique_name: str
    parent_uid: Optional[uuid.UUID]
    security: SecurityDescriptor
    children: List["SecureObjectBase"]

    @abstractmethod
    def iter_descendants(self) -> Iterator["SecureObjectBase"]:
        """Depth-first walk of the loaded subtree, excluding self."""

    def clear_children(self) -> None:
        self.children = []


@dataclass
class SecureObject(SecureObjectBase):
    unique_name: str = ""
    uid: uuid.UUID = field(default_factory=uuid.uuid4)
    parent_uid: Optional[uuid.UUID] = None
    security: SecurityDescriptor = field(default_factory=SecurityDescriptor)
    children: List[SecureObjectBase] = field(default_factory=list)

    def iter_descendants(self) -> Iterator[SecureObjectBase]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def add_child(self, child: SecureObjectBase) -> SecureObjectBase:
        child.parent_uid = self.uid
        self.children.append(child)
        return child
