"""
Type registry for the document codec.

Maps the discriminator names embedded in stored documents to the classes
they decode into. There are two namespaces: entity types (``"$type"``) and
right enumerations (``"right_type"`` on access control entries). A registry
is built explicitly and handed to the codec; nothing is registered globally.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, List, Mapping, Optional, Type

from aclvault.exceptions.handlers import CodecError
from aclvault.models.acl import (
    AccessControlEntry,
    FileSystemRight,
    RecordRight,
    SecurityDescriptor,
    SynchronizationRight,
    UIRight,
)
from aclvault.models.membership import GroupMembershipItem
from aclvault.models.principal import Group, User
from aclvault.models.secure_object import SecureObject

logger = logging.getLogger(__name__)


class TypeRegistry:
    def __init__(
        self,
        types: Optional[Mapping[str, type]] = None,
        rights: Optional[Mapping[str, Type[enum.IntFlag]]] = None,
    ) -> None:
        self._types: Dict[str, type] = {}
        self._type_names: Dict[type, str] = {}
        self._rights: Dict[str, Type[enum.IntFlag]] = {}
        self._right_names: Dict[Type[enum.IntFlag], str] = {}
        for name, cls in (types or {}).items():
            self.register(cls, name)
        for name, right_type in (rights or {}).items():
            self.register_right(right_type, name)

    @staticmethod
    def _add(
        by_name: Dict[str, type],
        by_type: Dict[type, str],
        cls: type,
        name: str,
        replace: bool,
    ) -> None:
        existing = by_name.get(name)
        if existing is not None and existing is not cls:
            if not replace:
                raise ValueError(f"Discriminator '{name}' already registered")
            by_type.pop(existing, None)
        previous = by_type.get(cls)
        if previous is not None and previous != name:
            if not replace:
                raise ValueError(f"{cls.__name__} already registered as '{previous}'")
            by_name.pop(previous, None)
        by_name[name] = cls
        by_type[cls] = name

    def register(self, cls: type, name: Optional[str] = None, *, replace: bool = False) -> None:
        self._add(self._types, self._type_names, cls, name or cls.__name__, replace)

    def register_right(
        self,
        right_type: Type[enum.IntFlag],
        name: Optional[str] = None,
        *,
        replace: bool = False,
    ) -> None:
        if not (isinstance(right_type, type) and issubclass(right_type, enum.IntFlag)):
            raise ValueError(f"Right type must be an IntFlag enumeration: {right_type!r}")
        self._add(self._rights, self._right_names, right_type, name or right_type.__name__, replace)

    def resolve(self, name: str) -> type:
        cls = self._types.get(name)
        if cls is None:
            raise CodecError(f"Unknown type discriminator: '{name}'", discriminator=name)
        return cls

    def resolve_right(self, name: str) -> Type[enum.IntFlag]:
        right_type = self._rights.get(name)
        if right_type is None:
            raise CodecError(f"Unknown right type: '{name}'", discriminator=name)
        return right_type

    def name_of(self, cls: type) -> str:
        name = self._type_names.get(cls)
        if name is None:
            raise CodecError(f"Type is not registered: {cls.__name__}", discriminator=cls.__name__)
        return name

    def right_name_of(self, right_type: type) -> str:
        name = self._right_names.get(right_type)
        if name is None:
            raise CodecError(
                f"Right type is not registered: {right_type.__name__}",
                discriminator=right_type.__name__,
            )
        return name

    def is_registered(self, cls: type) -> bool:
        return cls in self._type_names

    def list_types(self) -> List[str]:
        return sorted(self._types)

    def list_rights(self) -> List[str]:
        return sorted(self._rights)


def default_registry() -> TypeRegistry:
    """A fresh registry with every shipped entity and right type."""
    registry = TypeRegistry()
    for cls in (
        User,
        Group,
        GroupMembershipItem,
        SecureObject,
        SecurityDescriptor,
        AccessControlEntry,
    ):
        registry.register(cls)
    for right_type in (FileSystemRight, UIRight, RecordRight, SynchronizationRight):
        registry.register_right(right_type)
    logger.debug(
        f"Built default type registry: {len(registry.list_types())} types, "
        f"{len(registry.list_rights())} right types"
    )
    return registry
