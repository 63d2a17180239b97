"""
Access control entries, DACLs and the right enumerations they are
parameterized over.
"""

from __future__ import annotations

import enum
import operator
import uuid
from dataclasses import dataclass, field
from functools import reduce
from typing import Generic, Optional, Type, TypeVar


class FileSystemRight(enum.IntFlag):
    FULL_CONTROL = 511
    EXECUTE = 256
    DELETE = 128
    WRITE = 64
    CREATE = 32
    READ = 16
    LIST = 8
    CHANGE_PERMISSIONS = 4
    READ_PERMISSIONS = 2
    TAKE_OWNERSHIP = 1


class UIRight(enum.IntFlag):
    FULL_CONTROL = 7
    OPERATE = 4
    ENABLED = 2
    VISIBLE = 1


class RecordRight(enum.IntFlag):
    FULL_CONTROL = 31
    DELETE = 16
    UPDATE = 8
    INSERT = 4
    SELECT = 2
    LIST = 1


class SynchronizationRight(enum.IntFlag):
    TWO_WAY = 7
    UPLOAD = 4
    DOWNLOAD = 2
    ONE_WAY = 1


def all_bits(right_type: Type[enum.IntFlag]) -> int:
    """Union of every bit defined by ``right_type``."""
    return reduce(operator.or_, (member.value for member in right_type), 0)


RightT = TypeVar("RightT", bound=enum.IntFlag)


@dataclass
class AccessControlEntry(Generic[RightT]):
    """
    One allow/deny rule for a bitmask of rights.

    Parameterize with the right enumeration, e.g.
    ``AccessControlEntry[UIRight](right=UIRight.VISIBLE)``. The concrete
    enumeration is read off ``right`` itself, so the bare class works too.
    """

    right: RightT
    allowed: bool = True
    inheritable: bool = True
    uid: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def right_type(self) -> Type[enum.IntFlag]:
        return type(self.right)


class DiscretionaryAcl(list):
    """Ordered ACEs. Order is significant to evaluation and is never changed here."""

    def __repr__(self) -> str:
        return f"DiscretionaryAcl({list.__repr__(self)})"


@dataclass
class SecurityDescriptor:
    dacl: DiscretionaryAcl = field(default_factory=DiscretionaryAcl)
    dacl_allow_inherit: bool = True
