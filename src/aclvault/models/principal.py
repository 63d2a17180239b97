"""
Principals - the identities (users and groups) that ACEs are granted to.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Principal:
    """
    Shared identity shape for users and groups.

    Abstract: only the concrete ``User`` and ``Group`` are stored, and the
    codec needs the concrete class to tell the two apart on the way back.
    """

    name: str = ""
    uid: uuid.UUID = field(default_factory=uuid.uuid4)
    description: Optional[str] = None
    is_built_in: bool = False
    is_enabled: bool = True
    is_local: bool = False

    def __post_init__(self) -> None:
        if type(self) is Principal:
            raise TypeError("Principal is abstract; instantiate User or Group")


@dataclass
class User(Principal):
    pass


@dataclass
class Group(Principal):
    # Opaque group mask consumed by the evaluation engine
    mask: Optional[str] = None
