from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from aclvault.models.principal import Principal


@dataclass
class GroupMembershipItem:
    """
    Join record: ``member_uid`` is a member of ``group_uid``.

    ``member`` is an optional snapshot of the member principal so listings can
    filter on the enabled flag without a second lookup.
    """

    group_uid: Optional[uuid.UUID] = None
    member_uid: Optional[uuid.UUID] = None
    is_member_user: bool = True
    member: Optional[Principal] = None

    @property
    def is_member_enabled(self) -> bool:
        # No snapshot means enabled
        return self.member is None or self.member.is_enabled
