from __future__ import annotations

from typing import List, Optional

from aclvault.config import get_settings
from aclvault.config.settings import Settings
from aclvault.storage.store_interface import TableSpec

# Key attribute names, shared by the codec output and the table key schemas
UID_KEY = "uid"
GROUP_UID_KEY = "group_uid"
MEMBER_UID_KEY = "member_uid"


def user_table_spec(name: str) -> TableSpec:
    return TableSpec(name=name, hash_key=UID_KEY)


def group_table_spec(name: str) -> TableSpec:
    return TableSpec(name=name, hash_key=UID_KEY)


def group_membership_table_spec(name: str) -> TableSpec:
    return TableSpec(name=name, hash_key=GROUP_UID_KEY, range_key=MEMBER_UID_KEY)


def secure_object_table_spec(name: str) -> TableSpec:
    return TableSpec(name=name, hash_key=UID_KEY)


def table_specs(settings: Optional[Settings] = None) -> List[TableSpec]:
    """Specs for every configured table; unset names are skipped."""
    settings = settings or get_settings()
    candidates = [
        (settings.USER_TABLE, user_table_spec),
        (settings.GROUP_TABLE, group_table_spec),
        (settings.GROUP_MEMBERSHIP_TABLE, group_membership_table_spec),
        (settings.SECURE_OBJECT_TABLE, secure_object_table_spec),
    ]
    return [build(name) for name, build in candidates if name and name.strip()]
