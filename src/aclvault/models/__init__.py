from aclvault.models.acl import (
    AccessControlEntry,
    DiscretionaryAcl,
    FileSystemRight,
    RecordRight,
    SecurityDescriptor,
    SynchronizationRight,
    UIRight,
)
from aclvault.models.membership import GroupMembershipItem
from aclvault.models.principal import Group, Principal, User
from aclvault.models.secure_object import SecureObject, SecureObjectBase

__all__ = [
    "AccessControlEntry",
    "DiscretionaryAcl",
    "FileSystemRight",
    "Group",
    "GroupMembershipItem",
    "Principal",
    "RecordRight",
    "SecureObject",
    "SecureObjectBase",
    "SecurityDescriptor",
    "SynchronizationRight",
    "UIRight",
    "User",
]
