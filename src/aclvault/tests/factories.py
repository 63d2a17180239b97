from __future__ import annotations

from aclvault.models import (
    AccessControlEntry,
    DiscretionaryAcl,
    FileSystemRight,
    SecureObject,
    UIRight,
)

USER_TABLE = "AclVault.User"
GROUP_TABLE = "AclVault.Group"
GROUP_MEMBERSHIP_TABLE = "AclVault.GroupMembership"
SECURE_OBJECT_TABLE = "AclVault.SecureObject"


def make_secure_object(unique_name: str = "SecureObject.top") -> SecureObject:
    secure_object = SecureObject(unique_name=unique_name)
    secure_object.security.dacl = DiscretionaryAcl(
        [
            AccessControlEntry[FileSystemRight](
                allowed=True, right=FileSystemRight.FULL_CONTROL
            ),
            AccessControlEntry[FileSystemRight](
                allowed=False,
                right=FileSystemRight.EXECUTE | FileSystemRight.LIST,
                inheritable=False,
            ),
            AccessControlEntry[UIRight](right=UIRight.OPERATE | UIRight.VISIBLE),
        ]
    )
    return secure_object
