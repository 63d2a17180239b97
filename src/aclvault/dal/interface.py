"""
Data Access Layer Interface
Abstract CRUD surface over users, groups, memberships and secure objects.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from aclvault.models.membership import GroupMembershipItem
from aclvault.models.principal import Group, User
from aclvault.models.secure_object import SecureObjectBase

UIdLike = Union[uuid.UUID, str, None]


class AccessControlDataAccess(ABC):
    # Users
    @abstractmethod
    def get_user_by_uid(self, user_uid: UIdLike) -> User:
        pass

    @abstractmethod
    def get_user_by_name(self, name: Optional[str]) -> List[User]:
        pass

    @abstractmethod
    def upsert_user(self, user: Optional[User]) -> User:
        pass

    @abstractmethod
    def delete_user(self, user_uid: UIdLike) -> None:
        pass

    # Groups
    @abstractmethod
    def get_group_by_uid(self, group_uid: UIdLike) -> Group:
        pass

    @abstractmethod
    def get_group_by_name(self, name: Optional[str]) -> List[Group]:
        pass

    @abstractmethod
    def upsert_group(self, group: Optional[Group]) -> Group:
        pass

    @abstractmethod
    def delete_group(self, group_uid: UIdLike) -> None:
        pass

    # Group membership
    @abstractmethod
    def get_group_members(
        self, group_uid: UIdLike, include_disabled_membership: bool = False
    ) -> List[GroupMembershipItem]:
        """
        Memberships of ``group_uid``.
        Args:
            group_uid: The group whose members are listed.
            include_disabled_membership: Also return items whose member
                snapshot is disabled.
        """
        pass

    @abstractmethod
    def get_group_membership(
        self, member_uid: UIdLike, include_disabled_membership: bool = False
    ) -> List[GroupMembershipItem]:
        """
        Memberships held by ``member_uid`` (the groups it belongs to).
        Args:
            member_uid: The user or group whose memberships are listed.
            include_disabled_membership: Also return items whose member
                snapshot is disabled.
        """
        pass

    @abstractmethod
    def upsert_group_membership(
        self, group_membership_item: Optional[GroupMembershipItem]
    ) -> GroupMembershipItem:
        pass

    @abstractmethod
    def delete_group_membership(
        self, group_membership_item: Optional[GroupMembershipItem]
    ) -> None:
        pass

    # Secure objects
    @abstractmethod
    def get_secure_object_by_uid(
        self, secure_object_uid: UIdLike, include_children: bool
    ) -> SecureObjectBase:
        pass

    @abstractmethod
    def get_secure_object_by_unique_name(
        self, unique_name: Optional[str], include_children: bool
    ) -> SecureObjectBase:
        pass

    @abstractmethod
    def upsert_secure_object(
        self, secure_object: Optional[SecureObjectBase]
    ) -> SecureObjectBase:
        pass

    @abstractmethod
    def delete_secure_object(self, secure_object_uid: UIdLike) -> None:
        pass
