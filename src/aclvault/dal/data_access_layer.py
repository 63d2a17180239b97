"""
Data Access Layer
CRUD over the access-control model, backed by a DocumentStore.

Every operation validates its input before touching the store, encodes and
decodes through the DocumentCodec, and surfaces every error to the caller
(no retries). Deletes are verified with a consistent read.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Type, TypeVar

from aclvault.codec.document_codec import DocumentCodec
from aclvault.config import get_settings
from aclvault.config.settings import Settings
from aclvault.dal.interface import AccessControlDataAccess, UIdLike
from aclvault.exceptions.handlers import IntegrityError, NotFoundError, ValidationError
from aclvault.models.membership import GroupMembershipItem
from aclvault.models.principal import Group, User
from aclvault.models.secure_object import SecureObjectBase
from aclvault.storage.factory import get_document_store
from aclvault.storage.store_interface import DocumentStore, TableAccessor
from aclvault.storage.tables import GROUP_UID_KEY, MEMBER_UID_KEY, UID_KEY

logger = logging.getLogger(__name__)

T = TypeVar("T")

NAME_ATTR = "name"
UNIQUE_NAME_ATTR = "unique_name"


def _as_uid(value: Any, message: str, field: str) -> uuid.UUID:
    """Normalizes a UUID or UUID string; None, blank and the nil UUID are invalid."""
    if isinstance(value, str):
        if not value.strip():
            raise ValidationError(message, field=field)
        try:
            value = uuid.UUID(value)
        except ValueError as e:
            raise ValidationError(f"{field} is not a valid UUID: {value!r}", field=field) from e
    if not isinstance(value, uuid.UUID) or value.int == 0:
        raise ValidationError(message, field=field)
    return value


def _require_text(value: Optional[str], message: str, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=field)
    return value


class DataAccessLayer(AccessControlDataAccess):
    def __init__(
        self,
        store: DocumentStore,
        *,
        user_table: Optional[str] = None,
        group_table: Optional[str] = None,
        group_membership_table: Optional[str] = None,
        secure_object_table: Optional[str] = None,
        codec: Optional[DocumentCodec] = None,
    ):
        self.store = store
        self.codec = codec or DocumentCodec()
        self._user_table = user_table
        self._group_table = group_table
        self._group_membership_table = group_membership_table
        self._secure_object_table = secure_object_table

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        store: Optional[DocumentStore] = None,
        codec: Optional[DocumentCodec] = None,
    ) -> "DataAccessLayer":
        settings = settings or get_settings()
        return cls(
            store or get_document_store(settings),
            user_table=settings.USER_TABLE,
            group_table=settings.GROUP_TABLE,
            group_membership_table=settings.GROUP_MEMBERSHIP_TABLE,
            secure_object_table=settings.SECURE_OBJECT_TABLE,
            codec=codec,
        )

    @property
    def user_table(self) -> Optional[str]:
        return self._user_table

    @property
    def group_table(self) -> Optional[str]:
        return self._group_table

    @property
    def group_membership_table(self) -> Optional[str]:
        return self._group_membership_table

    @property
    def secure_object_table(self) -> Optional[str]:
        return self._secure_object_table

    # ------------------------------------------------------------------
    # Shared template
    # ------------------------------------------------------------------
    @staticmethod
    def _require_table(table_name: Optional[str], label: str) -> str:
        return _require_text(table_name, f"{label} table name must be specified.", "table_name")

    def _table(self, table_name: str) -> TableAccessor:
        return self.store.table(table_name)

    def _put(self, table_name: str, entity: Any) -> None:
        self._table(table_name).put(self.codec.encode(entity))

    def _get(
        self, table_name: str, key: Dict[str, Any], declared_type: Type[T], label: str
    ) -> T:
        document = self._table(table_name).get(key)
        if document is None:
            raise NotFoundError(f"{label} cannot be found.", entity=label, key=key)
        return self.codec.decode(document, declared_type)

    def _scan(
        self, table_name: str, attribute_name: str, value: Any, declared_type: Type[T]
    ) -> List[T]:
        # Full-table scan: there is no secondary index on these attributes
        logger.debug(f"Scanning {table_name} where {attribute_name} = {value}")
        documents = list(self._table(table_name).scan(attribute_name, value))
        return [self.codec.decode(document, declared_type) for document in documents]

    def _delete(self, table_name: str, key: Dict[str, Any], label: str) -> None:
        table = self._table(table_name)
        table.delete(key)
        if table.get(key, consistent_read=True) is not None:
            logger.error(f"{label} {key} still present in {table_name} after delete")
            raise IntegrityError(f"{label} was not deleted.", table_name=table_name, key=key)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def get_user_by_uid(self, user_uid: UIdLike) -> User:
        uid = _as_uid(user_uid, "User unique Id cannot be empty.", "user_uid")
        table_name = self._require_table(self._user_table, "User")
        return self._get(table_name, {UID_KEY: str(uid)}, User, "User")

    def get_user_by_name(self, name: Optional[str]) -> List[User]:
        name = _require_text(name, "User's name must be specified.", "name")
        table_name = self._require_table(self._user_table, "User")
        users = self._scan(table_name, NAME_ATTR, name, User)
        if not users:
            raise NotFoundError("User cannot be found.", entity="User", name=name)
        return users

    def upsert_user(self, user: Optional[User]) -> User:
        if user is None:
            raise ValidationError("User cannot be null.", field="user")
        _as_uid(user.uid, "User unique Id cannot be empty.", "uid")
        table_name = self._require_table(self._user_table, "User")
        self._put(table_name, user)
        return user

    def delete_user(self, user_uid: UIdLike) -> None:
        uid = _as_uid(user_uid, "User unique Id cannot be empty.", "user_uid")
        table_name = self._require_table(self._user_table, "User")
        self._delete(table_name, {UID_KEY: str(uid)}, "User")

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------
    def get_group_by_uid(self, group_uid: UIdLike) -> Group:
        uid = _as_uid(group_uid, "Group unique Id cannot be empty.", "group_uid")
        table_name = self._require_table(self._group_table, "Group")
        return self._get(table_name, {UID_KEY: str(uid)}, Group, "Group")

    def get_group_by_name(self, name: Optional[str]) -> List[Group]:
        name = _require_text(name, "Group's name must be specified.", "name")
        table_name = self._require_table(self._group_table, "Group")
        groups = self._scan(table_name, NAME_ATTR, name, Group)
        if not groups:
            raise NotFoundError("Group cannot be found.", entity="Group", name=name)
        return groups

    def upsert_group(self, group: Optional[Group]) -> Group:
        if group is None:
            raise ValidationError("Group cannot be null.", field="group")
        _as_uid(group.uid, "Group unique Id cannot be empty.", "uid")
        table_name = self._require_table(self._group_table, "Group")
        self._put(table_name, group)
        return group

    def delete_group(self, group_uid: UIdLike) -> None:
        uid = _as_uid(group_uid, "Group unique Id cannot be empty.", "group_uid")
        table_name = self._require_table(self._group_table, "Group")
        self._delete(table_name, {UID_KEY: str(uid)}, "Group")

    # ------------------------------------------------------------------
    # Group membership
    # ------------------------------------------------------------------
    def _membership_key(self, item: Optional[GroupMembershipItem]) -> Dict[str, str]:
        if item is None:
            raise ValidationError("Group membership item cannot be null.", field="group_membership_item")
        group_uid = _as_uid(item.group_uid, "Group unique Id cannot be empty.", "group_uid")
        member_uid = _as_uid(item.member_uid, "Member unique Id cannot be empty.", "member_uid")
        return {GROUP_UID_KEY: str(group_uid), MEMBER_UID_KEY: str(member_uid)}

    def _list_memberships(
        self,
        attribute_name: str,
        uid: uuid.UUID,
        include_disabled_membership: bool,
        not_found_message: str,
    ) -> List[GroupMembershipItem]:
        table_name = self._require_table(self._group_membership_table, "Group membership")
        items = self._scan(table_name, attribute_name, str(uid), GroupMembershipItem)
        if not items:
            raise NotFoundError(not_found_message, entity="GroupMembershipItem", uid=str(uid))
        if include_disabled_membership:
            return items
        return [item for item in items if item.is_member_enabled]

    def get_group_members(
        self, group_uid: UIdLike, include_disabled_membership: bool = False
    ) -> List[GroupMembershipItem]:
        uid = _as_uid(group_uid, "Group unique Id cannot be empty.", "group_uid")
        return self._list_memberships(
            GROUP_UID_KEY, uid, include_disabled_membership, "Group members cannot be found."
        )

    def get_group_membership(
        self, member_uid: UIdLike, include_disabled_membership: bool = False
    ) -> List[GroupMembershipItem]:
        uid = _as_uid(member_uid, "Member unique Id cannot be empty.", "member_uid")
        return self._list_memberships(
            MEMBER_UID_KEY, uid, include_disabled_membership, "Group membership cannot be found."
        )

    def upsert_group_membership(
        self, group_membership_item: Optional[GroupMembershipItem]
    ) -> GroupMembershipItem:
        self._membership_key(group_membership_item)
        table_name = self._require_table(self._group_membership_table, "Group membership")
        self._put(table_name, group_membership_item)
        return group_membership_item

    def delete_group_membership(
        self, group_membership_item: Optional[GroupMembershipItem]
    ) -> None:
        key = self._membership_key(group_membership_item)
        table_name = self._require_table(self._group_membership_table, "Group membership")
        self._delete(table_name, key, "Group membership item")

    # ------------------------------------------------------------------
    # Secure objects
    # ------------------------------------------------------------------
    @staticmethod
    def _trim(secure_object: SecureObjectBase, include_children: bool) -> SecureObjectBase:
        # The subtree is never fetched here, only dropped when not requested
        if not include_children:
            secure_object.clear_children()
        return secure_object

    def get_secure_object_by_uid(
        self, secure_object_uid: UIdLike, include_children: bool
    ) -> SecureObjectBase:
        uid = _as_uid(secure_object_uid, "Secure object unique Id cannot be empty.", "secure_object_uid")
        table_name = self._require_table(self._secure_object_table, "Secure object")
        secure_object = self._get(
            table_name, {UID_KEY: str(uid)}, SecureObjectBase, "Secure object"
        )
        return self._trim(secure_object, include_children)

    def get_secure_object_by_unique_name(
        self, unique_name: Optional[str], include_children: bool
    ) -> SecureObjectBase:
        unique_name = _require_text(
            unique_name, "Secure object unique name cannot be empty.", "unique_name"
        )
        table_name = self._require_table(self._secure_object_table, "Secure object")
        matches = self._scan(table_name, UNIQUE_NAME_ATTR, unique_name, SecureObjectBase)
        if not matches:
            raise NotFoundError(
                "Secure object cannot be found.", entity="SecureObject", unique_name=unique_name
            )
        if len(matches) > 1:
            logger.warning(f"{len(matches)} secure objects share unique name {unique_name}")
        return self._trim(matches[0], include_children)

    def upsert_secure_object(
        self, secure_object: Optional[SecureObjectBase]
    ) -> SecureObjectBase:
        if secure_object is None:
            raise ValidationError("Secure object cannot be null.", field="secure_object")
        # Children are stored embedded, so every node needs a valid identity
        for node in (secure_object, *secure_object.iter_descendants()):
            _as_uid(node.uid, "Secure object unique Id cannot be empty.", "uid")
            _require_text(
                node.unique_name, "Secure object unique name cannot be empty.", "unique_name"
            )
        table_name = self._require_table(self._secure_object_table, "Secure object")
        self._put(table_name, secure_object)
        return secure_object

    def delete_secure_object(self, secure_object_uid: UIdLike) -> None:
        uid = _as_uid(secure_object_uid, "Secure object unique Id cannot be empty.", "secure_object_uid")
        table_name = self._require_table(self._secure_object_table, "Secure object")
        self._delete(table_name, {UID_KEY: str(uid)}, "Secure object")
