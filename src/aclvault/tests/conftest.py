from __future__ import annotations

import pytest

from aclvault.dal import DataAccessLayer
from aclvault.storage import MemoryDocumentStore
from aclvault.storage.tables import (
    group_membership_table_spec,
    group_table_spec,
    secure_object_table_spec,
    user_table_spec,
)
from aclvault.tests.factories import (
    GROUP_MEMBERSHIP_TABLE,
    GROUP_TABLE,
    SECURE_OBJECT_TABLE,
    USER_TABLE,
)


@pytest.fixture
def store():
    # Small pages so scans always cross page boundaries
    return MemoryDocumentStore(
        [
            user_table_spec(USER_TABLE),
            group_table_spec(GROUP_TABLE),
            group_membership_table_spec(GROUP_MEMBERSHIP_TABLE),
            secure_object_table_spec(SECURE_OBJECT_TABLE),
        ],
        page_size=2,
    )


@pytest.fixture
def dal(store):
    return DataAccessLayer(
        store,
        user_table=USER_TABLE,
        group_table=GROUP_TABLE,
        group_membership_table=GROUP_MEMBERSHIP_TABLE,
        secure_object_table=SECURE_OBJECT_TABLE,
    )
