from __future__ import annotations

import os
from pathlib import Path

import pytest


# Need a reachable DynamoDB (or DynamoDB Local) endpoint
_LIVE_DYNAMODB_PATHS = (
    "src/aclvault/tests/test_dynamodb_live.py",
)


def _live_dynamodb_enabled() -> bool:
    flag = os.getenv("ACLVAULT_PYTEST_DYNAMODB")
    if flag:
        return flag.strip().lower() in {"1", "true", "yes", "on"}
    return False


def pytest_ignore_collect(collection_path: Path, config: pytest.Config) -> bool:  # type: ignore[override]
    if _live_dynamodb_enabled():
        return False

    path_str = collection_path.as_posix()
    return any(path_str.endswith(marker) for marker in _LIVE_DYNAMODB_PATHS)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "requires_dynamodb: marks tests that need a DynamoDB endpoint (enable with ACLVAULT_PYTEST_DYNAMODB=1)",
    )
