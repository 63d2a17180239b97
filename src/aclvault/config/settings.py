from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ACLVAULT_",
        env_file=".env",
        extra="ignore",
    )

    # Runtime
    LOG_LEVEL: str = Field(default="INFO", description="Root log level for the CLI")

    # Document store
    # memory: in-process tables (dev/tests)
    # dynamodb: Amazon DynamoDB or a DynamoDB-compatible endpoint (e.g. DynamoDB Local)
    STORE_TYPE: str = Field(default="dynamodb", description="memory|dynamodb")
    SCAN_PAGE_SIZE: int = Field(
        default=0,
        description="Optional Limit per scan page; 0 leaves paging to the store",
    )

    # One logical table per entity kind
    USER_TABLE: str = Field(default="AclVault.User")
    GROUP_TABLE: str = Field(default="AclVault.Group")
    GROUP_MEMBERSHIP_TABLE: str = Field(default="AclVault.GroupMembership")
    SECURE_OBJECT_TABLE: str = Field(default="AclVault.SecureObject")

    DYNAMODB_ENDPOINT_URL: str = Field(
        default="",
        description="Override endpoint, e.g. http://localhost:8000; empty uses AWS",
    )
    DYNAMODB_REGION_NAME: str = Field(default="us-east-1")
    DYNAMODB_ACCESS_KEY_ID: str = Field(
        default="", description="Empty falls back to the default AWS credential chain"
    )
    DYNAMODB_SECRET_ACCESS_KEY: str = Field(default="")
    BILLING_MODE: str = Field(
        default="PAY_PER_REQUEST",
        description="Billing mode used by `aclvault init-tables`",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
