from aclvault.exceptions.handlers import (
    CodecError,
    ConfigurationError,
    DalException,
    IntegrityError,
    NotFoundError,
    TableNotFoundError,
    ValidationError,
)

__all__ = [
    "DalException",
    "ValidationError",
    "NotFoundError",
    "TableNotFoundError",
    "IntegrityError",
    "CodecError",
    "ConfigurationError",
]
