from __future__ import annotations

from typing import Any, Dict, Optional


class DalException(Exception):
    """
    Base exception for the data-access layer.

    Every error carries:
    - attributes: message/code/details
    - method: to_dict()

    The message text is part of the public contract (callers and tests match
    on it), so subclasses never decorate it.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "DAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details: Dict[str, Any] = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ValidationError(DalException):
    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"field": field} if field else {}
        details.update(kwargs)
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NotFoundError(DalException):
    def __init__(self, message: str, entity: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"entity": entity} if entity else {}
        details.update(kwargs)
        super().__init__(message, code="NOT_FOUND", details=details)


class TableNotFoundError(DalException):
    def __init__(self, table_name: str, message: Optional[str] = None, **kwargs: Any):
        self.table_name = table_name
        details: Dict[str, Any] = {"table_name": table_name}
        details.update(kwargs)
        super().__init__(
            message or f"Requested resource not found: Table: {table_name} not found",
            code="TABLE_NOT_FOUND",
            details=details,
        )


class IntegrityError(DalException):
    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message, code="INTEGRITY_ERROR", details=dict(kwargs))


class CodecError(DalException):
    def __init__(self, message: str, discriminator: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = (
            {"discriminator": discriminator} if discriminator is not None else {}
        )
        details.update(kwargs)
        super().__init__(message, code="CODEC_ERROR", details=details)


class ConfigurationError(DalException):
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"config_key": config_key} if config_key else {}
        details.update(kwargs)
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
