"""
Document Codec
Converts entities to and from the generic document shape stored in tables.

Encoded form:
- every dataclass object carries a ``"$type"`` discriminator
- access control entries are tagged variants: ``"right_type"`` names the
  right enumeration and ``"right"`` holds the raw bitmask
- UUIDs are strings, lists stay lists (order preserved)

Decoding is driven by the discriminators plus the declared field types, so no
out-of-band schema is needed.
"""

from __future__ import annotations

import dataclasses
import enum
import typing
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from aclvault.codec.registry import TypeRegistry, default_registry
from aclvault.exceptions.handlers import CodecError
from aclvault.models.acl import AccessControlEntry, DiscretionaryAcl, all_bits

TYPE_KEY = "$type"
RIGHT_TYPE_KEY = "right_type"

T = TypeVar("T")


def _is_uuid_hint(hint: Any) -> bool:
    if hint is uuid.UUID:
        return True
    if typing.get_origin(hint) is Union:
        return uuid.UUID in typing.get_args(hint)
    return False


class DocumentCodec:
    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry or default_registry()
        self._hints: Dict[type, Dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def encode(self, entity: Any) -> Dict[str, Any]:
        if not dataclasses.is_dataclass(entity) or isinstance(entity, type):
            raise CodecError(f"Cannot encode {type(entity).__name__}: not an entity")
        return self._encode_value(entity)

    def _encode_value(self, value: Any) -> Any:
        if value is None or isinstance(value, (bool, str)):
            return value
        if isinstance(value, enum.Enum):
            raise CodecError(
                f"Enumeration value {value!r} outside an access control entry",
                discriminator=type(value).__name__,
            )
        if isinstance(value, int):
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, AccessControlEntry):
            return self._encode_ace(value)
        if dataclasses.is_dataclass(value):
            return self._encode_object(value)
        if isinstance(value, (list, tuple)):
            return [self._encode_value(item) for item in value]
        if isinstance(value, dict):
            return {str(k): self._encode_value(v) for k, v in value.items()}
        raise CodecError(f"Unsupported value type: {type(value).__name__}")

    def _encode_object(self, obj: Any, skip: Optional[str] = None) -> Dict[str, Any]:
        document: Dict[str, Any] = {TYPE_KEY: self.registry.name_of(type(obj))}
        hints = self._field_hints(type(obj))
        for f in dataclasses.fields(obj):
            if f.name == skip:
                continue
            value = getattr(obj, f.name)
            if isinstance(value, str) and _is_uuid_hint(hints.get(f.name)):
                # Keys are always built from str(uuid.UUID), so store that form
                value = self._parse_uuid(value, f.name)
            document[f.name] = self._encode_value(value)
        return document

    def _encode_ace(self, ace: AccessControlEntry) -> Dict[str, Any]:
        if not isinstance(ace.right, enum.IntFlag):
            raise CodecError(
                f"Access control entry right must be an IntFlag, got {type(ace.right).__name__}"
            )
        document = self._encode_object(ace, skip="right")
        document[RIGHT_TYPE_KEY] = self.registry.right_name_of(type(ace.right))
        document["right"] = int(ace.right)
        return document

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------
    def decode(self, document: Dict[str, Any], declared_type: Type[T]) -> T:
        return self._decode_object(document, declared_type)

    def _field_hints(self, cls: type) -> Dict[str, Any]:
        hints = self._hints.get(cls)
        if hints is None:
            hints = typing.get_type_hints(cls)
            self._hints[cls] = hints
        return hints

    def _resolve_class(self, document: Dict[str, Any], declared_type: type) -> type:
        name = document.get(TYPE_KEY)
        if name is None:
            # Untagged documents only decode into a concrete, registered type
            if self.registry.is_registered(declared_type):
                return declared_type
            raise CodecError(
                f"Document has no type discriminator and {declared_type.__name__} is not concrete"
            )
        cls = self.registry.resolve(str(name))
        if not issubclass(cls, declared_type):
            raise CodecError(
                f"Discriminator '{name}' is not a {declared_type.__name__}",
                discriminator=str(name),
            )
        return cls

    def _decode_object(self, document: Any, declared_type: type) -> Any:
        if not isinstance(document, dict):
            raise CodecError(
                f"Expected a document for {declared_type.__name__}, got {type(document).__name__}"
            )
        cls = self._resolve_class(document, declared_type)
        if issubclass(cls, AccessControlEntry):
            return self._decode_ace(document, cls)

        hints = self._field_hints(cls)
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if not f.init or f.name not in document:
                continue
            kwargs[f.name] = self._decode_value(document[f.name], hints[f.name], f.name)
        return cls(**kwargs)

    def _decode_ace(self, document: Dict[str, Any], cls: type) -> AccessControlEntry:
        right_name = document.get(RIGHT_TYPE_KEY)
        if right_name is None:
            raise CodecError("Access control entry has no right type discriminator")
        right_type = self.registry.resolve_right(str(right_name))

        raw = self._as_int(document.get("right"), "right")
        unknown_bits = raw & ~all_bits(right_type)
        if raw < 0 or unknown_bits:
            raise CodecError(
                f"Right value {raw} has bits not defined by {right_type.__name__}",
                discriminator=str(right_name),
            )

        hints = self._field_hints(cls)
        kwargs: Dict[str, Any] = {"right": right_type(raw)}
        for f in dataclasses.fields(cls):
            if f.name == "right" or not f.init or f.name not in document:
                continue
            kwargs[f.name] = self._decode_value(document[f.name], hints[f.name], f.name)
        if getattr(cls, "__parameters__", ()):
            return cls[right_type](**kwargs)
        return cls(**kwargs)

    def _decode_value(self, raw: Any, hint: Any, field_name: str) -> Any:
        if raw is None:
            return None

        origin = typing.get_origin(hint)
        if origin is Union:
            args = [a for a in typing.get_args(hint) if a is not type(None)]
            if len(args) != 1:
                raise CodecError(f"Unsupported union type on field '{field_name}'")
            return self._decode_value(raw, args[0], field_name)

        if hint is Any:
            return self._plain(raw)
        if hint is uuid.UUID:
            return self._parse_uuid(raw, field_name)
        if hint is bool:
            if not isinstance(raw, bool):
                raise CodecError(f"Expected a boolean on field '{field_name}', got {raw!r}")
            return raw
        if hint is int:
            return self._as_int(raw, field_name)
        if hint is str:
            if not isinstance(raw, str):
                raise CodecError(f"Expected a string on field '{field_name}', got {raw!r}")
            return raw

        if isinstance(hint, type) and issubclass(hint, DiscretionaryAcl):
            self._require_list(raw, field_name)
            return DiscretionaryAcl(
                self._decode_object(item, AccessControlEntry) for item in raw
            )
        if origin in (list, List):
            self._require_list(raw, field_name)
            (item_hint,) = typing.get_args(hint) or (Any,)
            return [self._decode_value(item, item_hint, field_name) for item in raw]
        if origin in (dict, Dict):
            return {k: self._plain(v) for k, v in raw.items()}
        if origin is AccessControlEntry:
            return self._decode_object(raw, AccessControlEntry)
        if isinstance(hint, type):
            return self._decode_object(raw, hint)
        raise CodecError(f"Unsupported field type on '{field_name}': {hint!r}")

    @staticmethod
    def _parse_uuid(raw: Any, field_name: str) -> uuid.UUID:
        if not isinstance(raw, str):
            raise CodecError(f"Expected a UUID string on field '{field_name}', got {raw!r}")
        try:
            return uuid.UUID(raw)
        except ValueError as e:
            raise CodecError(f"Invalid UUID on field '{field_name}': {raw!r}") from e

    @staticmethod
    def _require_list(raw: Any, field_name: str) -> None:
        if not isinstance(raw, list):
            raise CodecError(f"Expected a list on field '{field_name}', got {type(raw).__name__}")

    @staticmethod
    def _as_int(raw: Any, field_name: str) -> int:
        # DynamoDB hands numbers back as Decimal
        if isinstance(raw, bool) or not isinstance(raw, (int, Decimal)):
            raise CodecError(f"Expected a number on field '{field_name}', got {raw!r}")
        if isinstance(raw, Decimal) and raw != raw.to_integral_value():
            raise CodecError(f"Expected an integer on field '{field_name}', got {raw}")
        return int(raw)

    def _plain(self, raw: Any) -> Any:
        if isinstance(raw, Decimal):
            return int(raw) if raw == raw.to_integral_value() else float(raw)
        if isinstance(raw, list):
            return [self._plain(item) for item in raw]
        if isinstance(raw, dict):
            return {k: self._plain(v) for k, v in raw.items()}
        return raw
