from aclvault.codec.document_codec import RIGHT_TYPE_KEY, TYPE_KEY, DocumentCodec
from aclvault.codec.registry import TypeRegistry, default_registry

__all__ = [
    "DocumentCodec",
    "TypeRegistry",
    "default_registry",
    "TYPE_KEY",
    "RIGHT_TYPE_KEY",
]
