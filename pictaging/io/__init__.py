"""I/O helpers for persisted documents and embedded image metadata."""

from .document_store import IMAGES_KEY, TAG_GROUPS_KEY, DocumentStore
from .metadata import MetadataWriter, UnsupportedFormatError

__all__ = [
    "DocumentStore",
    "IMAGES_KEY",
    "MetadataWriter",
    "TAG_GROUPS_KEY",
    "UnsupportedFormatError",
]
