"""Exception hierarchy shared by the catalog, collection and export services."""

from __future__ import annotations


class PictagingError(RuntimeError):
    """Base class for every error raised by the library."""


class PersistenceError(PictagingError):
    """Raised when a persisted document cannot be read or written.

    Non-fatal: callers report it, but in-memory state is left as it was
    after the mutation, so it may be ahead of what is on disk.
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Document '{key}': {message}")
        self.key = key


class PermissionDenied(PictagingError):
    """Raised when the user refuses a permission an operation depends on."""

    def __init__(self, kind: object) -> None:
        label = getattr(kind, "value", kind)
        super().__init__(f"Permission '{label}' was not granted.")
        self.kind = kind


class CapacityError(PictagingError):
    """Raised when capturing would exceed the image limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"At most {limit} images can be kept.")
        self.limit = limit


class AssetCreationError(PictagingError):
    """Raised by a photo library when a single asset cannot be created."""


class AlbumCreationError(PictagingError):
    """Raised when the export album is missing and cannot be created."""
