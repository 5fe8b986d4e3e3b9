"""Device services: permissions, capture, staging and the photo library."""

from .base import Album, Asset, CaptureService, PermissionService, PhotoLibrary, StagingArea
from .local import (
    DirectoryPhotoLibrary,
    FileImportCapture,
    StaticPermissionService,
    TemporaryStagingArea,
)

__all__ = [
    "Album",
    "Asset",
    "CaptureService",
    "DirectoryPhotoLibrary",
    "FileImportCapture",
    "PermissionService",
    "PhotoLibrary",
    "StagingArea",
    "StaticPermissionService",
    "TemporaryStagingArea",
]
