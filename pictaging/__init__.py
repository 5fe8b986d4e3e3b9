"""Top-level package for the pictaging library."""

from .config import AppConfig, PermissionKind
from .io.document_store import DocumentStore
from .models.base import ImageItem, Tag, TagGroup
from .services.catalog import TagCatalog
from .services.collection import ImageCollection
from .services.editor import TagEditor
from .services.exporter import ExportPipeline, ExportSummary
from .services.selection import TagSelection
from .settings_store import SettingsStore

__all__ = [
    "AppConfig",
    "DocumentStore",
    "ExportPipeline",
    "ExportSummary",
    "ImageCollection",
    "ImageItem",
    "PermissionKind",
    "SettingsStore",
    "Tag",
    "TagCatalog",
    "TagEditor",
    "TagGroup",
    "TagSelection",
]
