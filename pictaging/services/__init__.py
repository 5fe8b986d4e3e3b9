"""Service layer: tag catalog, tag selection, image collection and export."""

from .catalog import TagCatalog, filter_groups
from .collection import ImageCollection
from .editor import TagEditor
from .exporter import ExportPipeline, ExportSummary, UniqueNamer
from .selection import ClearResult, TagSelection, sort_for_save

__all__ = [
    "ClearResult",
    "ExportPipeline",
    "ExportSummary",
    "ImageCollection",
    "TagCatalog",
    "TagEditor",
    "TagSelection",
    "UniqueNamer",
    "filter_groups",
    "sort_for_save",
]
