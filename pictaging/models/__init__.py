"""Data model for tags, tag groups and captured images."""

from .base import ImageItem, Tag, TagGroup, tag_names
from .ids import IdGenerator, default_ids

__all__ = ["IdGenerator", "ImageItem", "Tag", "TagGroup", "default_ids", "tag_names"]
