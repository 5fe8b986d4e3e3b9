"""Tag editing session for a single image."""

from __future__ import annotations

from ..models.base import ImageItem, Tag, TagGroup
from ..models.ids import IdGenerator
from ..utils.text import DEFAULT_COLLATION_LOCALE
from .catalog import TagCatalog, filter_groups
from .collection import ImageCollection
from .selection import TagSelection


class TagEditor:
    """Combines the shared catalog with the selection for one image.

    Catalog deletions made here also drop the matching selections. Tags
    already saved on images keep their copies.
    """

    def __init__(
        self,
        catalog: TagCatalog,
        collection: ImageCollection,
        image: ImageItem,
        *,
        ids: IdGenerator | None = None,
        locale: str = DEFAULT_COLLATION_LOCALE,
    ) -> None:
        self.catalog = catalog
        self.selection = TagSelection(image, collection, ids=ids, locale=locale)

    async def add_group(self, name: str) -> TagGroup | None:
        return await self.catalog.add_group(name)

    async def add_tag(self, group_id: str, name: str) -> Tag | None:
        return await self.catalog.add_tag(group_id, name)

    async def delete_group(self, group_id: str) -> TagGroup | None:
        try:
            return await self.catalog.delete_group(group_id)
        finally:
            self.selection.forget_group(group_id)

    async def delete_tag(self, group_id: str, tag_id: str) -> Tag | None:
        try:
            return await self.catalog.delete_tag(group_id, tag_id)
        finally:
            self.selection.forget_tag(tag_id)

    def select(self, group_id: str, tag_id: str) -> bool:
        """Toggle the catalog tag ``tag_id`` of ``group_id``.

        Raises KeyError when the catalog has no such tag.
        """
        group = self.catalog.get_group(group_id)
        tag = group.find_tag(tag_id) if group else None
        if tag is None:
            raise KeyError(f"Unknown tag '{tag_id}' in group '{group_id}'")
        return self.selection.toggle_tag(group_id, tag)

    def search(self, query: str) -> list[TagGroup]:
        return filter_groups(self.catalog.list_groups(), query)

    async def save(self) -> list[Tag]:
        return await self.selection.commit()
