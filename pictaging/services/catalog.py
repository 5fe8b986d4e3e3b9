"""Create, list and delete tag groups and their tags."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..io.document_store import DocumentStore
from ..models.base import Tag, TagGroup
from ..models.ids import IdGenerator, default_ids

logger = logging.getLogger(__name__)


class TagCatalog:
    """The persisted hierarchy of tag groups available for selection.

    Every mutation changes the in-memory list first and then writes the whole
    ``tagGroups`` document. If the write fails the in-memory change is kept
    and the :class:`~pictaging.errors.PersistenceError` propagates.
    """

    def __init__(self, store: DocumentStore, *, ids: IdGenerator | None = None) -> None:
        self.store = store
        self._ids = ids or default_ids
        self._groups: list[TagGroup] = []

    async def load(self) -> list[TagGroup]:
        self._groups = await self.store.load_tag_groups()
        return self.list_groups()

    def list_groups(self) -> list[TagGroup]:
        return list(self._groups)

    def get_group(self, group_id: str) -> TagGroup | None:
        return next((group for group in self._groups if group.id == group_id), None)

    async def add_group(self, name: str) -> TagGroup | None:
        """Append a new, empty group. Blank names are ignored."""
        if not name.strip():
            return None
        group = TagGroup(id=self._ids.next_id(), name=name)
        self._groups = [*self._groups, group]
        logger.info("Added tag group '%s' (%s)", name, group.id)
        await self._save()
        return group

    async def add_tag(self, group_id: str, name: str) -> Tag | None:
        """Append a tag to ``group_id``. Blank names and unknown groups are ignored."""
        if not name.strip():
            return None
        group = self.get_group(group_id)
        if group is None:
            logger.debug("Ignoring new tag '%s' for unknown group %s", name, group_id)
            return None
        tag = Tag(id=self._ids.next_id(), name=name)
        self._replace_group(replace(group, tags=[*group.tags, tag]))
        logger.info("Added tag '%s' (%s) to group %s", name, tag.id, group_id)
        await self._save()
        return tag

    async def delete_group(self, group_id: str) -> TagGroup | None:
        """Remove a group together with all of its tags."""
        removed = self.get_group(group_id)
        self._groups = [group for group in self._groups if group.id != group_id]
        if removed is not None:
            logger.info("Deleted tag group '%s' (%s)", removed.name, group_id)
        await self._save()
        return removed

    async def delete_tag(self, group_id: str, tag_id: str) -> Tag | None:
        group = self.get_group(group_id)
        if group is None:
            await self._save()
            return None
        removed = group.find_tag(tag_id)
        self._replace_group(replace(group, tags=[tag for tag in group.tags if tag.id != tag_id]))
        if removed is not None:
            logger.info("Deleted tag '%s' (%s) from group %s", removed.name, tag_id, group_id)
        await self._save()
        return removed

    def _replace_group(self, updated: TagGroup) -> None:
        self._groups = [updated if group.id == updated.id else group for group in self._groups]

    async def _save(self) -> None:
        await self.store.save_tag_groups(self._groups)


def filter_groups(groups: Sequence[TagGroup], query: str) -> list[TagGroup]:
    """Return the groups with at least one tag whose name contains ``query``.

    Matching is case-insensitive and each returned group holds only its
    matching tags. A blank query returns every group unchanged.
    """
    needle = query.strip().casefold()
    if not needle:
        return list(groups)
    matches: list[TagGroup] = []
    for group in groups:
        tags = [tag for tag in group.tags if needle in tag.name.casefold()]
        if tags:
            matches.append(TagGroup(id=group.id, name=group.name, tags=tags))
    return matches
