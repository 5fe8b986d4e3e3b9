"""In-memory editing state for the tags of one image."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from ..models.base import ImageItem, Tag
from ..models.ids import IdGenerator, default_ids
from ..utils.text import DEFAULT_COLLATION_LOCALE, collation_key
from .collection import ImageCollection

logger = logging.getLogger(__name__)

TIME_TAG_PREFIX = "time-"


class ClearResult(str, Enum):
    """Outcome of :meth:`TagSelection.clear_all_tags`."""

    CLEARED = "cleared"
    CANCELLED = "cancelled"
    ALREADY_EMPTY = "already_empty"


def sort_for_save(tags: Iterable[Tag], locale: str = DEFAULT_COLLATION_LOCALE) -> list[Tag]:
    """Order tags the way they are saved: time tag first, then by name in ``locale``."""
    return sorted(tags, key=lambda tag: (not tag.is_time_tag, collation_key(tag.name, locale)))


class TagSelection:
    """The tags currently selected for ``image``.

    At most one time tag is ever held. Nothing is persisted until
    :meth:`commit` hands the sorted selection to the image collection.
    """

    def __init__(
        self,
        image: ImageItem,
        collection: ImageCollection,
        *,
        ids: IdGenerator | None = None,
        locale: str = DEFAULT_COLLATION_LOCALE,
    ) -> None:
        self.image = image
        self.collection = collection
        self.locale = locale
        self._ids = ids or default_ids
        self._selected: list[Tag] = list(image.tags)

    @property
    def selected_tags(self) -> list[Tag]:
        return list(self._selected)

    @property
    def time_tag(self) -> Tag | None:
        return next((tag for tag in self._selected if tag.is_time_tag), None)

    def is_selected(self, tag_id: str) -> bool:
        return any(tag.id == tag_id for tag in self._selected)

    def toggle_tag(self, group_id: str, tag: Tag) -> bool:
        """Select ``tag`` through ``group_id`` or deselect it. Returns the new state."""
        if self.is_selected(tag.id):
            self._selected = [item for item in self._selected if item.id != tag.id]
            return False
        self._selected = [*self._selected, tag.with_group(group_id)]
        return True

    def add_time_tag(self, raw_text: str) -> Tag | None:
        """Set the time tag, replacing any existing one in its position."""
        if not raw_text.strip():
            return None
        time_tag = Tag(id=self._ids.next_id(TIME_TAG_PREFIX), name=raw_text, is_time_tag=True)
        index = next((i for i, tag in enumerate(self._selected) if tag.is_time_tag), None)
        if index is None:
            self._selected = [*self._selected, time_tag]
        else:
            updated = list(self._selected)
            updated[index] = time_tag
            # A stale selection could hold several time tags; keep only the new one.
            self._selected = [
                tag for i, tag in enumerate(updated) if i == index or not tag.is_time_tag
            ]
        return time_tag

    def remove_time_tag(self) -> None:
        self._selected = [tag for tag in self._selected if not tag.is_time_tag]

    def forget_group(self, group_id: str) -> None:
        """Drop every selection made through a deleted group."""
        self._selected = [tag for tag in self._selected if tag.group_id != group_id]

    def forget_tag(self, tag_id: str) -> None:
        self._selected = [tag for tag in self._selected if tag.id != tag_id]

    def clear_all_tags(self, confirm: Callable[[], bool]) -> ClearResult:
        if not self._selected:
            return ClearResult.ALREADY_EMPTY
        if not confirm():
            return ClearResult.CANCELLED
        self._selected = []
        return ClearResult.CLEARED

    async def commit(self) -> list[Tag]:
        """Sort the selection and save it on the image."""
        tags = sort_for_save(self._selected, self.locale)
        self._selected = list(tags)
        await self.collection.update_tags(self.image.id, tags)
        logger.info("Saved %d tags on image %s", len(tags), self.image.id)
        return tags
