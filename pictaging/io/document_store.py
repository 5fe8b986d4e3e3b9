"""Whole-document JSON persistence for the image and tag group collections."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import PersistenceError
from ..models.base import ImageItem, TagGroup

logger = logging.getLogger(__name__)

IMAGES_KEY = "images"
TAG_GROUPS_KEY = "tagGroups"


class DocumentStore:
    """Keyed store where every key holds one JSON array.

    Writes replace the whole document; there is no partial update and no
    locking, so concurrent writers to the same key race and the last one wins.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    async def read(self, key: str) -> list[Any] | None:
        """Return the stored document for ``key`` or None if it was never written."""
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, payload: list[Any]) -> None:
        await asyncio.to_thread(self._write_sync, key, payload)

    async def load_images(self) -> list[ImageItem]:
        data = await self.read(IMAGES_KEY) or []
        return _decode(IMAGES_KEY, data, ImageItem.from_dict)

    async def save_images(self, images: list[ImageItem]) -> None:
        await self.write(IMAGES_KEY, [image.as_dict() for image in images])

    async def load_tag_groups(self) -> list[TagGroup]:
        data = await self.read(TAG_GROUPS_KEY) or []
        return _decode(TAG_GROUPS_KEY, data, TagGroup.from_dict)

    async def save_tag_groups(self, groups: list[TagGroup]) -> None:
        await self.write(TAG_GROUPS_KEY, [group.as_dict() for group in groups])

    def _read_sync(self, key: str) -> list[Any] | None:
        path = self.path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            raise PersistenceError(key, f"could not read {path}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Document %s is not valid JSON: %s", path, exc)
            raise PersistenceError(key, "stored document is not valid JSON") from exc
        if data is None:
            return None
        if not isinstance(data, list):
            raise PersistenceError(key, "stored document is not a JSON array")
        return data

    def _write_sync(self, key: str, payload: list[Any]) -> None:
        path = self.path_for(key)
        text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(prefix=f".{key}-", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.replace(temp_name, path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise PersistenceError(key, f"could not write {path}") from exc
        logger.debug("Wrote %d entries to %s", len(payload), path)


def _decode(key: str, data: list[Any], factory):
    try:
        return [factory(item) for item in data]
    except (KeyError, TypeError, AttributeError) as exc:
        raise PersistenceError(key, f"malformed entry: {exc}") from exc
