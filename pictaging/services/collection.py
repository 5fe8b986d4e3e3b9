"""Ownership of the ordered image list and the tags saved on each image."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..config import MAX_IMAGES, PermissionKind
from ..device.base import CaptureService, PermissionService
from ..errors import CapacityError, PermissionDenied
from ..io.document_store import DocumentStore
from ..models.base import ImageItem, Tag
from ..models.ids import IdGenerator, default_ids

logger = logging.getLogger(__name__)


class ImageCollection:
    """Captured images in capture order, persisted as the ``images`` document.

    Deleting and clearing do not ask for confirmation; callers are expected
    to have confirmed with the user before calling them.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        max_images: int = MAX_IMAGES,
        ids: IdGenerator | None = None,
    ) -> None:
        self.store = store
        self.max_images = max_images
        self._ids = ids or default_ids
        self._images: list[ImageItem] = []

    async def load(self) -> tuple[ImageItem, ...]:
        self._images = await self.store.load_images()
        return self.images

    @property
    def images(self) -> tuple[ImageItem, ...]:
        return tuple(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def get(self, image_id: str) -> ImageItem | None:
        return next((image for image in self._images if image.id == image_id), None)

    def ensure_capacity(self) -> None:
        if len(self._images) >= self.max_images:
            raise CapacityError(self.max_images)

    async def capture(self, uri: str) -> ImageItem:
        """Append a new untagged image for ``uri``.

        Raises :class:`CapacityError` without touching the collection when it
        is already full.
        """
        self.ensure_capacity()
        image = ImageItem(id=self._ids.next_id(), uri=uri, tags=[])
        self._images = [*self._images, image]
        logger.info("Captured image %s (%d/%d)", image.id, len(self._images), self.max_images)
        await self._save()
        return image

    async def capture_from(
        self, camera: CaptureService, permissions: PermissionService
    ) -> ImageItem | None:
        """Check capacity, ask for the camera, take a photo and add it.

        Returns None when the user cancels the capture.
        """
        self.ensure_capacity()
        if not await permissions.request(PermissionKind.CAMERA):
            raise PermissionDenied(PermissionKind.CAMERA)
        uri = await camera.capture()
        if uri is None:
            logger.debug("Capture cancelled.")
            return None
        return await self.capture(uri)

    async def update_tags(self, image_id: str, tags: Sequence[Tag]) -> ImageItem | None:
        image = self.get(image_id)
        if image is None:
            logger.debug("Ignoring tag update for unknown image %s", image_id)
            return None
        # Snapshots handed out by `images` keep the old item.
        image = replace(image, tags=list(tags))
        self._images = [image if item.id == image_id else item for item in self._images]
        await self._save()
        return image

    async def delete(self, image_id: str) -> None:
        self._images = [image for image in self._images if image.id != image_id]
        await self._save()

    async def clear_all(self) -> None:
        self._images = []
        await self._save()

    async def _save(self) -> None:
        await self.store.save_images(self._images)
