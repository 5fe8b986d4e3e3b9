"""Batch export of the image collection into a photo library album."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import DEFAULT_ALBUM_NAME, AppConfig, PermissionKind
from ..device.base import Album, Asset, PermissionService, PhotoLibrary, StagingArea
from ..errors import AlbumCreationError, PermissionDenied
from ..io.metadata import MetadataWriter, UnsupportedFormatError
from ..models.base import ImageItem, Tag, tag_names
from ..utils.text import safe_filename_stem

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, ImageItem], None]

DEFAULT_BATCH_SIZE = 10
ALBUM_SEED_NAME = "album_init"


@dataclass(slots=True)
class ExportSummary:
    """Counts reported once an export has run to completion."""

    exported_count: int
    total_count: int

    @property
    def complete(self) -> bool:
        return self.exported_count == self.total_count


class UniqueNamer:
    """Derives distinct filename stems from image tags.

    The set of used names belongs to one export run. Names are checked and
    recorded in the same call, so results depend on call order: the first
    image with a given base name keeps it and later ones get ``_1``, ``_2``...
    Calls must not be interleaved.
    """

    def __init__(self, *, separator: str = "_", clock: Callable[[], float] = time.time) -> None:
        self.separator = separator
        self._clock = clock
        self._used: set[str] = set()

    def base_name(self, tags: Sequence[Tag]) -> str:
        if not tags:
            return f"image_{int(self._clock() * 1000)}"
        return safe_filename_stem(self.separator.join(tag_names(tags)))

    def generate(self, tags: Sequence[Tag]) -> str:
        base = self.base_name(tags)
        name = base
        counter = 1
        while name in self._used:
            name = f"{base}_{counter}"
            counter += 1
        self._used.add(name)
        return name


class ExportPipeline:
    """Copies images into a library album under tag-derived names.

    Images are handled in batches, strictly one after another. A failure for
    one image is logged and the image skipped; only a refused permission or an
    album that cannot be created stops the export.
    """

    def __init__(
        self,
        library: PhotoLibrary,
        staging: StagingArea,
        permissions: PermissionService,
        *,
        album_name: str = DEFAULT_ALBUM_NAME,
        batch_size: int = DEFAULT_BATCH_SIZE,
        separator: str = "_",
        metadata_writer: MetadataWriter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.library = library
        self.staging = staging
        self.permissions = permissions
        self.album_name = album_name
        self.batch_size = batch_size
        self.separator = separator
        self.metadata_writer = metadata_writer
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        library: PhotoLibrary,
        staging: StagingArea,
        permissions: PermissionService,
    ) -> ExportPipeline:
        return cls(
            library,
            staging,
            permissions,
            album_name=config.album_name,
            batch_size=config.batch_size,
            separator=config.filename_separator,
            metadata_writer=MetadataWriter() if config.embed_keywords else None,
        )

    async def export(
        self,
        images: Sequence[ImageItem],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> ExportSummary:
        images = list(images)
        total = len(images)
        if not images:
            logger.info("Nothing to export.")
            return ExportSummary(exported_count=0, total_count=0)

        if not await self.permissions.request(PermissionKind.LIBRARY):
            raise PermissionDenied(PermissionKind.LIBRARY)

        logger.info("Exporting %d images to album '%s'", total, self.album_name)
        album = await self._resolve_album(images)
        namer = UniqueNamer(separator=self.separator, clock=self._clock)

        exported = 0
        processed = 0
        for start in range(0, total, self.batch_size):
            batch = images[start : start + self.batch_size]
            assets: list[Asset] = []
            for image in batch:
                asset = await self._export_single(image, namer.generate(image.tags))
                if asset is not None:
                    assets.append(asset)
                processed += 1
                if progress_callback:
                    progress_callback(processed, total, image)

            exported += len(assets)
            await self._attach(assets, album)
            logger.debug("Export progress: %d/%d", exported, total)

        if exported != total:
            logger.warning("Exported %d of %d images.", exported, total)
        else:
            logger.info("Exported %d images.", exported)
        return ExportSummary(exported_count=exported, total_count=total)

    async def _resolve_album(self, images: Sequence[ImageItem]) -> Album:
        album = await self.library.get_album(self.album_name)
        if album is not None:
            return album

        for image in images:
            seed = await self._export_single(image, ALBUM_SEED_NAME)
            if seed is None:
                continue
            try:
                return await self.library.create_album(self.album_name, seed)
            except Exception as exc:
                logger.error("Failed to create album '%s': %s", self.album_name, exc)
                raise AlbumCreationError(
                    f"Could not create album '{self.album_name}'."
                ) from exc
        raise AlbumCreationError(
            f"Could not create album '{self.album_name}': no image could be staged."
        )

    async def _export_single(self, image: ImageItem, name: str) -> Asset | None:
        try:
            async with self.staging.stage(image.uri, name) as staged:
                await asyncio.to_thread(self._try_embed, staged, image)
                return await self.library.create_asset(staged)
        except Exception:
            logger.warning("Failed to create asset for %s", image.uri, exc_info=True)
            return None

    async def _attach(self, assets: list[Asset], album: Album) -> None:
        if not assets:
            return
        try:
            await self.library.add_assets_to_album(assets, album)
        except Exception:
            logger.exception("Failed to add %d assets to album '%s'", len(assets), album.name)

    def _try_embed(self, staged: Path, image: ImageItem) -> bool:
        if self.metadata_writer is None or not image.tags:
            return False
        time_tag = image.time_tag
        try:
            return self.metadata_writer.write(
                staged,
                keywords=tag_names(image.tags),
                title=time_tag.name if time_tag else None,
            )
        except UnsupportedFormatError as exc:
            logger.info("%s; exporting %s without keywords", exc, image.uri)
            return False
        except Exception:
            logger.exception("Failed to embed keywords into %s", staged)
            return False
