"""Filesystem-backed implementations of the device services."""

from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from pathlib import Path

from ..config import PermissionKind
from ..errors import AlbumCreationError, AssetCreationError
from ..models.ids import IdGenerator, default_ids
from ..utils.paths import image_suffix, is_image_file, non_clobbering_path, uri_to_path
from .base import Album, Asset

logger = logging.getLogger(__name__)


class StaticPermissionService:
    """Answers permission requests from a fixed set of granted kinds."""

    def __init__(self, granted: Iterable[PermissionKind]) -> None:
        self.granted = frozenset(granted)
        self.requested: list[PermissionKind] = []

    async def request(self, kind: PermissionKind) -> bool:
        self.requested.append(kind)
        allowed = kind in self.granted
        if not allowed:
            logger.info("Permission '%s' denied by configuration.", kind.value)
        return allowed


class FileImportCapture:
    """Treats importing an existing image file as taking a photo.

    The file is copied into ``photos_dir`` so the collection keeps working if
    the original is moved.
    """

    def __init__(self, photos_dir: Path, source: Path | None = None) -> None:
        self.photos_dir = photos_dir
        self.source = source

    async def capture(self) -> str | None:
        if self.source is None:
            return None
        source = self.source.expanduser()
        if not source.is_file():
            raise FileNotFoundError(source)
        if not is_image_file(source):
            raise ValueError(f"{source} is not a supported image file.")
        return await asyncio.to_thread(self._copy_in, source)

    def _copy_in(self, source: Path) -> str:
        self.photos_dir.mkdir(parents=True, exist_ok=True)
        target = non_clobbering_path(self.photos_dir, source.stem, source.suffix.lower())
        shutil.copy2(source, target)
        logger.debug("Captured %s as %s", source, target)
        return str(target)


class TemporaryStagingArea:
    """Stages export copies in a scratch directory."""

    def __init__(self, root: Path | None = None) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        if self._root is None:
            self._root = Path(tempfile.mkdtemp(prefix="pictaging-"))
        return self._root

    @asynccontextmanager
    async def stage(self, uri: str, name: str) -> AsyncIterator[Path]:
        source = uri_to_path(uri)
        target = self.root / f"{name}{image_suffix(uri)}"
        try:
            await asyncio.to_thread(self._copy, source, target)
            yield target
        finally:
            await asyncio.to_thread(target.unlink, missing_ok=True)

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)


class DirectoryPhotoLibrary:
    """A photo library laid out as plain directories.

    Newly created assets live in ``root/assets``; each album is a directory
    under ``root/albums`` and adding an asset to an album moves its file there.
    """

    def __init__(self, root: Path, *, ids: IdGenerator | None = None) -> None:
        self.root = root
        self.assets_dir = root / "assets"
        self.albums_dir = root / "albums"
        self._ids = ids or default_ids

    async def get_album(self, name: str) -> Album | None:
        path = self.albums_dir / name
        exists = await asyncio.to_thread(path.is_dir)
        if not exists:
            return None
        return Album(id=name, name=name, path=path)

    async def create_album(self, name: str, seed: Asset) -> Album:
        path = self.albums_dir / name
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise AlbumCreationError(f"Could not create album '{name}': {exc}") from exc
        album = Album(id=name, name=name, path=path)
        await self.add_assets_to_album([seed], album)
        logger.info("Created album '%s' at %s", name, path)
        return album

    async def create_asset(self, path: Path) -> Asset:
        try:
            target = await asyncio.to_thread(self._import, path)
        except OSError as exc:
            raise AssetCreationError(f"Could not import {path}: {exc}") from exc
        return Asset(id=self._ids.next_id("asset-"), path=target)

    async def add_assets_to_album(self, assets: Sequence[Asset], album: Album) -> None:
        await asyncio.to_thread(self._move_into, list(assets), album.path)

    def _import(self, path: Path) -> Path:
        if not path.is_file():
            raise FileNotFoundError(path)
        self.assets_dir.mkdir(parents=True, exist_ok=True)
        target = non_clobbering_path(self.assets_dir, path.stem, path.suffix)
        shutil.copy2(path, target)
        return target

    @staticmethod
    def _move_into(assets: list[Asset], directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        for asset in assets:
            if asset.path.parent == directory:
                continue
            target = non_clobbering_path(directory, asset.path.stem, asset.path.suffix)
            shutil.move(str(asset.path), str(target))
            asset.path = target
