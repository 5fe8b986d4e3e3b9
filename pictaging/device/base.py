"""Interfaces for the device services the application depends on."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from ..config import PermissionKind


@dataclass(slots=True)
class Asset:
    """A photo that exists in the device library."""

    id: str
    path: Path


@dataclass(slots=True)
class Album:
    """A named album inside the device library."""

    id: str
    name: str
    path: Path


class PermissionService(Protocol):
    async def request(self, kind: PermissionKind) -> bool:
        """Ask for ``kind`` and return True when it was granted."""


class CaptureService(Protocol):
    async def capture(self) -> str | None:
        """Take a photo and return a reference to it, or None if cancelled."""


class StagingArea(Protocol):
    def stage(self, uri: str, name: str) -> AbstractAsyncContextManager[Path]:
        """Copy ``uri`` to a temporary file named ``name``.

        The copy is removed when the context exits, whether or not the body
        raised.
        """


class PhotoLibrary(Protocol):
    async def get_album(self, name: str) -> Album | None:
        """Return the album called ``name`` if it exists."""

    async def create_album(self, name: str, seed: Asset) -> Album:
        """Create an album containing ``seed``."""

    async def create_asset(self, path: Path) -> Asset:
        """Import the file at ``path`` into the library."""

    async def add_assets_to_album(self, assets: Sequence[Asset], album: Album) -> None:
        """Attach ``assets`` to ``album`` in one call."""
