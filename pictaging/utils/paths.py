"""Path helpers used across the application."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from urllib.parse import unquote, urlparse

IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".webp",
    ".bmp",
    ".tiff",
    ".tif",
    ".gif",
    ".heic",
}


def is_image_file(path: Path, *, extensions: Iterable[str] | None = None) -> bool:
    """Return True if the given path has a supported image extension."""
    exts = {ext.lower() for ext in (extensions or IMAGE_EXTENSIONS)}
    return path.suffix.lower() in exts


def image_suffix(uri: str, default: str = ".jpg") -> str:
    """Return the lowercase image extension of ``uri`` or ``default``."""
    suffix = Path(uri).suffix.lower()
    return suffix if suffix in IMAGE_EXTENSIONS else default


def non_clobbering_path(directory: Path, stem: str, suffix: str) -> Path:
    """Return ``directory/stem+suffix``, numbering it ``stem-1`` etc. if taken."""
    candidate = directory / f"{stem}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return candidate


def uri_to_path(uri: str) -> Path:
    """Resolve a ``file://`` URI or plain path string to a filesystem path."""
    if uri.startswith("file://"):
        return Path(unquote(urlparse(uri).path))
    return Path(uri).expanduser()
