"""Embed tag names as keywords into exported JPEG and PNG copies."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import piexif
from PIL import Image, PngImagePlugin

logger = logging.getLogger(__name__)

XP_KEYWORDS_TAG = getattr(piexif.ImageIFD, "XPKeywords", 0x9C9E)
XP_TITLE_TAG = getattr(piexif.ImageIFD, "XPTitle", 0x9C9B)


def _ensure_bytes(raw: object) -> bytes:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    if isinstance(raw, (tuple, list)):
        try:
            return bytes(int(item) & 0xFF for item in raw)
        except (TypeError, ValueError):
            return b""
    return b""


def _decode_utf8(raw: object) -> str:
    data = _ensure_bytes(raw)
    if not data:
        return ""
    return data.decode("utf-8", errors="ignore").strip()


def _decode_xp_keywords(raw: object) -> list[str]:
    data = _ensure_bytes(raw)
    if not data:
        return []
    decoded = data.decode("utf-16le", errors="ignore").rstrip("\x00").split("\x00")
    return [item for item in decoded if item]


def _merge(existing: Iterable[str], extra: Iterable[str]) -> list[str]:
    merged: list[str] = []
    for value in [*existing, *extra]:
        if value and value not in merged:
            merged.append(value)
    return merged


class UnsupportedFormatError(RuntimeError):
    """Raised when attempting to embed metadata into an unsupported image type."""


class MetadataWriter:
    """Add keywords (and a title when none is present) to an image file.

    Keywords already in the file are kept; new ones are appended after them.
    """

    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png"}

    def write(self, path: Path, *, keywords: Iterable[str], title: str | None = None) -> bool:
        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(f"{ext} does not support embedded metadata.")

        keywords = [str(keyword) for keyword in keywords]
        if not keywords and not title:
            return False
        if ext == ".png":
            return self._write_png(path, keywords=keywords, title=title)
        return self._write_jpeg(path, keywords=keywords, title=title)

    def _write_jpeg(self, path: Path, *, keywords: list[str], title: str | None) -> bool:
        with Image.open(path) as image:
            exif_blob = image.info.get("exif")
        if exif_blob:
            exif_dict = piexif.load(exif_blob)
        else:
            exif_dict = {"0th": {}, "Exif": {}, "GPS": {}, "1st": {}, "Interop": {}, "thumbnail": None}

        zeroth = exif_dict.setdefault("0th", {})
        merged = _merge(_decode_xp_keywords(zeroth.get(XP_KEYWORDS_TAG, b"")), keywords)
        if merged:
            zeroth[XP_KEYWORDS_TAG] = "\x00".join(merged).encode("utf-16le") + b"\x00\x00"

        if title and not _decode_utf8(zeroth.get(piexif.ImageIFD.ImageDescription, b"")):
            zeroth[piexif.ImageIFD.ImageDescription] = title.encode("utf-8")
            zeroth[XP_TITLE_TAG] = title.encode("utf-16le") + b"\x00\x00"

        # Thumbnails with stale dimensions make piexif.dump fail; they are not needed here.
        exif_dict["thumbnail"] = None
        exif_dict["1st"] = {}
        exif_bytes = piexif.dump(exif_dict)
        piexif.insert(exif_bytes, str(path))
        logger.debug("Embedded %d keywords into %s", len(merged), path)
        return True

    def _write_png(self, path: Path, *, keywords: list[str], title: str | None) -> bool:
        with Image.open(path) as source:
            image = source.copy()
            text_chunks = {
                key: value for key, value in source.info.items() if isinstance(value, str)
            }
        existing = [item.strip() for item in text_chunks.get("Keywords", "").split(",")]
        merged = _merge(existing, keywords)

        png_info = PngImagePlugin.PngInfo()
        for key, value in text_chunks.items():
            if key not in {"Keywords", "Title"}:
                png_info.add_text(key, value)
        png_info.add_text("Keywords", ",".join(merged))
        current_title = text_chunks.get("Title", "").strip()
        if current_title or title:
            png_info.add_text("Title", current_title or title or "")
        image.save(path, format="PNG", pnginfo=png_info)
        logger.debug("Embedded %d keywords into %s", len(merged), path)
        return True
