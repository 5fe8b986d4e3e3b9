"""String helpers for filename sanitisation and tag name ordering."""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

import icu

DEFAULT_COLLATION_LOCALE = "zh_CN"

_UNSAFE_PATTERN = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def safe_filename_stem(text: str, *, max_length: int = 120, default: str = "image") -> str:
    """Return ``text`` usable as a filename stem.

    Unlike an ASCII slug this keeps non-Latin tag names intact; only path
    separators, characters Windows refuses and control characters are
    replaced with ``-``.
    """
    normalized = unicodedata.normalize("NFC", text)
    replaced = _UNSAFE_PATTERN.sub("-", normalized).strip(" .")
    if not replaced:
        return default
    return replaced[:max_length].rstrip(" .") or default


def collation_key(name: str, locale: str = DEFAULT_COLLATION_LOCALE) -> tuple[bytes, str]:
    """Sort key ordering names the way ``locale`` orders them.

    Chinese locales order Han names by pinyin. The raw name breaks ties so
    ordering stays total and deterministic.
    """
    return _collator(locale).getSortKey(name), name


@lru_cache(maxsize=None)
def _collator(locale: str) -> icu.Collator:
    return icu.Collator.createInstance(icu.Locale(locale))
