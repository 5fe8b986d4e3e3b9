"""Utility helpers for the pictaging library."""

from .paths import image_suffix, is_image_file, non_clobbering_path, uri_to_path
from .text import DEFAULT_COLLATION_LOCALE, collation_key, safe_filename_stem

__all__ = [
    "DEFAULT_COLLATION_LOCALE",
    "collation_key",
    "image_suffix",
    "is_image_file",
    "non_clobbering_path",
    "safe_filename_stem",
    "uri_to_path",
]
