"""Tests for filesystem helper utilities."""

from __future__ import annotations

from pathlib import Path

from pictaging.utils.paths import image_suffix, is_image_file, non_clobbering_path, uri_to_path


def test_is_image_file_with_custom_extensions(tmp_path):
    path = tmp_path / "sample.custom"
    path.write_text("data", encoding="utf-8")

    assert not is_image_file(path)
    assert is_image_file(path, extensions=[".custom"])
    assert is_image_file(tmp_path / "photo.JPG")


def test_image_suffix_defaults_to_jpeg():
    assert image_suffix("/photos/a.PNG") == ".png"
    assert image_suffix("/photos/noext") == ".jpg"
    assert image_suffix("/photos/file.txt") == ".jpg"


def test_non_clobbering_path_numbers_existing_files(tmp_path):
    first = non_clobbering_path(tmp_path, "Mom", ".jpg")
    assert first == tmp_path / "Mom.jpg"
    first.write_bytes(b"x")

    second = non_clobbering_path(tmp_path, "Mom", ".jpg")
    assert second == tmp_path / "Mom-1.jpg"
    second.write_bytes(b"x")

    assert non_clobbering_path(tmp_path, "Mom", ".jpg") == tmp_path / "Mom-2.jpg"


def test_uri_to_path_accepts_file_uris():
    assert uri_to_path("file:///tmp/a%20b.jpg") == Path("/tmp/a b.jpg")
    assert uri_to_path("/tmp/c.jpg") == Path("/tmp/c.jpg")
