"""Tests for the filesystem-backed device services."""

from __future__ import annotations

import pytest
from PIL import Image
from pictaging.config import PermissionKind
from pictaging.device.local import (
    DirectoryPhotoLibrary,
    FileImportCapture,
    StaticPermissionService,
    TemporaryStagingArea,
)
from pictaging.errors import AssetCreationError
from pictaging.models.ids import IdGenerator


def _create_image(path) -> None:
    Image.new("RGB", (4, 4), color=(123, 222, 111)).save(path)


@pytest.mark.asyncio
async def test_static_permissions_record_requests():
    service = StaticPermissionService([PermissionKind.LIBRARY])

    assert await service.request(PermissionKind.LIBRARY) is True
    assert await service.request(PermissionKind.CAMERA) is False
    assert service.requested == [PermissionKind.LIBRARY, PermissionKind.CAMERA]


@pytest.mark.asyncio
async def test_file_import_capture_copies_into_photo_dir(tmp_path):
    source = tmp_path / "IMG_0001.JPG"
    _create_image(source)
    photos = tmp_path / "photos"

    first = await FileImportCapture(photos, source).capture()
    second = await FileImportCapture(photos, source).capture()

    assert first == str(photos / "IMG_0001.jpg")
    assert second == str(photos / "IMG_0001-1.jpg")
    assert source.exists()


@pytest.mark.asyncio
async def test_file_import_capture_rejects_bad_sources(tmp_path):
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello", encoding="utf-8")

    assert await FileImportCapture(tmp_path / "photos").capture() is None
    with pytest.raises(ValueError):
        await FileImportCapture(tmp_path / "photos", text_file).capture()
    with pytest.raises(FileNotFoundError):
        await FileImportCapture(tmp_path / "photos", tmp_path / "missing.jpg").capture()


@pytest.mark.asyncio
async def test_staging_releases_copy_on_success_and_failure(tmp_path):
    source = tmp_path / "photo.png"
    _create_image(source)
    staging = TemporaryStagingArea(tmp_path / "staging")

    async with staging.stage(str(source), "Mom") as staged:
        assert staged == tmp_path / "staging" / "Mom.png"
        assert staged.read_bytes() == source.read_bytes()
    assert not staged.exists()

    with pytest.raises(RuntimeError):
        async with staging.stage(source.as_uri(), "Dad") as staged:
            assert staged.exists()
            raise RuntimeError("asset creation failed")
    assert not staged.exists()


@pytest.mark.asyncio
async def test_staging_missing_source_raises_and_leaves_nothing(tmp_path):
    staging = TemporaryStagingArea(tmp_path / "staging")

    with pytest.raises(FileNotFoundError):
        async with staging.stage(str(tmp_path / "gone.jpg"), "Mom"):
            pass

    assert list((tmp_path / "staging").iterdir()) == []


def test_staging_uses_private_temp_dir_by_default():
    staging = TemporaryStagingArea()

    assert staging.root.is_dir()
    assert staging.root.name.startswith("pictaging-")
    staging.root.rmdir()


@pytest.mark.asyncio
async def test_directory_library_album_lifecycle(tmp_path):
    library = DirectoryPhotoLibrary(tmp_path / "library", ids=IdGenerator(clock=lambda: 1.0))
    staged = tmp_path / "Mom.jpg"
    _create_image(staged)

    assert await library.get_album("picTaging") is None

    seed = await library.create_asset(staged)
    album = await library.create_album("picTaging", seed)
    first = await library.create_asset(staged)
    second = await library.create_asset(staged)
    await library.add_assets_to_album([first, second], album)

    assert seed.id != first.id != second.id
    assert (await library.get_album("picTaging")).path == album.path
    names = sorted(path.name for path in album.path.iterdir())
    assert names == ["Mom-1-1.jpg", "Mom-1.jpg", "Mom.jpg"]
    assert first.path.parent == album.path
    assert list((tmp_path / "library" / "assets").iterdir()) == []


@pytest.mark.asyncio
async def test_directory_library_create_asset_failure(tmp_path):
    library = DirectoryPhotoLibrary(tmp_path / "library")

    with pytest.raises(AssetCreationError):
        await library.create_asset(tmp_path / "missing.jpg")
