"""Tests for the image collection manager."""

from __future__ import annotations

import pytest
from pictaging.config import PermissionKind
from pictaging.device.local import StaticPermissionService
from pictaging.errors import CapacityError, PermissionDenied
from pictaging.io.document_store import DocumentStore
from pictaging.models.base import ImageItem, Tag
from pictaging.services.collection import ImageCollection


class DummyCamera:
    def __init__(self, uri: str | None) -> None:
        self.uri = uri
        self.calls = 0

    async def capture(self) -> str | None:
        self.calls += 1
        return self.uri


@pytest.fixture()
def store(tmp_path) -> DocumentStore:
    return DocumentStore(tmp_path)


@pytest.mark.asyncio
async def test_capture_appends_untagged_image_and_persists(store):
    collection = ImageCollection(store)

    image = await collection.capture("/photos/1.jpg")

    assert image.tags == []
    assert collection.images == (image,)
    assert await store.load_images() == [image]


@pytest.mark.asyncio
async def test_capture_rejects_when_full(store):
    await store.save_images([ImageItem(id=str(i), uri=f"/p/{i}.jpg") for i in range(80)])
    collection = ImageCollection(store)
    await collection.load()

    with pytest.raises(CapacityError) as info:
        await collection.capture("/p/extra.jpg")

    assert info.value.limit == 80
    assert len(collection) == 80
    assert len(await store.load_images()) == 80


@pytest.mark.asyncio
async def test_capture_from_checks_capacity_before_camera(store):
    collection = ImageCollection(store, max_images=1)
    await collection.capture("/p/0.jpg")
    camera = DummyCamera("/p/1.jpg")
    permissions = StaticPermissionService([PermissionKind.CAMERA])

    with pytest.raises(CapacityError):
        await collection.capture_from(camera, permissions)

    assert camera.calls == 0
    assert permissions.requested == []


@pytest.mark.asyncio
async def test_capture_from_requires_camera_permission(store):
    collection = ImageCollection(store)
    camera = DummyCamera("/p/1.jpg")

    with pytest.raises(PermissionDenied):
        await collection.capture_from(camera, StaticPermissionService([]))

    assert camera.calls == 0
    assert len(collection) == 0


@pytest.mark.asyncio
async def test_capture_from_handles_cancel_and_success(store):
    collection = ImageCollection(store)
    permissions = StaticPermissionService([PermissionKind.CAMERA])

    assert await collection.capture_from(DummyCamera(None), permissions) is None
    image = await collection.capture_from(DummyCamera("/p/1.jpg"), permissions)

    assert image.uri == "/p/1.jpg"
    assert len(collection) == 1


@pytest.mark.asyncio
async def test_update_tags_replaces_in_place(store):
    collection = ImageCollection(store)
    first = await collection.capture("/p/1.jpg")
    second = await collection.capture("/p/2.jpg")
    tags = [Tag("t1", "Mom", "g1")]

    await collection.update_tags(second.id, tags)

    assert [image.id for image in collection.images] == [first.id, second.id]
    assert collection.get(second.id).tags == tags
    assert (await store.load_images())[1].tags == tags


@pytest.mark.asyncio
async def test_update_tags_leaves_earlier_snapshots_alone(store):
    collection = ImageCollection(store)
    image = await collection.capture("/p/1.jpg")
    await collection.update_tags(image.id, [Tag("t1", "Mom", "g1")])
    snapshot = collection.images

    await collection.update_tags(image.id, [Tag("t2", "Dad", "g1")])

    assert snapshot[0].tags == [Tag("t1", "Mom", "g1")]
    assert collection.get(image.id).tags == [Tag("t2", "Dad", "g1")]


@pytest.mark.asyncio
async def test_update_tags_unknown_image_is_noop(store):
    collection = ImageCollection(store)

    assert await collection.update_tags("missing", [Tag("t1", "Mom")]) is None
    assert await store.read("images") is None


@pytest.mark.asyncio
async def test_delete_and_clear_all(store):
    collection = ImageCollection(store)
    first = await collection.capture("/p/1.jpg")
    second = await collection.capture("/p/2.jpg")

    await collection.delete(first.id)
    assert [image.id for image in await store.load_images()] == [second.id]

    await collection.clear_all()
    assert collection.images == ()
    assert await store.read("images") == []
