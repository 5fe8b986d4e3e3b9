"""Command line entry point for the pictaging project."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import AppConfig, DocumentStore, ExportPipeline, ImageCollection, SettingsStore, TagCatalog
from .device.local import (
    DirectoryPhotoLibrary,
    FileImportCapture,
    StaticPermissionService,
    TemporaryStagingArea,
)
from .errors import PersistenceError, PictagingError
from .services.catalog import filter_groups
from .services.editor import TagEditor

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pictaging", description="Photo tagging and export")
    parser.add_argument("--config", type=Path, help="Settings file to use instead of the default.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    groups = commands.add_parser("groups", help="Manage tag groups.").add_subparsers(
        dest="action", required=True
    )
    groups.add_parser("list", help="Print all tag groups.")
    add_group = groups.add_parser("add", help="Create a tag group.")
    add_group.add_argument("name")
    add_tag = groups.add_parser("add-tag", help="Add a tag to a group.")
    add_tag.add_argument("group_id")
    add_tag.add_argument("name")
    delete_group = groups.add_parser("delete", help="Delete a group and its tags.")
    delete_group.add_argument("group_id")
    delete_tag = groups.add_parser("delete-tag", help="Delete one tag from a group.")
    delete_tag.add_argument("group_id")
    delete_tag.add_argument("tag_id")
    search = groups.add_parser("search", help="Show groups with tags matching a query.")
    search.add_argument("query")

    images = commands.add_parser("images", help="Manage captured images.").add_subparsers(
        dest="action", required=True
    )
    images.add_parser("list", help="Print all images with their tags.")
    capture = images.add_parser("capture", help="Add an image file to the collection.")
    capture.add_argument("path", type=Path)
    tag = images.add_parser("tag", help="Edit and save the tags of an image.")
    tag.add_argument("image_id")
    tag.add_argument(
        "--tag",
        dest="toggles",
        action="append",
        default=[],
        metavar="GROUP_ID:TAG_ID",
        help="Toggle a catalog tag; may be repeated.",
    )
    tag.add_argument("--time", dest="time_tag", help="Set the time tag.")
    tag.add_argument("--remove-time", action="store_true", help="Remove the time tag.")
    tag.add_argument("--clear", action="store_true", help="Remove all tags before toggling.")
    delete = images.add_parser("delete", help="Delete one image.")
    delete.add_argument("image_id")
    delete.add_argument("--yes", action="store_true", help="Confirm the deletion.")
    clear = images.add_parser("clear", help="Delete every image.")
    clear.add_argument("--yes", action="store_true", help="Confirm the deletion.")

    commands.add_parser("export", help="Export all images into the library album.")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "images" and args.action in {"delete", "clear"} and not args.yes:
        parser.error("deleting images requires --yes")

    store = SettingsStore(args.config)
    try:
        config = store.load()
    except (ValueError, OSError) as exc:
        parser.exit(1, f"error: {exc}\n")
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.log_level)

    try:
        payload = asyncio.run(run_command(args, config))
    except PersistenceError as exc:
        logger.warning("%s", exc)
        parser.exit(2, f"warning: {exc}\n")
    except (PictagingError, LookupError, ValueError, OSError) as exc:
        parser.exit(1, f"error: {exc}\n")

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


async def run_command(args: argparse.Namespace, config: AppConfig) -> Any:
    documents = DocumentStore(config.data_directory.expanduser())
    catalog = TagCatalog(documents)
    collection = ImageCollection(documents, max_images=config.max_images)
    await catalog.load()
    await collection.load()
    permissions = StaticPermissionService(config.granted_permissions)

    if args.command == "groups":
        return await _run_groups(args, catalog)
    if args.command == "images":
        return await _run_images(args, config, catalog, collection, permissions)

    pipeline = ExportPipeline.from_config(
        config,
        library=DirectoryPhotoLibrary(config.library_directory.expanduser()),
        staging=TemporaryStagingArea(config.staging_directory),
        permissions=permissions,
    )
    summary = await pipeline.export(collection.images)
    return {
        "album": config.album_name,
        "exported": summary.exported_count,
        "total": summary.total_count,
    }


async def _run_groups(args: argparse.Namespace, catalog: TagCatalog) -> Any:
    if args.action == "list":
        return [group.as_dict() for group in catalog.list_groups()]
    if args.action == "search":
        return [group.as_dict() for group in filter_groups(catalog.list_groups(), args.query)]
    if args.action == "add":
        result = await catalog.add_group(args.name)
    elif args.action == "add-tag":
        result = await catalog.add_tag(args.group_id, args.name)
    elif args.action == "delete":
        result = await catalog.delete_group(args.group_id)
    else:
        result = await catalog.delete_tag(args.group_id, args.tag_id)
    return result.as_dict() if result is not None else None


async def _run_images(
    args: argparse.Namespace,
    config: AppConfig,
    catalog: TagCatalog,
    collection: ImageCollection,
    permissions: StaticPermissionService,
) -> Any:
    if args.action == "list":
        return [image.as_dict() for image in collection.images]
    if args.action == "capture":
        camera = FileImportCapture(config.photos_directory.expanduser(), args.path)
        image = await collection.capture_from(camera, permissions)
        return image.as_dict() if image is not None else None
    if args.action == "delete":
        await collection.delete(args.image_id)
        return {"deleted": args.image_id, "remaining": len(collection)}
    if args.action == "clear":
        await collection.clear_all()
        return {"deleted": "all", "remaining": 0}

    image = collection.get(args.image_id)
    if image is None:
        raise LookupError(f"Unknown image '{args.image_id}'")
    editor = TagEditor(catalog, collection, image, locale=config.localization)
    if args.clear:
        editor.selection.clear_all_tags(lambda: True)
    if args.remove_time:
        editor.selection.remove_time_tag()
    for toggle in args.toggles:
        group_id, _, tag_id = toggle.partition(":")
        if not tag_id:
            raise ValueError(f"Expected GROUP_ID:TAG_ID, got '{toggle}'")
        editor.select(group_id, tag_id)
    if args.time_tag:
        editor.selection.add_time_tag(args.time_tag)
    tags = await editor.save()
    return {"id": image.id, "tags": [tag.as_dict() for tag in tags]}


if __name__ == "__main__":  # pragma: no cover
    main()
