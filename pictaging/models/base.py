"""Value types describing tags, tag groups and captured images."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping


@dataclass(slots=True, frozen=True)
class Tag:
    """A single tag as stored in the catalog or copied onto an image.

    Tags are values: an image keeps its own copy, so later catalog edits never
    reach tags that were already saved on an image.
    """

    id: str
    name: str
    group_id: str | None = None
    is_time_tag: bool = False

    def with_group(self, group_id: str) -> "Tag":
        """Return a copy stamped with the group it was selected through."""
        return replace(self, group_id=group_id)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.group_id is not None:
            payload["groupId"] = self.group_id
        if self.is_time_tag:
            payload["isTimeTag"] = True
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tag":
        group_id = data.get("groupId")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            group_id=str(group_id) if group_id is not None else None,
            is_time_tag=bool(data.get("isTimeTag", False)),
        )


@dataclass(slots=True)
class TagGroup:
    """A named, ordered set of catalog tags."""

    id: str
    name: str
    tags: list[Tag] = field(default_factory=list)

    def find_tag(self, tag_id: str) -> Tag | None:
        return next((tag for tag in self.tags if tag.id == tag_id), None)

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "tags": [tag.as_dict() for tag in self.tags]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TagGroup":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            tags=[Tag.from_dict(item) for item in data.get("tags") or []],
        )


@dataclass(slots=True)
class ImageItem:
    """A captured photo together with the tags saved on it."""

    id: str
    uri: str
    tags: list[Tag] = field(default_factory=list)

    @property
    def time_tag(self) -> Tag | None:
        return next((tag for tag in self.tags if tag.is_time_tag), None)

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "uri": self.uri, "tags": [tag.as_dict() for tag in self.tags]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageItem":
        return cls(
            id=str(data["id"]),
            uri=str(data["uri"]),
            tags=[Tag.from_dict(item) for item in data.get("tags") or []],
        )


def tag_names(tags: Iterable[Tag]) -> list[str]:
    return [tag.name for tag in tags]
