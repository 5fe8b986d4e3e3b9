"""Application-wide configuration models and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .utils.text import DEFAULT_COLLATION_LOCALE

DEFAULT_ALBUM_NAME = "picTaging"
MAX_IMAGES = 80


class PermissionKind(str, Enum):
    """Device permissions the application may ask for."""

    CAMERA = "camera"
    LIBRARY = "library"


def default_data_root() -> Path:
    if os.name == "nt":
        base = Path(os.getenv("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    else:
        base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base.expanduser() / "pictaging"


class AppConfig(BaseModel):
    """Validates and stores runtime settings for the application."""

    data_directory: Path = Field(
        default_factory=lambda: default_data_root() / "data",
        description="Directory holding the persisted image and tag group documents.",
    )
    photos_directory: Path = Field(
        default_factory=lambda: default_data_root() / "photos",
        description="Directory where captured photos are kept.",
    )
    library_directory: Path = Field(
        default_factory=lambda: default_data_root() / "library",
        description="Root of the local photo library that exports are written to.",
    )
    staging_directory: Path | None = Field(
        default=None,
        description="Optional directory for temporary export copies; a private temp dir if unset.",
    )
    album_name: str = Field(
        default=DEFAULT_ALBUM_NAME,
        description="Name of the library album that exports are collected in.",
    )
    batch_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of images staged before they are attached to the album.",
    )
    filename_separator: str = Field(
        default="_",
        description="Separator placed between tag names in exported filenames.",
    )
    max_images: int = Field(
        default=MAX_IMAGES,
        ge=1,
        le=MAX_IMAGES,
        description="Maximum number of images the collection may hold.",
    )
    embed_keywords: bool = Field(
        default=True,
        description="When true, write tag names as keywords into exported JPEG/PNG copies.",
    )
    granted_permissions: list[PermissionKind] = Field(
        default_factory=lambda: [PermissionKind.CAMERA, PermissionKind.LIBRARY],
        description="Permissions answered with 'granted' by the local device services.",
    )
    localization: str = Field(
        default=DEFAULT_COLLATION_LOCALE,
        description="ICU locale used to order tag names when they are saved, e.g. zh_CN or en_US.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level used by the command line interface.",
    )

    @field_validator("album_name")
    @classmethod
    def _validate_album_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Album name must not be empty.")
        if "/" in value or "\\" in value:
            raise ValueError("Album name must not contain path separators.")
        return value

    @field_validator("filename_separator")
    @classmethod
    def _validate_separator(cls, value: str) -> str:
        if not value:
            raise ValueError("Filename separator must not be empty.")
        if "/" in value or "\\" in value:
            raise ValueError("Filename separator must not contain path separators.")
        return value

    @field_validator("localization")
    @classmethod
    def _validate_localization(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Localization must name a locale.")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.strip().upper() or "WARNING"
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level '{value}'.")
        return value

    def as_dict(self) -> dict[str, Any]:
        """Serialize the configuration to primitive Python types."""
        return self.model_dump(mode="json")

    @classmethod
    def load(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML or JSON file."""
        data = _read_config_file(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:  # pragma: no cover - pass through details
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        """Persist configuration to a YAML file."""
        _write_config_file(path, self.as_dict())


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    return json.loads(text)


def _write_config_file(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in {".yaml", ".yml"}:
        yaml_text = yaml.safe_dump(
            data,
            allow_unicode=True,
            sort_keys=False,
        )
        path.write_text(yaml_text, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
