"""Tests for the settings store helpers."""

from __future__ import annotations

from types import SimpleNamespace

from pictaging.config import AppConfig
from pictaging.settings_store import SettingsStore, default_settings_path


def _fake_os(name: str, **env: str) -> SimpleNamespace:
    def getenv(key: str, default=None):
        return env.get(key, default)

    return SimpleNamespace(name=name, getenv=getenv)


def test_default_settings_path_respects_xdg(monkeypatch, tmp_path):
    config_root = tmp_path / "xdg"
    fake_os = _fake_os("posix", XDG_CONFIG_HOME=str(config_root))
    monkeypatch.setattr("pictaging.settings_store.os", fake_os)

    assert default_settings_path() == config_root / "pictaging" / "settings.yaml"


def test_default_settings_path_windows(monkeypatch, tmp_path):
    appdata = tmp_path / "AppData" / "Roaming"
    fake_os = _fake_os("nt", APPDATA=str(appdata))
    monkeypatch.setattr("pictaging.settings_store.os", fake_os)

    assert default_settings_path() == appdata / "pictaging" / "settings.yaml"


def test_settings_store_round_trip(tmp_path):
    target_path = tmp_path / "settings.yaml"
    store = SettingsStore(path=target_path)
    original = AppConfig(album_name="Holiday", batch_size=3, embed_keywords=False)

    store.save(original)
    loaded = store.load()

    assert loaded.album_name == "Holiday"
    assert loaded.batch_size == 3
    assert loaded.embed_keywords is False
    assert target_path.exists()


def test_settings_store_loads_defaults_when_missing(tmp_path):
    store = SettingsStore(path=tmp_path / "missing.yaml")

    config = store.load()

    assert config.album_name == "picTaging"
    assert config.batch_size == 10


def test_prepare_directories_creates_all_roots(tmp_path):
    config = AppConfig(
        data_directory=tmp_path / "data",
        photos_directory=tmp_path / "photos",
        library_directory=tmp_path / "library",
    )

    SettingsStore.prepare_directories(config)

    assert (tmp_path / "data").is_dir()
    assert (tmp_path / "photos").is_dir()
    assert (tmp_path / "library").is_dir()
