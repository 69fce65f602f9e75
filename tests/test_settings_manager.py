"""Tests for the settings manager and schema."""

import json

import pytest

pytest.importorskip("PySide6.QtTest", reason="Qt test utilities unavailable", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy

from intent.errors import SettingsLoadError, SettingsValidationError
from intent.settings.manager import SettingsManager
from intent.settings.schema import DEFAULT_SETTINGS, merge_with_defaults


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "config" / "settings.json"


@pytest.fixture
def manager(qapp, settings_path):
    manager = SettingsManager(settings_path)
    manager.load()
    return manager


def test_load_creates_defaults(manager, settings_path):
    assert settings_path.exists()
    assert json.loads(settings_path.read_text())["schema"] == "intent/settings@1"
    assert manager.get("editor.show_grid") is True
    assert manager.get("editor.default_aspect_ratio") == "Free"
    assert manager.get("editor.missing", "fallback") == "fallback"


def test_set_persists_and_emits(manager, settings_path):
    spy = QSignalSpy(manager.settingsChanged)
    received = []
    manager.settingsChanged.connect(lambda key, value: received.append((key, value)))

    manager.set("editor.default_aspect_ratio", "16:9")

    assert spy.count() == 1
    assert received == [("editor.default_aspect_ratio", "16:9")]
    reloaded = SettingsManager(settings_path)
    reloaded.load()
    assert reloaded.get("editor.default_aspect_ratio") == "16:9"


def test_invalid_value_is_rejected(manager):
    spy = QSignalSpy(manager.settingsChanged)
    with pytest.raises(SettingsValidationError):
        manager.set("editor.jpeg_quality", 3)
    assert manager.get("editor.jpeg_quality") == DEFAULT_SETTINGS["editor"]["jpeg_quality"]
    assert spy.count() == 0


def test_corrupt_file_raises_load_error(qapp, settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json")
    with pytest.raises(SettingsLoadError):
        SettingsManager(settings_path).load()


def test_paths_default_next_to_settings(manager, settings_path, tmp_path):
    assert manager.database_path() == settings_path.parent / "projects.db"
    assert manager.export_directory() == settings_path.parent / "exported"
    manager.set("export_directory", tmp_path / "out")
    assert manager.export_directory() == tmp_path / "out"


def test_merge_keeps_unknown_editor_keys():
    merged = merge_with_defaults({"editor": {"show_grid": False, "extra": 1}})
    assert merged["editor"]["show_grid"] is False
    assert merged["editor"]["extra"] == 1
    assert merged["editor"]["jpeg_quality"] == DEFAULT_SETTINGS["editor"]["jpeg_quality"]
