"""Tests for the JSON settings document and its backup fallback."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from material_browser.errors import SettingsError
from material_browser.settings import (
    DEFAULT_SETTINGS,
    MaterialBrowserSettings,
    backup_path_for,
    install_default_settings,
)


@pytest.fixture()
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


def test_read_primary_document(settings_path: Path) -> None:
    settings_path.write_text(json.dumps({"zoom_value": 96, "display_name": False}))
    settings = MaterialBrowserSettings(settings_path)

    settings.read()

    assert settings.zoom_value == 96
    assert settings.display_name is False


def test_corrupt_primary_falls_back_to_backup(settings_path: Path) -> None:
    settings_path.write_text("{not json")
    backup_path_for(settings_path).write_text(json.dumps({"type_filter_value": "custom"}))
    settings = MaterialBrowserSettings(settings_path)

    settings.read()

    assert settings.type_filter_value == "custom"


def test_missing_primary_falls_back_to_backup(settings_path: Path) -> None:
    install_default_settings(settings_path)
    settings = MaterialBrowserSettings(settings_path)

    settings.read()

    assert settings.as_dict() == dict(DEFAULT_SETTINGS)


def test_backup_failure_is_fatal(settings_path: Path) -> None:
    settings_path.write_text("[]")
    backup_path_for(settings_path).write_text("also broken {")

    with pytest.raises(SettingsError):
        MaterialBrowserSettings(settings_path).read()


def test_write_overwrites_whole_document_pretty_printed(settings_path: Path) -> None:
    settings_path.write_text(json.dumps({"zoom_value": 64, "stale": True}))
    settings = MaterialBrowserSettings(settings_path)
    settings.read()

    settings.zoom_value = 160
    settings.custom_skm_path = "/Volumes/Materials"
    settings.write()

    text = settings_path.read_text()
    assert "\n  " in text
    assert json.loads(text) == {"zoom_value": 160, "stale": True, "custom_skm_path": "/Volumes/Materials"}


def test_install_default_settings_keeps_existing_backup(settings_path: Path) -> None:
    backup = backup_path_for(settings_path)
    backup.write_text(json.dumps({"zoom_value": 50}))

    install_default_settings(settings_path)

    assert json.loads(backup.read_text()) == {"zoom_value": 50}


@pytest.mark.parametrize(
    ("attribute", "value"),
    [
        ("zoom_value", "128"),
        ("zoom_value", True),
        ("display_name", 1),
        ("display_source", "yes"),
        ("display_only_model", None),
        ("custom_skm_path", Path("/tmp")),
        ("type_filter_value", 3),
    ],
)
def test_setters_reject_wrong_types(settings_path: Path, attribute: str, value: object) -> None:
    settings = MaterialBrowserSettings(settings_path)

    with pytest.raises(TypeError):
        setattr(settings, attribute, value)


def test_setters_store_valid_values(settings_path: Path) -> None:
    settings = MaterialBrowserSettings(settings_path)

    settings.display_source = True
    settings.display_only_model = False
    settings.type_filter_value = "stock"

    assert settings.as_dict() == {
        "display_source": True,
        "display_only_model": False,
        "type_filter_value": "stock",
    }
