"""Persistence helpers for user-configurable browser settings.

Settings live in a single pretty-printed JSON document. When the document is
missing or corrupt the backup document next to it (``settings.json.backup``)
is read instead; if that fails as well the settings cannot be loaded.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .errors import SettingsError

__all__ = [
    "BACKUP_SUFFIX",
    "DEFAULT_SETTINGS",
    "MaterialBrowserSettings",
    "TYPE_FILTER_VALUES",
    "backup_path_for",
    "install_default_settings",
]

logger = logging.getLogger(__name__)

BACKUP_SUFFIX: Final[str] = ".backup"
"""Suffix appended to the settings path to locate the fallback document."""

TYPE_FILTER_VALUES: Final[tuple[str, ...]] = ("all", "stock", "custom")
"""Values understood by the browser's material type filter."""

DEFAULT_SETTINGS: Final[Mapping[str, Any]] = {
    "zoom_value": 128,
    "display_name": True,
    "display_source": False,
    "display_only_model": False,
    "custom_skm_path": "",
    "type_filter_value": "all",
}
"""Baseline document written as the backup on first run."""


def backup_path_for(path: Path) -> Path:
    """Return the backup document location for *path*."""

    return path.with_name(path.name + BACKUP_SUFFIX)


def install_default_settings(path: Path) -> Path:
    """Write :data:`DEFAULT_SETTINGS` to the backup document when it is missing."""

    backup = backup_path_for(path)
    if not backup.exists():
        backup.parent.mkdir(parents=True, exist_ok=True)
        backup.write_text(json.dumps(dict(DEFAULT_SETTINGS), indent=2), encoding="utf-8")
        logger.debug("Installed default settings backup at %s", backup)
    return backup


def _load_document(path: Path) -> dict[str, Any]:
    parsed = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(parsed, dict):
        raise json.JSONDecodeError("Settings document must be a JSON object", "", 0)
    return parsed


def _require_bool(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a Boolean.")
    return value


def _require_str(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a String.")
    return value


class MaterialBrowserSettings:
    """User-defined settings backed by a JSON document."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._settings: dict[str, Any] = {}

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return backup_path_for(self._path)

    def read(self) -> None:
        """Load the settings document, falling back to the backup document."""

        try:
            self._settings = _load_document(self._path)
            return
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Error: unable to read settings from %s: %s", self._path, exc)

        try:
            self._settings = _load_document(self.backup_path)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SettingsError(f"Unable to read settings backup {self.backup_path!s}: {exc}") from exc

    def write(self) -> None:
        """Overwrite the settings document with the current values."""

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._settings, indent=2), encoding="utf-8")

    def as_dict(self) -> dict[str, Any]:
        return dict(self._settings)

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------
    @property
    def zoom_value(self) -> int | None:
        return self._settings.get("zoom_value")

    @zoom_value.setter
    def zoom_value(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("Zoom value must be an Integer.")
        self._settings["zoom_value"] = value

    @property
    def display_name(self) -> bool | None:
        return self._settings.get("display_name")

    @display_name.setter
    def display_name(self, value: bool) -> None:
        self._settings["display_name"] = _require_bool("Display name", value)

    @property
    def display_source(self) -> bool | None:
        return self._settings.get("display_source")

    @display_source.setter
    def display_source(self, value: bool) -> None:
        self._settings["display_source"] = _require_bool("Display source", value)

    @property
    def display_only_model(self) -> bool | None:
        return self._settings.get("display_only_model")

    @display_only_model.setter
    def display_only_model(self, value: bool) -> None:
        self._settings["display_only_model"] = _require_bool("Display only model", value)

    @property
    def custom_skm_path(self) -> str | None:
        return self._settings.get("custom_skm_path")

    @custom_skm_path.setter
    def custom_skm_path(self, value: str) -> None:
        self._settings["custom_skm_path"] = _require_str("Custom SKM path", value)

    @property
    def type_filter_value(self) -> str | None:
        return self._settings.get("type_filter_value")

    @type_filter_value.setter
    def type_filter_value(self, value: str) -> None:
        self._settings["type_filter_value"] = _require_str("Type filter value", value)
