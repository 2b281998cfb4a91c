"""Configuration helpers for the Material Browser application."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .utils.paths import coerce_required_path

__all__ = [
    "AppConfig",
    "DEFAULT_HOST_VERSION",
    "DEFAULT_SETTINGS_PATH",
    "HOST_PLATFORM_ENV_VAR",
    "HOST_VERSION_ENV_VAR",
    "SETTINGS_PATH_ENV_VAR",
    "TEMP_ROOT_ENV_VAR",
    "configure",
    "detect_platform_identifier",
    "get_config",
]

HOST_PLATFORM_ENV_VAR: Final[str] = "MATERIAL_BROWSER_HOST_PLATFORM"
"""Environment variable that overrides the detected host platform identifier."""

HOST_VERSION_ENV_VAR: Final[str] = "MATERIAL_BROWSER_HOST_VERSION"
"""Environment variable holding the host application version (e.g. ``21.0.339``)."""

TEMP_ROOT_ENV_VAR: Final[str] = "MATERIAL_BROWSER_TEMP_DIR"
"""Environment variable that overrides the temp root holding the thumbnail cache."""

SETTINGS_PATH_ENV_VAR: Final[str] = "MATERIAL_BROWSER_SETTINGS_PATH"
"""Environment variable that overrides the settings document location."""

DEFAULT_HOST_VERSION: Final[str] = "21"
"""Host version assumed when the environment does not provide one."""

DEFAULT_SETTINGS_PATH: Final[Path] = Path.home() / ".material_browser" / "settings.json"
"""Default filesystem path of the JSON settings document."""

_PLATFORM_IDENTIFIERS: Final[dict[str, str]] = {
    "darwin": "platform_osx",
    "win32": "platform_win",
}


def detect_platform_identifier(platform: str | None = None) -> str:
    """Return the host platform identifier for the running interpreter.

    Unsupported interpreters return their raw ``sys.platform`` value so the
    path resolver can reject it with a descriptive error.
    """

    current = platform or sys.platform
    return _PLATFORM_IDENTIFIERS.get(current, current)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Runtime configuration for the Material Browser application."""

    host_platform: str
    host_version: str
    temp_root: Path
    settings_path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "temp_root", coerce_required_path(self.temp_root))
        object.__setattr__(self, "settings_path", coerce_required_path(self.settings_path))


_CONFIG: AppConfig | None = None


def get_config() -> AppConfig:
    """Return the cached :class:`AppConfig` instance."""

    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _build_config()
    return _CONFIG


def configure(
    *,
    host_platform: str | None = None,
    host_version: str | int | None = None,
    temp_root: str | Path | None = None,
    settings_path: str | Path | None = None,
) -> AppConfig:
    """Rebuild the global configuration with optional overrides."""

    global _CONFIG
    _CONFIG = _build_config(
        host_platform=host_platform,
        host_version=host_version,
        temp_root=temp_root,
        settings_path=settings_path,
    )
    return _CONFIG


def _build_config(
    *,
    host_platform: str | None = None,
    host_version: str | int | None = None,
    temp_root: str | Path | None = None,
    settings_path: str | Path | None = None,
) -> AppConfig:
    platform = host_platform or os.environ.get(HOST_PLATFORM_ENV_VAR) or detect_platform_identifier()

    if host_version is not None:
        version = str(host_version)
    else:
        version = os.environ.get(HOST_VERSION_ENV_VAR) or DEFAULT_HOST_VERSION

    temp_value = temp_root if temp_root is not None else os.environ.get(TEMP_ROOT_ENV_VAR)
    resolved_temp = (
        coerce_required_path(temp_value, empty_error="Temp root overrides cannot be empty")
        if temp_value
        else Path(tempfile.gettempdir())
    )

    settings_value = settings_path if settings_path is not None else os.environ.get(SETTINGS_PATH_ENV_VAR)
    resolved_settings = (
        coerce_required_path(settings_value, empty_error="Settings path overrides cannot be empty")
        if settings_value
        else DEFAULT_SETTINGS_PATH
    )

    return AppConfig(
        host_platform=platform,
        host_version=version.strip(),
        temp_root=resolved_temp,
        settings_path=resolved_settings,
    )
