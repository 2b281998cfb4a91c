"""Exception hierarchy shared across material_browser modules."""

from __future__ import annotations

__all__ = [
    "CacheStoreError",
    "ConfigurationError",
    "MaterialBrowserError",
    "PreviewLoadError",
    "SettingsError",
    "UnsupportedPlatformError",
]


class MaterialBrowserError(RuntimeError):
    """Base class for errors raised by the material browser."""


class ConfigurationError(MaterialBrowserError):
    """Raised when host configuration makes an operation impossible."""


class UnsupportedPlatformError(ConfigurationError):
    """Raised for a host platform identifier outside the supported pair."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown operating system: {value!r}")
        self.value = value


class CacheStoreError(MaterialBrowserError):
    """Raised when the thumbnail cache directory cannot be managed."""


class SettingsError(MaterialBrowserError):
    """Raised when neither the settings document nor its backup can be read."""


class PreviewLoadError(MaterialBrowserError):
    """Raised when a cached preview image cannot be decoded."""
