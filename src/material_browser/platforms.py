"""Resolve the stock and custom material directories of the host application.

SketchUp keeps two material libraries per installed release: the *stock*
collection bundled with the application and a *custom* collection in a
per-user location. Both directories are keyed by the release year, which the
host reports only as a major version number (``21`` for SketchUp 2021).

The year is derived by string concatenation (``"20" + "21"``), not calendar
arithmetic. A three-digit major version therefore yields a malformed year such
as ``"20100"``; callers receive that value unchanged.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Final

from .errors import ConfigurationError, UnsupportedPlatformError

__all__ = [
    "ARCHIVE_EXTENSION",
    "HostPlatform",
    "MaterialRoots",
    "archive_glob_pattern",
    "custom_root",
    "host_year",
    "parse_major_version",
    "resolve_roots",
    "stock_root",
]

ARCHIVE_EXTENSION: Final[str] = ".skm"
"""File extension of SketchUp material archives."""

_MAJOR_VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*(\d+)")


def parse_major_version(version: int | str) -> int:
    """Return the major version number from *version*.

    Integers are returned as-is; strings such as ``"21.0.339"`` yield their
    leading integer component.
    """

    if isinstance(version, bool):
        raise ConfigurationError(f"Invalid host version: {version!r}")
    if isinstance(version, int):
        if version < 0:
            raise ConfigurationError(f"Invalid host version: {version!r}")
        return version

    match = _MAJOR_VERSION_PATTERN.match(str(version))
    if match is None:
        raise ConfigurationError(f"Invalid host version: {version!r}")
    return int(match.group(1))


def host_year(version: int | str) -> str:
    """Return the release year string for a host *version* (``21`` -> ``"2021"``)."""

    return "20" + str(parse_major_version(version))


def _require_env(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"Environment variable {name} is not set")
    return value


class HostPlatform(Enum):
    """Desktop platforms supported by the host application."""

    MACOS = "platform_osx"
    WINDOWS = "platform_win"

    @classmethod
    def from_identifier(cls, value: HostPlatform | str) -> HostPlatform:
        """Return the member matching *value*.

        Accepts a member, its identifier (``platform_osx``) or its name
        (``macos``), compared case-insensitively.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if normalized in {member.value, member.name.lower()}:
                    return member
        raise UnsupportedPlatformError(value)

    def stock_root(self, version: int | str, environ: Mapping[str, str] | None = None) -> PurePath:
        """Return the directory of materials bundled with the host installation."""

        year = host_year(version)
        env = os.environ if environ is None else environ
        if self is HostPlatform.MACOS:
            return PurePosixPath(
                "/",
                "Applications",
                f"SketchUp {year}",
                "SketchUp.app",
                "Contents",
                "Resources",
                "Content",
                "Materials",
            )
        return PureWindowsPath(
            _require_env(env, "PROGRAMDATA"),
            "SketchUp",
            f"SketchUp {year}",
            "SketchUp",
            "Materials",
        )

    def custom_root(self, version: int | str, environ: Mapping[str, str] | None = None) -> PurePath:
        """Return the per-user directory holding custom materials."""

        year = host_year(version)
        env = os.environ if environ is None else environ
        if self is HostPlatform.MACOS:
            return PurePosixPath(
                _require_env(env, "HOME"),
                "Library",
                "Application Support",
                f"SketchUp {year}",
                "SketchUp",
                "Materials",
            )
        return PureWindowsPath(
            _require_env(env, "APPDATA"),
            "SketchUp",
            f"SketchUp {year}",
            "SketchUp",
            "Materials",
        )

    @property
    def normalizes_glob_separators(self) -> bool:
        """Whether glob patterns must use ``/`` instead of the native separator."""

        return self is HostPlatform.WINDOWS


def stock_root(
    platform: HostPlatform | str,
    version: int | str,
    environ: Mapping[str, str] | None = None,
) -> PurePath:
    """Return the stock materials directory for *platform* and *version*."""

    return HostPlatform.from_identifier(platform).stock_root(version, environ)


def custom_root(
    platform: HostPlatform | str,
    version: int | str,
    environ: Mapping[str, str] | None = None,
) -> PurePath:
    """Return the custom materials directory for *platform* and *version*."""

    return HostPlatform.from_identifier(platform).custom_root(version, environ)


@dataclass(frozen=True, slots=True)
class MaterialRoots:
    """The pair of directories scanned for material archives."""

    stock: PurePath
    custom: PurePath

    def __iter__(self):
        yield self.stock
        yield self.custom


def resolve_roots(
    platform: HostPlatform | str,
    version: int | str,
    environ: Mapping[str, str] | None = None,
) -> MaterialRoots:
    """Return both material roots for the host described by *platform* and *version*."""

    member = HostPlatform.from_identifier(platform)
    return MaterialRoots(
        stock=member.stock_root(version, environ),
        custom=member.custom_root(version, environ),
    )


def archive_glob_pattern(root: PurePath | str, platform: HostPlatform | None = None) -> str:
    """Return a recursive glob pattern matching every archive below *root*.

    Glob patterns use ``/`` as their separator. On Windows the native ``\\``
    separators are rewritten, otherwise the scan silently matches nothing.
    """

    pattern = os.path.join(str(root), "**", f"*{ARCHIVE_EXTENSION}")
    if platform is not None and platform.normalizes_glob_separators:
        pattern = pattern.replace("\\", "/")
    return pattern
