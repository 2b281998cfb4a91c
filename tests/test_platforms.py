"""Tests covering material root resolution for each host platform."""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath

import pytest

from material_browser.errors import ConfigurationError, UnsupportedPlatformError
from material_browser.platforms import (
    HostPlatform,
    archive_glob_pattern,
    custom_root,
    host_year,
    parse_major_version,
    resolve_roots,
    stock_root,
)

ENVIRON = {
    "HOME": "/Users/alice",
    "PROGRAMDATA": "C:\\ProgramData",
    "APPDATA": "C:\\Users\\alice\\AppData\\Roaming",
}


@pytest.mark.parametrize(
    ("version", "expected"),
    [(21, "2021"), ("21", "2021"), ("21.0.339", "2021"), (17, "2017"), (5, "205")],
)
def test_host_year_prepends_century(version: int | str, expected: str) -> None:
    assert host_year(version) == expected


def test_three_digit_major_version_yields_malformed_year() -> None:
    """The year is plain string concatenation; large versions are not corrected."""

    assert host_year(100) == "20100"


@pytest.mark.parametrize("version", ["", "abc", "v21", True, -1])
def test_invalid_versions_are_configuration_errors(version: object) -> None:
    with pytest.raises(ConfigurationError):
        parse_major_version(version)  # type: ignore[arg-type]


def test_macos_roots() -> None:
    stock = stock_root("platform_osx", 21, ENVIRON)
    custom = custom_root("platform_osx", 21, ENVIRON)

    assert stock == PurePosixPath(
        "/Applications/SketchUp 2021/SketchUp.app/Contents/Resources/Content/Materials"
    )
    assert custom == PurePosixPath(
        "/Users/alice/Library/Application Support/SketchUp 2021/SketchUp/Materials"
    )


def test_windows_roots() -> None:
    stock = stock_root(HostPlatform.WINDOWS, "22.0.354", ENVIRON)
    custom = custom_root(HostPlatform.WINDOWS, "22.0.354", ENVIRON)

    assert stock == PureWindowsPath("C:/ProgramData/SketchUp/SketchUp 2022/SketchUp/Materials")
    assert custom == PureWindowsPath(
        "C:/Users/alice/AppData/Roaming/SketchUp/SketchUp 2022/SketchUp/Materials"
    )


@pytest.mark.parametrize("platform", list(HostPlatform))
@pytest.mark.parametrize("version", [17, 21, 23])
def test_roots_are_absolute_and_carry_year(platform: HostPlatform, version: int) -> None:
    roots = resolve_roots(platform, version, ENVIRON)

    for root in roots:
        assert root.is_absolute()
        assert f"20{version}" in str(root)


@pytest.mark.parametrize("identifier", ["platform_linux", "", "osx", None, 3])
def test_unsupported_platform_never_returns_a_path(identifier: object) -> None:
    with pytest.raises(UnsupportedPlatformError):
        stock_root(identifier, 21, ENVIRON)  # type: ignore[arg-type]
    with pytest.raises(UnsupportedPlatformError):
        custom_root(identifier, 21, ENVIRON)  # type: ignore[arg-type]


def test_platform_accepts_names_and_identifiers() -> None:
    assert HostPlatform.from_identifier("platform_win") is HostPlatform.WINDOWS
    assert HostPlatform.from_identifier("MacOS") is HostPlatform.MACOS
    assert HostPlatform.from_identifier(HostPlatform.MACOS) is HostPlatform.MACOS


def test_missing_environment_variable_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        custom_root(HostPlatform.WINDOWS, 21, {"PROGRAMDATA": "C:\\ProgramData"})


def test_windows_glob_pattern_uses_forward_slashes() -> None:
    root = stock_root(HostPlatform.WINDOWS, 21, ENVIRON)
    pattern = archive_glob_pattern(root, HostPlatform.WINDOWS)

    assert "\\" not in pattern
    assert pattern.endswith("/**/*.skm")
    assert pattern.startswith("C:/ProgramData/SketchUp/SketchUp 2021")


def test_macos_glob_pattern_is_recursive() -> None:
    root = stock_root(HostPlatform.MACOS, 21, ENVIRON)

    assert archive_glob_pattern(root, HostPlatform.MACOS) == f"{root}/**/*.skm"
