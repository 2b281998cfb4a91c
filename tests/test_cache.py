"""Tests covering the thumbnail cache directory lifecycle."""

from __future__ import annotations

from pathlib import Path

import pytest

from material_browser.cache import CACHE_DIRECTORY_NAME, CacheStore
from material_browser.errors import CacheStoreError


def test_cache_path_is_deterministic(tmp_path: Path) -> None:
    first = CacheStore(tmp_path)
    second = CacheStore(tmp_path)

    assert first.cache_path == second.cache_path == tmp_path / CACHE_DIRECTORY_NAME


def test_ensure_exists_creates_missing_parents(tmp_path: Path) -> None:
    cache = CacheStore(tmp_path / "nested" / "temp")

    created = cache.ensure_exists()
    cache.ensure_exists()

    assert created == cache.cache_path
    assert cache.cache_path.is_dir()


def test_remove_all_tolerates_missing_directory(tmp_path: Path) -> None:
    cache = CacheStore(tmp_path)

    cache.remove_all()

    assert not cache.cache_path.exists()


def test_remove_then_ensure_leaves_empty_directory(tmp_path: Path) -> None:
    cache = CacheStore(tmp_path)
    cache.ensure_exists()
    (cache.cache_path / "Brick #SKM-1.png").write_bytes(b"png")

    cache.remove_all()
    cache.ensure_exists()

    assert cache.cache_path.is_dir()
    assert list(cache.cache_path.iterdir()) == []


def test_uncreatable_cache_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    cache = CacheStore(blocker)

    with pytest.raises(CacheStoreError):
        cache.ensure_exists()


def test_preview_destination_is_inside_cache(tmp_path: Path) -> None:
    cache = CacheStore(tmp_path)

    assert cache.preview_destination("Oak #SKM-3.png").parent == cache.cache_path
