"""Process-scoped storage for previews extracted from material archives."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Final

from .errors import CacheStoreError

__all__ = ["CACHE_DIRECTORY_NAME", "CacheStore"]

logger = logging.getLogger(__name__)

CACHE_DIRECTORY_NAME: Final[str] = "Material Browser Thumbnails"
"""Name of the thumbnail cache directory created under the temp root."""


class CacheStore:
    """Own the single temp directory holding extracted material previews.

    The directory is created lazily before each scan and may be removed at any
    time; removing a missing directory is not an error. Only one process is
    expected to use the directory at a time.
    """

    def __init__(self, temp_root: Path | str | None = None) -> None:
        root = Path(temp_root) if temp_root is not None else Path(tempfile.gettempdir())
        self._path = root.expanduser() / CACHE_DIRECTORY_NAME

    @property
    def cache_path(self) -> Path:
        """Absolute location of the cache directory."""

        return self._path

    def ensure_exists(self) -> Path:
        """Create the cache directory and its parents when missing."""

        try:
            self._path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheStoreError(f"Unable to create thumbnail cache at {self._path!s}: {exc}") from exc
        return self._path

    def remove_all(self) -> None:
        """Delete the cache directory and everything inside it."""

        if not self._path.exists():
            return
        try:
            shutil.rmtree(self._path)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise CacheStoreError(f"Unable to remove thumbnail cache at {self._path!s}: {exc}") from exc
        logger.debug("Removed thumbnail cache %s", self._path)

    def preview_destination(self, filename: str) -> Path:
        """Return the cache location for a preview called *filename*."""

        return self._path / filename

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!s})"
