"""Discover SketchUp material archives and extract their preview images.

Material archives (``.skm``) are ZIP containers. Each one normally carries a
``doc_thumbnail.png`` entry which is copied into the :class:`CacheStore` so the
UI can display it. Archives that cannot be opened, or that carry no preview,
are skipped without interrupting the scan.
"""

from __future__ import annotations

import glob
import itertools
import logging
import shutil
import threading
import zipfile
import zlib
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePath
from typing import Final

from .cache import CacheStore
from .catalog import MaterialRecord, SessionCatalog, strip_archive_extension
from .platforms import HostPlatform, archive_glob_pattern
from .utils.paths import path_to_uri

__all__ = [
    "PREVIEW_ENTRY_NAME",
    "PREVIEW_MARKER",
    "MaterialIndexer",
    "preview_filename",
]

logger = logging.getLogger(__name__)

PREVIEW_ENTRY_NAME: Final[str] = "doc_thumbnail.png"
"""Archive member holding the material thumbnail."""

PREVIEW_MARKER: Final[str] = " #SKM-"
"""Separator placed between the archive name and the scan counter."""

# Encrypted members raise RuntimeError, unknown compression NotImplementedError,
# corrupt or truncated member data zlib.error or EOFError.
_ARCHIVE_ERRORS: Final = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    OSError,
    RuntimeError,
    NotImplementedError,
)


def preview_filename(archive_name: str, counter: int) -> str:
    """Return the cache filename used for the preview of *archive_name*."""

    return f"{strip_archive_extension(archive_name)}{PREVIEW_MARKER}{counter}.png"


class MaterialIndexer:
    """Build the material catalog from one or more archive directories."""

    def __init__(
        self,
        roots: Iterable[PurePath | str],
        cache: CacheStore,
        catalog: SessionCatalog,
        *,
        platform: HostPlatform | None = None,
        extra_roots: Iterable[PurePath | str] = (),
    ) -> None:
        self._roots = tuple(roots)
        self._extra_roots = tuple(extra_roots)
        self._cache = cache
        self._catalog = catalog
        self._platform = platform
        self._scan_lock = threading.Lock()

    @property
    def catalog(self) -> SessionCatalog:
        return self._catalog

    @property
    def roots(self) -> tuple[PurePath | str, ...]:
        return self._roots + self._extra_roots

    def glob_patterns(self) -> list[str]:
        """Return one recursive archive pattern per scanned root."""

        return [archive_glob_pattern(root, self._platform) for root in self.roots]

    def scan(self) -> tuple[MaterialRecord, ...]:
        """Rebuild the catalog from every archive below the configured roots.

        Scans are serialized; a caller arriving mid-scan waits for the running
        one to finish. Errors creating the cache directory propagate, errors
        affecting a single archive only omit that archive.
        """

        with self._scan_lock:
            self._catalog.clear()
            self._cache.ensure_exists()

            records: list[MaterialRecord] = []
            matches = 0
            for counter, archive_path in enumerate(self._iter_archives(), start=1):
                matches = counter
                record = self._index_archive(Path(archive_path), counter)
                if record is not None:
                    records.append(record)

            published = self._catalog.replace(records)
            logger.info(
                "Indexed %d material(s) from %d archive(s) into %s",
                len(published),
                matches,
                self._cache.cache_path,
            )
            return published

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _iter_archives(self) -> Iterator[str]:
        patterns = self.glob_patterns()
        for pattern in patterns:
            logger.debug("Scanning for material archives with %s", pattern)
        return itertools.chain.from_iterable(glob.iglob(pattern, recursive=True) for pattern in patterns)

    def _index_archive(self, archive_path: Path, counter: int) -> MaterialRecord | None:
        destination = self._cache.preview_destination(preview_filename(archive_path.name, counter))

        try:
            with zipfile.ZipFile(archive_path) as archive:
                entry = _find_preview_entry(archive)
                if entry is None:
                    logger.debug("No %s in %s", PREVIEW_ENTRY_NAME, archive_path)
                    return None
                if not _extract_without_overwrite(archive, entry, destination):
                    logger.debug("Preview %s already exists, skipping %s", destination, archive_path)
                    return None
        except _ARCHIVE_ERRORS as exc:
            logger.warning("Skipping unreadable material archive %s: %s", archive_path, exc)
            return None

        return MaterialRecord(source_path=archive_path, preview_uri=path_to_uri(destination))


def _find_preview_entry(archive: zipfile.ZipFile) -> zipfile.ZipInfo | None:
    for info in archive.infolist():
        if info.filename == PREVIEW_ENTRY_NAME:
            return info
    return None


def _extract_without_overwrite(
    archive: zipfile.ZipFile,
    entry: zipfile.ZipInfo,
    destination: Path,
) -> bool:
    """Copy *entry* to *destination* unless a file already occupies it.

    Returns ``False`` when the destination exists. A failed copy removes the
    partially written file before the error propagates.
    """

    try:
        target = destination.open("xb")
    except FileExistsError:
        return False

    try:
        with target, archive.open(entry) as source:
            shutil.copyfileobj(source, target)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise
    return True
