"""In-memory catalog of indexed material archives."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePath
from urllib.parse import urlparse
from urllib.request import url2pathname

from .platforms import ARCHIVE_EXTENSION

__all__ = ["MaterialRecord", "SessionCatalog", "filter_records", "strip_archive_extension"]


def strip_archive_extension(filename: str) -> str:
    """Return *filename* without a trailing archive extension."""

    if filename.lower().endswith(ARCHIVE_EXTENSION):
        return filename[: -len(ARCHIVE_EXTENSION)]
    return PurePath(filename).stem


@dataclass(frozen=True, slots=True)
class MaterialRecord:
    """One indexed material archive and the location of its cached preview."""

    source_path: Path
    preview_uri: str

    @property
    def display_name(self) -> str:
        """Archive filename with its extension stripped."""

        return strip_archive_extension(self.source_path.name)

    @property
    def preview_path(self) -> Path:
        """Local filesystem path behind :attr:`preview_uri`."""

        parsed = urlparse(self.preview_uri)
        return Path(url2pathname(parsed.path))


def filter_records(
    records: Iterable[MaterialRecord],
    *,
    query: str = "",
    within: Path | Iterable[Path] | None = None,
) -> list[MaterialRecord]:
    """Return *records* whose name contains *query* and which live below *within*.

    *within* may be a single directory or several; a record qualifies when it
    lies below any of them.
    """

    needle = query.strip().casefold()
    directories = (within,) if isinstance(within, PurePath) else tuple(within or ())
    selected: list[MaterialRecord] = []
    for record in records:
        if needle and needle not in record.display_name.casefold():
            continue
        if within is not None and not any(record.source_path.is_relative_to(root) for root in directories):
            continue
        selected.append(record)
    return selected


class SessionCatalog:
    """Hold the records produced by the most recent scan.

    Each scan replaces the whole record set. Readers always observe a complete
    snapshot because the set is published as a single immutable tuple.
    """

    def __init__(self, records: Iterable[MaterialRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._records: tuple[MaterialRecord, ...] = tuple(records)

    @property
    def records(self) -> tuple[MaterialRecord, ...]:
        """Snapshot of the current record set."""

        return self._records

    def replace(self, records: Iterable[MaterialRecord]) -> tuple[MaterialRecord, ...]:
        """Publish *records* as the new catalog contents."""

        snapshot = tuple(records)
        with self._lock:
            self._records = snapshot
        return snapshot

    def clear(self) -> None:
        """Drop every record."""

        with self._lock:
            self._records = ()

    def find(self, source_path: Path | str) -> MaterialRecord | None:
        """Return the record indexed from *source_path*, if any."""

        target = Path(source_path)
        for record in self._records:
            if record.source_path == target:
                return record
        return None

    def search(self, query: str) -> list[MaterialRecord]:
        """Return records whose display name contains *query* (case-insensitive)."""

        return filter_records(self._records, query=query)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MaterialRecord]:
        return iter(self._records)

    def __contains__(self, item: object) -> bool:
        return item in self._records
