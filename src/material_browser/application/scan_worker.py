"""Background material scanning used by the Qt application."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QRunnable, Signal

from ..cache import CacheStore
from ..indexer import MaterialIndexer

logger = logging.getLogger(__name__)

__all__ = ["ScanWorker", "ScanWorkerSignals"]


class ScanWorkerSignals(QObject):
    """Signals emitted by :class:`ScanWorker`."""

    finished = Signal(object)
    error = Signal(str)


class ScanWorker(QRunnable):
    """Background task that rebuilds the material catalog.

    When *clear_cache* is set the thumbnail cache is emptied first so previews
    left behind by an earlier scan cannot block extraction.
    """

    def __init__(
        self,
        indexer: MaterialIndexer,
        cache: CacheStore,
        *,
        clear_cache: bool = False,
    ) -> None:
        super().__init__()
        self._indexer = indexer
        self._cache = cache
        self._clear_cache = clear_cache
        self.signals = ScanWorkerSignals()

    def run(self) -> None:  # pragma: no cover - exercised indirectly
        try:
            if self._clear_cache:
                self._cache.remove_all()
            records = self._indexer.scan()
        except Exception as exc:  # noqa: BLE001 - reported to the UI thread
            logger.exception("Material scan failed")
            self.signals.error.emit(str(exc) or exc.__class__.__name__)
        else:
            self.signals.finished.emit(records)
