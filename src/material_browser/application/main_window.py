"""Main Qt window for the Material Browser."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QThreadPool, Slot
from PySide6.QtGui import QAction, QCloseEvent, QKeySequence
from PySide6.QtWidgets import QMainWindow, QWidget

from ..cache import CacheStore
from ..catalog import MaterialRecord, SessionCatalog
from ..config import AppConfig, get_config
from ..errors import ConfigurationError, MaterialBrowserError
from ..host import MaterialHost, select_material
from ..indexer import MaterialIndexer
from ..platforms import HostPlatform, resolve_roots
from ..previews import clamp_zoom
from ..settings import DEFAULT_SETTINGS, MaterialBrowserSettings, install_default_settings
from ..ui.material_panel import MaterialPanel
from ..utils.paths import coerce_optional_path
from .scan_worker import ScanWorker

WINDOW_TITLE = "Material Browser"

logger = logging.getLogger(__name__)

__all__ = ["MainWindow", "WINDOW_TITLE"]


def _setting(value: object, fallback: object) -> object:
    return fallback if value is None else value


class MainWindow(QMainWindow):
    """Primary window coordinating the catalog, the indexer and the host."""

    def __init__(
        self,
        *,
        host: MaterialHost | None = None,
        config: AppConfig | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)

        self._config = config or get_config()
        self._host = host
        self._catalog = SessionCatalog()
        self._cache = CacheStore(self._config.temp_root)
        self._thread_pool = QThreadPool.globalInstance()
        self._scan_in_progress = False

        install_default_settings(self._config.settings_path)
        self._settings = MaterialBrowserSettings(self._config.settings_path)
        self._settings.read()

        self._panel = MaterialPanel(
            self,
            zoom=clamp_zoom(self._settings.zoom_value, DEFAULT_SETTINGS["zoom_value"]),
            display_name=bool(_setting(self._settings.display_name, DEFAULT_SETTINGS["display_name"])),
            display_source=bool(_setting(self._settings.display_source, DEFAULT_SETTINGS["display_source"])),
            type_filter=str(_setting(self._settings.type_filter_value, DEFAULT_SETTINGS["type_filter_value"])),
        )
        self._panel.setObjectName("materialPanel")
        self._panel.materialActivated.connect(self._on_material_activated)
        self._panel.zoomChanged.connect(self._on_zoom_changed)
        self._panel.displayNameToggled.connect(self._on_display_name_toggled)
        self._panel.displaySourceToggled.connect(self._on_display_source_toggled)
        self._panel.typeFilterChanged.connect(self._on_type_filter_changed)
        self.setCentralWidget(self._panel)

        self._indexer = self._build_indexer()
        self._build_actions()
        self.resize(960, 640)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def catalog(self) -> SessionCatalog:
        return self._catalog

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def settings(self) -> MaterialBrowserSettings:
        return self._settings

    @property
    def panel(self) -> MaterialPanel:
        return self._panel

    @property
    def indexer(self) -> MaterialIndexer | None:
        return self._indexer

    # ------------------------------------------------------------------
    # Setup helpers
    # ------------------------------------------------------------------
    def _build_indexer(self) -> MaterialIndexer | None:
        try:
            platform = HostPlatform.from_identifier(self._config.host_platform)
            roots = resolve_roots(platform, self._config.host_version)
        except ConfigurationError as exc:
            logger.error("Material roots unavailable: %s", exc)
            self.statusBar().showMessage(f"Cannot locate materials: {exc}")
            return None

        extra_root = coerce_optional_path(self._settings.custom_skm_path)
        extra_roots = (extra_root,) if extra_root is not None else ()
        self._panel.set_roots(
            stock=Path(roots.stock.as_posix()),
            custom=Path(roots.custom.as_posix()),
            extra=extra_roots,
        )
        return MaterialIndexer(
            roots,
            self._cache,
            self._catalog,
            platform=platform,
            extra_roots=extra_roots,
        )

    def _build_actions(self) -> None:
        toolbar = self.addToolBar("Materials")
        toolbar.setObjectName("materialsToolbar")

        rescan = QAction("Rescan", self)
        rescan.setShortcut(QKeySequence.Refresh)
        rescan.triggered.connect(lambda: self.start_scan())
        toolbar.addAction(rescan)

        clear_and_rescan = QAction("Clear Cache && Rescan", self)
        clear_and_rescan.triggered.connect(lambda: self.start_scan(clear_cache=True))
        toolbar.addAction(clear_and_rescan)

        self._rescan_action = rescan
        self._clear_and_rescan_action = clear_and_rescan

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------
    def start_scan(self, *, clear_cache: bool = False) -> bool:
        """Queue a background scan; returns ``False`` when none was started."""

        if self._indexer is None:
            self.statusBar().showMessage("Material roots are not available on this platform", 5000)
            return False
        if self._scan_in_progress:
            logger.debug("Scan already running; ignoring request")
            return False

        self._scan_in_progress = True
        self._rescan_action.setEnabled(False)
        self._clear_and_rescan_action.setEnabled(False)
        self.statusBar().showMessage("Scanning materials…")

        worker = ScanWorker(self._indexer, self._cache, clear_cache=clear_cache)
        worker.signals.finished.connect(self._on_scan_finished)
        worker.signals.error.connect(self._on_scan_failed)
        self._thread_pool.start(worker)
        return True

    @Slot(object)
    def _on_scan_finished(self, records: object) -> None:
        self._finish_scan()
        materials = tuple(records) if isinstance(records, tuple) else self._catalog.records
        self._panel.set_records(materials)
        self.statusBar().showMessage(f"{len(materials)} material(s) indexed", 5000)

    @Slot(str)
    def _on_scan_failed(self, message: str) -> None:
        self._finish_scan()
        self._panel.set_records(())
        self.statusBar().showMessage(f"Material scan failed: {message}")

    def _finish_scan(self) -> None:
        self._scan_in_progress = False
        self._rescan_action.setEnabled(True)
        self._clear_and_rescan_action.setEnabled(True)

    # ------------------------------------------------------------------
    # Host handoff
    # ------------------------------------------------------------------
    @Slot(str)
    def _on_material_activated(self, source_path: str) -> None:
        record: MaterialRecord | None = self._catalog.find(source_path)
        if record is None:
            logger.warning("Activated material %s is no longer in the catalog", source_path)
            return
        if self._host is None:
            logger.info("No host attached; material %s not applied", record.source_path)
            self.statusBar().showMessage(f"Selected {record.display_name}", 5000)
            return
        try:
            select_material(self._host, record.source_path)
        except Exception as exc:  # noqa: BLE001 - host failures are reported, not fatal
            logger.exception("Host rejected material %s", record.source_path)
            self.statusBar().showMessage(f"Unable to apply {record.display_name}: {exc}", 5000)
            return
        self.statusBar().showMessage(f"Applied {record.display_name}", 5000)

    # ------------------------------------------------------------------
    # Settings persistence
    # ------------------------------------------------------------------
    @Slot(int)
    def _on_zoom_changed(self, value: int) -> None:
        self._settings.zoom_value = value
        self._save_settings()

    @Slot(bool)
    def _on_display_name_toggled(self, checked: bool) -> None:
        self._settings.display_name = checked
        self._save_settings()

    @Slot(bool)
    def _on_display_source_toggled(self, checked: bool) -> None:
        self._settings.display_source = checked
        self._save_settings()

    @Slot(str)
    def _on_type_filter_changed(self, value: str) -> None:
        self._settings.type_filter_value = value
        self._save_settings()

    def _save_settings(self) -> None:
        try:
            self._settings.write()
        except OSError as exc:
            logger.error("Unable to save settings to %s: %s", self._settings.path, exc)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        self._thread_pool.waitForDone()
        try:
            self._cache.remove_all()
        except MaterialBrowserError as exc:
            logger.warning("%s", exc)
        super().closeEvent(event)
