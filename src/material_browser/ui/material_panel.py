"""Grid widget listing indexed materials with their previews."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from PySide6.QtCore import QSize, Qt, Signal, Slot
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtWidgets import (
    QAbstractItemView,
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLineEdit,
    QListView,
    QListWidget,
    QListWidgetItem,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from ..catalog import MaterialRecord, filter_records
from ..errors import PreviewLoadError
from ..previews import MAX_ZOOM, MIN_ZOOM, clamp_zoom, render_preview
from ..settings import TYPE_FILTER_VALUES

logger = logging.getLogger(__name__)

__all__ = ["MaterialPanel"]

_TYPE_FILTER_LABELS = {
    "all": "All materials",
    "stock": "Stock materials",
    "custom": "Custom materials",
}


class MaterialPanel(QWidget):
    """Searchable grid of material previews.

    The panel only reads the records handed to :meth:`set_records`; picking an
    item emits :attr:`materialActivated` with the archive path.
    """

    materialSelected = Signal(str)
    materialActivated = Signal(str)
    zoomChanged = Signal(int)
    displayNameToggled = Signal(bool)
    displaySourceToggled = Signal(bool)
    typeFilterChanged = Signal(str)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        zoom: int = 128,
        display_name: bool = True,
        display_source: bool = False,
        type_filter: str = "all",
    ) -> None:
        super().__init__(parent)

        self._records: tuple[MaterialRecord, ...] = ()
        self._roots: dict[str, tuple[Path, ...]] = {}
        self._zoom = clamp_zoom(zoom)
        self._display_name = display_name
        self._display_source = display_source
        self._icon_cache: dict[tuple[Path, int], QIcon] = {}

        self._search = QLineEdit(self)
        self._search.setPlaceholderText("Search materials by name")
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(lambda _text: self._refresh())

        self._type_filter = QComboBox(self)
        for value in TYPE_FILTER_VALUES:
            self._type_filter.addItem(_TYPE_FILTER_LABELS[value], value)
        index = self._type_filter.findData(type_filter)
        self._type_filter.setCurrentIndex(index if index >= 0 else 0)
        self._type_filter.currentIndexChanged.connect(self._on_type_filter_changed)

        self._name_toggle = QCheckBox("Names", self)
        self._name_toggle.setChecked(display_name)
        self._name_toggle.toggled.connect(self._on_name_toggled)

        self._source_toggle = QCheckBox("Sources", self)
        self._source_toggle.setToolTip("Show the archive path in each tooltip")
        self._source_toggle.setChecked(display_source)
        self._source_toggle.toggled.connect(self._on_source_toggled)

        self._zoom_slider = QSlider(Qt.Horizontal, self)
        self._zoom_slider.setRange(MIN_ZOOM, MAX_ZOOM)
        self._zoom_slider.setSingleStep(8)
        self._zoom_slider.setValue(self._zoom)
        self._zoom_slider.valueChanged.connect(self._on_zoom_changed)

        self._list = QListWidget(self)
        self._list.setViewMode(QListView.IconMode)
        self._list.setResizeMode(QListView.Adjust)
        self._list.setMovement(QListView.Static)
        self._list.setUniformItemSizes(True)
        self._list.setWordWrap(True)
        self._list.setSelectionMode(QAbstractItemView.SingleSelection)
        self._list.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self._list.currentItemChanged.connect(self._on_current_item_changed)
        self._list.itemActivated.connect(self._on_item_activated)
        self._apply_icon_size()

        controls = QHBoxLayout()
        controls.setContentsMargins(0, 0, 0, 0)
        controls.setSpacing(6)
        controls.addWidget(self._search, 1)
        controls.addWidget(self._type_filter)
        controls.addWidget(self._name_toggle)
        controls.addWidget(self._source_toggle)
        controls.addWidget(self._zoom_slider)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.addLayout(controls)
        layout.addWidget(self._list, 1)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_records(self, records: Sequence[MaterialRecord]) -> None:
        """Display *records*, replacing whatever was shown before."""

        self._records = tuple(records)
        self._icon_cache.clear()
        self._refresh()

    def set_roots(
        self,
        *,
        stock: Path | None,
        custom: Path | None,
        extra: Sequence[Path] = (),
    ) -> None:
        """Register the directories used by the stock/custom type filter.

        Directories in *extra* belong to the user and count as custom.
        """

        custom_roots = tuple(path for path in (custom, *extra) if path is not None)
        self._roots = {"custom": custom_roots} if custom_roots else {}
        if stock is not None:
            self._roots["stock"] = (stock,)
        self._refresh()

    def set_search_text(self, text: str) -> None:
        self._search.setText(text)

    def set_type_filter(self, value: str) -> None:
        index = self._type_filter.findData(value)
        if index >= 0:
            self._type_filter.setCurrentIndex(index)

    def set_zoom(self, value: int) -> None:
        self._zoom_slider.setValue(clamp_zoom(value))

    def set_display_source(self, checked: bool) -> None:
        self._source_toggle.setChecked(checked)

    def zoom(self) -> int:
        return self._zoom

    def type_filter(self) -> str:
        return str(self._type_filter.currentData() or "all")

    def visible_records(self) -> list[MaterialRecord]:
        """Return the records currently shown, in display order."""

        within = self._roots.get(self.type_filter())
        if self.type_filter() != "all" and within is None:
            return []
        selected = filter_records(self._records, query=self._search.text(), within=within)
        return sorted(selected, key=lambda record: (record.display_name.casefold(), str(record.source_path)))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @Slot()
    def _refresh(self) -> None:
        self._list.clear()
        for record in self.visible_records():
            item = QListWidgetItem(self._icon_for(record), record.display_name if self._display_name else "")
            item.setData(Qt.UserRole, str(record.source_path))
            tooltip = record.display_name
            if self._display_source:
                tooltip = f"{tooltip}\n{record.source_path}"
            item.setToolTip(tooltip)
            self._list.addItem(item)

    def _icon_for(self, record: MaterialRecord) -> QIcon:
        key = (record.preview_path, self._zoom)
        icon = self._icon_cache.get(key)
        if icon is not None:
            return icon

        pixmap = QPixmap()
        try:
            pixmap.loadFromData(render_preview(record.preview_path, self._zoom))
        except PreviewLoadError as exc:
            logger.debug("Preview unavailable for %s: %s", record.source_path, exc)
        icon = QIcon(pixmap) if not pixmap.isNull() else QIcon()
        self._icon_cache[key] = icon
        return icon

    def _apply_icon_size(self) -> None:
        edge = self._zoom
        self._list.setIconSize(QSize(edge, edge))
        text_height = 32 if self._display_name else 0
        self._list.setGridSize(QSize(edge + 24, edge + text_height + 12))

    @Slot(int)
    def _on_zoom_changed(self, value: int) -> None:
        self._zoom = clamp_zoom(value)
        self._apply_icon_size()
        self._refresh()
        self.zoomChanged.emit(self._zoom)

    @Slot(bool)
    def _on_name_toggled(self, checked: bool) -> None:
        self._display_name = checked
        self._apply_icon_size()
        self._refresh()
        self.displayNameToggled.emit(checked)

    @Slot(bool)
    def _on_source_toggled(self, checked: bool) -> None:
        self._display_source = checked
        self._refresh()
        self.displaySourceToggled.emit(checked)

    @Slot(int)
    def _on_type_filter_changed(self, _index: int) -> None:
        self._refresh()
        self.typeFilterChanged.emit(self.type_filter())

    @Slot(QListWidgetItem, QListWidgetItem)
    def _on_current_item_changed(self, current: QListWidgetItem | None, _previous: QListWidgetItem | None) -> None:
        if current is None:
            return
        self.materialSelected.emit(str(current.data(Qt.UserRole) or ""))

    @Slot(QListWidgetItem)
    def _on_item_activated(self, item: QListWidgetItem) -> None:
        path = str(item.data(Qt.UserRole) or "")
        if path:
            self.materialActivated.emit(path)
