"""Pytest configuration helpers for material_browser tests."""

from __future__ import annotations

import io
import os
import sys
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

try:  # pragma: no cover - dependency availability varies between environments
    from PySide6.QtWidgets import QApplication
except ImportError:  # pragma: no cover - used when Qt is unavailable
    QApplication = None  # type: ignore[assignment]

# Ensure the source directory is importable without requiring an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def reset_app_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure each test runs with an isolated application configuration."""

    from material_browser.config import configure

    monkeypatch.setenv("MATERIAL_BROWSER_SETTINGS_PATH", str(tmp_path / "settings" / "settings.json"))
    monkeypatch.setenv("MATERIAL_BROWSER_TEMP_DIR", str(tmp_path / "temp"))
    configure()
    yield
    monkeypatch.undo()
    configure()


@pytest.fixture(scope="session")
def qapp():
    """Provide a ``QApplication`` instance for UI-oriented tests."""

    if QApplication is None:
        pytest.skip("PySide6 is unavailable in this environment")

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def _png_bytes(color: tuple[int, int, int] = (200, 40, 40), size: tuple[int, int] = (32, 32)) -> bytes:
    """Return a small solid-color PNG image."""

    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def png_bytes() -> Callable[..., bytes]:
    """Return a factory producing PNG payloads."""

    return _png_bytes


@pytest.fixture()
def make_skm() -> Callable[..., Path]:
    """Return a factory writing material archives for tests."""

    def _make(
        path: Path,
        *,
        preview: bytes | None = None,
        preview_name: str = "doc_thumbnail.png",
        with_preview: bool = True,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("document.xml", "<materialDocument/>")
            if with_preview:
                archive.writestr(preview_name, preview if preview is not None else _png_bytes())
        return path

    return _make
