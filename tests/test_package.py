"""Basic smoke tests for the material_browser package."""

from __future__ import annotations

import importlib


def test_package_importable() -> None:
    """Ensure that the top-level package can be imported."""

    module = importlib.import_module("material_browser")
    assert module.__version__ == "1.0.0"
