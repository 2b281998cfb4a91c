"""Hand a selected material over to the host application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

__all__ = ["MaterialHost", "select_material"]

logger = logging.getLogger(__name__)


@runtime_checkable
class MaterialHost(Protocol):
    """Operations the host application exposes to the browser."""

    def load_material(self, path: Path) -> Any:
        """Load the material archive at *path* into the active document."""

    def set_current_material(self, material: Any) -> None:
        """Make *material* the current material of the active document."""

    def activate_paint_tool(self) -> None:
        """Switch the host to its paint tool."""


def select_material(host: MaterialHost, source_path: Path | str) -> Any:
    """Load *source_path* into *host*, make it current and activate painting."""

    path = Path(source_path)
    logger.info("Selecting material %s", path)
    material = host.load_material(path)
    host.set_current_material(material)
    host.activate_paint_tool()
    return material
