"""Qt widgets for the Material Browser UI."""

from __future__ import annotations

from .material_panel import MaterialPanel

__all__ = ["MaterialPanel"]
