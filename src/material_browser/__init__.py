"""Top-level package for the Material Browser application.

The package indexes SketchUp material archives (``.skm`` files), caches their
embedded previews and exposes the resulting catalog to a Qt browsing UI.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
