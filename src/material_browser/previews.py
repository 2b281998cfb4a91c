"""Scale cached material previews for display in the browser grid."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Final

from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import PreviewLoadError

__all__ = ["MAX_ZOOM", "MIN_ZOOM", "clamp_zoom", "render_preview"]

MIN_ZOOM: Final[int] = 48
"""Smallest tile edge, in pixels, offered by the zoom slider."""

MAX_ZOOM: Final[int] = 256
"""Largest tile edge, in pixels, offered by the zoom slider."""


def clamp_zoom(value: object, default: int = 128) -> int:
    """Return *value* as a tile edge within ``[MIN_ZOOM, MAX_ZOOM]``."""

    if isinstance(value, bool) or not isinstance(value, int):
        value = default
    return max(MIN_ZOOM, min(MAX_ZOOM, value))


def render_preview(path: Path, edge: int) -> bytes:
    """Return PNG bytes of the preview at *path* fitted into an *edge* square.

    The image keeps its aspect ratio and is centred on a transparent canvas so
    every tile in the grid has the same footprint.
    """

    size = (clamp_zoom(edge), clamp_zoom(edge))
    try:
        with Image.open(path) as image:
            image.load()
            fitted = ImageOps.contain(image.convert("RGBA"), size, Image.Resampling.LANCZOS)
    except (OSError, UnidentifiedImageError) as exc:
        raise PreviewLoadError(f"Unable to load preview {path!s}: {exc}") from exc

    canvas = Image.new("RGBA", size, (0, 0, 0, 0))
    offset = ((size[0] - fitted.width) // 2, (size[1] - fitted.height) // 2)
    canvas.paste(fitted, offset, fitted)

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()
