"""Application bootstrap for the Material Browser desktop shell."""

from __future__ import annotations

import sys
from typing import Final

from PySide6.QtWidgets import QApplication

from .application.main_window import MainWindow

WINDOW_TITLE: Final[str] = "Material Browser"
"""Default title applied to the main Qt window."""

__all__ = ["MainWindow", "main", "WINDOW_TITLE"]


def main() -> int:
    """Launch the Material Browser Qt application."""
    import logging

    logger = logging.getLogger(__name__)

    logger.info("Starting Material Browser")
    app = QApplication.instance()
    owns_application = False

    if app is None:
        logger.info("Creating new QApplication")
        app = QApplication(sys.argv)
        owns_application = True
    else:
        logger.info("Using existing QApplication")

    try:
        window = MainWindow()
    except Exception:
        logger.exception("Failed to create MainWindow")
        raise

    window.setWindowTitle(WINDOW_TITLE)
    window.show()
    window.start_scan()

    if owns_application:
        result = app.exec()
        logger.info("Qt event loop exited with code: %s", result)
        return result

    return 0
