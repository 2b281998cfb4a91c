"""Qt application helpers for the Material Browser desktop shell."""

from .main_window import MainWindow
from .scan_worker import ScanWorker, ScanWorkerSignals

__all__ = [
    "MainWindow",
    "ScanWorker",
    "ScanWorkerSignals",
]
