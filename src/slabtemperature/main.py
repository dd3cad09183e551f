"""
GUI Application Initialization
==============================
This module constructs the live window and starts the Qt Event Loop.

Why is this file needed?
------------------------
It keeps every PySide6 import behind one function, so the command-line solver
runs on machines without a display or without Qt installed.
"""
import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from slabtemperature.model.state import SlabConfig
from slabtemperature.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def run_gui(config: Optional[SlabConfig] = None, report_every: int = 1, delay: float = 0.0) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    window = MainWindow(config, report_every=report_every, delay=delay)
    window.show()

    logger.info("Starting Qt event loop.")
    return app.exec()
