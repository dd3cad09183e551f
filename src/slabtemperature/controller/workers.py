"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: If we run the relaxation loop on the main thread, the GUI
   freezes. This class pushes the sweeps to a background thread.
2. Signals: Snapshots travel to the GUI through queued Qt signals, which is the
   only channel between the two threads.

Classes:
    SolverWorker: Runs the relaxation loop.
"""
import logging
import threading

from PySide6.QtCore import QThread, Signal

from slabtemperature.controller.driver import SolveResult, iterate
from slabtemperature.controller.solver import Solver

logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    # Signals to update the UI from the background
    snapshot_ready = Signal(object)  # Snapshot
    finished_solve = Signal(object)  # SolveResult
    error_occurred = Signal(str)

    def __init__(self, solver: Solver, report_every: int = 1, delay: float = 0.0, parent=None):
        super().__init__(parent)
        self.solver = solver
        self.report_every = report_every
        self.delay = delay
        self._stop_event = threading.Event()

    def run(self):
        try:
            logger.info("Starting Solver in Background Thread...")

            for snapshot in iterate(self.solver, report_every=self.report_every, stop_event=self._stop_event):
                self.snapshot_ready.emit(snapshot)
                if self.delay > 0:
                    self._stop_event.wait(self.delay)

            self.finished_solve.emit(SolveResult.from_solver(self.solver, cancelled=self._stop_event.is_set()))

        except Exception as e:
            logger.error(f"Error in SolverWorker: {e}")
            self.error_occurred.emit(str(e))

    def stop(self) -> None:
        self._stop_event.set()
