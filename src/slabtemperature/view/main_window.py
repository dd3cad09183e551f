"""
Main Application Window
=======================
Live view of a running solve: parameter form on the left, temperature profile
and convergence history charts on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the controls and the two charts.
2. Routing: It starts and stops the SolverWorker and feeds its snapshots to
   the charts.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QDoubleSpinBox, QSpinBox, QPushButton, QLabel, QFileDialog, QMessageBox
)

from slabtemperature.controller.driver import SolveResult
from slabtemperature.controller.solver import Snapshot, Solver
from slabtemperature.controller.workers import SolverWorker
from slabtemperature.exceptions import InvalidConfiguration
from slabtemperature.model.bc import ConvectiveBoundary
from slabtemperature.model.io import IOManager
from slabtemperature.model.state import SlabConfig

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Slab Temperature"


def _spin(value: float, minimum: float, maximum: float, decimals: int = 3, suffix: str = "") -> QDoubleSpinBox:
    sp = QDoubleSpinBox()
    sp.setRange(minimum, maximum)
    sp.setDecimals(decimals)
    sp.setValue(value)
    if suffix:
        sp.setSuffix(suffix)
    return sp


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[SlabConfig] = None, report_every: int = 1, delay: float = 0.0) -> None:
        super().__init__()
        self.config = config if config is not None else SlabConfig()
        self.report_every = report_every
        self.delay = delay

        self.worker: Optional[SolverWorker] = None
        self.result: Optional[SolveResult] = None
        self.last_snapshot: Optional[Snapshot] = None
        self._iterations: list[int] = []
        self._residuals: list[float] = []

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1300, 650)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QHBoxLayout(main_widget)

        main_layout.addWidget(self._build_controls())
        main_layout.addWidget(self._build_charts(), stretch=1)

    # ---- UI construction ----

    def _build_controls(self) -> QWidget:
        panel = QWidget()
        panel.setMaximumWidth(320)
        layout = QVBoxLayout(panel)

        cfg = self.config

        grp_grid = QGroupBox("Discretization")
        form = QFormLayout(grp_grid)
        self.sp_points = QSpinBox()
        self.sp_points.setRange(3, 100000)
        self.sp_points.setValue(cfg.number_of_points)
        self.sp_thickness = _spin(cfg.thickness, 1e-6, 1e3, suffix=" m")
        self.sp_tolerance = _spin(cfg.tolerance, 1e-12, 1e3, decimals=12)
        self.sp_max_iter = QSpinBox()
        self.sp_max_iter.setRange(1, 100_000_000)
        self.sp_max_iter.setValue(cfg.max_iterations)
        form.addRow("Points N", self.sp_points)
        form.addRow("Thickness", self.sp_thickness)
        form.addRow("Tolerance ε", self.sp_tolerance)
        form.addRow("Max iterations", self.sp_max_iter)
        layout.addWidget(grp_grid)

        grp_mat = QGroupBox("Material & boundaries")
        form = QFormLayout(grp_mat)
        self.sp_conductivity = _spin(cfg.conductivity, 1e-6, 1e4, suffix=" W/mK")
        self.sp_hot_alpha = _spin(cfg.hot_side.coefficient, 1e-6, 1e6, suffix=" W/m²K")
        self.sp_hot_temp = _spin(cfg.hot_side.ambient_temperature, -273.15, 1e5, decimals=2, suffix=" °C")
        self.sp_cold_alpha = _spin(cfg.cold_side.coefficient, 1e-6, 1e6, suffix=" W/m²K")
        self.sp_cold_temp = _spin(cfg.cold_side.ambient_temperature, -273.15, 1e5, decimals=2, suffix=" °C")
        form.addRow("Conductivity λ", self.sp_conductivity)
        form.addRow("Hot side α", self.sp_hot_alpha)
        form.addRow("Hot side T∞", self.sp_hot_temp)
        form.addRow("Cold side α", self.sp_cold_alpha)
        form.addRow("Cold side T∞", self.sp_cold_temp)
        layout.addWidget(grp_mat)

        self.btn_start = QPushButton("Start")
        self.btn_start.clicked.connect(self.start_solve)
        self.btn_stop = QPushButton("Stop")
        self.btn_stop.setEnabled(False)
        self.btn_stop.clicked.connect(self.stop_solve)
        self.btn_export = QPushButton("Export results...")
        self.btn_export.setEnabled(False)
        self.btn_export.clicked.connect(self.export_results)
        layout.addWidget(self.btn_start)
        layout.addWidget(self.btn_stop)
        layout.addWidget(self.btn_export)

        self.lbl_status = QLabel("Ready.")
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)
        layout.addStretch()
        return panel

    def _build_charts(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)

        self.profile_plot = pg.PlotWidget()
        self.profile_plot.setBackground('w')
        self.profile_plot.showGrid(x=True, y=True, alpha=0.3)
        self.profile_plot.setLabel('bottom', 'Position x / L [-]', color='black')
        self.profile_plot.setLabel('left', 'Normalized temperature [-]', color='black')
        self.profile_plot.setTitle('Temperature profile', color='black', size='12pt')
        self.profile_plot.setXRange(0.0, 1.0)
        self.profile_curve = self.profile_plot.plot([], [], pen=pg.mkPen('#d62728', width=2))

        self.residual_plot = pg.PlotWidget()
        self.residual_plot.setBackground('w')
        self.residual_plot.showGrid(x=True, y=True, alpha=0.3)
        self.residual_plot.setLogMode(x=False, y=True)
        self.residual_plot.setLabel('bottom', 'Iteration [-]', color='black')
        self.residual_plot.setLabel('left', 'Residual max|ΔT| [°C]', color='black')
        self.residual_plot.setTitle('Convergence', color='black', size='12pt')
        self.residual_curve = self.residual_plot.plot([], [], pen=pg.mkPen('#1f77b4', width=2))

        for plot in (self.profile_plot, self.residual_plot):
            for axis in ('bottom', 'left'):
                plot.getAxis(axis).setPen('k')
                plot.getAxis(axis).setTextPen('k')
            layout.addWidget(plot)
        return panel

    # ---- actions ----

    def _config_from_form(self) -> SlabConfig:
        return SlabConfig(
            number_of_points=self.sp_points.value(),
            thickness=self.sp_thickness.value(),
            tolerance=self.sp_tolerance.value(),
            max_iterations=self.sp_max_iter.value(),
            conductivity=self.sp_conductivity.value(),
            hot_side=ConvectiveBoundary(self.sp_hot_alpha.value(), self.sp_hot_temp.value()),
            cold_side=ConvectiveBoundary(self.sp_cold_alpha.value(), self.sp_cold_temp.value()),
            initial_temperature=self.config.initial_temperature,
        )

    def start_solve(self) -> None:
        try:
            self.config = self._config_from_form()
            solver = Solver(self.config)
        except InvalidConfiguration as e:
            QMessageBox.warning(self, "Invalid configuration", str(e))
            return

        self._iterations.clear()
        self._residuals.clear()
        self.result = None
        self.last_snapshot = None
        self.profile_plot.setLabel(
            'left',
            'Normalized temperature [-]' if self.config.is_normalizable else 'Temperature [°C]',
            color='black'
        )

        self.worker = SolverWorker(solver, report_every=self.report_every, delay=self.delay, parent=self)
        self.worker.snapshot_ready.connect(self.on_snapshot)
        self.worker.finished_solve.connect(self.on_finished)
        self.worker.error_occurred.connect(self.on_error)

        self.btn_start.setEnabled(False)
        self.btn_stop.setEnabled(True)
        self.btn_export.setEnabled(False)
        self.lbl_status.setText("Solving...")
        self.worker.start()

    def stop_solve(self) -> None:
        if self.worker is not None:
            self.worker.stop()

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self.last_snapshot = snapshot
        self.profile_curve.setData(snapshot.positions, snapshot.values())
        # log axis cannot show a zero residual
        if snapshot.residual > 0:
            self._iterations.append(snapshot.iteration)
            self._residuals.append(snapshot.residual)
            self.residual_curve.setData(np.asarray(self._iterations), np.asarray(self._residuals))
        self.lbl_status.setText(
            f"Iteration {snapshot.iteration}\nResidual {snapshot.residual:.3e}\n"
            f"Hot face {snapshot.hot_face_temperature:.2f} °C"
        )

    def on_finished(self, result: SolveResult) -> None:
        self.result = result
        if result.converged:
            status = "Converged"
        elif result.cancelled:
            status = "Stopped"
        else:
            status = "Iteration limit reached"
        self.lbl_status.setText(f"{status} after {result.iterations} iterations\nResidual {result.residual:.3e}")
        self._reset_buttons()
        self.btn_export.setEnabled(True)

    def on_error(self, message: str) -> None:
        self._reset_buttons()
        self.lbl_status.setText("Failed.")
        QMessageBox.critical(self, "Solver error", message)

    def export_results(self) -> None:
        if self.result is None or self.last_snapshot is None:
            return
        filepath, _ = QFileDialog.getSaveFileName(self, "Export results", "", "HDF5 (*.h5)")
        if not filepath:
            return
        IOManager.save_result(
            filepath,
            config=self.config,
            iterations=self.result.iterations,
            residual=self.result.residual,
            converged=self.result.converged,
            positions=self.last_snapshot.positions,
            temperatures=self.result.temperatures,
            history_iterations=np.asarray(self._iterations, dtype=np.int64),
            history_residuals=np.asarray(self._residuals, dtype=np.float64),
        )

    def _reset_buttons(self) -> None:
        self.btn_start.setEnabled(True)
        self.btn_stop.setEnabled(False)

    def closeEvent(self, event) -> None:
        if self.worker is not None and self.worker.isRunning():
            self.worker.stop()
            self.worker.wait()
        super().closeEvent(event)
