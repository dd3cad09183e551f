"""Matplotlib figures of the temperature profile and the convergence history."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from slabtemperature.controller.driver import SolveResult
    from slabtemperature.controller.solver import Snapshot

logger = logging.getLogger(__name__)


def _style_axes(ax: Axes) -> None:
    ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    ax.minorticks_on()
    ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)


class FigurePresenter:
    """Two-panel figure: temperature profile (left) and residual history (right)."""

    def __init__(self) -> None:
        self.figure, (self.ax_profile, self.ax_residual) = plt.subplots(
            1, 2, figsize=(11, 4.5), layout="constrained"
        )

        self._profile_line, = self.ax_profile.plot([], [], 'r', lw=2)
        self.ax_profile.set_title("Temperature profile")
        self.ax_profile.set_xlabel("Position x / L (-)")
        self.ax_profile.set_xlim(0.0, 1.0)
        _style_axes(self.ax_profile)

        self._residual_line, = self.ax_residual.semilogy([], [], 'b', lw=1.5)
        self.ax_residual.set_title("Convergence")
        self.ax_residual.set_xlabel("Iteration (-)")
        self.ax_residual.set_ylabel("Residual max|ΔT| (°C)")
        _style_axes(self.ax_residual)

        self._iterations: list[int] = []
        self._residuals: list[float] = []

    def update(self, snapshot: Snapshot) -> None:
        self._profile_line.set_data(snapshot.positions, snapshot.values())
        if snapshot.normalized:
            self.ax_profile.set_ylabel("Normalized temperature (-)")
        else:
            self.ax_profile.set_ylabel("Temperature (°C)")
        self.ax_profile.relim()
        self.ax_profile.autoscale_view(scalex=False)

        # Residual is only positive values on a log axis
        if snapshot.residual > 0:
            self._iterations.append(snapshot.iteration)
            self._residuals.append(snapshot.residual)
            self._residual_line.set_data(self._iterations, self._residuals)
            self.ax_residual.relim()
            self.ax_residual.autoscale_view()

    def finish(self, result: SolveResult) -> None:
        status = "converged" if result.converged else "not converged"
        self.figure.suptitle(f"{result.iterations} iterations, {status}")

    @property
    def profile_data(self) -> tuple[np.ndarray, np.ndarray]:
        x, y = self._profile_line.get_data()
        return np.asarray(x), np.asarray(y)

    @property
    def residual_data(self) -> tuple[np.ndarray, np.ndarray]:
        x, y = self._residual_line.get_data()
        return np.asarray(x), np.asarray(y)

    def save(self, path: str, dpi: Optional[int] = 150) -> None:
        logger.info(f"Saving figure to: {path}")
        self.figure.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.figure)
