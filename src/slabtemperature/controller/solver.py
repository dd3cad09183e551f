from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import TYPE_CHECKING, Iterator

import numpy as np

from slabtemperature.controller.kernels import relaxation_sweep
from slabtemperature.exceptions import DegenerateNormalization
from slabtemperature.model.bc import ConvectiveBoundary
from slabtemperature.model.state import SlabConfig
from slabtemperature.utils import grid_positions, normalize_temperatures

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of the solver state after a completed sweep.

    The arrays are private copies, so a snapshot stays valid while the solver
    keeps iterating (e.g. when it is rendered on another thread).
    """
    iteration: int
    residual: float
    positions: npt.NDArray[np.float64]
    temperatures: npt.NDArray[np.float64]
    hot_ambient: float
    cold_ambient: float
    normalized: bool = True

    def points(self) -> Iterator[tuple[float, float]]:
        """
        Lazily yield (normalized position, value) pairs in index order.

        The value is the normalized temperature
        (T - T_cold) / (T_hot - T_cold) when the snapshot is normalized and the
        raw temperature otherwise.
        """
        if self.normalized:
            span = self.hot_ambient - self.cold_ambient
            for x, t in zip(self.positions, self.temperatures):
                yield float(x), float((t - self.cold_ambient) / span)
        else:
            for x, t in zip(self.positions, self.temperatures):
                yield float(x), float(t)

    def values(self) -> npt.NDArray[np.float64]:
        """The y values of points() as one array."""
        if self.normalized:
            return normalize_temperatures(self.temperatures, self.hot_ambient, self.cold_ambient)
        return self.temperatures.copy()

    @property
    def hot_face_temperature(self) -> float:
        """Temperature at index 0."""
        return float(self.temperatures[0])

    @property
    def progress(self) -> tuple[int, float]:
        """(iteration, residual) of the most recent sweep."""
        return self.iteration, self.residual


class Solver:
    """
    Finite-difference relaxation solver for steady 1-D conduction through a slab
    with convective conditions on both faces.
    """

    def __init__(
        self,
        config: SlabConfig | None = None,
    ) -> None:
        """
        Initialize the solver and the uniform starting field.

        Args:
            config: Problem definition. Defaults to SlabConfig().

        Raises:
            InvalidConfiguration: If any parameter violates its constraint.
        """
        self._config = config if config is not None else SlabConfig()
        self._config.validate()

        n = self._config.number_of_points
        self._dx = self._config.dx
        self._field: npt.NDArray[np.float64] = np.full((n,), self._config.initial_temperature, dtype=np.float64)
        self._next: npt.NDArray[np.float64] = np.empty_like(self._field)
        self._positions = grid_positions(n)
        self._positions.flags.writeable = False

        self._iteration = 0
        self._residual = math.inf

        logger.debug(
            f"Solver ready: N={n}, dx={self._dx:.6g} m, tolerance={self._config.tolerance:g}, "
            f"max_iterations={self._config.max_iterations}"
        )

    @classmethod
    def from_parameters(
        cls,
        number_of_points: int,
        thickness: float,
        tolerance: float,
        max_iterations: int,
        conductivity: float,
        hot_side: tuple[float, float],
        cold_side: tuple[float, float],
    ) -> Solver:
        """
        Build a solver from loose parameters.

        Args:
            hot_side: (coefficient, ambient temperature) of the left face.
            cold_side: (coefficient, ambient temperature) of the right face.
        """
        return cls(SlabConfig(
            number_of_points=number_of_points,
            thickness=thickness,
            tolerance=tolerance,
            max_iterations=max_iterations,
            conductivity=conductivity,
            hot_side=ConvectiveBoundary(*hot_side),
            cold_side=ConvectiveBoundary(*cold_side),
        ))

    # ---- read-only state ----

    @property
    def config(self) -> SlabConfig:
        return self._config

    @property
    def dx(self) -> float:
        return self._dx

    @property
    def iteration(self) -> int:
        return self._iteration

    @property
    def residual(self) -> float:
        """Residual of the last sweep, inf before the first one."""
        return self._residual

    @property
    def temperatures(self) -> npt.NDArray[np.float64]:
        """Copy of the current field."""
        return self._field.copy()

    @property
    def converged(self) -> bool:
        return self._iteration > 0 and self._residual <= self._config.tolerance

    @property
    def exhausted(self) -> bool:
        return self._iteration >= self._config.max_iterations

    @property
    def finished(self) -> bool:
        """True once the do-while loop must stop."""
        return self.converged or self.exhausted

    # ---- iteration ----

    def advance(self) -> float:
        """
        Perform one relaxation sweep and update the field in place.

        Returns:
            The L-infinity norm of the change made by this sweep.
        """
        hot = self._config.hot_side
        cold = self._config.cold_side

        residual = relaxation_sweep(
            self._field,
            self._next,
            self._dx,
            self._config.conductivity,
            hot.coefficient,
            hot.ambient_temperature,
            cold.coefficient,
            cold.ambient_temperature,
        )

        self._field[:] = self._next
        self._iteration += 1
        self._residual = float(residual)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Iteration {self._iteration}: residual {self._residual:.3e}, "
                f"hot face {self._field[0]:.2f}"
            )
        return self._residual

    def snapshot(self, normalize: bool = True) -> Snapshot:
        """
        Capture the current state without modifying it.

        Args:
            normalize: Report (T - T_cold) / (T_hot - T_cold) instead of raw temperatures.

        Raises:
            DegenerateNormalization: If normalize is requested and both ambients are equal.
        """
        if normalize and not self._config.is_normalizable:
            raise DegenerateNormalization(
                f"Cannot normalize temperatures: both ambient temperatures equal "
                f"{self._config.hot_side.ambient_temperature!r}."
            )
        temperatures = self._field.copy()
        temperatures.flags.writeable = False
        return Snapshot(
            iteration=self._iteration,
            residual=self._residual,
            positions=self._positions,
            temperatures=temperatures,
            hot_ambient=self._config.hot_side.ambient_temperature,
            cold_ambient=self._config.cold_side.ambient_temperature,
            normalized=normalize,
        )
