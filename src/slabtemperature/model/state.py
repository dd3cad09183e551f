"""
Solve Configuration (Data Model)
================================
This module defines the parameter set of a single slab solve.

Why is this file needed?
------------------------
1. Explicit state: Grid size, tolerances and material data travel together in
   one object handed to the Solver, instead of living in module globals.
2. Persistence: This object is what gets serialized to a JSON config file and
   into the attributes of an exported result file.
3. Validation: Constraints are checked in one place before any solve starts.

Classes:
    SlabConfig: The parameter container.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
import numbers
from typing import Dict, Any

from slabtemperature import config
from slabtemperature.exceptions import InvalidConfiguration
from slabtemperature.model.bc import ConvectiveBoundary, SlabFace

logger = logging.getLogger(__name__)


def _positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) \
            or not math.isfinite(value) or value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive finite number, got {value!r}.")


def _whole(name: str, value: Any) -> int:
    # JSON numbers may arrive as floats; only whole values are accepted
    if isinstance(value, bool):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}.")
    number = float(value)
    if not number.is_integer():
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}.")
    return int(number)


@dataclass(frozen=True)
class SlabConfig:
    """
    Parameters of one steady-state slab solve.

    The hot side is the left face (index 0) and the cold side the right face
    (index N-1).
    """
    number_of_points: int = config.DEFAULT_NUMBER_OF_POINTS
    thickness: float = config.DEFAULT_THICKNESS
    tolerance: float = config.DEFAULT_TOLERANCE
    max_iterations: int = config.DEFAULT_MAX_ITERATIONS
    conductivity: float = config.DEFAULT_CONDUCTIVITY
    hot_side: ConvectiveBoundary = field(default_factory=lambda: ConvectiveBoundary(
        config.DEFAULT_HOT_COEFFICIENT, config.DEFAULT_HOT_AMBIENT
    ))
    cold_side: ConvectiveBoundary = field(default_factory=lambda: ConvectiveBoundary(
        config.DEFAULT_COLD_COEFFICIENT, config.DEFAULT_COLD_AMBIENT
    ))
    initial_temperature: float = config.DEFAULT_INITIAL_TEMPERATURE

    @property
    def dx(self) -> float:
        """Grid spacing in meters."""
        return self.thickness / (self.number_of_points - 1)

    @property
    def is_normalizable(self) -> bool:
        """False when both ambients coincide and normalized output is undefined."""
        return self.hot_side.ambient_temperature != self.cold_side.ambient_temperature

    def validate(self) -> None:
        """
        Check every constraint of the parameter set.

        Raises:
            InvalidConfiguration: On the first violated constraint.
        """
        n = self.number_of_points
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 3:
            raise InvalidConfiguration(f"number_of_points must be an integer >= 3, got {n!r}.")

        m = self.max_iterations
        if isinstance(m, bool) or not isinstance(m, numbers.Integral) or m <= 0:
            raise InvalidConfiguration(f"max_iterations must be a positive integer, got {m!r}.")

        _positive("thickness", self.thickness)
        _positive("tolerance", self.tolerance)
        _positive("conductivity", self.conductivity)

        t0 = self.initial_temperature
        if isinstance(t0, bool) or not isinstance(t0, numbers.Real) or not math.isfinite(t0):
            raise InvalidConfiguration(
                f"initial_temperature must be finite, got {t0!r}."
            )

        self.hot_side.validate(SlabFace.HOT)
        self.cold_side.validate(SlabFace.COLD)

    def with_changes(self, **changes: Any) -> SlabConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number_of_points": self.number_of_points,
            "thickness": self.thickness,
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
            "conductivity": self.conductivity,
            "hot_side": self.hot_side.to_dict(),
            "cold_side": self.cold_side.to_dict(),
            "initial_temperature": self.initial_temperature,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SlabConfig:
        """
        Build a config from a plain dict, missing keys fall back to defaults.

        Raises:
            InvalidConfiguration: If a value cannot be converted.
        """
        defaults = SlabConfig()
        try:
            return SlabConfig(
                number_of_points=_whole("number_of_points", data.get("number_of_points", defaults.number_of_points)),
                thickness=float(data.get("thickness", defaults.thickness)),
                tolerance=float(data.get("tolerance", defaults.tolerance)),
                max_iterations=_whole("max_iterations", data.get("max_iterations", defaults.max_iterations)),
                conductivity=float(data.get("conductivity", defaults.conductivity)),
                hot_side=ConvectiveBoundary.from_dict(data["hot_side"])
                if "hot_side" in data else defaults.hot_side,
                cold_side=ConvectiveBoundary.from_dict(data["cold_side"])
                if "cold_side" in data else defaults.cold_side,
                initial_temperature=float(data.get("initial_temperature", defaults.initial_temperature)),
            )
        except InvalidConfiguration:
            raise
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidConfiguration(f"Invalid configuration data: {e}") from e
