from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def grid_positions(number_of_points: int) -> npt.NDArray[np.float64]:
    """
    Normalized node positions i/(N-1) for i in 0..N-1.

    The first value is exactly 0.0 and the last exactly 1.0.
    """
    return np.arange(number_of_points, dtype=np.float64) / (number_of_points - 1)


def normalize_temperatures(
    temperatures: npt.NDArray[np.float64],
    hot_ambient: float,
    cold_ambient: float,
) -> npt.NDArray[np.float64]:
    """Map the cold ambient to 0 and the hot ambient to 1."""
    return (temperatures - cold_ambient) / (hot_ambient - cold_ambient)
