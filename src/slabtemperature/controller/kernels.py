# kernels.py
from __future__ import annotations

import numpy as np
import numpy.typing as npt
import numba as nb

# ---- JIT'd relaxation kernel ----
# No fastmath: the evaluation order below defines the iterates.

@nb.njit(cache=True)
def relaxation_sweep(
    t_old: npt.NDArray[np.float64],
    t_new: npt.NDArray[np.float64],
    dx: float,
    conductivity: float,
    hot_coefficient: float,
    hot_ambient: float,
    cold_coefficient: float,
    cold_ambient: float,
) -> float:
    """
    One relaxation sweep of the 1-D steady conduction problem.

    Both faces use the convective closure with the previous sweep's neighbour.
    Interior nodes are visited left to right and average the freshly updated
    left neighbour with the previous sweep's right neighbour.

    Args:
        t_old: Field from the previous sweep (not modified).
        t_new: Output buffer of the same length.
        dx: Grid spacing.
        conductivity: Thermal conductivity λ.
        hot_coefficient, hot_ambient: Convective condition at index 0.
        cold_coefficient, cold_ambient: Convective condition at index N-1.

    Returns:
        Largest absolute change of any node (L-infinity norm of the update).
    """
    n = t_old.shape[0]

    t_new[0] = (hot_coefficient * hot_ambient * dx + conductivity * t_old[1]) / (
        hot_coefficient * dx + conductivity
    )
    t_new[n - 1] = (cold_coefficient * cold_ambient * dx + conductivity * t_old[n - 2]) / (
        cold_coefficient * dx + conductivity
    )

    for i in range(1, n - 1):
        t_new[i] = 0.5 * (t_new[i - 1] + t_old[i + 1])

    residual = 0.0
    for i in range(n):
        change = abs(t_new[i] - t_old[i])
        if change > residual:
            residual = change
    return residual
