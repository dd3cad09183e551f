from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.sparse import diags
from scipy.sparse.linalg import spsolve

from slabtemperature.model.state import SlabConfig

if TYPE_CHECKING:
    import numpy.typing as npt


def steady_state_reference(config: SlabConfig) -> npt.NDArray[np.float64]:
    """
    Solve the fixed point of the relaxation sweep directly.

    At the fixed point the faces satisfy the convective closure and every
    interior node is the mean of its neighbours, which gives a tridiagonal
    system:

        (α_h·dx + λ)·T[0] - λ·T[1]           = α_h·T_h·dx
        -T[i-1] + 2·T[i] - T[i+1]            = 0
        -λ·T[N-2] + (α_c·dx + λ)·T[N-1]      = α_c·T_c·dx

    Args:
        config: Problem definition (validated).

    Returns:
        Temperatures at the N grid points.
    """
    config.validate()
    n = config.number_of_points
    dx = config.dx
    lam = config.conductivity
    hot = config.hot_side
    cold = config.cold_side

    main = np.full((n,), 2.0, dtype=np.float64)
    lower = np.full((n - 1,), -1.0, dtype=np.float64)
    upper = np.full((n - 1,), -1.0, dtype=np.float64)
    rhs = np.zeros((n,), dtype=np.float64)

    main[0] = hot.coefficient * dx + lam
    upper[0] = -lam
    rhs[0] = hot.coefficient * hot.ambient_temperature * dx

    main[-1] = cold.coefficient * dx + lam
    lower[-1] = -lam
    rhs[-1] = cold.coefficient * cold.ambient_temperature * dx

    matrix = diags([lower, main, upper], offsets=[-1, 0, 1], format="csr")
    return np.asarray(spsolve(matrix, rhs), dtype=np.float64)
