from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from slabtemperature.controller.driver import Presenter, SolveResult
    from slabtemperature.controller.solver import Snapshot


class ConvergenceHistory:
    """
    Presenter that records the residual history and the latest snapshot.

    The solver keeps no history of its own; this is where it accumulates.
    """

    def __init__(self) -> None:
        self._iterations: list[int] = []
        self._residuals: list[float] = []
        self.last_snapshot: Optional[Snapshot] = None
        self.result: Optional[SolveResult] = None

    def __len__(self) -> int:
        return len(self._iterations)

    @property
    def iterations(self) -> npt.NDArray[np.int64]:
        return np.asarray(self._iterations, dtype=np.int64)

    @property
    def residuals(self) -> npt.NDArray[np.float64]:
        return np.asarray(self._residuals, dtype=np.float64)

    def update(self, snapshot: Snapshot) -> None:
        self._iterations.append(snapshot.iteration)
        self._residuals.append(snapshot.residual)
        self.last_snapshot = snapshot

    def finish(self, result: SolveResult) -> None:
        self.result = result


class CompositePresenter:
    """Forwards every call to several presenters, in order."""

    def __init__(self, *presenters: Presenter) -> None:
        self.presenters = list(presenters)

    def update(self, snapshot: Snapshot) -> None:
        for presenter in self.presenters:
            presenter.update(snapshot)

    def finish(self, result: SolveResult) -> None:
        for presenter in self.presenters:
            presenter.finish(result)
