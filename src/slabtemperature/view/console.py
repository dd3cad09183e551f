"""Console presenter: one log line per reported iteration."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slabtemperature.controller.driver import SolveResult
    from slabtemperature.controller.solver import Snapshot

logger = logging.getLogger(__name__)


def format_progress(snapshot: Snapshot) -> str:
    """Iteration index, residual in scientific notation and hot face temperature."""
    return (
        f"Iteration {snapshot.iteration}: residual {snapshot.residual:.3e}, "
        f"hot face {snapshot.hot_face_temperature:.2f}"
    )


class ConsolePresenter:
    """Logs solver progress through the package logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def update(self, snapshot: Snapshot) -> None:
        logger.log(self.level, format_progress(snapshot))

    def finish(self, result: SolveResult) -> None:
        if result.converged:
            status = "converged"
        elif result.cancelled:
            status = "cancelled"
        else:
            status = "iteration limit reached"
        logger.log(
            self.level,
            f"Finished ({status}) after {result.iterations} iterations, "
            f"residual {result.residual:.3e}, hot face {result.temperatures[0]:.2f}, "
            f"cold face {result.temperatures[-1]:.2f}"
        )
