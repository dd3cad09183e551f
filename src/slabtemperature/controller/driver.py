"""
Solve Loop Driver
=================
This module owns the loop around Solver.advance().

Why is this file needed?
------------------------
1. Policy: The solver only knows how to do one sweep. The do-while loop, the
   report cadence and the pacing live here.
2. Responsiveness: run_solve() moves the sweeps to a background thread and
   hands snapshots to the presenter through a bounded queue, so rendering and
   solving never share mutable state.

Functions:
    iterate: Synchronous generator of snapshots.
    run_solve: Threaded solve with a presenter on the calling thread.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import queue
import threading
from typing import TYPE_CHECKING, Iterator, Optional, Protocol

import numpy as np

from slabtemperature import config
from slabtemperature.controller.solver import Snapshot, Solver
from slabtemperature.exceptions import InvalidConfiguration

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# How long a blocked producer waits before re-checking for an aborted consumer
_PUT_TIMEOUT = 0.1


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a finished solve loop."""
    iterations: int
    residual: float
    converged: bool
    cancelled: bool
    temperatures: npt.NDArray[np.float64]

    @property
    def exhausted(self) -> bool:
        return not self.converged and not self.cancelled

    @staticmethod
    def from_solver(solver: Solver, cancelled: bool = False) -> SolveResult:
        return SolveResult(
            iterations=solver.iteration,
            residual=solver.residual,
            converged=solver.converged,
            cancelled=cancelled and not solver.finished,
            temperatures=solver.temperatures,
        )


class Presenter(Protocol):
    def update(self, snapshot: Snapshot) -> None: ...
    def finish(self, result: SolveResult) -> None: ...


def iterate(
    solver: Solver,
    report_every: int = config.DEFAULT_REPORT_EVERY,
    stop_event: Optional[threading.Event] = None,
) -> Iterator[Snapshot]:
    """
    Advance the solver until it converges, runs out of iterations or is stopped.

    At least one sweep is always performed. A snapshot is yielded after every
    report_every-th sweep and always after the last one. When both ambients are
    equal the snapshots carry raw temperatures.

    Args:
        solver: Solver to drive.
        report_every: Report cadence in sweeps.
        stop_event: Optional event requesting cancellation between sweeps.

    Raises:
        InvalidConfiguration: If report_every is not a positive integer.
    """
    if isinstance(report_every, bool) or not isinstance(report_every, int) or report_every < 1:
        raise InvalidConfiguration(f"report_every must be a positive integer, got {report_every!r}.")

    normalize = solver.config.is_normalizable
    if not normalize:
        logger.warning("Ambient temperatures are equal, reporting raw temperatures instead of normalized ones.")

    while True:
        solver.advance()
        last = solver.finished or (stop_event is not None and stop_event.is_set())
        if last or solver.iteration % report_every == 0:
            yield solver.snapshot(normalize=normalize)
        if last:
            return


class _Failure:
    def __init__(self, error: BaseException) -> None:
        self.error = error


_DONE = object()


def run_solve(
    solver: Solver,
    presenter: Presenter,
    report_every: int = config.DEFAULT_REPORT_EVERY,
    delay: float = 0.0,
    max_pending: int = config.DEFAULT_MAX_PENDING_SNAPSHOTS,
    stop_event: Optional[threading.Event] = None,
) -> SolveResult:
    """
    Run the solve loop on a background thread and present snapshots here.

    Args:
        solver: Solver to drive. It must not be used elsewhere until this returns.
        presenter: Receives every snapshot in order, then the result.
        report_every: Report cadence in sweeps.
        delay: Pause in seconds after each report (for watching the field evolve).
        max_pending: Capacity of the snapshot queue; the solver blocks when it is full.
        stop_event: Optional event; setting it ends the loop after the current sweep.

    Returns:
        The SolveResult, also passed to presenter.finish().

    Raises:
        Any exception raised by the solve loop or by the presenter.
    """
    if max_pending < 1:
        raise InvalidConfiguration(f"max_pending must be at least 1, got {max_pending!r}.")
    if delay < 0:
        raise InvalidConfiguration(f"delay must not be negative, got {delay!r}.")

    stop_event = stop_event if stop_event is not None else threading.Event()
    abort = threading.Event()
    channel: queue.Queue = queue.Queue(maxsize=max_pending)

    def put(item: object) -> bool:
        while not abort.is_set():
            try:
                channel.put(item, timeout=_PUT_TIMEOUT)
                return True
            except queue.Full:
                continue
        return False

    def produce() -> None:
        try:
            for snapshot in iterate(solver, report_every=report_every, stop_event=stop_event):
                if not put(snapshot):
                    return
                if delay > 0:
                    stop_event.wait(delay)
        except Exception as e:
            logger.error(f"Error in solve loop: {e}")
            put(_Failure(e))
        else:
            put(_DONE)

    logger.info("Starting solve loop in background thread...")
    worker = threading.Thread(target=produce, name="slab-solver", daemon=True)
    worker.start()

    try:
        while True:
            item = channel.get()
            if item is _DONE:
                break
            if isinstance(item, _Failure):
                raise item.error
            presenter.update(item)
    except BaseException:
        abort.set()
        raise
    finally:
        worker.join()

    result = SolveResult.from_solver(solver, cancelled=stop_event.is_set())
    if result.converged:
        logger.info(f"Converged after {result.iterations} iterations (residual {result.residual:.3e}).")
    elif result.cancelled:
        logger.info(f"Cancelled after {result.iterations} iterations (residual {result.residual:.3e}).")
    else:
        logger.warning(
            f"Stopped at the iteration limit {result.iterations} without converging "
            f"(residual {result.residual:.3e} > {solver.config.tolerance:g})."
        )
    presenter.finish(result)
    return result
