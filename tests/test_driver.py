import threading

import numpy as np
import pytest

from slabtemperature import InvalidConfiguration, Solver
from slabtemperature.controller.driver import SolveResult, iterate, run_solve
from slabtemperature.view.history import ConvergenceHistory


class RecordingPresenter:
    def __init__(self):
        self.snapshots = []
        self.results = []
        self.threads = set()

    def update(self, snapshot):
        self.snapshots.append(snapshot)
        self.threads.add(threading.get_ident())

    def finish(self, result):
        self.results.append(result)


# ---- iterate ----

def test_iterate_performs_at_least_one_sweep(fixed_point_config):
    solver = Solver(fixed_point_config)
    snapshots = list(iterate(solver))
    assert solver.iteration == 1
    assert len(snapshots) == 1
    assert snapshots[0].residual == 0.0
    assert not snapshots[0].normalized


def test_iterate_reports_every_nth_sweep_and_the_last(small_config):
    solver = Solver(small_config.with_changes(max_iterations=23))
    iterations = [s.iteration for s in iterate(solver, report_every=5)]
    assert iterations == [5, 10, 15, 20, 23]


def test_iterate_stops_on_event(small_config):
    solver = Solver(small_config)
    stop = threading.Event()
    seen = []
    for snapshot in iterate(solver, stop_event=stop):
        seen.append(snapshot.iteration)
        if snapshot.iteration == 3:
            stop.set()
    assert seen == [1, 2, 3, 4]
    assert solver.iteration == 4


@pytest.mark.parametrize("report_every", [0, -1, 1.5, True])
def test_iterate_rejects_bad_cadence(small_config, report_every):
    with pytest.raises(InvalidConfiguration):
        next(iterate(Solver(small_config), report_every=report_every))


# ---- run_solve ----

def test_run_solve_delivers_every_snapshot_in_order(small_config):
    solver = Solver(small_config)
    presenter = RecordingPresenter()

    result = run_solve(solver, presenter, max_pending=2)

    iterations = [s.iteration for s in presenter.snapshots]
    assert iterations == list(range(1, solver.iteration + 1))
    assert presenter.threads == {threading.get_ident()}
    assert presenter.results == [result]
    assert result.converged
    assert not result.cancelled
    assert not result.exhausted
    assert result.iterations == solver.iteration
    np.testing.assert_array_equal(result.temperatures, solver.temperatures)


def test_run_solve_reports_exhaustion(small_config):
    solver = Solver(small_config.with_changes(max_iterations=7))
    history = ConvergenceHistory()

    result = run_solve(solver, history, report_every=3)

    assert result.exhausted
    assert not result.converged
    assert history.iterations.tolist() == [3, 6, 7]
    assert history.result is result


def test_run_solve_can_be_cancelled(reference_config):
    solver = Solver(reference_config)
    stop = threading.Event()

    class StopAfterFirst(RecordingPresenter):
        def update(self, snapshot):
            super().update(snapshot)
            stop.set()

    presenter = StopAfterFirst()
    result = run_solve(solver, presenter, stop_event=stop)

    assert result.cancelled
    assert not result.converged
    assert result.iterations < reference_config.max_iterations
    assert presenter.snapshots[-1].iteration == result.iterations


def test_run_solve_reraises_presenter_errors(reference_config):
    solver = Solver(reference_config)

    class Broken(RecordingPresenter):
        def update(self, snapshot):
            raise RuntimeError("render failed")

    with pytest.raises(RuntimeError, match="render failed"):
        run_solve(solver, Broken(), max_pending=1)
    assert not solver.finished


def test_run_solve_reraises_solver_errors(small_config):
    solver = Solver(small_config)
    presenter = RecordingPresenter()

    with pytest.raises(InvalidConfiguration):
        run_solve(solver, presenter, report_every=0)
    assert presenter.results == []


def test_run_solve_rejects_bad_arguments(small_config):
    with pytest.raises(InvalidConfiguration):
        run_solve(Solver(small_config), RecordingPresenter(), max_pending=0)
    with pytest.raises(InvalidConfiguration):
        run_solve(Solver(small_config), RecordingPresenter(), delay=-1.0)


def test_run_solve_falls_back_to_raw_snapshots(fixed_point_config, caplog):
    presenter = RecordingPresenter()
    with caplog.at_level("WARNING", logger="slabtemperature"):
        result = run_solve(Solver(fixed_point_config), presenter)

    assert result.converged
    assert [s.normalized for s in presenter.snapshots] == [False]
    assert "raw temperatures" in caplog.text


def test_solve_result_from_fresh_solver(small_config):
    result = SolveResult.from_solver(Solver(small_config), cancelled=True)
    assert result.iterations == 0
    assert result.cancelled
    assert not result.converged
