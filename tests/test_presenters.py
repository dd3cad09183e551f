import logging

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.layout_engine import ConstrainedLayoutEngine

from slabtemperature import Solver
from slabtemperature.controller.driver import run_solve
from slabtemperature.view.console import ConsolePresenter, format_progress
from slabtemperature.view.history import CompositePresenter, ConvergenceHistory
from slabtemperature.view.plots import FigurePresenter


def test_format_progress(small_config):
    solver = Solver(small_config)
    solver.advance()
    line = format_progress(solver.snapshot())
    residual = solver.residual
    assert line == f"Iteration 1: residual {residual:.3e}, hot face {solver.temperatures[0]:.2f}"
    assert "e+" in line or "e-" in line


def test_console_presenter_logs_progress_and_summary(small_config, caplog):
    with caplog.at_level(logging.INFO, logger="slabtemperature"):
        result = run_solve(Solver(small_config), ConsolePresenter(), report_every=50)

    messages = [r.getMessage() for r in caplog.records if r.name == "slabtemperature.view.console"]
    assert messages[0].startswith("Iteration 50: residual ")
    assert messages[-1].startswith(f"Finished (converged) after {result.iterations} iterations")


def test_history_records_residuals(small_config):
    history = ConvergenceHistory()
    result = run_solve(Solver(small_config), history)

    assert len(history) == result.iterations
    assert history.iterations.tolist() == list(range(1, result.iterations + 1))
    assert history.residuals[-1] == result.residual
    assert np.all(np.diff(history.residuals) <= 0.0)
    assert history.last_snapshot.iteration == result.iterations


def test_composite_presenter_fans_out(small_config):
    first, second = ConvergenceHistory(), ConvergenceHistory()
    run_solve(Solver(small_config), CompositePresenter(first, second), report_every=25)
    assert first.iterations.tolist() == second.iterations.tolist()
    assert first.result is second.result


def test_figure_presenter_draws_and_saves(small_config, tmp_path):
    figure = FigurePresenter()
    try:
        result = run_solve(Solver(small_config), figure, report_every=10)

        x, y = figure.profile_data
        np.testing.assert_array_equal(x, np.arange(11) / 10)
        assert y[0] > y[-1]
        iterations, residuals = figure.residual_data
        assert iterations[-1] == result.iterations
        assert np.all(residuals > 0.0)

        path = tmp_path / "slab.png"
        figure.save(str(path))
        assert path.stat().st_size > 0
    finally:
        figure.close()


def test_figure_presenter_accepts_raw_snapshots(fixed_point_config):
    figure = FigurePresenter()
    try:
        run_solve(Solver(fixed_point_config), figure)
        _, y = figure.profile_data
        np.testing.assert_array_equal(y, np.full(5, 25.0))
        assert figure.ax_profile.get_ylabel() == "Temperature (°C)"
        # zero residual cannot go on the log axis
        assert figure.residual_data[0].size == 0
    finally:
        figure.close()


def test_figure_presenter_keeps_global_rc_params():
    before = plt.rcParams["figure.constrained_layout.use"]
    figure = FigurePresenter()
    try:
        assert plt.rcParams["figure.constrained_layout.use"] == before
        assert isinstance(figure.figure.get_layout_engine(), ConstrainedLayoutEngine)
    finally:
        figure.close()
