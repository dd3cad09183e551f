import json

import numpy as np
import pytest

from slabtemperature import ConvectiveBoundary, InvalidConfiguration, SlabConfig, Solver
from slabtemperature.controller.driver import run_solve
from slabtemperature.model.io import IOManager
from slabtemperature.view.history import ConvergenceHistory


def test_default_config():
    config = SlabConfig()
    assert config.number_of_points == 80
    assert config.thickness == 2.5
    assert config.tolerance == 1e-5
    assert config.max_iterations == 10000
    assert config.conductivity == 20.0
    assert config.hot_side == ConvectiveBoundary(80.0, 1200.0)
    assert config.cold_side == ConvectiveBoundary(15.0, 25.0)
    assert config.initial_temperature == 25.0
    assert config.dx == pytest.approx(2.5 / 79)
    assert config.is_normalizable
    config.validate()


def test_config_dict_round_trip():
    config = SlabConfig(number_of_points=21, hot_side=ConvectiveBoundary(50.0, 800.0))
    assert SlabConfig.from_dict(config.to_dict()) == config


def test_from_dict_uses_defaults_for_missing_keys():
    config = SlabConfig.from_dict({"number_of_points": 40})
    assert config.number_of_points == 40
    assert config.cold_side == SlabConfig().cold_side


@pytest.mark.parametrize("data", [
    {"thickness": "thick"},
    {"hot_side": {"coefficient": 80.0}},
    {"cold_side": None},
    {"number_of_points": 80.9},
    {"number_of_points": float("inf")},
    {"number_of_points": True},
    {"max_iterations": 1.5},
    {"max_iterations": "many"},
])
def test_from_dict_rejects_bad_values(data):
    with pytest.raises(InvalidConfiguration):
        SlabConfig.from_dict(data)


def test_from_dict_accepts_whole_floats():
    config = SlabConfig.from_dict({"number_of_points": 40.0, "max_iterations": 500.0})
    assert config.number_of_points == 40
    assert isinstance(config.max_iterations, int)


def test_config_file_round_trip(tmp_path):
    path = tmp_path / "slab.json"
    config = SlabConfig(number_of_points=31, tolerance=1e-7)

    IOManager.save_config(config, str(path))

    assert json.loads(path.read_text(encoding="utf-8"))["number_of_points"] == 31
    assert IOManager.load_config(str(path)) == config


def test_load_config_validates(tmp_path):
    path = tmp_path / "slab.json"
    path.write_text(json.dumps({"number_of_points": 2}), encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        IOManager.load_config(str(path))


@pytest.mark.parametrize("content", [
    b"{not json",
    b"[1, 2, 3]",
    b'{"thickness": "\xff"}',
    b'{"number_of_points": Infinity}',
    b'{"max_iterations": 1e400}',
])
def test_load_config_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "slab.json"
    path.write_bytes(content)
    with pytest.raises(InvalidConfiguration):
        IOManager.load_config(str(path))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        IOManager.load_config(str(tmp_path / "missing.json"))


def test_result_export(tmp_path, small_config):
    solver = Solver(small_config)
    history = ConvergenceHistory()
    result = run_solve(solver, history, report_every=10)
    path = tmp_path / "result.h5"

    IOManager.save_result(
        str(path),
        config=small_config,
        iterations=result.iterations,
        residual=result.residual,
        converged=result.converged,
        positions=history.last_snapshot.positions,
        temperatures=result.temperatures,
        history_iterations=history.iterations,
        history_residuals=history.residuals,
    )
    stored = IOManager.load_result(str(path))

    assert stored.config == small_config
    assert stored.iterations == result.iterations
    assert stored.converged
    assert stored.residual == result.residual
    np.testing.assert_array_equal(stored.temperatures, result.temperatures)
    np.testing.assert_array_equal(stored.positions, np.arange(11) / 10)
    np.testing.assert_array_equal(stored.history_iterations, history.iterations)
    np.testing.assert_array_equal(stored.history_residuals, history.residuals)


def test_result_export_without_history(tmp_path, small_config):
    path = tmp_path / "result.h5"
    IOManager.save_result(
        str(path),
        config=small_config,
        iterations=0,
        residual=1.0,
        converged=False,
        positions=np.linspace(0.0, 1.0, 11),
        temperatures=np.full(11, 25.0),
    )
    stored = IOManager.load_result(str(path))
    assert stored.history_iterations.size == 0
    assert not stored.converged
