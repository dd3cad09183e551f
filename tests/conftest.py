import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from slabtemperature.model.bc import ConvectiveBoundary
from slabtemperature.model.state import SlabConfig


@pytest.fixture
def reference_config() -> SlabConfig:
    """The default slab with room to converge."""
    return SlabConfig(max_iterations=20000)


@pytest.fixture
def small_config() -> SlabConfig:
    return SlabConfig(number_of_points=11, thickness=1.0, tolerance=1e-6, max_iterations=5000)


@pytest.fixture
def fixed_point_config() -> SlabConfig:
    """Uniform 25.0 is an exact fixed point: dx = 1 and both ambients equal the start value."""
    return SlabConfig(
        number_of_points=5,
        thickness=4.0,
        tolerance=1e-9,
        max_iterations=10,
        conductivity=1.0,
        hot_side=ConvectiveBoundary(3.0, 25.0),
        cold_side=ConvectiveBoundary(3.0, 25.0),
        initial_temperature=25.0,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() installs handlers on the package logger; drop them between tests."""
    yield
    logger = logging.getLogger("slabtemperature")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
