"""Steady-state temperature distribution through a slab with convective faces."""
from slabtemperature.exceptions import DegenerateNormalization, InvalidConfiguration, SlabTemperatureError
from slabtemperature.model.bc import ConvectiveBoundary
from slabtemperature.model.state import SlabConfig
from slabtemperature.controller.solver import Snapshot, Solver

__all__ = [
    "ConvectiveBoundary",
    "DegenerateNormalization",
    "InvalidConfiguration",
    "SlabConfig",
    "SlabTemperatureError",
    "Snapshot",
    "Solver",
]
