"""
Configuration Defaults
======================
This module serves as the central registry for the default problem constants.

Why is this file needed?
------------------------
1. Abstraction: The default slab (thickness, material, boundaries) is defined
   in one place instead of being scattered through the solver and the GUI.
2. Independence: These values are only defaults. Every solve receives its own
   SlabConfig, so several solves can run side by side in one process.

Exports:
    DEFAULT_* constants used by model.state.SlabConfig.
"""

# Discretization
DEFAULT_NUMBER_OF_POINTS: int = 80
DEFAULT_THICKNESS: float = 2.5  # m

# Iteration control
DEFAULT_TOLERANCE: float = 1e-5
DEFAULT_MAX_ITERATIONS: int = 10000

# Material
DEFAULT_CONDUCTIVITY: float = 20.0  # W/mK

# Boundaries (coefficient in W/m²K, ambient temperature in °C)
DEFAULT_HOT_COEFFICIENT: float = 80.0
DEFAULT_HOT_AMBIENT: float = 1200.0
DEFAULT_COLD_COEFFICIENT: float = 15.0
DEFAULT_COLD_AMBIENT: float = 25.0

DEFAULT_INITIAL_TEMPERATURE: float = 25.0  # °C

# Driver
DEFAULT_REPORT_EVERY: int = 1
DEFAULT_MAX_PENDING_SNAPSHOTS: int = 8
