"""
Finite-Difference Solver Engine
===============================
The core implementation for the slab temperature analysis.

Why is this file needed?
------------------------
1. Physics: It implements the discretized conduction equation and the
   convective boundary closures.
2. Iteration: It manages the relaxation loop (sweep, residual, stop policy).
3. Data Generation: It produces snapshots of the field for the presenters.

Note: solver, kernels, reference and driver are pure Python/NumPy and do NOT
import PySide6. Only workers.py does.
"""
from slabtemperature.controller.solver import Snapshot, Solver
from slabtemperature.controller.driver import SolveResult, iterate, run_solve
from slabtemperature.controller.reference import steady_state_reference

__all__ = ["Snapshot", "Solver", "SolveResult", "iterate", "run_solve", "steady_state_reference"]
