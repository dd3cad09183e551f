"""
The VIEW layer turns snapshots into something a human can read.
Qt widgets live in main_window.py and are imported only by the GUI entry point.
"""
from slabtemperature.view.console import ConsolePresenter
from slabtemperature.view.history import CompositePresenter, ConvergenceHistory

__all__ = ["CompositePresenter", "ConsolePresenter", "ConvergenceHistory"]
