"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from slabtemperature.controller.driver import run_solve
from slabtemperature.controller.solver import Solver
from slabtemperature.exceptions import InvalidConfiguration
from slabtemperature.logging_config import setup_logging
from slabtemperature.model.io import IOManager
from slabtemperature.model.state import SlabConfig
from slabtemperature.view.console import ConsolePresenter
from slabtemperature.view.history import CompositePresenter, ConvergenceHistory

logger = logging.getLogger("slabtemperature.cli")

EXIT_CONVERGED = 0
EXIT_NOT_CONVERGED = 1
EXIT_INVALID_CONFIGURATION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slabtemperature",
        description="Steady-state temperature through a slab with convective faces.",
    )
    parser.add_argument("--config", metavar="PATH", help="JSON file with the solve parameters.")
    parser.add_argument("--report-every", type=int, default=100, metavar="N",
                        help="Report progress every N iterations (default: 100).")
    parser.add_argument("--delay", type=float, default=0.0, metavar="SECONDS",
                        help="Pause after each report.")
    parser.add_argument("--plot", metavar="PATH", help="Save profile and convergence figure to PATH.")
    parser.add_argument("--export", metavar="PATH", help="Save result and history to an HDF5 file.")
    parser.add_argument("--gui", action="store_true", help="Open the live Qt window instead.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", metavar="PATH", help="Also write the log to PATH.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = IOManager.load_config(args.config) if args.config else SlabConfig()
        solver = Solver(config)
    except InvalidConfiguration as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INVALID_CONFIGURATION
    except OSError as e:
        logger.error(f"Cannot read configuration: {e}")
        return EXIT_INVALID_CONFIGURATION

    if args.gui:
        # Qt is only imported when the window is requested
        from slabtemperature.main import run_gui
        return run_gui(config, report_every=args.report_every, delay=args.delay)

    history = ConvergenceHistory()
    presenter = CompositePresenter(ConsolePresenter(), history)

    figure = None
    if args.plot:
        from slabtemperature.view.plots import FigurePresenter
        figure = FigurePresenter()
        presenter.presenters.append(figure)

    try:
        result = run_solve(solver, presenter, report_every=args.report_every, delay=args.delay)
    except InvalidConfiguration as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INVALID_CONFIGURATION

    if figure is not None:
        figure.save(args.plot)
        figure.close()

    if args.export:
        IOManager.save_result(
            args.export,
            config=config,
            iterations=result.iterations,
            residual=result.residual,
            converged=result.converged,
            positions=history.last_snapshot.positions,
            temperatures=result.temperatures,
            history_iterations=history.iterations,
            history_residuals=history.residuals,
        )

    return EXIT_CONVERGED if result.converged else EXIT_NOT_CONVERGED


if __name__ == "__main__":
    sys.exit(main())
