"""
Input/Output Manager (JSON + HDF5)
Loads solve configurations from JSON and exports results to .h5 files.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib.metadata import version, PackageNotFoundError
from typing import TYPE_CHECKING, Optional

import h5py
import numpy as np

from slabtemperature.exceptions import InvalidConfiguration
from slabtemperature.model.state import SlabConfig

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("slabtemperature")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


@dataclass
class StoredResult:
    """Content of an exported result file."""
    config: SlabConfig
    iterations: int
    residual: float
    converged: bool
    positions: npt.NDArray[np.float64]
    temperatures: npt.NDArray[np.float64]
    history_iterations: npt.NDArray[np.int64]
    history_residuals: npt.NDArray[np.float64]
    version: str = APP_VERSION


class IOManager:

    @staticmethod
    def save_config(config: SlabConfig, filepath: str) -> None:
        logger.info(f"Saving configuration to: {filepath}")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

    @staticmethod
    def load_config(filepath: str) -> SlabConfig:
        """
        Read a SlabConfig from a JSON file and validate it.

        Raises:
            FileNotFoundError: If the file does not exist.
            InvalidConfiguration: If the content is not a valid configuration.
        """
        logger.info(f"Loading configuration from: {filepath}")
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidConfiguration(f"Configuration file '{filepath}' is not valid JSON: {e}") from e
            except UnicodeDecodeError as e:
                raise InvalidConfiguration(f"Configuration file '{filepath}' is not UTF-8 text: {e}") from e

        if not isinstance(data, dict):
            raise InvalidConfiguration(f"Configuration file '{filepath}' must contain a JSON object.")

        config = SlabConfig.from_dict(data)
        config.validate()
        return config

    @staticmethod
    def save_result(
        filepath: str,
        config: SlabConfig,
        iterations: int,
        residual: float,
        converged: bool,
        positions: npt.NDArray[np.float64],
        temperatures: npt.NDArray[np.float64],
        history_iterations: Optional[npt.NDArray[np.int64]] = None,
        history_residuals: Optional[npt.NDArray[np.float64]] = None,
    ) -> None:
        """Write the final field and the convergence history to an HDF5 file."""
        logger.info(f"Saving result to: {filepath}")
        if history_iterations is None:
            history_iterations = np.empty(0, dtype=np.int64)
        if history_residuals is None:
            history_residuals = np.empty(0, dtype=np.float64)

        with h5py.File(filepath, "w") as f:
            f.attrs["version"] = APP_VERSION
            f.attrs["iterations"] = iterations
            f.attrs["residual"] = residual
            f.attrs["converged"] = converged

            grp_cfg = f.create_group("config")
            grp_cfg.attrs["config_json"] = json.dumps(config.to_dict())

            f.create_dataset("positions", data=np.asarray(positions, dtype=np.float64))
            f.create_dataset("temperatures", data=np.asarray(temperatures, dtype=np.float64))

            grp_hist = f.create_group("history")
            grp_hist.create_dataset("iterations", data=np.asarray(history_iterations, dtype=np.int64))
            grp_hist.create_dataset("residuals", data=np.asarray(history_residuals, dtype=np.float64))
        logger.debug(f"Saved {len(history_iterations)} history entries.")

    @staticmethod
    def load_result(filepath: str) -> StoredResult:
        logger.info(f"Loading result from: {filepath}")
        with h5py.File(filepath, "r") as f:
            config = SlabConfig.from_dict(json.loads(f["config"].attrs["config_json"]))
            return StoredResult(
                config=config,
                iterations=int(f.attrs["iterations"]),
                residual=float(f.attrs["residual"]),
                converged=bool(f.attrs["converged"]),
                positions=f["positions"][()],
                temperatures=f["temperatures"][()],
                history_iterations=f["history/iterations"][()],
                history_residuals=f["history/residuals"][()],
                version=str(f.attrs["version"]),
            )
