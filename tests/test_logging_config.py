import logging

import pytest

from slabtemperature.logging_config import PACKAGE_LOGGER, setup_logging


def test_setup_logging_accepts_level_names():
    logger = setup_logging("debug")
    assert logger.name == PACKAGE_LOGGER
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_replaces_handlers(tmp_path):
    setup_logging(logging.INFO, log_file=str(tmp_path / "a.log"))
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("loud")
