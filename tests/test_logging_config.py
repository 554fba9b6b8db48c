import logging

import colorlog
import pytest

from token_dashboard.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_single_color_handler(restore_root_logger):
    root = setup_logging("debug")
    assert root is restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, colorlog.ColoredFormatter)
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_unknown_level_name_falls_back_to_info(restore_root_logger):
    assert setup_logging("chatty").level == logging.INFO
