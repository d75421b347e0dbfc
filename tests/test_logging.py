from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from qdailymotion.utils.logging import get_logger, setup_logging


def test_get_logger_namespaces_children() -> None:
    assert get_logger().name == "qdailymotion"
    assert get_logger("cli").name == "qdailymotion.cli"
    assert get_logger("qdailymotion.models").name == "qdailymotion.models"


def test_setup_logging_installs_single_rich_handler() -> None:
    setup_logging()
    logger = setup_logging(verbose=True, console=Console(file=None, record=True))

    handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    assert not logger.propagate

    setup_logging()
    assert logger.level == logging.WARNING
