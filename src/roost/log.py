"""Logging configuration for roost."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_path: Path) -> None:
    """Attach a rotating file handler to the package logger.

    Does nothing if a handler is already attached. Console output goes through
    ``roost.output``, never through logging.
    """
    logger = logging.getLogger("roost")
    if logger.handlers:
        return

    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))

    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.propagate = False
