"""
Thin wrapper around Python's ``logging`` module for the polaris
package.

Usage
-----
>>> from polaris.logger import get_logger
>>> log = get_logger(__name__)
>>> log.info("standard message")
"""

import logging
import sys

ROOT_NAME = "polaris"
LOG_FORMAT = "%(levelname)-7s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``polaris`` hierarchy.

    Module loggers created with ``get_logger(__name__)`` inherit from the
    ``polaris`` root logger, so a single ``set_level()`` call controls
    everything.
    """
    return logging.getLogger(name or ROOT_NAME)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the log level for all polaris loggers at once."""
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(ROOT_NAME).setLevel(level)


def setup(level: int | str = logging.INFO, stream=None) -> None:
    """Attach a stream handler with the polaris format.

    Extra calls are no-ops.
    """
    root = logging.getLogger(ROOT_NAME)
    if root.handlers:
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    set_level(level)
