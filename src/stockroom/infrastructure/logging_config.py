"""Logging setup for the command-line entry point.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here by whoever owns the process.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
HANDLER_NAME = "stockroom-cli"

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int = 0) -> None:
    """Send ``stockroom.*`` records to the current stderr.

    ``verbosity`` 0 shows warnings and errors, 1 adds info, 2+ adds debug.
    Calling it again replaces the handler installed by the previous call.
    """
    root = logging.getLogger("stockroom")
    root.setLevel(_LEVELS.get(verbosity, logging.DEBUG))
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
