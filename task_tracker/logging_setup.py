"""Logging configuration for task-tracker."""

import logging
import sys
from typing import Union

LOGGER_NAME = "task_tracker"


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send ``task_tracker`` logs to stderr at the given level.

    Calling this again replaces the handler rather than adding a second one.
    Unknown level names fall back to WARNING.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    logger.addHandler(handler)
