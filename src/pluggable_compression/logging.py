"""Coloured console output for the package's registration and codec logs."""

from __future__ import annotations

import logging

import colorlog

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

LOGGER_NAME = "pluggable_compression"
FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(name)s: %(message)s"


def setup(
    level: int = logging.INFO, logger: logging.Logger | None = None
) -> colorlog.StreamHandler:
    """Send log records of `logger` to stderr, coloured by level.

    Calling it again on the same logger replaces the handler installed by the
    previous call instead of adding a second one.

    Parameters
    ----------
    level
        threshold applied to the logger, e.g. :data:`DEBUG` to see every
        registration and constructed algorithm.
    logger
        logger to configure. Defaults to the ``pluggable_compression`` logger,
        which every module of the package logs under.

    Returns
    -------
    the installed handler.

    Examples
    --------
    >>> from pluggable_compression import logging
    >>> logging.setup(level=logging.DEBUG)
    """
    if logger is None:
        logger = colorlog.getLogger(LOGGER_NAME)

    for old in list(logger.handlers):
        if getattr(old, "_pluggable_compression", False):
            logger.removeHandler(old)

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(FORMAT))
    handler._pluggable_compression = True

    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
