"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "fitness_metrics"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure the package logger once; later calls only change its level.

    ``level`` accepts a logging constant or a level name such as ``"DEBUG"``.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
