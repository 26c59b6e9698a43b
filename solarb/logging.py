"""Logging configuration for the spread monitor."""

import logging
import sys

ROOT_LOGGER = "solarb"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = ROOT_LOGGER, level: int = logging.INFO) -> logging.Logger:
    """Get a configured logger instance.

    Child loggers (``solarb.collector``, ...) share the handlers of the
    ``solarb`` root logger.

    Args:
        name: Logger name (usually ``solarb.<component>``)
        level: Logging level used when the root logger is first configured

    Returns:
        Configured logger instance.
    """
    root = logging.getLogger(ROOT_LOGGER)

    # Only configure if not already configured
    if not root.handlers:
        root.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)

        # Prevent propagation to root logger
        root.propagate = False

    return logging.getLogger(name)


def set_log_level(name: str, level: int) -> None:
    """Set log level for a specific logger.

    Args:
        name: Logger name
        level: New logging level
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def setup_logging(level: str = "INFO", log_file: str = "") -> logging.Logger:
    """Reconfigure the ``solarb`` logger from process configuration.

    Args:
        level: Level name, e.g. "DEBUG" or "INFO"
        log_file: Optional path of a file to mirror console output to

    Returns:
        The configured root ``solarb`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
