# Logging setup
"""
Loggers for procprofile modules.

Handlers live on the package logger (``procprofile``) only. Module loggers
from ``get_logger(__name__)`` propagate to it, so ``set_level`` on the
package logger changes what every module reports.
"""

import logging
import sys
from procprofile.config import settings

PACKAGE_LOGGER = "procprofile"

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def level_from_name(level_name, default=logging.INFO):
    """Logging constant for a level name; unknown names give ``default``."""
    return LOG_LEVEL_MAP.get(str(level_name).upper(), default)


def _package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    logger.addHandler(console_handler)
    logger.setLevel(level_from_name(settings.LOGGING_LEVEL))
    logger.propagate = False

    if settings.LOGGING_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOGGING_FILE, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot open log file %s: %s", settings.LOGGING_FILE, e)
        else:
            file_handler.setFormatter(log_formatter)
            logger.addHandler(file_handler)
    return logger


def get_logger(name):
    """
    Logger for a module, routed through the package logger.

    Names outside the package (``__main__`` when run with ``-m``) are placed
    under it so their records use the same handlers.
    """
    package = _package_logger()
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return package.getChild(name)


def set_level(level_name):
    """Set the level for all procprofile logging (used by ``--log-level``)."""
    _package_logger().setLevel(level_from_name(level_name))
