# ============================================
#   Parley: Central logger
#   parley.<module> children of one rotating-file logger
# ============================================

import os
import logging
from logging.handlers import TimedRotatingFileHandler

from parley.config import LOG_FILE, IS_PROD


# --------------------------------------------
#   Settings (env)
# --------------------------------------------

ROOT_LOGGER_NAME = os.getenv("PARLEY_LOGGER_NAME", "parley")

LOG_LEVEL = os.getenv("PARLEY_LOG_LEVEL", "INFO").upper()

# Days of rotated files kept next to the live one
LOG_BACKUP_DAYS = int(os.getenv("PARLEY_LOG_BACKUP_DAYS", "30"))

# Dev only: mirror records to stderr
LOG_CONSOLE = (
    not IS_PROD
    and os.getenv("PARLEY_LOG_CONSOLE", "true").lower() in ("1", "true", "yes", "on")
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _build_handlers():
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    # New file at midnight, chat activity is reviewed per day
    file_handler = TimedRotatingFileHandler(
        LOG_FILE,
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding="utf-8",
    )
    handlers = [file_handler]

    if LOG_CONSOLE:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.setFormatter(formatter)
    return handlers


def _configure_root_logger() -> logging.Logger:
    """
    Attach the Parley handlers on first use; later calls return the
    already configured logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    for h in _build_handlers():
        logger.addHandler(h)

    # Records stay out of the root logger (and Flask/engineio output)
    logger.propagate = False
    return logger


def get_logger(module_name: str) -> logging.Logger:
    """
    Child logger named after a Parley module, e.g. get_logger("admin")
    gives parley.admin.
    """
    return _configure_root_logger().getChild(module_name)


def log_info(module: str, message: str):
    get_logger(module).info(message)


def log_warning(module: str, message: str):
    get_logger(module).warning(message)


def log_error(module: str, message: str):
    get_logger(module).error(message)


def log_exception(module: str, message: str):
    """Error record with the active traceback; call from an except block."""
    get_logger(module).exception(message)
