"""
Tests for the central logger (parley/logger.py)
"""
from logging.handlers import TimedRotatingFileHandler

from parley import logger


def test_child_logger_naming():
    assert logger.get_logger("admin").name == f"{logger.ROOT_LOGGER_NAME}.admin"


def test_handlers_attached_once():
    first = logger.get_logger("router").parent
    count = len(first.handlers)

    logger.get_logger("router")
    logger.get_logger("context")

    assert len(logger.get_logger("x").parent.handlers) == count


def test_rotating_file_handler_settings():
    root = logger.get_logger("router").parent
    files = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]

    assert len(files) == 1
    assert files[0].backupCount == logger.LOG_BACKUP_DAYS
    assert root.propagate is False
