"""Logging utility for Calendar Permission Manager"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .paths import get_log_dir

LOG_FILE_NAME = "calperm.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ROOT_LOGGER = "calperm"


def configure_logging(
        log_dir: Path = None,
        level: str = "INFO",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 5,
) -> logging.Logger:
    """Attach a rotating file handler to the application's root logger.

    The terminal is owned by the UI, so nothing is sent to the console.
    Python warnings (colour/style resolution problems) are routed into the
    same file.
    """
    log_dir = Path(log_dir) if log_dir else get_log_dir()
    log_file = log_dir / LOG_FILE_NAME

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger

    if not any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers):
        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

        logging.captureWarnings(True)
        warnings_logger = logging.getLogger("py.warnings")
        warnings_logger.propagate = False
        warnings_logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the application's namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
