"""
Logging setup for the fiber geometry tools.
"""

import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler

from .config import GeometryConfig

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _log_path(config: GeometryConfig) -> str:
    if config.log_filename:
        filename = config.log_filename
    else:
        filename = f"{config.log_prefix}_{datetime.now().strftime('%Y%m%d')}_{config.log_postfix}.log"
    return os.path.join(config.log_dir, filename)


def setup_logging(config: GeometryConfig, console: bool = True) -> logging.Logger:
    """Configure the package logger with a rotating file handler and an optional console handler."""
    level = getattr(logging, config.logging_level.upper())
    logger = logging.getLogger("fiber_geometry")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    os.makedirs(config.log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        _log_path(config),
        maxBytes=config.max_log_size * 1024 * 1024,
        backupCount=config.backup_count
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger
