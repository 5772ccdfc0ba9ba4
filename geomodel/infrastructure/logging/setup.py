"""Setup and configuration for the structured logging system."""

import logging
from typing import Optional

from .structured_logger import get_logger
from .handlers import ConsoleHandler, FileHandler


def setup_logging(config=None,
                  log_file: Optional[str] = None,
                  console: bool = True,
                  file: bool = False,
                  log_level: Optional[str] = None):
    """Configure the structured logging system.

    Args:
        config: Config instance (defaults to the global one)
        log_file: Optional log file path (uses config default if not provided)
        console: Whether to enable console logging
        file: Whether to enable JSON file logging
        log_level: Minimum log level (uses config 'logging.level' if not provided)
    """
    if config is None:
        from ...config import config

    log_level = log_level or config.get('logging.level', 'INFO')
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console:
        root_logger.addHandler(ConsoleHandler(level=level))

    if file or log_file is not None:
        file_handler = FileHandler.from_config(config, log_file)
        log_file = file_handler.baseFilename
        root_logger.addHandler(file_handler)

    logger = get_logger(__name__)
    logger.info(
        "Structured logging system initialized",
        extra={
            'context': {
                'log_level': log_level,
                'handlers': {
                    'console': console,
                    'file': str(log_file) if log_file is not None else None
                }
            }
        }
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Setup console-only logging for scripts and debugging.

    Args:
        log_level: Minimum log level
    """
    root_logger = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(ConsoleHandler(level=level))
