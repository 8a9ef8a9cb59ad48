"""
Logging utility for specmeta.
"""
import logging
from typing import Any, Optional, Tuple

import yaml
from rich.console import Console
from rich.logging import RichHandler

from .config import get_config

console = Console(stderr=True)


def _logging_settings() -> Tuple[Any, Optional[str]]:
    # broken settings are reported by whoever uses them, not at import time
    try:
        config = get_config()
    except (OSError, ValueError, yaml.YAMLError):
        return 'WARNING', None
    return config.get('log_level', 'WARNING'), config.get('log_file')


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name of the logger

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(f"specmeta.{name}")

    # Add rich handler for console output if no handlers exist
    if not logger.handlers:
        log_level, log_file = _logging_settings()
        logger.setLevel(logging.DEBUG)

        console_handler = RichHandler(console=console, show_path=False)
        try:
            console_handler.setLevel(str(log_level).upper())
        except ValueError:
            console_handler.setLevel(logging.WARNING)
        logger.addHandler(console_handler)

        # Add file handler for detailed logs
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            logger.addHandler(file_handler)

    return logger
