"""Process-wide deprecation notices for legacy metadata access."""

import warnings
from typing import Callable, Optional

from ..config import get_config
from ..logger import get_logger

logger = get_logger("deprecation")

DeprecationSink = Callable[[str, Optional[str]], None]

_sink: Optional[DeprecationSink] = None


def format_notice(subject: str, replacement: Optional[str] = None) -> str:
    message = f"{subject} is deprecated."
    if replacement:
        message += f" Use {replacement} instead."
    return message


def default_sink(subject: str, replacement: Optional[str] = None) -> None:
    """Report a deprecation according to the configured mode.

    Args:
        subject: What is deprecated
        replacement: Hint at what to use instead
    """
    mode = get_config().deprecations
    if mode == 'silent':
        return

    message = format_notice(subject, replacement)
    if mode == 'log':
        logger.warning(message)
    else:
        warnings.warn(message, DeprecationWarning, stacklevel=4)


def set_deprecation_sink(sink: Optional[DeprecationSink]) -> None:
    """Install a host-provided deprecation sink; None restores the default."""
    global _sink
    _sink = sink


def deprecate(subject: str, replacement: Optional[str] = None) -> None:
    (_sink or default_sink)(subject, replacement)
