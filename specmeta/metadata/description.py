"""Description text rules shared by group and example metadata."""

import types
from typing import Any, Optional

from .types import METHOD_DESCRIPTION_PREFIXES


def is_namespace(value: Any) -> bool:
    """Whether a description argument names a class or module rather than text."""
    return isinstance(value, (type, types.ModuleType))


def description_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, types.ModuleType):
        return value.__name__
    return str(value)


def description_separator(parent_part: Any, child_part: Any) -> str:
    """`Calculator#add` and `Calculator.add` join without a space; text joins with one."""
    if (is_namespace(parent_part) and isinstance(child_part, str)
            and child_part.startswith(METHOD_DESCRIPTION_PREFIXES)):
        return ''
    return ' '


def build_description_from(parent_description: Any = None,
                           my_description: Optional[Any] = None) -> str:
    """Build a description from up to two description arguments.

    Args:
        parent_description: The outer part, text or a class/module
        my_description: The inner part, if any

    Returns:
        The combined description text
    """
    if my_description is None:
        return description_text(parent_description)
    separator = description_separator(parent_description, my_description)
    return description_text(parent_description) + separator + description_text(my_description)
