"""Enums and constants for metadata construction.

This module defines the names the framework computes itself, the status
values an execution result can carry, and the location sentinels used while
resolving where a group or example was declared.

The module provides:
- RESERVED_KEYS: Metadata keys users may never supply as tags
- COMPUTED_KEYS: Every key the framework writes into a record
- ExampleStatus: Enum for example execution statuses
- EXPLICIT_LOCATION_KEY: Tag name consumed as an explicit location override
- EPHEMERAL_LOCATIONS: Locations that do not point at a real file

Example:
    >>> from specmeta.metadata.types import RESERVED_KEYS, ExampleStatus
    >>> "location" in RESERVED_KEYS
    True
    >>> ExampleStatus.PASSED.value
    'passed'
"""

from enum import Enum
from typing import Final, FrozenSet, Tuple

# Keys computed by the framework; a user tag with one of these names is an error
RESERVED_KEYS: Final[Tuple[str, ...]] = (
    'description',
    'example_group',
    'execution_result',
    'file_path',
    'full_description',
    'line_number',
    'location',
    'block',
)

# Every key the framework writes into a record; the rest are user tags
COMPUTED_KEYS: Final[Tuple[str, ...]] = RESERVED_KEYS + (
    'description_args',
    'described_class',
    'parent_example_group',
)

# Tag holding an explicit (file_path, line_number) override
EXPLICIT_LOCATION_KEY: Final[str] = 'caller'

# Key under which a group record links to its parent group's record
PARENT_GROUP_KEY: Final[str] = 'parent_example_group'

# Key under which an example record links to its group's record
EXAMPLE_GROUP_KEY: Final[str] = 'example_group'

# Inline evaluation (`python -c`, `exec`, the REPL) has no file to point at
EPHEMERAL_LOCATIONS: Final[FrozenSet[str]] = frozenset({
    '-e:1',
    '-e',
    '-c',
    '<string>',
    '<stdin>',
})

# Prefixes that separate a class from a method name in a description
METHOD_DESCRIPTION_PREFIXES: Final[Tuple[str, ...]] = ('#', '::', '.')


class ExampleStatus(str, Enum):
    """Enum for example status values.

    Attributes:
        PENDING: Example is pending or was skipped
        PASSED: Example passed
        FAILED: Example failed

    Example:
        >>> status = ExampleStatus.from_str("Failed")
        >>> print(status.value)  # failed
    """
    PENDING = 'pending'
    PASSED = 'passed'
    FAILED = 'failed'

    @classmethod
    def from_str(cls, value: str) -> 'ExampleStatus':
        """Convert string to ExampleStatus enum.

        Args:
            value: String value to convert (case-insensitive)

        Returns:
            ExampleStatus enum value

        Raises:
            ValueError: If value is not a valid status
        """
        try:
            return cls(value.lower())
        except ValueError:
            valid_values = [s.value for s in cls]
            raise ValueError(
                f"Invalid example status: {value}. "
                f"Must be one of {valid_values}"
            )
