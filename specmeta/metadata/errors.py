"""Error types for metadata construction.

This module defines custom exceptions raised while building group and
example metadata. Each error carries a descriptive message plus structured
details so callers can report the failure without parsing text.
"""

from typing import Any, Optional, Sequence


class MetadataError(Exception):
    """Base class for all metadata-related errors.

    Attributes:
        message: A descriptive error message
        details: Optional additional error details
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        """Initialize a new MetadataError.

        Args:
            message: A descriptive error message
            details: Optional additional error details
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class ConfigurationError(MetadataError):
    """Error raised when a user tag uses a name the framework reserves.

    The declaration that triggered it produces no metadata record.

    Example:
        >>> raise ConfigurationError.reserved_key("location", RESERVED_KEYS, "spec/foo_spec.py:3")
    """

    @property
    def key(self) -> Optional[str]:
        return (self.details or {}).get('key')

    @property
    def reserved_keys(self) -> Sequence[str]:
        return (self.details or {}).get('reserved_keys', ())

    @property
    def caller_line(self) -> Optional[str]:
        return (self.details or {}).get('caller_line')

    @classmethod
    def reserved_key(cls, key: str, reserved_keys: Sequence[str],
                     caller_line: Optional[str]) -> 'ConfigurationError':
        """Build the error for a tag that collides with a computed key.

        Args:
            key: The offending tag name
            reserved_keys: Every reserved key name
            caller_line: First stack frame outside the framework, if any

        Returns:
            A ConfigurationError describing the collision
        """
        banner = '*' * 50
        reserved = '\n  '.join(reserved_keys)
        message = (
            f"{banner}\n"
            f"'{key}' is not allowed\n"
            f"\n"
            f"specmeta reserves some metadata keys for its own internal use,\n"
            f"including '{key}', which is used on:\n"
            f"\n"
            f"  {caller_line}.\n"
            f"\n"
            f"Here are all of the reserved metadata keys:\n"
            f"\n"
            f"  {reserved}\n"
            f"{banner}"
        )
        return cls(message, {
            'key': key,
            'reserved_keys': list(reserved_keys),
            'caller_line': caller_line,
        })


class OutlineError(MetadataError):
    """Error raised when an outline file cannot be loaded.

    This error is raised when:
    - The outline file is not valid YAML
    - The outline does not match the expected structure
    - A `subject` reference cannot be imported
    """
    pass
