"""specmeta: metadata model for behavior-driven test groups and examples."""

from .metadata import (
    RESERVED_KEYS,
    ConfigurationError,
    ExampleMetadataFactory,
    ExecutionResult,
    GroupMetadataFactory,
    LegacyExampleGroupHash,
    Tag,
)

__version__ = "0.1.0"

__all__ = [
    'RESERVED_KEYS',
    'ConfigurationError',
    'ExampleMetadataFactory',
    'ExecutionResult',
    'GroupMetadataFactory',
    'LegacyExampleGroupHash',
    'Tag',
]
