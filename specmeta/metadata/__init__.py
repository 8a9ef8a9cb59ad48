"""Metadata records for example groups and examples."""

from .compat import HashImitatable, LegacyExampleGroupHash
from .deprecation import deprecate, set_deprecation_sink
from .description import build_description_from
from .errors import ConfigurationError, MetadataError, OutlineError
from .example import ExampleMetadataFactory
from .execution_result import ExecutionResult
from .group import (
    GroupMetadataFactory,
    legacy_describes,
    legacy_example_group,
    legacy_example_group_block,
)
from .location import CallerFilter, SourceLocation, relative_path, resolve_location
from .tags import Tag, build_tags, split_args
from .types import RESERVED_KEYS, ExampleStatus

__all__ = [
    'HashImitatable', 'LegacyExampleGroupHash',
    'deprecate', 'set_deprecation_sink',
    'build_description_from',
    'ConfigurationError', 'MetadataError', 'OutlineError',
    'ExampleMetadataFactory', 'GroupMetadataFactory',
    'legacy_describes', 'legacy_example_group', 'legacy_example_group_block',
    'ExecutionResult', 'ExampleStatus',
    'CallerFilter', 'SourceLocation', 'relative_path', 'resolve_location',
    'Tag', 'build_tags', 'split_args',
    'RESERVED_KEYS',
]
