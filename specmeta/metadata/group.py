"""Metadata for example groups.

A group's record starts as a copy of its parent group's record, so user
tags flow down the hierarchy, and links back to the parent record through
`parent_example_group`. The legacy accessors at the bottom of this module
serve callers still written against the old nested layout; each one must be
called explicitly and leaves the record untouched.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from .compat import LegacyExampleGroupHash
from .deprecation import deprecate
from .description import description_separator, is_namespace
from .location import FrameClassifier
from .populator import MetadataPopulator
from .tags import build_tags, split_args
from .types import PARENT_GROUP_KEY


class GroupMetadataFactory(MetadataPopulator):
    """Builds the metadata record of an example group."""

    @classmethod
    def create(cls, parent_metadata: Optional[Mapping[str, Any]],
               user_metadata: Optional[Mapping[str, Any]] = None,
               *description_args: Any,
               block: Any = None,
               tag_names: Iterable[str] = (),
               is_framework_frame: Optional[FrameClassifier] = None) -> Dict[str, Any]:
        """Create the metadata record of a group.

        Args:
            parent_metadata: Record of the enclosing group, None at the top level
            user_metadata: Tags given on the declaration
            *description_args: Description arguments, text or a class/module first
            block: Body callable of the group
            tag_names: Bare tag names, each meaning `name: True`
            is_framework_frame: Predicate marking framework stack frames

        Returns:
            The new group record

        Raises:
            ConfigurationError: If a tag uses a reserved key
        """
        group_metadata = dict(parent_metadata or {})
        group_metadata[PARENT_GROUP_KEY] = parent_metadata

        populator = cls(
            group_metadata,
            build_tags(tag_names, user_metadata),
            description_args,
            block,
            is_framework_frame=is_framework_frame,
        )
        return populator.populate()

    @classmethod
    def from_declaration(cls, parent_metadata: Optional[Mapping[str, Any]], *args: Any,
                         block: Any = None,
                         is_framework_frame: Optional[FrameClassifier] = None) -> Dict[str, Any]:
        """Create a group record from the raw arguments of a declaration.

        Example:
            >>> GroupMetadataFactory.from_declaration(None, Widget, "#resize", Tag("slow"), {"type": "unit"})
        """
        description_args, tags = split_args(args)
        return cls.create(parent_metadata, tags, *description_args,
                          block=block, is_framework_frame=is_framework_frame)

    def described_class(self) -> Any:
        candidate = self.description_args[0] if self.description_args else None
        if is_namespace(candidate):
            return candidate
        parent_group = self.metadata[PARENT_GROUP_KEY]
        return parent_group.get('described_class') if parent_group else None

    def full_description(self) -> str:
        description = self.metadata['description']
        parent_group = self.metadata[PARENT_GROUP_KEY]
        parent_description = parent_group.get('full_description') if parent_group else None

        if parent_description is None:
            return description

        parent_args = parent_group.get('description_args') or [None]
        my_args = self.metadata['description_args'] or [None]
        separator = description_separator(parent_args[-1], my_args[0])

        return parent_description + separator + description


def legacy_example_group(metadata: Dict[str, Any]) -> LegacyExampleGroupHash:
    """Old `metadata[:example_group]` access on a group record."""
    deprecate(
        "The `example_group` key in an example group's metadata",
        "the example group's metadata directly for the computed keys and "
        "`parent_example_group` to access the parent example group metadata",
    )
    return LegacyExampleGroupHash(metadata)


def legacy_example_group_block(metadata: Mapping[str, Any]) -> Any:
    deprecate("`metadata['example_group_block']`", "`metadata['block']`")
    return metadata.get('block')


def legacy_describes(metadata: Mapping[str, Any]) -> Any:
    deprecate("`metadata['describes']`", "`metadata['described_class']`")
    return metadata.get('described_class')
