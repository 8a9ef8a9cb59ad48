"""Metadata for examples."""

from typing import Any, Dict, Iterable, Mapping, Optional

from .description import build_description_from
from .location import FrameClassifier
from .populator import MetadataPopulator
from .tags import build_tags, split_args
from .types import EXAMPLE_GROUP_KEY, PARENT_GROUP_KEY


class ExampleMetadataFactory(MetadataPopulator):
    """Builds the metadata record of an example.

    The record copies its group's entries, points back at the group record
    through `example_group` and drops the group-chain link.
    """

    tracks_execution = True

    @classmethod
    def create(cls, group_metadata: Mapping[str, Any],
               user_metadata: Optional[Mapping[str, Any]] = None,
               description: Optional[Any] = None,
               block: Any = None,
               tag_names: Iterable[str] = (),
               is_framework_frame: Optional[FrameClassifier] = None) -> Dict[str, Any]:
        """Create the metadata record of an example.

        Args:
            group_metadata: Record of the group the example belongs to
            user_metadata: Tags given on the declaration
            description: Description of the example, if any
            block: Body callable of the example
            tag_names: Bare tag names, each meaning `name: True`
            is_framework_frame: Predicate marking framework stack frames

        Returns:
            The new example record

        Raises:
            ConfigurationError: If a tag uses a reserved key
        """
        example_metadata = dict(group_metadata)
        example_metadata[EXAMPLE_GROUP_KEY] = group_metadata
        example_metadata.pop(PARENT_GROUP_KEY, None)

        description_args = [description] if description is not None else []
        populator = cls(
            example_metadata,
            build_tags(tag_names, user_metadata),
            description_args,
            block,
            is_framework_frame=is_framework_frame,
        )
        return populator.populate()

    @classmethod
    def from_declaration(cls, group_metadata: Mapping[str, Any], *args: Any,
                         block: Any = None,
                         is_framework_frame: Optional[FrameClassifier] = None) -> Dict[str, Any]:
        """Create an example record from the raw arguments of a declaration.

        The first remaining argument, if any, is the description.
        """
        description_args, tags = split_args(args)
        description = description_args[0] if description_args else None
        return cls.create(group_metadata, tags, description,
                          block=block, is_framework_frame=is_framework_frame)

    def described_class(self) -> Any:
        return self.metadata[EXAMPLE_GROUP_KEY].get('described_class')

    def full_description(self) -> str:
        # the group's full description is always text, so this joins with a space
        return build_description_from(
            self.metadata[EXAMPLE_GROUP_KEY].get('full_description'),
            self.metadata['description'],
        )
