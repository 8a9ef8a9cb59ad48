"""Population of metadata records with framework-computed keys.

`MetadataPopulator` fills a pre-seeded record with everything the framework
computes for a group or an example: description text, full description,
described class, source location and, for examples, a fresh execution
result. User tags are validated against the reserved keys first and merged
in last.

The group and example factories subclass it and supply the two rules that
differ between them: how the full description and the described class are
derived.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from ..logger import get_logger
from .description import build_description_from
from .errors import ConfigurationError
from .execution_result import ExecutionResult
from .location import CallerFilter, FrameClassifier, current_stack, resolve_location
from .types import EXPLICIT_LOCATION_KEY, RESERVED_KEYS

logger = get_logger("populator")


class MetadataPopulator:
    """Populates a metadata record with computed keys.

    Attributes:
        metadata: The record being populated
        user_metadata: Validated user tags, copied from the caller's mapping
        description_args: Raw description arguments
        block: Body callable of the group or example
    """

    # Only example records carry an execution result
    tracks_execution = False

    def __init__(self, metadata: Dict[str, Any], user_metadata: Mapping[str, Any],
                 description_args: Sequence[Any], block: Any = None,
                 is_framework_frame: Optional[FrameClassifier] = None):
        self.metadata = metadata
        self.user_metadata = dict(user_metadata)
        self.description_args = list(description_args)
        self.block = block
        self.is_framework_frame = is_framework_frame or CallerFilter()

    def populate(self) -> Dict[str, Any]:
        """Fill in the computed keys and merge the user tags.

        Returns:
            The populated record

        Raises:
            ConfigurationError: If a user tag uses a reserved key
        """
        self.ensure_valid_user_keys()

        if self.tracks_execution:
            self.metadata['execution_result'] = ExecutionResult()
        self.metadata['block'] = self.block
        self.metadata['description_args'] = self.description_args
        self.metadata['description'] = build_description_from(*self.description_args[:2])
        self.metadata['full_description'] = self.full_description()
        self.metadata['described_class'] = self.described_class()

        self.populate_location_attributes()
        self.metadata.update(self.user_metadata)

        logger.debug(f"Built metadata for '{self.metadata['full_description']}' "
                     f"at {self.metadata['location']}")
        return self.metadata

    def full_description(self) -> str:
        raise NotImplementedError

    def described_class(self) -> Any:
        raise NotImplementedError

    def populate_location_attributes(self) -> None:
        explicit = self.user_metadata.pop(EXPLICIT_LOCATION_KEY, None)
        source = resolve_location(
            explicit=explicit,
            block=self.block,
            is_framework_frame=self.is_framework_frame,
        )

        self.metadata['file_path'] = source.file_path
        self.metadata['line_number'] = source.line_number
        self.metadata['location'] = source.location

    def ensure_valid_user_keys(self) -> None:
        for key in RESERVED_KEYS:
            if key in self.user_metadata:
                raise ConfigurationError.reserved_key(
                    key,
                    RESERVED_KEYS,
                    self.first_non_framework_line(),
                )

    def first_non_framework_line(self) -> Optional[str]:
        """First stack frame outside the framework, used in error reports."""
        for frame in current_stack():
            if not self.is_framework_frame(frame):
                return frame
        return None
