"""Outline files: groups and examples declared in YAML.

An outline describes a tree of groups and examples without any test code,
which is enough to build and inspect their metadata:

    groups:
      - subject: "decimal:Decimal"
        tags: {type: unit}
        examples:
          - description: "rounds half to even"
            flags: [slow]
        groups:
          - description: ".quantize"

Every group and example is located at the YAML line that declares it.
"""

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .logger import get_logger
from .metadata import ExampleMetadataFactory, GroupMetadataFactory, OutlineError, Tag
from .metadata.types import EXPLICIT_LOCATION_KEY

logger = get_logger("outline")

LINE_KEY = '__line__'


class _LineLoader(yaml.SafeLoader):
    """SafeLoader that records the line of every mapping under `__line__`."""

    def construct_mapping(self, node, deep=False):
        mapping = super().construct_mapping(node, deep=deep)
        mapping[LINE_KEY] = node.start_mark.line + 1
        return mapping


def _strip_lines(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _strip_lines(v) for k, v in value.items() if k != LINE_KEY}
    if isinstance(value, list):
        return [_strip_lines(v) for v in value]
    return value


class OutlineExample(BaseModel):
    """Schema for one example in an outline."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    description: Optional[str] = None
    tags: Dict[str, Any] = Field(default_factory=dict)
    flags: List[str] = Field(default_factory=list)
    line: int = Field(0, alias=LINE_KEY)

    @field_validator('tags', mode='before')
    @classmethod
    def strip_tag_lines(cls, v):
        return _strip_lines(v) if v is not None else {}


class OutlineGroup(BaseModel):
    """Schema for one group in an outline."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    description: Optional[str] = None
    subject: Optional[str] = None
    tags: Dict[str, Any] = Field(default_factory=dict)
    flags: List[str] = Field(default_factory=list)
    examples: List[OutlineExample] = Field(default_factory=list)
    groups: List['OutlineGroup'] = Field(default_factory=list)
    line: int = Field(0, alias=LINE_KEY)

    @field_validator('tags', mode='before')
    @classmethod
    def strip_tag_lines(cls, v):
        return _strip_lines(v) if v is not None else {}

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, v):
        if v is not None and (not v or v.startswith(':') or v.endswith(':')):
            raise ValueError('subject must look like "package.module" or "package.module:Name"')
        return v


OutlineGroup.model_rebuild()


class Outline(BaseModel):
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    groups: List[OutlineGroup] = Field(default_factory=list)
    line: int = Field(0, alias=LINE_KEY)


@dataclass
class OutlineNode:
    """A group's record together with its examples' and subgroups' records."""
    metadata: Dict[str, Any]
    examples: List[Dict[str, Any]] = field(default_factory=list)
    children: List['OutlineNode'] = field(default_factory=list)


def import_subject(reference: str) -> Any:
    """Import the class or module an outline names as a group's subject.

    Args:
        reference: "package.module" or "package.module:Attr.Nested"

    Returns:
        The imported module or attribute

    Raises:
        OutlineError: If the module or attribute cannot be found
    """
    module_name, _, attribute = reference.partition(':')
    try:
        target = importlib.import_module(module_name)
        for part in filter(None, attribute.split('.')):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise OutlineError(f"Cannot import subject '{reference}': {e}", {"subject": reference})
    return target


def parse_outline(text: str, source: str = '<outline>') -> Outline:
    """Parse and validate outline text.

    Raises:
        OutlineError: If the text is not valid YAML or not a valid outline
    """
    try:
        data = yaml.load(text, Loader=_LineLoader) or {}
    except yaml.YAMLError as e:
        raise OutlineError(f"Invalid YAML in {source}: {e}", {"source": source})

    try:
        return Outline.model_validate(data)
    except ValidationError as e:
        raise OutlineError(f"Invalid outline {source}: {e}", {"source": source, "errors": e.errors()})


def build_outline(outline: Outline, source: Union[str, Path]) -> List[OutlineNode]:
    """Build the metadata records of every group and example in an outline."""
    return [_build_group(group, None, str(source)) for group in outline.groups]


def _build_group(group: OutlineGroup, parent_metadata: Optional[Dict[str, Any]],
                 source: str) -> OutlineNode:
    description_args: List[Any] = []
    if group.subject:
        description_args.append(import_subject(group.subject))
    if group.description is not None:
        description_args.append(group.description)

    tags = dict(group.tags)
    tags[EXPLICIT_LOCATION_KEY] = [source, group.line]
    metadata = GroupMetadataFactory.from_declaration(
        parent_metadata, *description_args, *map(Tag, group.flags), tags
    )

    node = OutlineNode(metadata)
    for example in group.examples:
        example_args: List[Any] = [] if example.description is None else [example.description]
        example_tags = dict(example.tags)
        example_tags[EXPLICIT_LOCATION_KEY] = [source, example.line]
        node.examples.append(ExampleMetadataFactory.from_declaration(
            metadata, *example_args, *map(Tag, example.flags), example_tags
        ))
    for child in group.groups:
        node.children.append(_build_group(child, metadata, source))
    return node


def load_outline(path: Union[str, Path]) -> List[OutlineNode]:
    """Load an outline file and build its metadata records.

    Args:
        path: Path to the YAML outline

    Returns:
        One node per top-level group

    Raises:
        OutlineError: If the file cannot be read or is not a valid outline
        ConfigurationError: If a tag uses a reserved key
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise OutlineError(f"Cannot read outline {path}: {e}", {"source": str(path)})

    nodes = build_outline(parse_outline(text, str(path)), path)
    logger.debug(f"Loaded {len(nodes)} top-level groups from {path}")
    return nodes
