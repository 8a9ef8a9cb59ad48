"""Tag expansion for group and example declarations.

Tags reach the metadata builder as two inputs: bare tag names, each meaning
`name: True`, and a mapping of tag names to values. Declarations that take a
single positional argument list can split it with `split_args`, marking bare
tag names with `Tag`:

    >>> split_args(["Calculator", Tag("slow"), Tag("ui"), {"timeout": 5}])
    (['Calculator'], {'timeout': 5, 'ui': True, 'slow': True})
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


class Tag(str):
    """A bare tag name given positionally, equivalent to `{name: True}`."""

    def __repr__(self) -> str:
        return f"Tag({str.__repr__(self)})"


def build_tags(tag_names: Iterable[str] = (),
               tags: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Combine bare tag names and a tag mapping into one dictionary.

    Args:
        tag_names: Names that each become `name: True`
        tags: Explicit tag values

    Returns:
        A new dictionary; a bare name wins over a mapping entry of the same name
    """
    result = dict(tags or {})
    for name in tag_names:
        result[str(name)] = True
    return result


def split_args(args: Sequence[Any]) -> Tuple[List[Any], Dict[str, Any]]:
    """Split raw declaration arguments into description arguments and tags.

    A trailing mapping supplies tag values; the `Tag` values directly before
    it (or at the end) are popped in reverse order and each becomes `True`.

    Args:
        args: Raw positional arguments of a declaration

    Returns:
        Tuple of the remaining description arguments and the tag dictionary
    """
    remaining = list(args)
    tags = dict(remaining.pop()) if remaining and isinstance(remaining[-1], Mapping) else {}

    while remaining and isinstance(remaining[-1], Tag):
        tags[str(remaining.pop())] = True

    return remaining, tags
