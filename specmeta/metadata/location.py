"""Source location resolution for groups and examples.

A location is derived, in order of preference, from an explicit override
supplied through the `caller` tag, from the source position of the body
callable, or from the first frame of the call stack that does not belong to
the framework itself. Resolution never raises: anything that cannot be
resolved degrades to a missing file path.

Example:
    >>> loc = resolve_location(explicit=["./spec/foo_spec.py", 10])
    >>> loc.location
    './spec/foo_spec.py:10'
"""

import os
import re
import traceback
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..config import get_config
from ..logger import get_logger
from .types import EPHEMERAL_LOCATIONS

logger = get_logger("location")

FRAME_PATTERN = re.compile(r'(.+?):(\d+)(?::\d+)?')

# The installed package directory; every frame under it is framework code
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

FrameClassifier = Callable[[str], bool]


@dataclass(frozen=True)
class SourceLocation:
    """Where a group or example was declared.

    Attributes:
        file_path: Path relative to the working directory, None if unknown
        line_number: Line number, 0 if unknown
    """
    file_path: Optional[str]
    line_number: int

    @property
    def location(self) -> str:
        return f"{self.file_path or ''}:{self.line_number}"


class CallerFilter:
    """Tells framework frames apart from the user's own frames."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        if patterns is None:
            patterns = get_config().framework_patterns
        sources = [re.escape(PACKAGE_DIR + os.sep), r'<frozen ']
        for pattern in patterns:
            try:
                re.compile(pattern)
            except (re.error, TypeError) as e:
                logger.warning(f"Ignoring invalid framework pattern {pattern!r}: {e}")
                continue
            sources.append(pattern)
        self.regex = re.compile('|'.join(f'(?:{source})' for source in sources))

    def __call__(self, frame: str) -> bool:
        return self.regex.search(frame) is not None

    def first_non_framework_line(self, frames: Optional[Sequence[str]] = None) -> Optional[str]:
        if frames is None:
            frames = current_stack()
        for frame in frames:
            if not self(frame):
                return frame
        return None


def current_stack() -> List[str]:
    """Return the current call stack as `path:line` strings, most recent first."""
    return [f"{frame.filename}:{frame.lineno}" for frame in reversed(traceback.extract_stack())]


def relative_path(path: Optional[str]) -> Optional[str]:
    """Make a path relative to the working directory.

    Args:
        path: A file path or a `path:line` string

    Returns:
        The path with the working directory replaced by `.`, the raw path if
        the working directory is unavailable, or None for inline sources
    """
    if path is None or path in EPHEMERAL_LOCATIONS:
        return None
    try:
        cwd = os.path.abspath('.')
    except OSError:
        return path
    if path == cwd or path.startswith(cwd + os.sep):
        return '.' + path[len(cwd):]
    return path


def source_position(block: Any) -> Optional[Tuple[str, int]]:
    """The (file, line) a body callable declares for itself, if any.

    A handle whose declared position is not a `(file, line)` pair counts as
    having no position.
    """
    try:
        declared = getattr(block, 'source_location', None)
        if callable(declared):
            declared = declared()
        if declared is not None:
            file_path, line_number = declared[0], declared[1]
            if not isinstance(file_path, (str, os.PathLike)):
                raise TypeError(f"source_location file is {type(file_path).__name__}")
            return file_path, int(line_number)
        code = getattr(block, '__code__', None)
        if code is not None:
            return code.co_filename, code.co_firstlineno
    except Exception as e:
        logger.debug(f"Ignoring source position of {block!r}: {e}")
    return None


def parse_frame(frame: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if not frame:
        return None, None
    match = FRAME_PATTERN.match(frame)
    if match is None:
        return None, None
    return match.group(1), match.group(2)


def _to_line_number(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def resolve_location(explicit: Optional[Sequence[Any]] = None,
                     block: Any = None,
                     frames: Optional[Sequence[str]] = None,
                     is_framework_frame: Optional[FrameClassifier] = None) -> SourceLocation:
    """Resolve the declaration site of a group or example.

    Args:
        explicit: Override whose first two elements are file path and line
        block: Body callable, consulted for its own source position
        frames: Stack frames, most recent first; defaults to the current stack
        is_framework_frame: Predicate marking frames to skip

    Returns:
        The resolved SourceLocation
    """
    file_path: Any = None
    line_number: Any = None
    try:
        position = None
        if explicit is None and block is not None:
            position = source_position(block)

        if explicit is not None:
            file_path, line_number = explicit[0], explicit[1]
        elif position is not None:
            file_path, line_number = position
        else:
            if frames is None:
                frames = current_stack()
            classifier = is_framework_frame or CallerFilter()
            frame = next((f for f in frames if not classifier(f)), None)
            file_path, line_number = parse_frame(frame)
    except Exception as e:
        logger.debug(f"Could not resolve location: {e}")
        file_path = None

    if file_path is not None:
        file_path = relative_path(str(file_path))
    if file_path is None:
        logger.debug("Declaration has no file path")
    return SourceLocation(file_path, _to_line_number(line_number))
