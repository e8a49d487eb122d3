"""Path pattern parser for request routing.

Converts route patterns into typed segments:
- users -> literal segment (matched exactly, case-sensitive)
- :id -> parameter segment named "id"
- {id} -> parameter segment named "id" (alternate syntax)
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from segment_router.exceptions import PathParseError

SEPARATOR = "/"


class SegmentType(Enum):
    """Type of a URL path segment."""

    STATIC = "static"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class PathSegment:
    """A parsed URL path segment with type and name."""

    name: str
    segment_type: SegmentType
    original: str

    @property
    def is_parameter(self) -> bool:
        """Check if this segment represents a path parameter."""
        return self.segment_type == SegmentType.PARAMETER

    def to_pattern_segment(self) -> str:
        """Convert this segment back to normalized pattern syntax.

        Examples:
            STATIC "users" -> "users"
            PARAMETER "id" -> ":id"
        """
        match self.segment_type:
            case SegmentType.STATIC:
                return self.name
            case SegmentType.PARAMETER:
                return f":{self.name}"

    def matches(self, value: str) -> bool:
        """Check whether a request path segment satisfies this segment."""
        if self.is_parameter:
            return bool(value)
        return value == self.name


_COLON_PARAM_PATTERN = re.compile(r"^:(.*)$")
_BRACE_PARAM_PATTERN = re.compile(r"^\{(.*)\}$")
_PARAM_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_path_segment(segment: str, *, pattern: str = "") -> PathSegment:
    """Parse a single pattern segment into a PathSegment.

    Args:
        segment: One separator-delimited piece of a route pattern.
        pattern: Full pattern, used for error context only.

    Returns:
        PathSegment with detected type and extracted name.

    Raises:
        PathParseError: If the segment is empty or names an invalid parameter.

    Examples:
        "users" -> PathSegment(name="users", segment_type=STATIC, ...)
        ":id" -> PathSegment(name="id", segment_type=PARAMETER, ...)
        "{id}" -> PathSegment(name="id", segment_type=PARAMETER, ...)
    """
    where = f" in pattern '{pattern}'" if pattern else ""

    if not segment:
        raise PathParseError(f"Empty segment{where}")

    match = _COLON_PARAM_PATTERN.match(segment) or _BRACE_PARAM_PATTERN.match(segment)
    if match is None:
        if "{" in segment or "}" in segment:
            raise PathParseError(f"Unbalanced braces in segment '{segment}'{where}")
        return PathSegment(
            name=segment,
            segment_type=SegmentType.STATIC,
            original=segment,
        )

    name = match.group(1)
    if not _PARAM_NAME_PATTERN.match(name):
        raise PathParseError(
            f"Invalid parameter name '{name}'{where}. "
            f"Parameter names must be valid identifiers."
        )
    return PathSegment(
        name=name,
        segment_type=SegmentType.PARAMETER,
        original=segment,
    )


def split_path(path: str, decode: Callable[[str], str] | None = None) -> list[str]:
    """Split a path into its separator-delimited segments.

    One leading and one trailing separator are dropped; interior empty
    segments are kept. ``decode`` is applied to each segment after
    splitting, so an encoded separator stays inside its segment.

    Raises:
        PathParseError: If path does not start with the separator.

    Examples:
        "/" -> []
        "//" -> [""]
        "/users/42" -> ["users", "42"]
        "/users/" -> ["users"]
        "/users//42" -> ["users", "", "42"]
        "/users/a%2Fb" with decode=unquote -> ["users", "a/b"]
    """
    if not path.startswith(SEPARATOR):
        raise PathParseError(f"Path must start with '{SEPARATOR}', got '{path}'")
    if path == SEPARATOR:
        return []

    body = path[1:]
    if body.endswith(SEPARATOR):
        body = body[:-1]
    parts = body.split(SEPARATOR)
    if decode is not None:
        parts = [decode(part) for part in parts]
    return parts


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern string into PathSegments.

    Args:
        pattern: Route pattern, e.g. "/users/:id".

    Returns:
        List of parsed PathSegment objects.

    Raises:
        PathParseError: If any segment is invalid or a parameter name repeats.

    Examples:
        "/health" -> [PathSegment(STATIC, "health")]
        "/users/:id" -> [PathSegment(STATIC, "users"), PathSegment(PARAMETER, "id")]
    """
    segments = []
    seen_params: set[str] = set()

    for part in split_path(pattern):
        segment = parse_path_segment(part, pattern=pattern)

        if segment.is_parameter:
            if segment.name in seen_params:
                raise PathParseError(
                    f"Duplicate parameter name '{segment.name}' in pattern '{pattern}'"
                )
            seen_params.add(segment.name)

        segments.append(segment)

    return segments


def segments_to_pattern(segments: list[PathSegment] | tuple[PathSegment, ...]) -> str:
    """Convert PathSegments to a normalized pattern string.

    Examples:
        [STATIC("users")] -> "/users"
        [STATIC("users"), PARAMETER("id")] -> "/users/:id"
        [] -> "/"
    """
    return SEPARATOR + SEPARATOR.join(s.to_pattern_segment() for s in segments)
