"""Resource path patterns.

``/classes/:classId`` matches ``/classes/123``: a ``:name`` segment matches
exactly one non-empty segment. A final ``*`` segment matches whatever
follows, including nothing. Other segments match literally. Trailing
slashes and query strings are ignored on both sides.
"""

import re
from functools import lru_cache


def normalize_path(path: str) -> str:
    """Strip the query string and trailing slashes."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path or "/"


class ResourcePattern:
    """A compiled resource path pattern."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.params: list[str] = []
        self._regex = re.compile(self._compile(normalize_path(pattern)))

    def _compile(self, pattern: str) -> str:
        segments = pattern.strip("/").split("/") if pattern != "/" else []
        parts: list[str] = []
        for index, segment in enumerate(segments):
            if segment == "*" and index == len(segments) - 1:
                parts.append("(?:/.*)?")
            elif segment.startswith(":") and len(segment) > 1:
                self.params.append(segment[1:])
                parts.append("/[^/]+")
            else:
                parts.append("/" + re.escape(segment))
        return "^" + ("".join(parts) or "/") + "$"

    def matches(self, path: str) -> bool:
        return self._regex.match(normalize_path(path)) is not None

    def extract(self, path: str) -> dict[str, str] | None:
        """Values of the named segments, or None when the path does not match."""
        path = normalize_path(path)
        if not self.matches(path):
            return None
        values: dict[str, str] = {}
        pattern_segments = normalize_path(self.pattern).strip("/").split("/")
        path_segments = path.strip("/").split("/")
        for segment, value in zip(pattern_segments, path_segments, strict=False):
            if segment.startswith(":") and len(segment) > 1:
                values[segment[1:]] = value
        return values

    def __repr__(self) -> str:
        return f"ResourcePattern({self.pattern!r})"


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> ResourcePattern:
    return ResourcePattern(pattern)
