"""Glob-based exclusion for scanned paths.

Patterns are shell globs matched case-sensitively against both the full
root-relative path and its base name. ``*`` matches dotfiles. Wildcards never
cross a ``/``; a ``**`` segment spans any number of whole segments.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fnmatch import fnmatchcase

_SPLIT_RE = re.compile(r"[\n,]")


def parse_ignore_patterns(raw: str | None) -> list[str]:
    """Split a newline/comma separated ignore list into glob patterns.

    Whitespace is trimmed; empty entries and ``#`` comment entries are dropped.
    """
    if not raw:
        return []
    patterns: list[str] = []
    for part in _SPLIT_RE.split(raw):
        stripped = part.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


def normalize_relative_path(relative_path: str) -> str:
    """Return ``relative_path`` with backslashes turned into forward slashes."""
    return relative_path.replace("\\", "/")


def _base_name(normalized_path: str) -> str:
    return normalized_path.rstrip("/").rsplit("/", 1)[-1]


def _match_segments(path_parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    """Match path segments against pattern segments with ``**`` support."""
    if not pattern_parts:
        return not path_parts
    head = pattern_parts[0]
    if head == "**":
        rest = pattern_parts[1:]
        for skip in range(len(path_parts) + 1):
            if _match_segments(path_parts[skip:], rest):
                return True
        return False
    if not path_parts:
        return False
    if not fnmatchcase(path_parts[0], head):
        return False
    return _match_segments(path_parts[1:], pattern_parts[1:])


def glob_match(path: str, pattern: str) -> bool:
    """Return whether ``path`` matches shell glob ``pattern``.

    An empty path never matches, mirroring minimatch.
    """
    if not path:
        return False
    return _match_segments(path.split("/"), pattern.split("/"))


def should_ignore(relative_path: str, patterns: Iterable[str]) -> bool:
    """Return whether any pattern matches the path or its base name."""
    normalized = normalize_relative_path(relative_path)
    base_name = _base_name(normalized)
    for pattern in patterns:
        if glob_match(normalized, pattern):
            return True
        if glob_match(base_name, pattern):
            return True
    return False


@dataclass(frozen=True)
class IgnoreFilter:
    """Immutable set of ignore patterns used by the tree walker."""

    patterns: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, raw: str | None) -> IgnoreFilter:
        return cls(tuple(parse_ignore_patterns(raw)))

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> IgnoreFilter:
        collected: list[str] = []
        for raw in patterns:
            collected.extend(parse_ignore_patterns(raw))
        return cls(tuple(collected))

    def is_ignored(self, relative_path: str) -> bool:
        if not self.patterns:
            return False
        return should_ignore(relative_path, self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)


__all__ = [
    "IgnoreFilter",
    "glob_match",
    "normalize_relative_path",
    "parse_ignore_patterns",
    "should_ignore",
]
