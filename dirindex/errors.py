"""Exception types raised by dirindex.

Configuration and precondition failures derive from ``DirIndexError`` so the
CLI can report them as a single terminal failure. Filesystem errors raised
during traversal are plain ``OSError`` and are not wrapped.
"""

from __future__ import annotations

from pathlib import Path


class DirIndexError(Exception):
    """Base class for failures reported to the user as one message."""


class ConfigError(DirIndexError):
    """An option value could not be parsed or is not supported."""


class RootNotFoundError(DirIndexError):
    """The scan root does not exist."""

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"Root directory does not exist: {root}")


__all__ = ["DirIndexError", "ConfigError", "RootNotFoundError"]
