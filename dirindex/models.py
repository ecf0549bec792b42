"""Domain datatypes for generated directory listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

EntryType = Literal["file", "directory"]

INDEX_HTML = "index.html"
INDEX_JSON = "index.json"
RESERVED_NAMES = frozenset({INDEX_HTML, INDEX_JSON})


def format_timestamp(moment: datetime) -> str:
    """Return ``moment`` as UTC ISO-8601 with millisecond precision and ``Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def timestamp_from_mtime(mtime: float) -> str:
    """Return ISO-8601 timestamp for a filesystem ``st_mtime`` value."""
    return format_timestamp(datetime.fromtimestamp(mtime, tz=timezone.utc))


@dataclass(frozen=True)
class FileEntry:
    """One visible child of a scanned directory."""

    name: str
    type: EntryType
    path: str
    size: int | None = None
    modified: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.type == "directory"

    def to_dict(self) -> dict[str, object]:
        """Serialize with stable key order; unset metadata is omitted."""
        data: dict[str, object] = {
            "name": self.name,
            "type": self.type,
            "path": self.path,
        }
        if self.size is not None:
            data["size"] = self.size
        if self.modified is not None:
            data["modified"] = self.modified
        return data


@dataclass(frozen=True)
class DirectoryIndex:
    """Listing record for one scanned directory.

    ``path`` always has a leading ``/``; the scan root is ``/``.
    """

    path: str
    entries: tuple[FileEntry, ...]
    generated: str

    @property
    def is_root(self) -> bool:
        return self.path == "/"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "entries": [entry.to_dict() for entry in self.entries],
            "generated": self.generated,
        }


@dataclass
class ScanStats:
    """Counters accumulated across one recursive scan."""

    generated_count: int = 0
    directories_scanned: int = 0


@dataclass
class ScanResult:
    """Stats plus every listing produced by one scan, children before parents."""

    stats: ScanStats = field(default_factory=ScanStats)
    indexes: list[DirectoryIndex] = field(default_factory=list)

    @property
    def root_index(self) -> DirectoryIndex | None:
        for index in self.indexes:
            if index.is_root:
                return index
        return None


__all__ = [
    "EntryType",
    "INDEX_HTML",
    "INDEX_JSON",
    "RESERVED_NAMES",
    "FileEntry",
    "DirectoryIndex",
    "ScanStats",
    "ScanResult",
    "format_timestamp",
    "timestamp_from_mtime",
]
