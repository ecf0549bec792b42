"""Recursive directory scan that writes a listing into every directory.

The walk is depth-first and single-threaded. Subdirectories are visited while
the parent's entries are collected, so child listings are written before the
parent's. Filesystem errors are not caught here; they abort the whole scan.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import structlog

from .errors import ConfigError, RootNotFoundError
from .filtering import IgnoreFilter
from .models import (
    INDEX_HTML,
    INDEX_JSON,
    RESERVED_NAMES,
    DirectoryIndex,
    FileEntry,
    ScanResult,
    ScanStats,
    format_timestamp,
    timestamp_from_mtime,
)
from .render.formats import OutputFormat, render_index
from .render.page import DEFAULT_TITLE_TEMPLATE
from .render.themes import PageTheme

logger = structlog.get_logger("dirindex.walk")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScanOptions:
    """Per-run settings shared by every recursive step."""

    ignore: IgnoreFilter = field(default_factory=IgnoreFilter)
    output_format: OutputFormat = OutputFormat.BOTH
    stylesheet: str | None = None
    include_metadata: bool = True
    title_template: str = DEFAULT_TITLE_TEMPLATE
    theme: PageTheme | None = None


def relative_posix(path: str | Path, root: str | Path) -> str:
    """Return ``path`` relative to ``root`` with ``/`` separators (``""`` for root)."""
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def index_path_for(relative_path: str) -> str:
    """Return the listing path (leading ``/``) for a root-relative path."""
    if not relative_path or relative_path == "/":
        return "/"
    return "/" + relative_path


def sort_entries(entries: list[FileEntry]) -> list[FileEntry]:
    """Order directories before files, each group alphabetically.

    Names compare case-insensitively first; names equal under case folding
    fall back to code-point order.
    """
    return sorted(entries, key=lambda entry: (not entry.is_dir, entry.name.casefold(), entry.name))


def display_text(value: str) -> str:
    """Replace undecodable filename bytes with U+FFFD so the text encodes as UTF-8."""
    return os.fsencode(value).decode("utf-8", errors="replace")


def build_entry(child: os.DirEntry, root: Path, include_metadata: bool) -> FileEntry:
    """Build the listing entry for one directory child."""
    is_dir = child.is_dir()
    size: int | None = None
    modified: str | None = None
    if include_metadata and not is_dir and child.is_file():
        stat = child.stat()
        size = int(stat.st_size)
        modified = timestamp_from_mtime(stat.st_mtime)
    return FileEntry(
        name=display_text(child.name),
        type="directory" if is_dir else "file",
        path=display_text(relative_posix(child.path, root)),
        size=size,
        modified=modified,
    )


def _default_file_mode() -> int:
    """Return the mode ``open()`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_text(path: Path, text: str) -> None:
    """Write ``text`` to a sibling temp file, then move it over ``path``.

    A failed write leaves any previous artifact untouched.
    """
    data = text.encode("utf-8")
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def write_index(
    directory: Path,
    index: DirectoryIndex,
    options: ScanOptions,
    stats: ScanStats,
) -> list[Path]:
    """Render ``index`` and write the requested artifacts into ``directory``."""
    rendered = render_index(
        index,
        options.output_format,
        options.stylesheet,
        options.title_template,
        options.theme,
    )
    written: list[Path] = []
    for name, text in ((INDEX_HTML, rendered.html), (INDEX_JSON, rendered.json)):
        if text is None:
            continue
        target = directory / name
        _write_text(target, text)
        stats.generated_count += 1
        written.append(target)
        logger.debug("dirindex.wrote", path=index.path, artifact=name)
    return written


def walk_directory(
    directory: str | Path,
    root: str | Path,
    options: ScanOptions,
    stats: ScanStats,
    *,
    result: ScanResult | None = None,
    clock: Clock = utc_now,
    ancestors: frozenset[str] = frozenset(),
) -> DirectoryIndex | None:
    """Scan ``directory`` and its subtree, writing one listing per directory.

    Returns ``None`` without touching ``stats`` when the directory itself is
    ignored. ``ancestors`` holds resolved paths of the directories above this
    one; a child resolving to one of them is listed but not descended into.
    """
    directory = Path(directory)
    root = Path(root)
    relative_path = relative_posix(directory, root) or "/"

    if options.ignore.is_ignored(relative_path):
        logger.debug("dirindex.skip_ignored", path=relative_path)
        return None

    stats.directories_scanned += 1
    lineage = ancestors | {os.path.realpath(directory)}

    entries: list[FileEntry] = []
    with os.scandir(directory) as children:
        for child in children:
            if child.name in RESERVED_NAMES:
                continue
            if options.ignore.is_ignored(relative_posix(child.path, root)):
                continue

            entry = build_entry(child, root, options.include_metadata)
            entries.append(entry)

            if not entry.is_dir:
                continue
            if os.path.realpath(child.path) in lineage:
                logger.warning("dirindex.symlink_cycle", path=entry.path)
                continue
            walk_directory(
                child.path,
                root,
                options,
                stats,
                result=result,
                clock=clock,
                ancestors=lineage,
            )

    index = DirectoryIndex(
        path=index_path_for(display_text(relative_path)),
        entries=tuple(sort_entries(entries)),
        generated=format_timestamp(clock()),
    )
    write_index(directory, index, options, stats)
    if result is not None:
        result.indexes.append(index)
    return index


def resolve_root(root: str | Path) -> Path:
    """Return the absolute scan root, failing before any traversal."""
    absolute = Path(os.path.abspath(root))
    if not absolute.exists():
        raise RootNotFoundError(absolute)
    if not absolute.is_dir():
        raise ConfigError(f"Root is not a directory: {absolute}")
    return absolute


def scan_tree(
    root: str | Path,
    options: ScanOptions | None = None,
    *,
    clock: Clock = utc_now,
) -> ScanResult:
    """Validate ``root`` and generate listings for its whole tree."""
    options = options or ScanOptions()
    absolute_root = resolve_root(root)
    result = ScanResult()
    logger.info(
        "dirindex.scan_start",
        root=str(absolute_root),
        output_format=options.output_format.value,
        ignore=list(options.ignore.patterns),
    )
    walk_directory(absolute_root, absolute_root, options, result.stats, result=result, clock=clock)
    logger.info(
        "dirindex.scan_complete",
        generated_count=result.stats.generated_count,
        directories_scanned=result.stats.directories_scanned,
    )
    return result


__all__ = [
    "Clock",
    "ScanOptions",
    "build_entry",
    "index_path_for",
    "relative_posix",
    "resolve_root",
    "scan_tree",
    "sort_entries",
    "utc_now",
    "walk_directory",
]
