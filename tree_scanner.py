#!/usr/bin/env python3
"""
Tree Scanner

Walks a directory tree and aggregates what a recursive removal would destroy:
file and directory counts, total size, the largest file and the distribution
of file extensions. Only metadata is read; file contents are never opened.

The traversal yields one EntryOutcome per entry and the ScanAccumulator folds
those outcomes into a ScanResult, so skipped entries are ordinary values
instead of exceptions.
"""

import logging
import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

NO_EXTENSION = "[no extension]"


class PathError(Exception):
    """Raised when the scan root is missing, not a directory or unreadable"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class SkipReason(Enum):
    ACCESS_DENIED = "access denied"
    VANISHED = "vanished"
    IO_ERROR = "i/o error"


@dataclass(frozen=True)
class EntryOutcome:
    """What the traversal learned about a single entry."""

    path: str
    kind: EntryKind
    size: Optional[int] = None
    skip_reason: Optional[SkipReason] = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None


@dataclass(frozen=True)
class ScanResult:
    """Summary of one scan. Frozen once the scan returns."""

    root_path: str
    total_files: int = 0
    total_directories: int = 0
    total_size: int = 0
    largest_file_size: int = 0
    largest_file_path: str = ""
    file_types: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    other_entries: int = 0
    unmeasured_files: int = 0
    inaccessible_entries: int = 0
    interrupted: bool = False


@dataclass
class ScanAccumulator:
    """Mutable counterpart of ScanResult, fed one outcome at a time."""

    root_path: str
    total_files: int = 0
    total_directories: int = 0
    total_size: int = 0
    largest_file_size: int = 0
    largest_file_path: str = ""
    file_types: dict[str, int] = field(default_factory=dict)
    other_entries: int = 0
    unmeasured_files: int = 0
    inaccessible_entries: int = 0

    def add(self, outcome: EntryOutcome):
        """Fold a single entry outcome into the running totals"""
        if outcome.kind is EntryKind.FILE:
            if outcome.skipped:
                # Seen but not measured: kept out of totals and extensions
                self.unmeasured_files += 1
                return
            size = outcome.size or 0
            self.total_files += 1
            self.total_size += size
            # Strict > so the first file reaching a size keeps the title
            if size > self.largest_file_size:
                self.largest_file_size = size
                self.largest_file_path = outcome.path
            ext = extension_of(os.path.basename(outcome.path))
            self.file_types[ext] = self.file_types.get(ext, 0) + 1
        elif outcome.kind is EntryKind.DIRECTORY:
            if outcome.skipped:
                # Listing failed; the directory itself was already counted
                self.inaccessible_entries += 1
            else:
                self.total_directories += 1
        elif outcome.skipped:
            self.inaccessible_entries += 1
        else:
            self.other_entries += 1

    def freeze(self, interrupted: bool = False) -> ScanResult:
        return ScanResult(
            root_path=self.root_path,
            total_files=self.total_files,
            total_directories=self.total_directories,
            total_size=self.total_size,
            largest_file_size=self.largest_file_size,
            largest_file_path=self.largest_file_path,
            file_types=MappingProxyType(dict(self.file_types)),
            other_entries=self.other_entries,
            unmeasured_files=self.unmeasured_files,
            inaccessible_entries=self.inaccessible_entries,
            interrupted=interrupted,
        )


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def extension_of(name: str) -> str:
    """Return the lexical extension of *name*, including the dot.

    The suffix starts at the last '.' in the name. Leading dots are not
    special, so '.bashrc' is its own extension. Names without a dot, or
    ending in a dot, fall into the NO_EXTENSION bucket.
    """
    idx = name.rfind(".")
    if idx == -1 or idx == len(name) - 1:
        return NO_EXTENSION
    return name[idx:]


def _skip_reason(error: OSError) -> SkipReason:
    if isinstance(error, PermissionError):
        return SkipReason.ACCESS_DENIED
    if isinstance(error, FileNotFoundError):
        return SkipReason.VANISHED
    return SkipReason.IO_ERROR


def _classify(entry: os.DirEntry) -> EntryOutcome:
    """Classify one directory entry without following symlinks."""
    try:
        if entry.is_symlink():
            return EntryOutcome(entry.path, EntryKind.OTHER)
        if entry.is_dir(follow_symlinks=False):
            return EntryOutcome(entry.path, EntryKind.DIRECTORY)
        if not entry.is_file(follow_symlinks=False):
            return EntryOutcome(entry.path, EntryKind.OTHER)
    except OSError as e:
        logger.debug("Cannot classify %s: %s", entry.path, e)
        return EntryOutcome(entry.path, EntryKind.OTHER, skip_reason=_skip_reason(e))

    try:
        st = entry.stat(follow_symlinks=False)
    except OSError as e:
        logger.debug("Cannot read size of %s: %s", entry.path, e)
        return EntryOutcome(entry.path, EntryKind.FILE, skip_reason=_skip_reason(e))

    # Replaced by something else between listing and stat
    if not stat.S_ISREG(st.st_mode):
        return EntryOutcome(entry.path, EntryKind.OTHER)
    return EntryOutcome(entry.path, EntryKind.FILE, size=st.st_size)


def _list_directory(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _resolve_root(root_path: str) -> list[os.DirEntry]:
    """Validate the scan root and return its sorted listing."""
    try:
        st = os.stat(root_path)
    except FileNotFoundError:
        raise PathError(root_path, "Path does not exist") from None
    except OSError as e:
        raise PathError(root_path, f"Cannot access path ({e.strerror or e})") from e

    if not stat.S_ISDIR(st.st_mode):
        raise PathError(root_path, "Path is not a directory")

    try:
        return _list_directory(root_path)
    except OSError as e:
        raise PathError(root_path, f"Cannot read directory ({e.strerror or e})") from e


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def iter_entries(
    root_path: str,
    on_directory: Optional[Callable[[str, int], None]] = None,
) -> Iterator[EntryOutcome]:
    """Yield an outcome for every entry below *root_path*.

    Directories are yielded before their contents are listed. A directory
    whose listing fails is yielded a second time with a skip reason. Raises
    PathError if the root itself cannot be resolved.
    """
    root_entries = _resolve_root(root_path)
    dirs_seen = 0

    # Each stack item is a directory listing still to be processed
    stack: list[Iterator[os.DirEntry]] = [iter(root_entries)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        outcome = _classify(entry)
        yield outcome
        if outcome.kind is not EntryKind.DIRECTORY or outcome.skipped:
            continue

        dirs_seen += 1
        if on_directory:
            on_directory(entry.path, dirs_seen)

        try:
            children = _list_directory(entry.path)
        except OSError as e:
            logger.debug("Cannot list %s: %s", entry.path, e)
            yield EntryOutcome(entry.path, EntryKind.DIRECTORY, skip_reason=_skip_reason(e))
            continue
        stack.append(iter(children))


def scan(
    root_path: str,
    should_stop: Optional[Callable[[], bool]] = None,
    on_directory: Optional[Callable[[str, int], None]] = None,
) -> ScanResult:
    """Scan *root_path* recursively and return the aggregated ScanResult.

    Args:
        root_path: Directory to analyze
        should_stop: Checked before descending into each directory; when it
            returns True the scan ends early and the result is marked interrupted
        on_directory: Progress hook called with (directory path, directories seen)

    Raises:
        PathError: If the root does not exist, is not a directory or cannot be read
    """
    acc = ScanAccumulator(root_path=root_path)
    interrupted = False

    for outcome in iter_entries(root_path, on_directory):
        acc.add(outcome)
        if outcome.kind is EntryKind.DIRECTORY and not outcome.skipped and should_stop and should_stop():
            interrupted = True
            break

    logger.info(
        "Scanned %s: %d files, %d directories, %d bytes (%d unmeasured, %d inaccessible)%s",
        root_path,
        acc.total_files,
        acc.total_directories,
        acc.total_size,
        acc.unmeasured_files,
        acc.inaccessible_entries,
        " [interrupted]" if interrupted else "",
    )
    return acc.freeze(interrupted=interrupted)
