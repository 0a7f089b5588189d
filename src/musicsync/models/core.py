"""Core domain models for musicsync.

This module defines the data structures that flow through one sync cycle:
scan, diff, copy.
- FileEntry is the identity of a file inside a tree: its path relative to the
  tree root.
- Inventory is everything the scanner found under one root.
- UnsyncedFile is a FileEntry resolved against both roots, ready to be copied.

Design:
- Identity is the exact relative path string. Two entries with the same
  relative path are the same file, whatever their content.
- Relative paths always use forward slashes so that inventories taken on
  different platforms (or from different drive letters) compare equal.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CopyStatus(str, Enum):
    """Status of a single file in the copy plan."""

    PENDING = "pending"
    COPIED = "copied"
    FAILED = "failed"


class SyncState(str, Enum):
    """States a sync session moves through during one process run."""

    IDLE = "idle"
    SCANNING = "scanning"
    DIFFING = "diffing"
    SYNCED = "synced"
    AWAITING_COPY_DECISION = "awaiting_copy_decision"
    COPYING = "copying"
    DONE = "done"
    FATAL = "fatal"


class FileEntry(BaseModel):
    """A file inside a scanned tree, identified by its root-relative path."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    """Path relative to the tree root, with forward slashes."""

    @field_validator("relative_path")
    @classmethod
    def validate_relative(cls, value: str) -> str:
        """Normalise separators and reject absolute or empty paths."""
        value = value.replace("\\", "/")
        if not value or value.startswith("/"):
            raise ValueError(f"Entry path must be relative: {value!r}")
        return value

    @property
    def name(self) -> str:
        """File name without its directories."""
        return self.relative_path.rsplit("/", 1)[-1]

    def resolve(self, root: Path) -> Path:
        """Return the absolute location of this entry under *root*."""
        return root.joinpath(*self.relative_path.split("/"))

    def __str__(self) -> str:
        return self.relative_path


class Inventory(BaseModel):
    """Result of scanning one root directory.

    Entries keep the order the walk produced them in. No uniqueness is
    enforced beyond what the filesystem already guarantees.
    """

    root: Path
    """Absolute root directory that was scanned."""

    entries: List[FileEntry] = Field(default_factory=list)
    """Extension-matching files found under the root."""

    skipped_files: int = 0
    """Files seen during the walk but excluded by the extension filter."""

    scan_duration_seconds: float = 0.0
    """Wall-clock time the scan took."""

    errors: List[str] = Field(default_factory=list)
    """Subdirectories that could not be read, with the reason."""

    def __len__(self) -> int:
        return len(self.entries)

    def paths(self) -> Set[str]:
        """Return the relative paths of all entries as a set."""
        return {entry.relative_path for entry in self.entries}

    def __contains__(self, item: object) -> bool:
        if isinstance(item, FileEntry):
            item = item.relative_path
        return item in self.paths()


class SyncDirection(BaseModel):
    """Which root plays Source and which plays Target for one cycle."""

    model_config = ConfigDict(frozen=True)

    source_root: Path
    target_root: Path


class UnsyncedFile(BaseModel):
    """A file present in Source but missing from Target.

    Created after differencing, consumed by the copy executor, discarded at
    the end of the cycle. The byte size is filled in lazily by the executor.
    """

    entry: FileEntry
    """Relative identity shared by source and destination."""

    source_path: Path
    """Absolute path of the existing file in the Source tree."""

    destination_path: Path
    """Absolute path the file will be copied to in the Target tree."""

    size: Optional[int] = None
    """Size of the source file in bytes, once known."""

    status: CopyStatus = CopyStatus.PENDING
    """Where this file is in the copy lifecycle."""

    error: Optional[str] = None
    """Error message if the copy failed."""
