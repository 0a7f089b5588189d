"""Models describing the outcome of diffing and copying.

- SyncReport is what the differencer hands to the user before any copy.
- CopyEvent is emitted per file while copying, for progress output.
- CopyResult summarises a finished batch.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from musicsync.models.core import FileEntry, SyncDirection, UnsyncedFile


class SyncReport(BaseModel):
    """Comparison of two inventories."""

    synced: bool
    """Count-based check: both inventories hold the same number of entries."""

    direction: SyncDirection
    """Source (larger inventory) and Target for this cycle."""

    source_count: int
    target_count: int

    unsynced: List[FileEntry] = Field(default_factory=list)
    """Entries of Source with no exact path match in Target."""


class CopyEventKind(str, Enum):
    """Kind of progress event emitted by the copy executor."""

    STARTED = "started"
    COPIED = "copied"
    FAILED = "failed"


class CopyEvent(BaseModel):
    """Progress notification for one file of a copy batch."""

    kind: CopyEventKind
    index: int
    """1-based position of the file in the batch."""

    total: int
    entry: FileEntry
    source_path: Path
    destination_path: Path
    size: Optional[int] = None
    elapsed_seconds: float = 0.0
    error_code: Optional[int] = None
    """errno of the underlying failure, when the OS provided one."""

    error_message: Optional[str] = None

    @property
    def progress(self) -> str:
        """Position rendered as ``i/total``."""
        return f"{self.index}/{self.total}"


class CopyResult(BaseModel):
    """Summary of a copy batch."""

    copied: int = 0
    failed: int = 0
    total_bytes: int = 0
    duration: float = 0.0
    files: List[UnsyncedFile] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def failures(self) -> List[UnsyncedFile]:
        """Files that could not be copied."""
        return [f for f in self.files if f.error is not None]
