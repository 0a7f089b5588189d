"""Domain models for the musicsync application."""

from musicsync.models.config import DEFAULT_EXTENSIONS, SyncConfig
from musicsync.models.core import (
    CopyStatus,
    FileEntry,
    Inventory,
    SyncDirection,
    SyncState,
    UnsyncedFile,
)
from musicsync.models.report import CopyEvent, CopyEventKind, CopyResult, SyncReport

__all__ = [
    "CopyEvent",
    "CopyEventKind",
    "CopyResult",
    "CopyStatus",
    "DEFAULT_EXTENSIONS",
    "FileEntry",
    "Inventory",
    "SyncConfig",
    "SyncDirection",
    "SyncReport",
    "SyncState",
    "UnsyncedFile",
]
