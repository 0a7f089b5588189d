"""Core functionality for musicsync.

This package exposes the three steps of a sync cycle and the session that
strings them together:
- scan_inventory: Recursively scans a root for files in the extension
  allow-list and returns their root-relative paths.
- compare_inventories: Decides whether two inventories are synced and which
  files are missing from the smaller one.
- copy_unsynced: Copies the missing files across, one guarded copy per file.
- SyncSession: Runs scan, diff, copy and rescan as an explicit loop.
"""

from musicsync.core.copier import (
    build_copy_plan,
    copy_unsynced,
    plan_from_report,
    plan_size,
)
from musicsync.core.differ import compare_inventories, get_unsynced, is_synced
from musicsync.core.exceptions import PathNotFoundError
from musicsync.core.scanner import scan_inventory
from musicsync.core.session import SessionHooks, SyncSession

__all__ = [
    "PathNotFoundError",
    "SessionHooks",
    "SyncSession",
    "build_copy_plan",
    "compare_inventories",
    "copy_unsynced",
    "get_unsynced",
    "is_synced",
    "plan_from_report",
    "plan_size",
    "scan_inventory",
]
