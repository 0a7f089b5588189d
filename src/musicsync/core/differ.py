"""Set differencing between two inventories.

The "synced" check compares entry counts only, and the copy direction is
inferred from which inventory is larger. Two trees with the same number of
files but different content therefore report as synced with nothing to copy.
The unsynced list itself is computed by exact relative-path match.
"""

from typing import List, Sequence, Tuple, Union

from musicsync.models.core import FileEntry, Inventory, SyncDirection
from musicsync.models.report import SyncReport

Entries = Union[Sequence[FileEntry], Inventory]


def _entries(value: Entries) -> Sequence[FileEntry]:
    return value.entries if isinstance(value, Inventory) else value


def is_synced(a: Entries, b: Entries) -> bool:
    """Return True when both inventories hold the same number of entries."""
    return len(a) == len(b)


def get_unsynced(source: Entries, target: Entries) -> List[FileEntry]:
    """Return the entries of *source* whose path is missing from *target*.

    Order follows *source*. Matching is by exact relative path string.
    """
    target_paths = {entry.relative_path for entry in _entries(target)}
    return [e for e in _entries(source) if e.relative_path not in target_paths]


def order_by_size(a: Inventory, b: Inventory) -> Tuple[Inventory, Inventory]:
    """Return ``(source, target)``: the larger inventory is Source.

    On a tie *a* stays Source.
    """
    if len(b) > len(a):
        return b, a
    return a, b


def choose_direction(a: Inventory, b: Inventory) -> SyncDirection:
    """Pick the Source and Target roots for a cycle."""
    source, target = order_by_size(a, b)
    return SyncDirection(source_root=source.root, target_root=target.root)


def compare_inventories(a: Inventory, b: Inventory) -> SyncReport:
    """Compare two inventories and build the report shown to the user.

    Args:
        a: Usually the library inventory.
        b: Usually the removable-disk inventory.

    Returns:
        SyncReport with the synced flag, the direction and, when not synced,
        the entries missing from Target.
    """
    source, target = order_by_size(a, b)
    synced = is_synced(source, target)
    return SyncReport(
        synced=synced,
        direction=SyncDirection(source_root=source.root, target_root=target.root),
        source_count=len(source),
        target_count=len(target),
        unsynced=[] if synced else get_unsynced(source, target),
    )
