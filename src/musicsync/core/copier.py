"""Copy engine for unsynced files.

This module copies every file missing from Target over from Source.
- The destination's parent directories are created before each copy, since
  the copy primitive does not create them.
- Each file is guarded on its own: a failure is recorded and reported, then
  the batch moves on to the next file. There is no retry and no cleanup of a
  partially written destination.
- Progress is published as CopyEvent objects through an optional callback.
"""

import logging
import time as time_mod
from typing import Callable, List, Optional, Sequence, Union

from musicsync.fs.operations import copy_file, ensure_parent_dirs, file_size
from musicsync.models.core import CopyStatus, FileEntry, SyncDirection, UnsyncedFile
from musicsync.models.report import CopyEvent, CopyEventKind, CopyResult, SyncReport

logger = logging.getLogger(__name__)

EventCallback = Callable[[CopyEvent], None]


def build_copy_plan(
    entries: Sequence[FileEntry], direction: SyncDirection
) -> List[UnsyncedFile]:
    """Resolve each entry against the Source and Target roots.

    Sizes are left unset; the executor looks them up when it reaches each file.
    """
    return [
        UnsyncedFile(
            entry=entry,
            source_path=entry.resolve(direction.source_root),
            destination_path=entry.resolve(direction.target_root),
        )
        for entry in entries
    ]


def plan_from_report(report: SyncReport) -> List[UnsyncedFile]:
    """Build the copy plan for the unsynced entries of *report*."""
    return build_copy_plan(report.unsynced, report.direction)


def _event(
    kind: CopyEventKind, item: UnsyncedFile, index: int, total: int, **kwargs: object
) -> CopyEvent:
    return CopyEvent(
        kind=kind,
        index=index,
        total=total,
        entry=item.entry,
        source_path=item.source_path,
        destination_path=item.destination_path,
        size=item.size,
        **kwargs,
    )


def copy_one(item: UnsyncedFile) -> int:
    """Copy a single planned file, creating its parent directories first.

    Returns:
        The number of bytes copied.

    Raises:
        OSError: If the size lookup, directory creation or copy fails.
    """
    item.size = file_size(item.source_path)
    ensure_parent_dirs(item.destination_path)
    copy_file(item.source_path, item.destination_path)
    return item.size


def plan_size(plan: Sequence[UnsyncedFile]) -> int:
    """Return the total byte size of the sources in *plan*.

    Files that cannot be stat'ed are left out; the copy reports them later.
    """
    total = 0
    for item in plan:
        try:
            total += file_size(item.source_path)
        except OSError as e:
            logger.debug(f"Cannot size {item.source_path}: {e}")
    return total


def copy_unsynced(
    plan: Union[SyncReport, Sequence[UnsyncedFile]],
    *,
    on_event: Optional[EventCallback] = None,
) -> CopyResult:
    """Copy every file in *plan*, isolating failures per file.

    Args:
        plan: Files to copy, usually from :func:`plan_from_report`, or the
            SyncReport whose unsynced entries should be copied.
        on_event: Optional callback receiving a STARTED event and then a
            COPIED or FAILED event for each file.

    Returns:
        CopyResult: counts, bytes copied, duration and the per-file outcome.
    """
    if isinstance(plan, SyncReport):
        plan = plan_from_report(plan)
    start = time_mod.time()
    total = len(plan)
    result = CopyResult(files=list(plan))

    def emit(event: CopyEvent) -> None:
        if on_event is not None:
            on_event(event)

    for index, item in enumerate(plan, start=1):
        emit(_event(CopyEventKind.STARTED, item, index, total))
        file_start = time_mod.time()
        try:
            copied_bytes = copy_one(item)
        except OSError as e:
            item.status = CopyStatus.FAILED
            item.error = e.strerror or str(e)
            result.failed += 1
            logger.warning(
                f"[{index}/{total}] Failed to copy {item.entry.relative_path}: "
                f"{item.error} (path1: {item.source_path}, "
                f"path2: {item.destination_path})"
            )
            emit(
                _event(
                    CopyEventKind.FAILED,
                    item,
                    index,
                    total,
                    elapsed_seconds=time_mod.time() - file_start,
                    error_code=e.errno,
                    error_message=item.error,
                )
            )
            continue

        item.status = CopyStatus.COPIED
        result.copied += 1
        result.total_bytes += copied_bytes
        elapsed = time_mod.time() - file_start
        logger.info(
            f"[{index}/{total}] Copied {item.entry.relative_path} "
            f"to {item.destination_path} ({copied_bytes} bytes, {elapsed:.2f}s)"
        )
        emit(
            _event(
                CopyEventKind.COPIED,
                item,
                index,
                total,
                elapsed_seconds=elapsed,
            )
        )

    result.duration = time_mod.time() - start
    return result


__all__ = [
    "build_copy_plan",
    "copy_one",
    "copy_unsynced",
    "plan_from_report",
    "plan_size",
]
