"""Directory scanner for music files.

This module walks a directory tree and builds the Inventory of files whose
extension is in the configured allow-list.

Each match is recorded by its path relative to the scanned root. The relative
path is computed from the root itself, so roots may be named anything and sit
at any depth (``C:/Users/x/Music``, ``/media/usb/Tunes``, ...).
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List

from musicsync.core.exceptions import PathNotFoundError
from musicsync.fs.operations import iter_tree
from musicsync.models.config import DEFAULT_EXTENSIONS, normalize_extensions
from musicsync.models.core import FileEntry, Inventory

# Logger for this module
logger = logging.getLogger(__name__)


def matches_extension(path: Path, extensions: Iterable[str]) -> bool:
    """Check if *path* has one of *extensions*, ignoring case.

    Args:
        path: The file path to check.
        extensions: Lower-case, dot-prefixed suffixes (e.g. ``.mp3``).

    Returns:
        True if the file's suffix is in the allow-list.
    """
    return path.suffix.lower() in extensions


def relative_entry(path: Path, root: Path) -> FileEntry:
    """Build the FileEntry for *path* relative to *root*.

    Raises:
        ValueError: If *path* is not inside *root*.
    """
    return FileEntry(relative_path=path.relative_to(root).as_posix())


def scan_inventory(
    root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    *,
    include_hidden: bool = True,
) -> Inventory:
    """Scan *root* recursively and return the inventory of matching files.

    Args:
        root: The directory to scan.
        extensions: Allow-list of suffixes, matched case-insensitively.
        include_hidden: Whether to include dot-files and dot-directories.

    Returns:
        Inventory of FileEntry objects, in filesystem walk order.

    Raises:
        PathNotFoundError: If the directory doesn't exist.
        NotADirectoryError: If the path is not a directory.
    """
    if not root.exists():
        raise PathNotFoundError(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {root}")

    # Use absolute path so that relative_to works against absolute walk results
    root = root.absolute()
    allowed = set(normalize_extensions(extensions))

    start_time = time.time()
    entries: List[FileEntry] = []
    errors: List[str] = []
    skipped = 0

    def _on_error(directory: Path, error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {directory}: {error}")
        errors.append(f"Error accessing directory {directory}: {error}")

    for file_path in iter_tree(root, include_hidden=include_hidden, on_error=_on_error):
        if matches_extension(file_path, allowed):
            entries.append(relative_entry(file_path, root))
        else:
            skipped += 1

    scan_duration = time.time() - start_time
    logger.debug(
        f"Scanned {root}: {len(entries)} matching, {skipped} skipped "
        f"in {scan_duration:.2f}s"
    )

    return Inventory(
        root=root,
        entries=entries,
        skipped_files=skipped,
        scan_duration_seconds=scan_duration,
        errors=errors,
    )

