"""Filesystem operations for musicsync.

Thin, blocking wrappers around the handful of filesystem calls a sync cycle
needs: existence checks, a recursive walk, size lookup, parent-directory
creation, a non-overwriting copy and a free-space query. Windows long paths are
prefixed so deep album folders on removable disks still copy.
"""

import errno
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Iterator, Optional

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix (avoids static backslash pattern)."""
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: Path) -> str:
    s = str(path)
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(s) > WIN_MAX_PATH and not s.startswith(prefix):
        return prefix + s
    return s


def is_hidden(path: Path) -> bool:
    """Check if a path component is hidden (starts with a dot)."""
    return path.name.startswith(".")


def path_exists(path: Path) -> bool:
    """Return True if *path* exists (file or directory)."""
    return path.exists()


def iter_tree(
    root: Path,
    *,
    include_hidden: bool = True,
    on_error: Optional[Callable[[Path, OSError], None]] = None,
) -> Iterator[Path]:
    """Yield every regular file under *root*, recursing into subdirectories.

    Symbolic links to directories are not followed. Order follows the
    filesystem and is not stable between runs.

    Args:
        root: Directory to walk.
        include_hidden: Whether to descend into / yield dot-prefixed names.
        on_error: Called with the directory and the error when a directory
            cannot be listed; the walk then continues with its siblings. When
            omitted the error propagates.
    """
    try:
        items = list(root.iterdir())
    except OSError as e:
        if on_error is None:
            raise
        on_error(root, e)
        return
    for item in items:
        if not include_hidden and is_hidden(item):
            continue
        if item.is_dir() and not item.is_symlink():
            yield from iter_tree(
                item, include_hidden=include_hidden, on_error=on_error
            )
        elif item.is_file():
            yield item


def file_size(path: Path) -> int:
    """Return the size of *path* in bytes."""
    return os.stat(_win_long_path(path)).st_size


def ensure_parent_dirs(path: Path) -> Path:
    """Create the parent directory tree of *path* if it is missing.

    Creating an already-existing directory is not an error.

    Returns:
        The parent directory.
    """
    parent = path.parent
    os.makedirs(_win_long_path(parent), exist_ok=True)
    return parent


def copy_file(src: Path, dst: Path) -> None:
    """Copy *src* to *dst*, preserving metadata.

    The parent directory of *dst* must already exist (see
    :func:`ensure_parent_dirs`).

    Raises:
        FileExistsError: If *dst* already exists. Existing files are never
            overwritten.
        FileNotFoundError: If *src* is missing.
        OSError: For any other failure (permissions, disk full, name too long).
    """
    src_path = _win_long_path(src)
    dst_path = _win_long_path(dst)
    with open(src_path, "rb") as fsrc:
        # "x" creates the destination atomically and fails if it exists
        try:
            fdst = open(dst_path, "xb")
        except FileExistsError as e:
            raise FileExistsError(
                errno.EEXIST,
                f"Destination {dst} already exists",
                str(src),
                None,
                str(dst),
            ) from e
        with fdst:
            shutil.copyfileobj(fsrc, fdst)
    shutil.copystat(src_path, dst_path)


def free_space(path: Path) -> int:
    """Return the free space in bytes on the volume holding *path*."""
    return shutil.disk_usage(path).free
