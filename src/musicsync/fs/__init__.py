"""Filesystem operations for musicsync."""

from musicsync.fs.operations import (
    copy_file,
    ensure_parent_dirs,
    file_size,
    free_space,
    iter_tree,
    path_exists,
)

__all__ = [
    "copy_file",
    "ensure_parent_dirs",
    "file_size",
    "free_space",
    "iter_tree",
    "path_exists",
]
