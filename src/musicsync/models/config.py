"""Sync configuration model.

SyncConfig is built once at startup (see ``musicsync.utils.config``) and is
immutable afterwards. It is handed to the scanner and the session instead of
module-level constants.
"""

from pathlib import Path
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".mp3", ".wav", ".flac")


def normalize_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
    """Lower-case, dot-prefix and de-duplicate *extensions*, keeping order.

    Example:
        >>> normalize_extensions(["MP3", ".flac", ".mp3"])
        ('.mp3', '.flac')
    """
    seen: list[str] = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in seen:
            seen.append(ext)
    return tuple(seen)


class SyncConfig(BaseModel):
    """Roots and filters for a sync run."""

    model_config = ConfigDict(frozen=True)

    library_root: Path
    """Primary music library."""

    removable_root: Path
    """Mirror of the library on a removable disk."""

    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    """Allow-list of file extensions, matched case-insensitively."""

    include_hidden: bool = True
    """Whether dot-files and dot-directories are part of the inventory."""

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, value: Iterable[str]) -> Tuple[str, ...]:
        """Normalise the allow-list and refuse an empty one."""
        if isinstance(value, str):
            value = value.split(",")
        normalized = normalize_extensions(value)
        if not normalized:
            raise ValueError("At least one file extension must be configured")
        return normalized
