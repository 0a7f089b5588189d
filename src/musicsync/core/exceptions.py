"""Exceptions raised by the musicsync core."""

from pathlib import Path


class PathNotFoundError(FileNotFoundError):
    """Raised when a configured root directory does not exist."""

    def __init__(self, path: Path, label: str = "Directory") -> None:
        self.path = path
        self.label = label
        super().__init__(f"{label} does not exist: {path}")
