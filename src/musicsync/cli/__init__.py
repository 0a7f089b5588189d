"""Command-line interface for musicsync.

This package provides the Typer app and global console for all CLI commands and
user-facing output.

- app: The Typer application object, used by the ``musicsync`` entry point.
- console: Rich Console instance for consistent, styled output.
"""

from musicsync.cli.commands import app, main
from musicsync.cli.console import console

__all__ = ["app", "console", "main"]
