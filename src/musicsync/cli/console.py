"""Console utilities & context manager for CLI commands.

This module centralises Rich configuration for CLI commands:

* Pretty traceback installation with show_locals enabled.
* A ``ConsoleManager`` context manager yielding a pre-configured :class:`rich.console.Console`.
* Opt-out via the ``--no-rich`` flag (sets env var ``MUSICSYNC_NO_RICH``) or
  the environment variable being set externally.
* An error console writing to stderr, for fatal messages and failed copies.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from typing import Any, Dict

from rich.console import Console
from rich.traceback import install as install_rich_traceback

__all__ = [
    "console",
    "ConsoleManager",
    "rich_enabled",
]

# ENV VAR used to disable rich output entirely (useful for piping or testing)
_ENV_DISABLE_RICH = "MUSICSYNC_NO_RICH"

console: Console = Console()


def rich_enabled() -> bool:
    """Return False when Rich styling has been disabled via the environment."""
    return os.getenv(_ENV_DISABLE_RICH, "0").lower() not in {"1", "true", "yes"}


class ConsoleManager(AbstractContextManager):
    """Context manager that yields a configured Rich :class:`Console`.

    Parameters
    ----------
    record:
        Forwarded to :class:`rich.console.Console`. When *True*, Rich records
        all output so it can be retrieved later via ``console.export_text``.
    force_use:
        When *True* / *False* this overrides autodetection and forces rich
        enabled/disabled. When *None*, autodetect via ``MUSICSYNC_NO_RICH``.
    console_kwargs:
        Additional keyword arguments forwarded verbatim to the Console
        (``stderr=True`` gives an error console).
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:  # noqa: D401
        self._record = record
        self._force_use = force_use
        self._console_kwargs: Dict[str, Any] = console_kwargs
        self.console: Console | None = None

    def __enter__(self) -> Console:  # noqa: D401
        enabled = self._force_use if self._force_use is not None else rich_enabled()

        if enabled:
            self.console = Console(record=self._record, **self._console_kwargs)
        else:
            # Disable colour, otherwise output may contain escape codes.
            self.console = Console(
                record=self._record,
                color_system=None,
                force_terminal=False,
                **self._console_kwargs,
            )

        install_rich_traceback(show_locals=True, console=self.console)

        return self.console

    def __exit__(self, exc_type, exc_val, exc_tb):  # type: ignore[override]
        if self.console is not None:
            if exc_type is not None:
                self.console.print_exception()  # type: ignore[arg-type]

            self.console.file.flush()  # type: ignore[attr-defined]
        # Propagate exceptions – we do *not* swallow them.
        return False
