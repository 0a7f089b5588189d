"""Yes/no prompts used by the interactive sync command."""

from typing import Callable, Optional

from rich.console import Console
from rich.prompt import Confirm


def ask_yes_no(question: str, console: Optional[Console] = None) -> bool:
    """Ask a y/n question on *console* and return the answer."""
    return Confirm.ask(question, console=console)


def auto_yes(times: Optional[int] = None) -> Callable[..., bool]:
    """Return a confirm callable answering yes, at most *times* times.

    Used by ``--yes`` so that the rescan prompt cannot loop forever.
    """
    remaining = times

    def _answer(*_: object) -> bool:
        nonlocal remaining
        if remaining is None:
            return True
        if remaining <= 0:
            return False
        remaining -= 1
        return True

    return _answer
