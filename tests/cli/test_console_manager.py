from __future__ import annotations

import pytest
from rich.console import Console

from musicsync.cli.console import ConsoleManager, rich_enabled


def test_console_manager_yields_recording_console():  # noqa: D103
    with ConsoleManager(record=True) as console:  # type: Console
        assert isinstance(console, Console)
        console.print("Hey buddy!")
        console.print("Done. 3 file(s) in library")

        output = console.export_text()

    for expected in ("Hey buddy!", "Done. 3 file(s)"):
        assert expected in output


def test_console_manager_pretty_traceback():  # noqa: D103
    with ConsoleManager(record=True) as console:
        try:
            1 / 0
        except ZeroDivisionError:
            console.print_exception()

        output = console.export_text()

    assert "ZeroDivisionError" in output


def test_console_manager_does_not_swallow_exceptions():  # noqa: D103
    with pytest.raises(RuntimeError):
        with ConsoleManager(record=True):
            raise RuntimeError("boom")


def test_no_rich_env_disables_colour(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.setenv("MUSICSYNC_NO_RICH", "1")
    assert rich_enabled() is False

    with ConsoleManager() as console:
        assert console.color_system is None


def test_stderr_console(monkeypatch: pytest.MonkeyPatch):  # noqa: D103
    monkeypatch.delenv("MUSICSYNC_NO_RICH", raising=False)
    assert rich_enabled() is True
    with ConsoleManager(stderr=True) as console:
        assert console.stderr is True
