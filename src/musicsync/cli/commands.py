"""CLI commands for musicsync.

This module implements all user-facing CLI commands: the interactive ``sync``
cycle, ``scan`` and ``diff`` for inspection, ``config`` to persist roots and
extensions, and ``version``.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console for consistent, styled UX.

Design:
- Annotated aliases define shared arguments/options once.
- The sync command wires a SyncSession to Rich prompts and renderers; the
  session itself never touches the terminal.
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_traceback

from musicsync.cli.console import ConsoleManager, console
from musicsync.cli.renderer import (
    render_copy_event,
    render_copy_summary,
    render_free_space,
    render_inventory,
    render_report,
    render_unsynced,
)
from musicsync.cli.utils.prompt_utils import ask_yes_no, auto_yes
from musicsync.core.copier import plan_from_report, plan_size
from musicsync.core.differ import compare_inventories
from musicsync.core.exceptions import PathNotFoundError
from musicsync.core.scanner import scan_inventory
from musicsync.core.session import SessionHooks, SyncSession
from musicsync.fs.operations import free_space
from musicsync.models.config import (
    DEFAULT_EXTENSIONS,
    SyncConfig,
    normalize_extensions,
)
from musicsync.models.core import Inventory
from musicsync.models.report import SyncReport
from musicsync.utils import config as config_utils
from musicsync.utils.debug import debug, error, info, setup_logger, warn

# Install rich traceback handler
install_traceback(show_locals=True)

app = typer.Typer(
    name="musicsync",
    help="Keep a music library and its removable-disk mirror in sync.",
    add_completion=True,
)
config_app = typer.Typer(help="Show or change persistent settings.")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


LIBRARY = Annotated[
    Optional[Path],
    typer.Option(
        "--library",
        "-l",
        help="Primary music library (default: paths.library from config)",
    ),
]

REMOVABLE = Annotated[
    Optional[Path],
    typer.Option(
        "--removable",
        "-r",
        help="Music directory on the removable disk (default: paths.removable)",
    ),
]

EXTENSIONS = Annotated[
    Optional[List[str]],
    typer.Option(
        "--ext",
        "-e",
        help="File extension to include; repeat for several "
        f"(default: {', '.join(DEFAULT_EXTENSIONS)})",
    ),
]

INCLUDE_HIDDEN = Annotated[
    Optional[bool],
    typer.Option(
        "--include-hidden/--skip-hidden",
        help="Whether dot-files and dot-directories are scanned",
    ),
]

YES = Annotated[
    bool,
    typer.Option(
        "--yes",
        "-y",
        help="Answer yes to every prompt (rescan after copy happens once)",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the MUSICSYNC_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every scan and copy step to stderr."
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        import os

        os.environ["MUSICSYNC_NO_RICH"] = "1"
    setup_logger(logging.DEBUG if verbose else None)


def _load_config(
    library: Optional[Path],
    removable: Optional[Path],
    ext: Optional[List[str]],
    include_hidden: Optional[bool],
    err_console: Console,
) -> Optional[SyncConfig]:
    """Resolve the run's SyncConfig, printing the reason when it is invalid."""
    try:
        return config_utils.load_sync_config(
            library=library,
            removable=removable,
            extensions=ext,
            include_hidden=include_hidden,
        )
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return None


def _build_hooks(out: Console, err: Console, yes: bool) -> SessionHooks:
    """Wire session callbacks to Rich prompts and renderers."""

    def on_scan(label: str, inventory: Inventory) -> None:
        render_inventory(label, inventory, console=out)

    def on_report(report: SyncReport) -> None:
        out.print()
        render_report(report, console=out)

    def on_fatal(exc: PathNotFoundError) -> None:
        path = escape(str(exc.path))
        err.print(f'[red]Can\'t find {exc.label}: "{path}". Exiting...[/red]')

    def confirm_copy(report: SyncReport) -> bool:
        target = report.direction.target_root
        if target.exists():
            free_bytes = free_space(target)
            needed = plan_size(plan_from_report(report))
            if needed > free_bytes:
                warn(f"Plan needs {needed} bytes, {free_bytes} free on {target}")
            render_free_space(free_bytes, report, plan_bytes=needed, console=out)
        if yes:
            return True
        return ask_yes_no(
            f"Do you want to copy the unsynced files into {escape(str(target))}?",
            console=out,
        )

    if yes:
        confirm_show = auto_yes()
        confirm_rescan = auto_yes(times=1)
    else:

        def confirm_show(report: SyncReport) -> bool:
            return ask_yes_no("Do you want to show the unsynced files?", console=out)

        def confirm_rescan(report: SyncReport) -> bool:
            return ask_yes_no(
                "Do you want to rescan both folders to make sure they're synced?",
                console=out,
            )

    return SessionHooks(
        confirm_show=confirm_show,
        confirm_copy=confirm_copy,
        confirm_rescan=confirm_rescan,
        on_scan=on_scan,
        on_report=on_report,
        on_show=lambda report: render_unsynced(report, console=out),
        on_event=lambda event: render_copy_event(event, console=out, err_console=err),
        on_copy_done=lambda result: render_copy_summary(result, console=out),
        on_fatal=on_fatal,
    )


@app.command()
def sync(
    library: LIBRARY = None,
    removable: REMOVABLE = None,
    ext: EXTENSIONS = None,
    include_hidden: INCLUDE_HIDDEN = None,
    yes: YES = False,
) -> None:
    """Compare both trees and copy missing files across, interactively."""
    with ConsoleManager(stderr=True) as err:
        config = _load_config(library, removable, ext, include_hidden, err)
    if config is None:
        raise typer.Exit(ExitCode.ERROR)

    exit_code = ExitCode.SUCCESS
    with ConsoleManager() as out, ConsoleManager(stderr=True) as err:
        out.print("Hey buddy! Give me a moment...\n")
        session = SyncSession(config, _build_hooks(out, err, yes))
        try:
            exit_code = ExitCode(session.run())
        except Exception as e:
            error(f"Sync session aborted: {e}")
            message = escape(str(e))
            err.print(f"[red]Error: An unexpected error occurred: {message}[/red]")
            err.print_exception()
            exit_code = ExitCode.ERROR
        else:
            debug(f"Session states: {[s.value for s in session.history]}")
            info(f"Sync finished after {session.cycles} cycle(s): {exit_code.name}")
            if exit_code == ExitCode.SUCCESS:
                report = session.last_report
                if session.cycles == 1 and report is not None and report.synced:
                    out.print("Looks like there's nothing to do here. CYA!!!")
                else:
                    out.print("Alright, take care!")
    raise typer.Exit(exit_code)


@app.command()
def scan(
    root: Annotated[Path, typer.Argument(help="Directory to scan for music files")],
    ext: EXTENSIONS = None,
    include_hidden: INCLUDE_HIDDEN = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """List the music files found under a directory."""
    extensions = config_utils.resolve_setting(
        "scan.extensions", default=list(DEFAULT_EXTENSIONS), cli_value=ext or None
    )
    hidden = config_utils.resolve_setting(
        "scan.include_hidden", default=True, cli_value=include_hidden
    )
    allowed = normalize_extensions(extensions)
    try:
        if not allowed:
            raise ValueError("At least one file extension must be configured")
        inventory = scan_inventory(root, allowed, include_hidden=hidden)
    except (FileNotFoundError, NotADirectoryError, ValueError) as e:
        with ConsoleManager(stderr=True) as err:
            err.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    if json_output:
        sys.stdout.write(json.dumps(inventory.model_dump(mode="json"), indent=2) + "\n")
        return
    with ConsoleManager() as out:
        for entry in inventory.entries:
            out.print(entry.relative_path, markup=False, highlight=False)
        render_inventory("scan", inventory, console=out)


@app.command()
def diff(
    library: LIBRARY = None,
    removable: REMOVABLE = None,
    ext: EXTENSIONS = None,
    include_hidden: INCLUDE_HIDDEN = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Compare both trees and list the unsynced files without copying."""
    inventories: List[Inventory] = []
    with ConsoleManager(stderr=True) as err:
        config = _load_config(library, removable, ext, include_hidden, err)
        try:
            if config is not None:
                inventories = [
                    scan_inventory(
                        root, config.extensions, include_hidden=config.include_hidden
                    )
                    for root in (config.library_root, config.removable_root)
                ]
        except (FileNotFoundError, NotADirectoryError) as e:
            err.print(f"[red]Error: {escape(str(e))}[/red]")
    if not inventories:
        raise typer.Exit(ExitCode.ERROR)

    report = compare_inventories(*inventories)
    if json_output:
        sys.stdout.write(json.dumps(report.model_dump(mode="json"), indent=2) + "\n")
        return
    with ConsoleManager() as out:
        for label, inventory in zip(("library", "removable"), inventories):
            render_inventory(label, inventory, console=out)
        render_report(report, console=out)
        if report.unsynced:
            render_unsynced(report, console=out)


@config_app.command("show")
def config_show() -> None:
    """Print the resolved settings and where the config file lives."""
    config_file = escape(str(config_utils.CONFIG_FILE))
    console.print(f"Config file: [cyan]{config_file}[/cyan]")
    for key, default in (
        ("paths.library", ""),
        ("paths.removable", ""),
        ("scan.extensions", list(DEFAULT_EXTENSIONS)),
        ("scan.include_hidden", True),
    ):
        value = config_utils.resolve_setting(key, default=default)
        console.print(f"{key} = {value!r}", markup=False, highlight=False)


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. paths.library")],
    value: Annotated[
        List[str], typer.Argument(help="Value; several values make a list")
    ],
) -> None:
    """Persist a setting in config.toml."""
    known = {
        "paths.library": str,
        "paths.removable": str,
        "scan.extensions": list,
        "scan.include_hidden": bool,
    }
    kind = known.get(key)
    if kind is None:
        console.print(
            f"[red]Error: Unknown setting {key!r}. "
            f"Must be one of: {', '.join(known)}[/red]"
        )
        raise typer.Exit(ExitCode.ERROR)

    stored: object
    if kind is list:
        stored = [part for v in value for part in v.split(",") if part]
    elif kind is bool:
        stored = value[0].lower() in {"1", "true", "yes", "on"}
    else:
        stored = str(Path(value[0]).expanduser().absolute())
    config_utils.save_setting(key, stored)
    console.print(f"Saved {key} = {stored!r}", markup=False, highlight=False)


@app.command()
def version() -> None:
    """Show the version of musicsync."""
    from musicsync.__about__ import __version__

    console.print(f"MusicSync version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "main", "ExitCode"]
