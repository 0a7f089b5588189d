"""Renderer for CLI output.

This module turns inventories, sync reports and copy events into Rich output.
- Sizes are shown in human-readable decimal units via ``rich.filesize``.
- Failed copies are rendered with the file name, the ``i/total`` position,
  the reason and both paths involved.
"""

from typing import Optional

from rich.console import Console
from rich.filesize import decimal
from rich.markup import escape
from rich.table import Table

from musicsync.models.core import Inventory
from musicsync.models.report import CopyEvent, CopyEventKind, CopyResult, SyncReport


def render_inventory(
    label: str, inventory: Inventory, console: Optional[Console] = None
) -> None:
    """Print the one-line summary of a scanned root."""
    console = console or Console()
    console.print(
        f"Done. [bold]{len(inventory)}[/bold] file(s) in {label} "
        f"[cyan]{escape(str(inventory.root))}[/cyan] "
        f"({inventory.skipped_files} skipped, "
        f"{inventory.scan_duration_seconds:.2f}s)"
    )
    for error in inventory.errors:
        console.print(f"[yellow]Warning: {escape(error)}[/yellow]")


def render_report(report: SyncReport, console: Optional[Console] = None) -> None:
    """Print whether both trees are synced and, if not, which way files go."""
    console = console or Console()
    if report.synced:
        console.print("Are both synced? [bold green]YES[/bold green]")
        return
    console.print("Are both synced? [bold red]NO[/bold red]")
    console.print(
        f"{len(report.unsynced)} file(s) missing from "
        f"[cyan]{escape(str(report.direction.target_root))}[/cyan] "
        f"({report.source_count} vs {report.target_count})"
    )


def render_unsynced(report: SyncReport, console: Optional[Console] = None) -> None:
    """Render the unsynced entries as a numbered table."""
    console = console or Console()

    source = escape(str(report.direction.source_root))
    table = Table(title=f"Unsynced files: {source}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("File", style="cyan")

    for num, entry in enumerate(report.unsynced, start=1):
        table.add_row(str(num), escape(entry.relative_path))

    console.print(table)


def render_copy_event(
    event: CopyEvent,
    console: Optional[Console] = None,
    err_console: Optional[Console] = None,
) -> None:
    """Print the outcome of one file of a copy batch.

    STARTED events announce the file, COPIED events report size and elapsed
    time, FAILED events go to *err_console* with the reason and both paths.
    """
    console = console or Console()
    err_console = err_console or console

    if event.kind == CopyEventKind.STARTED:
        console.print(f'Working on "{escape(event.entry.relative_path)}"...')
    elif event.kind == CopyEventKind.COPIED:
        size = decimal(event.size) if event.size is not None else "?"
        name = escape(event.entry.relative_path)
        console.print(
            f'[green][{event.progress}][/green] File "{name}" '
            f'copied to "{escape(str(event.destination_path))}" '
            f"({size} in {event.elapsed_seconds:.2f}s)."
        )
    else:
        code = f" [errno {event.error_code}]" if event.error_code is not None else ""
        name = escape(event.entry.name)
        err_console.print(
            f'[red][{event.progress}] Failed to copy file "{name}"![/red]'
        )
        err_console.print(f"Why: {event.error_message}{code}", markup=False)
        err_console.print(f"path1: {event.source_path}", markup=False)
        err_console.print(f"path2: {event.destination_path}", markup=False)


def render_copy_summary(result: CopyResult, console: Optional[Console] = None) -> None:
    """Print the totals of a finished copy batch."""
    console = console or Console()
    console.print("All files have been processed.")
    console.print(
        f"Copied: {result.copied} | Failed: {result.failed} | "
        f"{decimal(result.total_bytes)} in {result.duration:.2f}s"
    )
    if result.failed > 0:
        console.print(f"Failed items: {result.failed}", style="red bold")


def render_free_space(
    free_bytes: int,
    report: SyncReport,
    plan_bytes: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """Show how much room is left on the Target volume before copying.

    When *plan_bytes* is given and exceeds *free_bytes*, a warning follows.
    """
    console = console or Console()
    target = escape(str(report.direction.target_root))
    console.print(f"Free space on [cyan]{target}[/cyan]: {decimal(free_bytes)}")
    if plan_bytes is not None and plan_bytes > free_bytes:
        console.print(
            f"[yellow]Warning: the unsynced files need {decimal(plan_bytes)}, "
            f"more than the free space on {target}.[/yellow]"
        )
