"""Sync session: one process run of scan, diff, copy and optional rescan.

The session is an explicit state machine::

    IDLE -> SCANNING -> DIFFING -> SYNCED -> DONE
                                -> AWAITING_COPY_DECISION -> DONE
                                                          -> COPYING -> SCANNING
                                                                     -> DONE
    IDLE -> FATAL  (a configured root is missing)

All user interaction is injected as callables so the CLI can prompt and tests
can answer programmatically.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from musicsync.core.copier import EventCallback, copy_unsynced, plan_from_report
from musicsync.core.differ import compare_inventories
from musicsync.core.exceptions import PathNotFoundError
from musicsync.core.scanner import scan_inventory
from musicsync.fs.operations import path_exists
from musicsync.models.config import SyncConfig
from musicsync.models.core import Inventory, SyncState
from musicsync.models.report import CopyResult, SyncReport

logger = logging.getLogger(__name__)

Confirm = Callable[[SyncReport], bool]


def _no(_: SyncReport) -> bool:
    return False


@dataclass
class SessionHooks:
    """Callbacks wiring a session to its user interface."""

    confirm_show: Confirm = _no
    """Asked whether to show the unsynced list; the list is then published
    through ``on_show``."""

    confirm_copy: Confirm = _no
    """Asked whether to copy the unsynced files."""

    confirm_rescan: Confirm = _no
    """Asked after a copy batch whether to scan and compare again."""

    on_scan: Optional[Callable[[str, Inventory], None]] = None
    on_report: Optional[Callable[[SyncReport], None]] = None
    on_show: Optional[Callable[[SyncReport], None]] = None
    on_event: Optional[EventCallback] = None
    on_copy_done: Optional[Callable[[CopyResult], None]] = None
    on_fatal: Optional[Callable[[PathNotFoundError], None]] = None


@dataclass
class SyncSession:
    """Drive sync cycles until the trees are synced or the user stops."""

    config: SyncConfig
    hooks: SessionHooks = field(default_factory=SessionHooks)
    state: SyncState = SyncState.IDLE
    history: List[SyncState] = field(default_factory=list)
    cycles: int = 0
    last_report: Optional[SyncReport] = None
    copy_results: List[CopyResult] = field(default_factory=list)

    def _enter(self, state: SyncState) -> None:
        logger.debug(f"Session state {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def check_roots(self) -> None:
        """Raise PathNotFoundError if a configured root is missing."""
        if not path_exists(self.config.library_root):
            raise PathNotFoundError(self.config.library_root, "Music library")
        if not path_exists(self.config.removable_root):
            raise PathNotFoundError(self.config.removable_root, "Removable directory")

    def scan(self) -> SyncReport:
        """Run one SCANNING + DIFFING step and return the report.

        Raises:
            PathNotFoundError: If a root is missing, including one that
                disappeared since the previous cycle (an unplugged disk).
        """
        self.check_roots()
        self._enter(SyncState.SCANNING)
        inventories = []
        for label, root in (
            ("library", self.config.library_root),
            ("removable", self.config.removable_root),
        ):
            inventory = scan_inventory(
                root,
                self.config.extensions,
                include_hidden=self.config.include_hidden,
            )
            if self.hooks.on_scan:
                self.hooks.on_scan(label, inventory)
            inventories.append(inventory)

        self._enter(SyncState.DIFFING)
        report = compare_inventories(*inventories)
        self.last_report = report
        if self.hooks.on_report:
            self.hooks.on_report(report)
        return report

    def run(self) -> int:
        """Run the session loop and return the process exit code.

        Returns:
            0 on normal completion, 1 if a configured root does not exist
            or disappears between cycles.
        """
        try:
            self._loop()
        except PathNotFoundError as e:
            self._enter(SyncState.FATAL)
            logger.error(str(e))
            if self.hooks.on_fatal:
                self.hooks.on_fatal(e)
            return 1

        self._enter(SyncState.DONE)
        return 0

    def _loop(self) -> None:
        while True:
            self.cycles += 1
            report = self.scan()

            if report.synced:
                self._enter(SyncState.SYNCED)
                break

            self._enter(SyncState.AWAITING_COPY_DECISION)
            if self.hooks.confirm_show(report) and self.hooks.on_show:
                self.hooks.on_show(report)
            if not self.hooks.confirm_copy(report):
                break

            self._enter(SyncState.COPYING)
            result = copy_unsynced(
                plan_from_report(report), on_event=self.hooks.on_event
            )
            self.copy_results.append(result)
            if self.hooks.on_copy_done:
                self.hooks.on_copy_done(result)
            if not self.hooks.confirm_rescan(report):
                break
