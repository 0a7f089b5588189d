"""Tests for the set differencer.

Covers the count-only synced check, path-based unsynced detection, the
size-driven direction and the documented equal-count boundary.
"""

from pathlib import Path
from typing import List

from musicsync.core.differ import (
    choose_direction,
    compare_inventories,
    get_unsynced,
    is_synced,
)
from musicsync.models.core import FileEntry, Inventory


def _entries(*paths: str) -> List[FileEntry]:
    return [FileEntry(relative_path=p) for p in paths]


def _inventory(root: str, *paths: str) -> Inventory:
    return Inventory(root=Path(root).absolute(), entries=_entries(*paths))


class TestIsSynced:
    def test_equal_counts_are_synced(self) -> None:
        assert is_synced(_entries("a.mp3", "b.mp3"), _entries("c.mp3", "d.mp3"))

    def test_different_counts_are_not_synced(self) -> None:
        assert not is_synced(_entries("a.mp3"), _entries("a.mp3", "b.mp3"))

    def test_empty_inventories_are_synced(self) -> None:
        assert is_synced(_inventory("/lib"), _inventory("/usb"))


class TestGetUnsynced:
    def test_missing_paths_in_source_order(self) -> None:
        source = _entries("a.mp3", "b.flac", "c.mp3")
        target = _entries("a.mp3")
        assert get_unsynced(source, target) == _entries("b.flac", "c.mp3")

    def test_empty_source(self) -> None:
        assert get_unsynced([], _entries("a.mp3")) == []

    def test_subset_has_nothing_unsynced(self) -> None:
        assert get_unsynced(_entries("a.mp3"), _entries("b.mp3", "a.mp3")) == []

    def test_match_is_exact(self) -> None:
        """Paths that differ only in case or directory are different files."""
        source = _entries("A.mp3", "x/a.mp3")
        target = _entries("a.mp3")
        assert get_unsynced(source, target) == _entries("A.mp3", "x/a.mp3")

    def test_accepts_inventories(self) -> None:
        source = _inventory("/lib", "a.mp3", "b.mp3")
        target = _inventory("/usb", "b.mp3")
        assert get_unsynced(source, target) == _entries("a.mp3")


def test_larger_inventory_is_source() -> None:
    library = _inventory("/lib", "a.mp3")
    removable = _inventory("/usb", "a.mp3", "b.mp3")

    direction = choose_direction(library, removable)

    assert direction.source_root == removable.root
    assert direction.target_root == library.root


def test_tie_keeps_first_as_source() -> None:
    library = _inventory("/lib", "a.mp3")
    removable = _inventory("/usb", "b.mp3")
    assert choose_direction(library, removable).source_root == library.root


def test_compare_scenario_library_larger() -> None:
    """{a, b, c} vs {a}: not synced, b and c go from library to removable."""
    library = _inventory("/lib", "a.mp3", "b.flac", "c.mp3")
    removable = _inventory("/usb", "a.mp3")

    report = compare_inventories(library, removable)

    assert report.synced is False
    assert report.direction.source_root == library.root
    assert report.direction.target_root == removable.root
    assert {e.relative_path for e in report.unsynced} == {"b.flac", "c.mp3"}
    assert (report.source_count, report.target_count) == (3, 1)


def test_compare_reverse_direction() -> None:
    """When the removable disk holds more files, it becomes the Source."""
    library = _inventory("/lib", "a.mp3")
    removable = _inventory("/usb", "a.mp3", "new.mp3")

    report = compare_inventories(library, removable)

    assert report.direction.source_root == removable.root
    assert report.unsynced == _entries("new.mp3")


def test_equal_counts_with_different_content_report_synced() -> None:
    """Count-only semantics: disjoint trees of equal size are 'synced'."""
    library = _inventory("/lib", "a.mp3", "b.mp3")
    removable = _inventory("/usb", "x.mp3", "y.mp3")

    report = compare_inventories(library, removable)

    assert report.synced is True
    assert report.unsynced == []


def test_unsynced_may_be_empty_when_not_synced() -> None:
    """Different counts but every Source path present in Target (duplicates)."""
    library = _inventory("/lib", "a.mp3", "a.mp3")
    removable = _inventory("/usb", "a.mp3")

    report = compare_inventories(library, removable)

    assert report.synced is False
    assert report.unsynced == []
