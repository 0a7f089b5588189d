"""Configure pytest and shared fixtures for building music trees."""

import sys
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

# Add src directory to Python path
src_path = str(Path(__file__).parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

TreeSpec = Dict[str, Union[bytes, str]]


def write_tree(root: Path, files: TreeSpec) -> Path:
    """Create *files* (relative path -> content) under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        path.write_bytes(content)
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, TreeSpec], Path]:
    """Return a factory creating a directory tree under ``tmp_path``."""

    def _make(name: str, files: TreeSpec) -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file at a temp dir and clear MUSICSYNC_* variables."""
    import os

    from musicsync.utils import config as cfg

    for name in list(os.environ):
        if name.startswith("MUSICSYNC_"):
            monkeypatch.delenv(name)
    config_dir = tmp_path / "config" / "musicsync"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    return config_dir


@pytest.fixture(autouse=True)
def reset_logger() -> None:
    """Rebind the musicsync log handler to this test's stderr at ERROR level."""
    from musicsync.utils.debug import setup_logger

    setup_logger()
