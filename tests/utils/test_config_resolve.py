import importlib
from pathlib import Path

import pytest

from musicsync.utils import config as cfg


@pytest.fixture()
def reload_config(tmp_path, monkeypatch):
    """Reload utils.config after patching HOME/XDG directories.

    Ensures CONFIG_DIR/FILE constants are recalculated for a temporary home dir
    so tests do not interfere with the real user config.
    """
    fake_home = tmp_path / "home"
    fake_home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    importlib.reload(cfg)
    yield fake_home
    monkeypatch.undo()
    importlib.reload(cfg)


def _write_config(text: str) -> None:
    cfg.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    cfg.CONFIG_FILE.write_text(text)


def test_config_dir_follows_home(reload_config):
    assert cfg.CONFIG_FILE == reload_config / ".config" / "musicsync" / "config.toml"


def test_config_dir_respects_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    importlib.reload(cfg)
    try:
        assert cfg.CONFIG_DIR == tmp_path / "xdg" / "musicsync"
    finally:
        monkeypatch.delenv("XDG_CONFIG_HOME")
        importlib.reload(cfg)


def test_resolve_setting_cli_over_env_over_config(monkeypatch):
    monkeypatch.setenv("MUSICSYNC_PATHS_LIBRARY", "/from/env")
    _write_config('[paths]\nlibrary = "/from/config"\n')

    result = cfg.resolve_setting("paths.library", default="", cli_value="/from/cli")
    assert result == "/from/cli"


def test_resolve_setting_env_over_config(monkeypatch):
    monkeypatch.setenv("MUSICSYNC_PATHS_LIBRARY", "/from/env")
    _write_config('[paths]\nlibrary = "/from/config"\n')

    assert cfg.resolve_setting("paths.library", default="") == "/from/env"


def test_resolve_setting_config_when_no_env():
    _write_config('[paths]\nremovable = "/media/usb"\n')
    assert cfg.resolve_setting("paths.removable", default="") == "/media/usb"


def test_resolve_setting_default_when_missing():
    assert cfg.resolve_setting("missing", default="default-value") == "default-value"


def test_resolve_extensions_env_list(monkeypatch):
    monkeypatch.setenv("MUSICSYNC_SCAN_EXTENSIONS", ".mp3, .ogg")
    result = cfg.resolve_setting("scan.extensions", default=[".flac"])
    assert result == [".mp3", ".ogg"]


def test_resolve_extensions_config_list():
    _write_config('[scan]\nextensions = [".m4a", ".mp3"]\n')
    result = cfg.resolve_setting("scan.extensions", default=[".flac"])
    assert result == [".m4a", ".mp3"]


def test_resolve_bool_env_and_config(monkeypatch):
    _write_config("[scan]\ninclude_hidden = false\n")
    assert cfg.resolve_setting("scan.include_hidden", default=True) is False
    monkeypatch.setenv("MUSICSYNC_SCAN_INCLUDE_HIDDEN", "yes")
    assert cfg.resolve_setting("scan.include_hidden", default=False) is True


def test_resolve_invalid_int_env_falls_back(monkeypatch):
    monkeypatch.setenv("MUSICSYNC_SCAN_DEPTH", "notanint")
    assert cfg.resolve_setting("scan.depth", default=30) == 30


def test_save_setting_round_trip():
    cfg.save_setting("paths.library", "/music")
    cfg.save_setting("paths.removable", "/usb")
    cfg.save_setting("scan.extensions", [".mp3"])

    assert cfg.resolve_setting("paths.library", default="") == "/music"
    assert cfg.resolve_setting("paths.removable", default="") == "/usb"
    assert "[paths]" in cfg.CONFIG_FILE.read_text()


def test_load_sync_config_from_file(tmp_path):
    _write_config(
        f'[paths]\nlibrary = "{(tmp_path / "lib").as_posix()}"\n'
        f'removable = "{(tmp_path / "usb").as_posix()}"\n'
        '[scan]\nextensions = ["MP3", "ogg"]\n'
    )

    config = cfg.load_sync_config()

    assert config.library_root == tmp_path / "lib"
    assert config.removable_root == tmp_path / "usb"
    assert config.extensions == (".mp3", ".ogg")
    assert config.include_hidden is True


def test_load_sync_config_cli_wins(tmp_path):
    _write_config('[paths]\nlibrary = "/elsewhere"\nremovable = "/usb"\n')

    config = cfg.load_sync_config(library=tmp_path, extensions=[".wav"])

    assert config.library_root == tmp_path
    assert config.removable_root == Path("/usb")
    assert config.extensions == (".wav",)


def test_load_sync_config_requires_roots():
    with pytest.raises(ValueError, match="No music library configured"):
        cfg.load_sync_config()
    with pytest.raises(ValueError, match="No removable directory configured"):
        cfg.load_sync_config(library=Path("/music"))
