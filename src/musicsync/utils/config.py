"""Config utility for persistent musicsync settings (roots, extensions).

Settings live in ~/.config/musicsync/config.toml (respecting XDG_CONFIG_HOME)
and can be overridden by MUSICSYNC_* environment variables or CLI options.
Uses tomli/tomli-w for TOML parsing and writing.

Example config.toml::

    [paths]
    library = "/home/me/Music"
    removable = "/media/usb/Music"

    [scan]
    extensions = [".mp3", ".wav", ".flac"]
    include_hidden = true
"""

from pathlib import Path
from typing import Any, Optional, Sequence, TypeVar, cast
import contextlib
import os

import tomli
import tomli_w

from musicsync.models.config import DEFAULT_EXTENSIONS, SyncConfig

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/musicsync or $XDG_CONFIG_HOME/musicsync
CONFIG_DIR = _xdg_config_home / "musicsync"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "MUSICSYNC_"

T = TypeVar("T")

_TRUTHY = {"1", "true", "yes", "on"}


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="paths.library" will attempt
    ``data["paths"]["library"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "scan.extensions" -> "MUSICSYNC_SCAN_EXTENSIONS".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Best-effort conversion of an env/config value to the type of *default*."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, (list, tuple)):
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return cast(T, type(default)(str(v) for v in value))
        return default
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"paths.library"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def save_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"paths.removable"``.
        value: A TOML-serialisable value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    node = data
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def load_sync_config(
    library: Optional[Path] = None,
    removable: Optional[Path] = None,
    extensions: Optional[Sequence[str]] = None,
    include_hidden: Optional[bool] = None,
) -> SyncConfig:
    """Build the immutable SyncConfig for this run.

    CLI values passed here take precedence over environment variables, which
    take precedence over config.toml.

    Raises:
        ValueError: If a root is not configured anywhere or the extension
            list is empty.
    """
    library_value = resolve_setting(
        "paths.library", default="", cli_value=str(library) if library else None
    )
    removable_value = resolve_setting(
        "paths.removable", default="", cli_value=str(removable) if removable else None
    )
    if not library_value:
        raise ValueError(
            "No music library configured. Pass --library or set paths.library."
        )
    if not removable_value:
        raise ValueError(
            "No removable directory configured. Pass --removable or set "
            "paths.removable."
        )
    ext_value = resolve_setting(
        "scan.extensions",
        default=list(DEFAULT_EXTENSIONS),
        cli_value=list(extensions) if extensions else None,
    )
    hidden_value = resolve_setting(
        "scan.include_hidden", default=True, cli_value=include_hidden
    )
    return SyncConfig(
        library_root=Path(library_value).expanduser(),
        removable_root=Path(removable_value).expanduser(),
        extensions=ext_value,
        include_hidden=hidden_value,
    )
