"""Utility modules for musicsync."""

from musicsync.utils.config import load_sync_config, resolve_setting, save_setting
from musicsync.utils.debug import setup_logger

__all__ = [
    "load_sync_config",
    "resolve_setting",
    "save_setting",
    "setup_logger",
]
