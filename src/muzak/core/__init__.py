"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Output and logging (Loguru)
- Console management (Rich)
"""

from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_playlists_dir,
    get_plugins_dir,
    get_log_file_path,
    create_default_config,
    ensure_directories,
)
from .console import get_console, print_listing
from .output import log, setup_loguru

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_playlists_dir",
    "get_plugins_dir",
    "get_log_file_path",
    "create_default_config",
    "ensure_directories",
    # Console
    "get_console",
    "print_listing",
    # Output
    "log",
    "setup_loguru",
]
