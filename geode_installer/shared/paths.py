"""
Shared filesystem locations for Geode Installer data, logs and configuration.
"""

import os
from pathlib import Path

APP_DIR_NAME = "geode-installer"


def get_data_dir() -> Path:
    """Data directory (~/.local/share/geode-installer, or $GEODE_INSTALLER_DATA_DIR)."""
    override = os.environ.get("GEODE_INSTALLER_DATA_DIR")
    if override:
        return Path(override).expanduser()
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def get_logs_dir() -> Path:
    return get_data_dir() / "logs"


def get_config_dir() -> Path:
    """Config directory (~/.config/geode-installer, or $GEODE_INSTALLER_CONFIG_DIR)."""
    override = os.environ.get("GEODE_INSTALLER_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / APP_DIR_NAME
