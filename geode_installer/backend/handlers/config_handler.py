#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration Handler Module
Handles application settings and configuration
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Any, Dict, Union

from geode_installer.shared.paths import get_config_dir

# Initialize logger
logger = logging.getLogger(__name__)

CONFIG_VERSION = "0.1.0"
GEODE_API_URL = "https://api.geode-sdk.org/v1/loader/versions/latest"
GEODE_RELEASE_URL = "https://github.com/geode-sdk/geode/releases/download"


class ConfigHandler:
    """
    Handles application configuration and settings
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration handler with default settings"""
        self.config_dir = Path(config_dir) if config_dir else get_config_dir()
        self.config_file = self.config_dir / "config.json"
        self.settings: Dict[str, Any] = {
            "version": CONFIG_VERSION,
            "geode_api_url": GEODE_API_URL,
            "geode_release_url": GEODE_RELEASE_URL,
            "download_timeout": 300,  # seconds
            "last_game_path": None,  # Last game directory used for a Wine install
            "last_wine_prefix": None,  # Last Wine prefix used for a Wine install
            "debug_mode": False,
        }

        # Load configuration if exists
        self._load_config()

    def _load_config(self):
        """Load configuration from file, keeping defaults for missing keys."""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r') as f:
                    saved_config = json.load(f)
                if isinstance(saved_config, dict):
                    self.settings.update(saved_config)
                    logger.debug("Loaded configuration from file")
                else:
                    logger.warning(f"Ignoring malformed configuration file: {self.config_file}")
            else:
                logger.debug("No configuration file found, using defaults")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration: {e}")

    def _create_config_dir(self):
        """Create configuration directory if it doesn't exist"""
        os.makedirs(self.config_dir, exist_ok=True)

    def save_config(self) -> bool:
        """Save current configuration to file"""
        try:
            self._create_config_dir()
            with open(self.config_file, 'w') as f:
                json.dump(self.settings, f, indent=2)
            logger.debug("Saved configuration to file")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self.settings.get(key, default)

    def set_last_wine_paths(self, game_path: Union[str, Path], wine_prefix: Union[str, Path]) -> bool:
        """Remember the paths used for the last Wine install"""
        self.settings["last_game_path"] = str(game_path)
        self.settings["last_wine_prefix"] = str(wine_prefix)
        logger.debug(f"Set last Wine paths to: {game_path}, {wine_prefix}")
        return True

    def get_last_wine_paths(self):
        """Get the (game_path, wine_prefix) used for the last Wine install"""
        return self.settings.get("last_game_path"), self.settings.get("last_wine_prefix")
