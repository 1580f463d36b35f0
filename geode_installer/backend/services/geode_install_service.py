"""
Geode install service.

Drives an installation end to end: locate Geometry Dash under Steam (or take
user-supplied paths), download and unpack Geode into the game directory, then
patch the prefix's registry so Wine loads Geode's xinput1_4.dll.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from geode_installer.backend.errors import InstallationError
from geode_installer.backend.handlers.config_handler import ConfigHandler
from geode_installer.backend.handlers.filesystem_handler import FileSystemHandler, ProgressCallback
from geode_installer.backend.handlers.registry_handler import RegistryHandler
from geode_installer.backend.handlers.validation_handler import ValidationHandler
from geode_installer.backend.models.game_info import InstallationPaths
from geode_installer.backend.services.geode_release_service import GeodeReleaseService
from geode_installer.backend.services.steam_game_finder import SteamGameFinder

logger = logging.getLogger(__name__)

GD_APP_ID = "322170"


class GeodeInstallService:
    """Installs Geode into a Steam or Wine copy of Geometry Dash."""

    def __init__(self, config_handler: Optional[ConfigHandler] = None,
                 finder: Optional[SteamGameFinder] = None,
                 release_service: Optional[GeodeReleaseService] = None,
                 filesystem_handler: Optional[FileSystemHandler] = None,
                 registry_handler: Optional[RegistryHandler] = None,
                 validation_handler: Optional[ValidationHandler] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        self.config_handler = config_handler or ConfigHandler()
        self._finder = finder
        self.release_service = release_service or GeodeReleaseService(
            api_url=self.config_handler.get("geode_api_url"),
            release_url=self.config_handler.get("geode_release_url"),
        )
        self.filesystem_handler = filesystem_handler or FileSystemHandler(
            timeout=self.config_handler.get("download_timeout", 300)
        )
        self.registry_handler = registry_handler or RegistryHandler()
        self.validation_handler = validation_handler or ValidationHandler()
        self.progress_callback = progress_callback

    @property
    def finder(self) -> SteamGameFinder:
        # Steam is only probed once something actually needs it
        if self._finder is None:
            self._finder = SteamGameFinder()
        return self._finder

    def install_to_steam(self) -> InstallationPaths:
        """Install Geode to Steam's Geometry Dash installation."""
        steam_root = self.finder.get_steam_root()
        if steam_root is None:
            raise InstallationError("Can't find Steam installation")
        logger.info(f"Steam root found at: {steam_root}")

        paths = self.locate_geometry_dash()
        logger.info(f"Geometry Dash found at: {paths.game_path}")
        logger.info(f"Proton prefix found at: {paths.proton_prefix}")

        self.install_to_wine(paths.proton_prefix, paths.game_path)
        return paths

    def locate_geometry_dash(self) -> InstallationPaths:
        game_info = self.finder.get_game_info(GD_APP_ID)
        if not game_info.found:
            raise InstallationError("Can't find Geometry Dash installation")
        if game_info.proton_prefix is None:
            raise InstallationError("Can't find Proton prefix for Geometry Dash")
        return InstallationPaths(game_path=game_info.game_path, proton_prefix=game_info.proton_prefix)

    def install_to_wine(self, prefix: Union[str, Path], game_dir: Union[str, Path]) -> None:
        """Install Geode to a custom Wine prefix and game directory."""
        prefix, game_dir = self.validation_handler.validate_install_paths(prefix, game_dir)

        logger.info(f"Installing Geode to: {game_dir}")
        download_url = self.release_service.get_download_url()
        self.filesystem_handler.download_and_extract(download_url, game_dir, self.progress_callback)

        logger.info("Patching Wine registry...")
        self.registry_handler.patch_wine_registry(prefix)

        logger.info("Geode installation completed!")
