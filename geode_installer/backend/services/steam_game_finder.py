#!/usr/bin/env python3
"""
Steam Game Finder Service

Resolves a Steam application's install directory and Proton prefix across all
Steam libraries.
"""

import logging
from pathlib import Path
from typing import Optional, List, Tuple

from geode_installer.backend.handlers.path_handler import PathHandler
from geode_installer.backend.handlers.vdf_handler import parse_vdf_file
from geode_installer.backend.models.game_info import GameInfo

logger = logging.getLogger(__name__)

INSTALL_DIR_KEY = "AppState.installdir"


def appmanifest_name(app_id: str) -> str:
    return f"appmanifest_{app_id}.acf"


def compat_prefix_path(library_path: Path, app_id: str) -> Path:
    return Path(library_path) / "compatdata" / str(app_id) / "pfx"


class SteamGameFinder:
    """
    Finds Steam games by AppID.

    Library order matters: lookups return the first match, so the Steam root's
    own library always wins over additional libraries.
    """

    def __init__(self, steam_root: Optional[Path] = None, library_folders: Optional[List[Path]] = None,
                 home: Optional[Path] = None):
        """
        Args:
            steam_root: Use this Steam root instead of probing the known locations
            library_folders: Use these steamapps directories instead of reading libraryfolders.vdf
            home: Home directory to probe from (defaults to the current user's)
        """
        if steam_root is None and library_folders is None:
            steam_root = PathHandler.find_steam_root(home)
        self.steam_root = Path(steam_root) if steam_root is not None else None

        if library_folders is None:
            library_folders = PathHandler.get_library_folders(self.steam_root)
        self.library_folders = [Path(p) for p in library_folders]

    def get_steam_root(self) -> Optional[Path]:
        return self.steam_root

    def get_library_folders(self) -> List[Path]:
        return list(self.library_folders)

    def find_game_by_appid(self, app_id: str) -> Optional[Tuple[Path, Path]]:
        """
        Find the install directory of a game.

        Returns:
            Optional[Tuple[Path, Path]]: (game_path, library_path) or None
        """
        for library_path in self.library_folders:
            acf_file = library_path / appmanifest_name(app_id)
            if not acf_file.exists():
                continue

            install_dir = parse_vdf_file(acf_file).get(INSTALL_DIR_KEY)
            if not install_dir:
                logger.debug(f"{acf_file} has no {INSTALL_DIR_KEY}")
                continue

            game_path = library_path / "common" / install_dir
            if game_path.exists():
                logger.info(f"Found AppID {app_id} at: {game_path}")
                return game_path, library_path
            logger.debug(f"Manifest {acf_file} points to missing directory {game_path}")

        logger.info(f"AppID {app_id} is not installed in any Steam library")
        return None

    def find_proton_prefix(self, app_id: str, library_path: Optional[Path] = None) -> Optional[Path]:
        """
        Find the Proton prefix (compatdata/<appid>/pfx) of a game.

        The library that owns the game is checked first so a stale prefix in
        another library cannot shadow the real one.
        """
        if library_path is not None:
            preferred = compat_prefix_path(library_path, app_id)
            if preferred.exists():
                logger.info(f"Found Proton prefix: {preferred}")
                return preferred

        for lib_path in self.library_folders:
            candidate = compat_prefix_path(lib_path, app_id)
            if candidate.exists():
                logger.info(f"Found Proton prefix: {candidate}")
                return candidate

        logger.warning(f"No Proton prefix found for AppID {app_id}")
        return None

    def get_game_info(self, app_id: str) -> GameInfo:
        """Resolve the install directory and, if installed, the Proton prefix."""
        app_id = str(app_id)
        found = self.find_game_by_appid(app_id)
        if found is None:
            return GameInfo.not_found(app_id)

        game_path, library_path = found
        proton_prefix = self.find_proton_prefix(app_id, library_path)
        return GameInfo.from_lookup(app_id, game_path, library_path, proton_prefix)
