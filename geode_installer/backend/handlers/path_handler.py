#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Path Handler Module
Handles Steam root detection and Steam library enumeration
"""

import logging
from pathlib import Path
from typing import Optional, List

from .vdf_handler import parse_vdf_file

# Initialize logger
logger = logging.getLogger(__name__)

STEAMAPPS_DIR = "steamapps"
LIBRARY_FOLDERS_VDF = "libraryfolders.vdf"
FLATPAK_STEAM_ID = "com.valvesoftware.Steam"
SYSTEM_STEAM_PATH = Path("/usr/share/steam")


class PathHandler:
    """
    Locates the Steam installation and every Steam library folder it knows about
    """

    @staticmethod
    def get_steam_root_candidates(home: Optional[Path] = None) -> List[Path]:
        """Known Steam install locations, in probing order."""
        home = Path(home) if home is not None else Path.home()
        return [
            home / ".steam" / "steam",
            home / ".steam" / "root",
            home / ".local" / "share" / "Steam",
            home / ".var" / "app" / FLATPAK_STEAM_ID,
            home / ".var" / "app" / FLATPAK_STEAM_ID / "data" / "Steam",
            SYSTEM_STEAM_PATH,
        ]

    @staticmethod
    def find_steam_root(home: Optional[Path] = None) -> Optional[Path]:
        """
        Find the Steam root directory.

        A candidate only counts if it contains a steamapps directory; the first
        one that does wins.

        Returns:
            Optional[Path]: The Steam root, or None if Steam is not installed here
        """
        logger.debug("Searching for Steam root...")
        for candidate in PathHandler.get_steam_root_candidates(home):
            if candidate.exists() and (candidate / STEAMAPPS_DIR).exists():
                logger.info(f"Found Steam root at: {candidate}")
                return candidate
            logger.debug(f"Not a Steam root: {candidate}")

        logger.warning("Can't find Steam root in any known location")
        return None

    @staticmethod
    def get_library_folders(steam_root: Optional[Path]) -> List[Path]:
        """
        List every steamapps directory for the given Steam root.

        The root's own steamapps comes first, followed by the libraries listed in
        libraryfolders.vdf in file order. Libraries that don't exist on disk are
        dropped, and duplicates are removed keeping the first occurrence.
        """
        if steam_root is None:
            return []

        primary = Path(steam_root) / STEAMAPPS_DIR
        folders = [primary]

        library_file = primary / LIBRARY_FOLDERS_VDF
        if library_file.exists():
            data = parse_vdf_file(library_file)
            for key, value in data.items():
                if ".path" not in key:
                    continue
                library_path = Path(value) / STEAMAPPS_DIR
                if library_path.exists():
                    folders.append(library_path)
                else:
                    logger.debug(f"Skipping missing Steam library from {LIBRARY_FOLDERS_VDF}: {library_path}")
        else:
            logger.debug(f"No {LIBRARY_FOLDERS_VDF} in {primary}")

        seen = set()
        unique_folders = []
        for folder in folders:
            key = str(folder)
            if key not in seen:
                seen.add(key)
                unique_folders.append(folder)

        logger.info(f"Steam libraries: {[str(f) for f in unique_folders]}")
        return unique_folders
