#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Geode Installer CLI Frontend - Main Entry Point

Command-line interface for the Geode installer that uses the backend services.
Without a subcommand it runs the interactive menu.
"""

import sys
import argparse
import logging
from typing import Callable, List, Optional

from geode_installer import __version__
from geode_installer.backend.errors import GeodeInstallerError, ValidationError
from geode_installer.backend.handlers.config_handler import ConfigHandler
from geode_installer.backend.handlers.logging_handler import LoggingHandler
from geode_installer.backend.services.geode_install_service import GeodeInstallService, GD_APP_ID
from geode_installer.backend.services.steam_game_finder import SteamGameFinder
from geode_installer.shared.colors import COLOR_INFO, COLOR_STEAM, COLOR_WINE, COLOR_HEADER, COLOR_RESET

from .menus.main_menu import (
    MainMenuHandler, CHOICE_STEAM, CHOICE_WINE, CHOICE_QUIT, format_error
)

logger = logging.getLogger(__name__)

PROGRESS_BAR_WIDTH = 40


def print_download_progress(downloaded: int, total: int) -> None:
    """Render a single-line download progress bar"""
    if total > 0:
        filled = int(PROGRESS_BAR_WIDTH * downloaded / total)
        bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
        line = f"[{bar}] {downloaded}/{total} bytes"
    else:
        line = f"{downloaded} bytes"
    end = "\n" if total > 0 and downloaded >= total else ""
    print(f"\r{COLOR_INFO}{line}{COLOR_RESET}", end=end, flush=True)


class GeodeInstallerCLI:
    """Main application class for the Geode installer CLI frontend"""

    def __init__(self, config_handler: Optional[ConfigHandler] = None,
                 service_factory: Optional[Callable[[ConfigHandler], GeodeInstallService]] = None,
                 menu: Optional[MainMenuHandler] = None):
        self.config_handler = config_handler or ConfigHandler()
        self._service_factory = service_factory or self._default_service
        self._service: Optional[GeodeInstallService] = None
        self.menu = menu or MainMenuHandler()
        self.parser = self._build_parser()
        self.args = None

    @staticmethod
    def _default_service(config_handler: ConfigHandler) -> GeodeInstallService:
        return GeodeInstallService(config_handler=config_handler, progress_callback=print_download_progress)

    @property
    def service(self) -> GeodeInstallService:
        if self._service is None:
            self._service = self._service_factory(self.config_handler)
        return self._service

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="geode-installer",
            description="Install the Geode mod loader for Geometry Dash on Linux",
        )
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
        parser.add_argument("--debug", action="store_true", help="Enable debug logging on the console")
        parser.add_argument("--verbose", "-v", action="store_true", help="Enable informational logging on the console")

        subparsers = parser.add_subparsers(dest="command")
        subparsers.add_parser("steam", help="Install to Steam's Geometry Dash")

        wine_parser = subparsers.add_parser("wine", help="Install to a custom Wine prefix")
        wine_parser.add_argument("--game-path", required=True, help="Geometry Dash directory")
        wine_parser.add_argument("--prefix", required=True, help="Wine prefix directory")

        find_parser = subparsers.add_parser("find", help="Show where Steam keeps a game")
        find_parser.add_argument("--app-id", default=GD_APP_ID, help=f"Steam AppID (default: {GD_APP_ID})")
        return parser

    def _configure_logging(self):
        """Configure file and console logging based on parsed arguments"""
        logging_handler = LoggingHandler()
        logging_handler.rotate_log_for_logger()
        app_logger = logging_handler.setup_logger('geode_installer')

        if self.args.debug or self.config_handler.get("debug_mode"):
            logging_handler.set_console_level(app_logger, logging.DEBUG)
        elif self.args.verbose:
            logging_handler.set_console_level(app_logger, logging.INFO)

    def handle_steam_installation(self):
        print(f"{COLOR_STEAM}🎮 Installing to Steam...{COLOR_RESET}")
        self.service.install_to_steam()

    def handle_wine_installation(self, game_path: Optional[str] = None, wine_prefix: Optional[str] = None):
        print(f"{COLOR_WINE}🍷 Wine Installation{COLOR_RESET}")
        last_game_path, last_wine_prefix = self.config_handler.get_last_wine_paths()
        if game_path is None:
            game_path = self._prompt_path("Enter your Geometry Dash path", "Geometry Dash path", last_game_path)
        if wine_prefix is None:
            wine_prefix = self._prompt_path("Enter your Wine prefix path", "Wine prefix path", last_wine_prefix)

        self.service.install_to_wine(wine_prefix, game_path)
        self.config_handler.set_last_wine_paths(game_path, wine_prefix)
        self.config_handler.save_config()

    def _prompt_path(self, prompt: str, label: str, default: Optional[str]) -> str:
        suffix = f" [{default}]" if default else ""
        value = self.menu.read_input(f"{prompt}{suffix}: ") or default
        if not value:
            raise ValidationError(f"{label} is required")
        return value

    def handle_find(self, app_id: str):
        finder = SteamGameFinder()
        info = finder.get_game_info(app_id)
        print(f"{COLOR_HEADER}Steam root:{COLOR_RESET}    {finder.get_steam_root() or 'not found'}")
        print(f"{COLOR_HEADER}AppID:{COLOR_RESET}         {info.app_id}")
        print(f"{COLOR_HEADER}Found:{COLOR_RESET}         {'yes' if info.found else 'no'}")
        print(f"{COLOR_HEADER}Game path:{COLOR_RESET}     {info.game_path or '-'}")
        print(f"{COLOR_HEADER}Library:{COLOR_RESET}       {info.library_path or '-'}")
        print(f"{COLOR_HEADER}Proton prefix:{COLOR_RESET} {info.proton_prefix or '-'}")
        return info

    def run_interactive_loop(self):
        while True:
            try:
                choice = self.menu.show_main_menu()
                if choice == CHOICE_QUIT:
                    print(f"{COLOR_HEADER}👋 Exiting...{COLOR_RESET}")
                    break
                if choice == CHOICE_STEAM:
                    self.handle_steam_installation()
                elif choice == CHOICE_WINE:
                    self.handle_wine_installation()
                self.menu.print_success()
            except GeodeInstallerError as e:
                logger.info(f"Operation failed: {e.message}")
                self.menu.print_error(e)

    def run(self, argv: Optional[List[str]] = None) -> int:
        self.args = self.parser.parse_args(argv)
        self._configure_logging()

        try:
            if self.args.command == "steam":
                self.handle_steam_installation()
                self.menu.print_success()
            elif self.args.command == "wine":
                self.handle_wine_installation(self.args.game_path, self.args.prefix)
                self.menu.print_success()
            elif self.args.command == "find":
                info = self.handle_find(self.args.app_id)
                return 0 if info.found else 1
            else:
                self.run_interactive_loop()
        except GeodeInstallerError as e:
            logger.info(f"Operation failed: {e.message}")
            print(format_error(e), file=sys.stderr)
            return 1
        except (KeyboardInterrupt, EOFError):
            print()
            return 130
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    return GeodeInstallerCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
