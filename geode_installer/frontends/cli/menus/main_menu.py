"""
Main Menu Handler for the Geode Installer CLI Frontend
"""

import os
import subprocess
from typing import Callable, Optional

from geode_installer.backend.errors import GeodeInstallerError, InvalidChoiceError
from geode_installer.shared.colors import (
    COLOR_HEADER, COLOR_PROMPT, COLOR_STEAM, COLOR_WINE, COLOR_ERROR, COLOR_SUCCESS, COLOR_RESET
)

CHOICE_STEAM = "steam"
CHOICE_WINE = "wine"
CHOICE_QUIT = "quit"

MENU_CHOICES = {
    1: CHOICE_STEAM,
    2: CHOICE_WINE,
    0: CHOICE_QUIT,
}


def clear_screen():
    """Clear the terminal screen when attached to one"""
    if os.isatty(1):
        subprocess.run(["clear"], check=False)


def format_error(error: GeodeInstallerError) -> str:
    return f"{COLOR_ERROR}❌ {error.message}{COLOR_RESET}"


def parse_menu_choice(raw: str) -> str:
    """
    Map raw menu input to a choice.

    Raises:
        InvalidChoiceError: Input is not a number, or not one of the offered numbers
    """
    try:
        number = int(raw.strip())
    except ValueError:
        raise InvalidChoiceError("Invalid choice. Please try again.") from None
    if number not in MENU_CHOICES:
        raise InvalidChoiceError("Invalid input. Please enter a number.")
    return MENU_CHOICES[number]


class MainMenuHandler:
    """
    Handles the main interactive menu display and user input routing
    """

    def __init__(self, input_func: Callable[[str], str] = input, clear: Optional[Callable[[], None]] = clear_screen):
        self.input_func = input_func
        self.clear = clear

    def read_input(self, prompt: str) -> str:
        return self.input_func(f"{COLOR_PROMPT}{prompt}{COLOR_RESET}").strip()

    def print_header(self):
        print(f"{COLOR_HEADER}======================================{COLOR_RESET}")
        print(f"{COLOR_HEADER}       Geode Installer for Linux      {COLOR_RESET}")
        print(f"{COLOR_HEADER}======================================{COLOR_RESET}")
        print()

    def print_menu(self):
        print(f"{COLOR_PROMPT}Select an action:{COLOR_RESET}")
        print()
        print(f"{COLOR_STEAM}1.{COLOR_RESET} Install to {COLOR_STEAM}Steam{COLOR_RESET}")
        print(f"{COLOR_WINE}2.{COLOR_RESET} Install to {COLOR_WINE}Wine{COLOR_RESET} prefix")
        print(f"{COLOR_ERROR}0.{COLOR_RESET} Quit")
        print()

    def show_main_menu(self) -> str:
        """Show the menu once and return the parsed selection"""
        if self.clear:
            self.clear()
        self.print_header()
        self.print_menu()
        return parse_menu_choice(self.read_input("What do you want to do: "))

    def print_success(self):
        print()
        print(f"{COLOR_SUCCESS}✅ Geode has been successfully installed!{COLOR_RESET}")

    def print_error(self, error: GeodeInstallerError):
        print()
        print(format_error(error))
        print()
        self.read_input("Press Enter to continue...")
