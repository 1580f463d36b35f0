"""
CLI Menu Components for the Geode Installer Frontend
"""

from .main_menu import MainMenuHandler

__all__ = [
    'MainMenuHandler',
]
