"""Data models shared between the backend and the frontends."""

from .game_info import GameInfo, InstallationPaths

__all__ = ['GameInfo', 'InstallationPaths']
