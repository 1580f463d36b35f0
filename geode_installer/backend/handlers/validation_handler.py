"""
ValidationHandler module for managing validation operations.
This module handles path validation for user-supplied install targets.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from geode_installer.backend.errors import ValidationError


class ValidationHandler:
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate_path(self, path: Union[str, Path], must_exist: bool = True) -> Tuple[bool, str]:
        """Validate a path."""
        path = Path(path).expanduser()
        if must_exist and not path.exists():
            return False, f"Path does not exist: {path}"
        return True, "Path is valid"

    def require_directory(self, path: Union[str, Path], label: str) -> Path:
        """
        Return path as an expanded Path, raising if it does not exist.

        Raises:
            ValidationError: The path does not exist
        """
        path = Path(path).expanduser()
        is_valid, message = self.validate_path(path)
        if not is_valid:
            self.logger.error(f"{label} validation failed: {message}")
            raise ValidationError(f"{label} doesn't exist: {path}", path)
        return path

    def validate_install_paths(self, prefix: Union[str, Path], game_dir: Union[str, Path]) -> Tuple[Path, Path]:
        """Check a Wine prefix and game directory both exist before installing."""
        prefix = self.require_directory(prefix, "Prefix directory")
        game_dir = self.require_directory(game_dir, "Game directory")
        return prefix, game_dir
