"""
Game Discovery Data Models

Results of looking up a Steam application on disk.
"""

from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass(frozen=True)
class GameInfo:
    """Where a Steam application lives: install dir, owning library and Proton prefix."""
    app_id: str
    game_path: Optional[Path] = None
    proton_prefix: Optional[Path] = None
    library_path: Optional[Path] = None
    found: bool = False

    @classmethod
    def not_found(cls, app_id: str) -> 'GameInfo':
        return cls(app_id=app_id)

    @classmethod
    def from_lookup(cls, app_id: str, game_path: Path, library_path: Path,
                    proton_prefix: Optional[Path] = None) -> 'GameInfo':
        """Build a found result; ``found`` always mirrors ``game_path``."""
        return cls(
            app_id=app_id,
            game_path=game_path,
            proton_prefix=proton_prefix,
            library_path=library_path,
            found=game_path is not None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'app_id': self.app_id,
            'game_path': str(self.game_path) if self.game_path else None,
            'proton_prefix': str(self.proton_prefix) if self.proton_prefix else None,
            'library_path': str(self.library_path) if self.library_path else None,
            'found': self.found,
        }


@dataclass(frozen=True)
class InstallationPaths:
    """Game directory and Wine prefix an installation targets."""
    game_path: Path
    proton_prefix: Path

    def __post_init__(self):
        """Convert string paths to Path objects."""
        if isinstance(self.game_path, str):
            object.__setattr__(self, 'game_path', Path(self.game_path))
        if isinstance(self.proton_prefix, str):
            object.__setattr__(self, 'proton_prefix', Path(self.proton_prefix))
