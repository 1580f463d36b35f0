"""
Error types raised by the Geode installer backend.

Discovery never raises for "not found"; these are reserved for failures the
caller has to act on.
"""

from pathlib import Path
from typing import Optional, Union


class GeodeInstallerError(Exception):
    """Base class for all installer errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InstallationError(GeodeInstallerError):
    """The installation could not proceed (missing Steam, game, prefix, API error)."""
    pass


class ValidationError(GeodeInstallerError):
    """A path that must exist does not."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class RegistryFileNotFoundError(GeodeInstallerError, FileNotFoundError):
    """The prefix has no user.reg to patch."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        GeodeInstallerError.__init__(self, f"Wine registry file not found: {self.path}")


class RegistryIOError(GeodeInstallerError, OSError):
    """Reading or writing user.reg failed."""

    def __init__(self, path: Union[str, Path], operation: str, cause: Exception):
        self.path = Path(path)
        self.operation = operation
        self.cause = cause
        GeodeInstallerError.__init__(self, f"Failed to {operation} {self.path}: {cause}")


class DownloadError(GeodeInstallerError):
    """An HTTP request or download failed."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Download failed for {url}: {cause}")


class ExtractionError(GeodeInstallerError):
    """An archive could not be extracted."""

    def __init__(self, archive: Union[str, Path], cause: Exception):
        self.archive = Path(archive)
        self.cause = cause
        super().__init__(f"Zip error for {self.archive}: {cause}")


class InvalidChoiceError(GeodeInstallerError):
    """Menu input was not a number or not one of the offered options."""
    pass
