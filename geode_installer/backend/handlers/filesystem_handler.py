"""
FileSystemHandler module for download and archive operations.
This module handles streaming downloads and zip extraction.
"""

import os
import stat
import shutil
import logging
import zipfile
from pathlib import Path
from typing import Optional, Callable

import requests

from geode_installer.backend.errors import DownloadError, ExtractionError

# Initialize logger for the module
logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
TEMP_ARCHIVE_NAME = "geode_temp.zip"

ProgressCallback = Callable[[int, int], None]


class FileSystemHandler:
    def __init__(self, timeout: int = 300):
        self.logger = logging.getLogger(__name__)
        self.timeout = timeout

    def download_file(self, url: str, destination_path: Path,
                      progress_callback: Optional[ProgressCallback] = None) -> Path:
        """
        Download a file from a URL to a destination path.

        Args:
            url: URL to fetch
            destination_path: File to write
            progress_callback: Called with (bytes_downloaded, total_bytes); total is 0 if unknown

        Raises:
            DownloadError: The request failed or returned an error status
        """
        destination_path = Path(destination_path)
        self.logger.info(f"Downloading {url} to {destination_path}...")

        try:
            destination_path.parent.mkdir(parents=True, exist_ok=True)
            with requests.get(url, stream=True, timeout=self.timeout) as r:
                r.raise_for_status()
                total_size = self._content_length(r.headers)
                downloaded_size = 0
                with open(destination_path, 'wb') as f:
                    for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        f.write(chunk)
                        downloaded_size += len(chunk)
                        if progress_callback:
                            progress_callback(downloaded_size, total_size)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Download failed: {e}")
            self._remove_file(destination_path)
            raise DownloadError(url, e) from e
        except OSError as e:
            self.logger.error(f"Error writing download to {destination_path}: {e}")
            self._remove_file(destination_path)
            raise DownloadError(url, e) from e

        self.logger.info("Download complete.")
        return destination_path

    def _content_length(self, headers) -> int:
        """Total size announced by the server, or 0 when missing or malformed."""
        raw = headers.get('content-length')
        if not raw:
            return 0
        try:
            return max(int(raw), 0)
        except (TypeError, ValueError):
            self.logger.debug(f"Ignoring malformed Content-Length header: {raw!r}")
            return 0

    def _remove_file(self, path: Path) -> None:
        if path.exists():
            try:
                path.unlink()
            except OSError as e:
                self.logger.warning(f"Could not remove {path}: {e}")

    def extract_zip(self, zip_path: Path, destination: Path) -> int:
        """
        Extract a zip archive into destination.

        Entries that would land outside destination are skipped. Unix permission
        bits stored in the archive are restored; entries without them keep the
        platform default.

        Returns:
            int: Number of entries extracted

        Raises:
            ExtractionError: The archive is corrupt or an entry could not be written
        """
        destination = Path(destination)
        extracted = 0

        try:
            destination.mkdir(parents=True, exist_ok=True)
            root = destination.resolve()
            with zipfile.ZipFile(zip_path, 'r') as archive:
                for info in archive.infolist():
                    out_path = self._safe_target(root, info.filename)
                    if out_path is None:
                        self.logger.warning(f"Skipping unsafe archive entry: {info.filename}")
                        continue

                    if info.is_dir():
                        out_path.mkdir(parents=True, exist_ok=True)
                    else:
                        out_path.parent.mkdir(parents=True, exist_ok=True)
                        with archive.open(info) as src, open(out_path, 'wb') as dst:
                            shutil.copyfileobj(src, dst)

                    self._apply_unix_mode(info, out_path)
                    extracted += 1
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ExtractionError(zip_path, e) from e
        except OSError as e:
            self.logger.error(f"Error extracting {zip_path} to {destination}: {e}")
            raise ExtractionError(zip_path, e) from e

        self.logger.info(f"Extracted {extracted} entries from {zip_path} to {destination}")
        return extracted

    @staticmethod
    def _safe_target(root: Path, name: str) -> Optional[Path]:
        """Resolve an archive member name under root, or None if it escapes it."""
        name = name.replace('\\', '/')
        if not name or name.startswith('/') or (len(name) > 1 and name[1] == ':'):
            return None
        target = (root / name).resolve()
        if target != root and root not in target.parents:
            return None
        return target

    def _apply_unix_mode(self, info: zipfile.ZipInfo, out_path: Path) -> None:
        mode = (info.external_attr >> 16) & 0o7777
        if not mode:
            return
        # Owner always keeps read/write access
        mode |= stat.S_IRUSR | stat.S_IWUSR
        if info.is_dir():
            mode |= stat.S_IXUSR
        try:
            os.chmod(out_path, mode)
        except OSError as e:
            self.logger.warning(f"Failed to set permissions on {out_path}: {e}")

    def download_and_extract(self, url: str, destination: Path,
                             progress_callback: Optional[ProgressCallback] = None) -> None:
        """Download a zip into destination, extract it there and remove the archive."""
        zip_path = Path(destination) / TEMP_ARCHIVE_NAME

        self.download_file(url, zip_path, progress_callback)
        try:
            self.extract_zip(zip_path, destination)
        finally:
            self._remove_file(zip_path)
