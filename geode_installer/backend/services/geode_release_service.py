"""
Geode release service.

Looks up the latest Geode loader release via the Geode API and builds the
download URL of its Windows build.
"""

import logging
from typing import Optional

import requests

from geode_installer.backend.errors import DownloadError, InstallationError
from geode_installer.backend.handlers.config_handler import GEODE_API_URL, GEODE_RELEASE_URL

logger = logging.getLogger(__name__)


class GeodeReleaseService:
    """Service for resolving the Geode release to install."""

    def __init__(self, api_url: str = GEODE_API_URL, release_url: str = GEODE_RELEASE_URL,
                 timeout: int = 15):
        self.api_url = api_url
        self.release_url = release_url.rstrip('/')
        self.timeout = timeout

    def fetch_latest_tag(self) -> str:
        """
        Get the tag of the latest Geode loader release.

        Raises:
            DownloadError: The API could not be reached
            InstallationError: The API reported an error or returned no tag
        """
        logger.info(f"Fetching latest Geode version from {self.api_url}")
        try:
            response = requests.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(self.api_url, e) from e

        # requests' JSONDecodeError is also a RequestException, so parse separately
        try:
            data = response.json()
        except ValueError as e:
            raise InstallationError(f"Geode API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise InstallationError("Failed to extract version tag from API response")

        error = data.get("error")
        if isinstance(error, str) and error:
            raise InstallationError(f"Geode API error: {error}")

        payload = data.get("payload") or {}
        tag: Optional[str] = payload.get("tag") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag:
            raise InstallationError("Failed to extract version tag from API response")

        logger.info(f"Latest Geode version: {tag}")
        return tag

    def get_download_url(self, tag: Optional[str] = None) -> str:
        tag = tag or self.fetch_latest_tag()
        return f"{self.release_url}/{tag}/geode-{tag}-win.zip"
