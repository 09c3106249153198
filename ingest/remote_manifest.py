"""HTTP source for JSON record manifests, e.g. a CMS export endpoint."""
import logging
import time
from typing import Any

import requests

from ingest.manifest_processor import ManifestError

logger = logging.getLogger(__name__)


class RemoteManifestFetcher:
    """Fetches a JSON manifest over HTTP with retries."""

    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, url: str, timeout: int = 30):
        """
        Initialize the fetcher.

        Args:
            url: Manifest URL
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.url = url
        self.timeout = timeout

    def fetch_manifest(self) -> Any:
        """
        Fetch and decode the manifest.

        Returns:
            Decoded JSON document

        Raises:
            requests.RequestException: If all retry attempts fail
            ManifestError: If the body is not valid JSON
        """
        response = self._get_with_retries()
        try:
            manifest = response.json()
        except ValueError as e:
            raise ManifestError(f"Manifest at {self.url} is not valid JSON: {e}")
        logger.info(f"Fetched manifest from {self.url}")
        return manifest

    def _get_with_retries(self) -> requests.Response:
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(
                    f"Fetching manifest (attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = requests.get(
                    self.url,
                    headers={'Accept': 'application/json'},
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): "
                        f"{e}. Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. "
                        f"Last error: {e}"
                    )
                    raise
