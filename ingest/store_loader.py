"""Build a record store from the configured manifest source."""
import logging
from datetime import date, tzinfo
from typing import Optional

from ingest.manifest_processor import ManifestProcessor
from ingest.remote_manifest import RemoteManifestFetcher
from records.catalog import build_default_store
from records.models import RecordStore
from storage.s3_manifest import S3ManifestSource

logger = logging.getLogger(__name__)

SOURCE_BUILTIN = 'builtin'
SOURCE_URL = 'url'
SOURCE_S3 = 's3'


class ConfigurationError(ValueError):
    """Raised when the manifest source settings are incomplete."""


def load_record_store(
    source: str,
    tz: tzinfo,
    today: date,
    url: Optional[str] = None,
    bucket: Optional[str] = None,
    key: Optional[str] = None,
    timeout: int = 30
) -> RecordStore:
    """
    Load events and photos from the selected source.

    Args:
        source: 'builtin', 'url' or 's3'
        tz: Club timezone, used for naive manifest timestamps
        today: Day the built-in schedule is built around
        url: Manifest URL for the 'url' source
        bucket: Bucket for the 's3' source
        key: Object key for the 's3' source
        timeout: HTTP timeout in seconds

    Returns:
        RecordStore of validated records

    Raises:
        ConfigurationError: If the source is unknown or missing settings
    """
    source = source.lower()

    if source == SOURCE_BUILTIN:
        store = build_default_store(today, tz)
    elif source == SOURCE_URL:
        if not url:
            raise ConfigurationError("MANIFEST_URL is required for the url source")
        manifest = RemoteManifestFetcher(url, timeout=timeout).fetch_manifest()
        store = ManifestProcessor(tz).process_manifest(manifest)
    elif source == SOURCE_S3:
        if not bucket or not key:
            raise ConfigurationError(
                "MANIFEST_BUCKET and MANIFEST_KEY are required for the s3 source"
            )
        manifest = S3ManifestSource(bucket, key).fetch_manifest()
        store = ManifestProcessor(tz).process_manifest(manifest)
    else:
        raise ConfigurationError(f"Unknown manifest source: {source!r}")

    logger.info(
        f"Loaded {len(store.events)} events and {len(store.photos)} photos "
        f"from {source} source"
    )
    return store
