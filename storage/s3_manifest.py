"""S3 source for JSON record manifests."""
import json
import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from ingest.manifest_processor import ManifestError

logger = logging.getLogger(__name__)


class S3ManifestSource:
    """Reads a JSON manifest object from an S3 bucket."""

    def __init__(self, bucket: str, key: str):
        """
        Initialize the S3 client.

        Args:
            bucket: Bucket holding the manifest
            key: Object key of the manifest
        """
        self.bucket = bucket
        self.key = key
        self.s3 = boto3.client('s3')
        logger.info(f"Initialized S3ManifestSource for s3://{bucket}/{key}")

    def fetch_manifest(self) -> Any:
        """
        Download and decode the manifest object.

        Returns:
            Decoded JSON document

        Raises:
            ClientError: If the object cannot be read
            ManifestError: If the object is not valid JSON
        """
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=self.key)
            body = response['Body'].read()
        except ClientError as e:
            logger.error(f"Error reading s3://{self.bucket}/{self.key}: {e}")
            raise

        try:
            manifest = json.loads(body)
        except ValueError as e:
            raise ManifestError(
                f"Manifest s3://{self.bucket}/{self.key} is not valid JSON: {e}"
            )

        logger.info(f"Read {len(body)} bytes from s3://{self.bucket}/{self.key}")
        return manifest
