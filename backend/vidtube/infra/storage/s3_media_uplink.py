"""S3-compatible media host adapter."""

from __future__ import annotations

import logging
import mimetypes
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import quote
from uuid import uuid4

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from vidtube.services._shared.ports import MediaUploadResult

logger = logging.getLogger(__name__)


class S3MediaUplink:
    """Push temp files to an S3-compatible bucket and return their public URL.

    :param bucket: Target bucket.
    :param client: boto3 S3 client (injected in tests).
    :param public_base_url: Base URL objects are served from. Falls back to
        ``<endpoint>/<bucket>`` when unset.
    :param key_prefix: Prefix prepended to generated object keys.
    """

    def __init__(
        self,
        *,
        bucket: str,
        client: Any,
        public_base_url: str | None = None,
        endpoint_url: str | None = None,
        key_prefix: str = "media/",
    ) -> None:
        if not bucket:
            raise ValueError("bucket cannot be empty")
        self.bucket = bucket
        self.client = client
        self.key_prefix = key_prefix
        base = public_base_url or (f"{endpoint_url.rstrip('/')}/{bucket}" if endpoint_url else "")
        self.public_base_url = base.rstrip("/")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> S3MediaUplink:
        """Build the uplink from ``MEDIA_*`` application settings."""
        client = boto3.client(
            "s3",
            endpoint_url=config.get("MEDIA_ENDPOINT_URL"),
            region_name=config.get("MEDIA_REGION"),
            aws_access_key_id=config.get("MEDIA_ACCESS_KEY_ID"),
            aws_secret_access_key=config.get("MEDIA_SECRET_ACCESS_KEY"),
            config=Config(signature_version="s3v4"),
        )
        logger.info("S3MediaUplink initialized for bucket: %s", config["MEDIA_BUCKET"])
        return cls(
            bucket=config["MEDIA_BUCKET"],
            client=client,
            public_base_url=config.get("MEDIA_PUBLIC_BASE_URL"),
            endpoint_url=config.get("MEDIA_ENDPOINT_URL"),
        )

    def _object_key(self, path: Path) -> str:
        return f"{self.key_prefix}{uuid4().hex}{path.suffix.lower()}"

    def _public_url(self, object_key: str) -> str:
        encoded = "/".join(quote(segment, safe="") for segment in object_key.split("/"))
        return f"{self.public_base_url}/{encoded}"

    def upload(self, local_path: str) -> MediaUploadResult | None:
        """Upload ``local_path`` and delete it afterwards, whatever the outcome.

        :param local_path: Temp file written by the HTTP layer.
        :type local_path: str
        :returns: URL and key of the stored object, or ``None`` on failure.
        :rtype: MediaUploadResult | None
        """
        if not local_path:
            return None

        path = Path(local_path)
        try:
            if not path.exists():
                logger.error("Upload source missing: %s", path)
                return None

            object_key = self._object_key(path)
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            self.client.upload_file(
                str(path),
                self.bucket,
                object_key,
                ExtraArgs={"ContentType": content_type},
            )
            logger.info("Uploaded %s to bucket %s as %s", path.name, self.bucket, object_key)
            return MediaUploadResult(url=self._public_url(object_key), key=object_key)
        except (ClientError, BotoCoreError):
            logger.error("Upload of %s to bucket %s failed", path.name, self.bucket, exc_info=True)
            return None
        finally:
            _discard(path)


def _discard(path: Path) -> None:
    """Remove a temp file, logging instead of raising when that fails."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Could not remove temp file %s", path, exc_info=True)
