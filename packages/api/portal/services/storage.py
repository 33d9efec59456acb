# This project was developed with assistance from AI tools.
"""S3-compatible object storage for uploaded application documents.

The boto3 client is synchronous, so every call is pushed onto the default
thread-pool executor. A module-level singleton is created once from the app
lifespan via ``init_storage_service()``.
"""

import asyncio
import logging
import os
from functools import partial

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from ..core.config import Settings

logger = logging.getLogger(__name__)


class StorageService:
    """Document bucket accessor."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str = "us-east-1",
    ):
        self._bucket = bucket
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
        )
        self._ensure_bucket()

    def _ensure_bucket(self) -> None:
        """Create the bucket on first start (MinIO in dev starts empty)."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError:
            logger.info("Creating S3 bucket: %s", self._bucket)
            self._client.create_bucket(Bucket=self._bucket)

    async def _run(self, func, /, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, **kwargs))

    async def upload_file(self, file_data: bytes, object_key: str, content_type: str) -> str:
        """Store bytes under ``object_key`` and return the key."""
        await self._run(
            self._client.put_object,
            Bucket=self._bucket,
            Key=object_key,
            Body=file_data,
            ContentType=content_type,
        )
        return object_key

    async def delete_file(self, object_key: str) -> None:
        """Remove a superseded object after a re-upload."""
        await self._run(self._client.delete_object, Bucket=self._bucket, Key=object_key)

    @staticmethod
    def build_object_key(application_id: int, document_id: int, filename: str) -> str:
        """Build the object key ``{application_id}/{document_id}/{filename}``.

        Directory components in the client-supplied name are discarded.
        """
        safe_name = os.path.basename(filename.replace("\\", "/")) or f"doc-{document_id}"
        return f"{application_id}/{document_id}/{safe_name}"


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: StorageService | None = None


def init_storage_service(cfg: Settings) -> StorageService:
    """Initialise the singleton (called once from app lifespan)."""
    global _service  # noqa: PLW0603
    _service = StorageService(
        endpoint=cfg.S3_ENDPOINT,
        access_key=cfg.S3_ACCESS_KEY,
        secret_key=cfg.S3_SECRET_KEY,
        bucket=cfg.S3_BUCKET,
        region=cfg.S3_REGION,
    )
    logger.info("StorageService initialised (bucket=%s)", cfg.S3_BUCKET)
    return _service


def get_storage_service() -> StorageService:
    """Return the initialised StorageService singleton."""
    if _service is None:
        raise RuntimeError("StorageService not initialised -- call init_storage_service() first")
    return _service
