"""
Storage service for item photos on S3
Reference: https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3.html
"""
import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from fnmatch import fnmatch
from functools import lru_cache
from typing import Iterable, Optional
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from closet_worthy.core.config import settings

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "heic": "image/heic",
}


def is_allowed_image_url(url: str, patterns: Optional[Iterable[str]] = None) -> bool:
    """
    Check a photo URL against the image host allow-list.

    Only https URLs whose hostname matches one of the glob patterns
    (e.g. "*.amazonaws.com") are accepted.
    """
    if patterns is None:
        patterns = settings.image_remote_host_patterns_list
    parsed = urlparse(url)
    if parsed.scheme != "https" or not parsed.hostname:
        return False
    host = parsed.hostname.lower()
    return any(fnmatch(host, pattern.lower()) for pattern in patterns)


@lru_cache()
def get_storage_service() -> "StorageService":
    """
    Get a singleton StorageService instance.

    Reusing one instance avoids repeated boto3 client initialization.
    Reference: https://docs.python.org/3/library/functools.html#functools.lru_cache
    """
    return StorageService()


class StorageService:
    """Service for storing item photos in AWS S3"""

    def __init__(self):
        """Initialize S3 client with credentials from settings"""
        # Reference: https://boto3.amazonaws.com/v1/documentation/api/latest/guide/configuration.html
        config = Config(
            max_pool_connections=10,
            retries={
                'max_attempts': 3,
                'mode': 'standard'
            },
            connect_timeout=5,
            read_timeout=30
        )

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_REGION,
            config=config
        )

        self.bucket_name = settings.AWS_S3_BUCKET_NAME
        self.base_url = (settings.AWS_S3_BASE_URL or self._generate_base_url()).rstrip("/")

    def _generate_base_url(self) -> str:
        """Generate S3 base URL from bucket name and region"""
        # Standard S3 URL format: https://bucket-name.s3.region.amazonaws.com
        return f"https://{self.bucket_name}.s3.{settings.AWS_REGION}.amazonaws.com"

    @staticmethod
    def generate_key(folder: str, file_extension: str) -> str:
        """Object key: {folder}/{YYYYMMDD}_{uuid8}.{ext}"""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        unique_id = uuid.uuid4().hex[:8]
        return f"{folder}/{timestamp}_{unique_id}.{file_extension}"

    async def upload_photo(
        self,
        file_content: bytes,
        file_extension: str = "jpg",
        folder: Optional[str] = None,
    ) -> str:
        """
        Upload one photo to S3 and return its public URL.

        Args:
            file_content: Raw image bytes
            file_extension: Extension without the dot (jpg, png, ...)
            folder: Key prefix, defaults to PHOTO_FOLDER

        Returns:
            Public URL of the uploaded file

        Raises:
            ValueError: If the file is empty or the extension is not an image type
            ClientError: If the S3 upload fails
        """
        if not file_content:
            raise ValueError("File is empty")

        file_extension = file_extension.lower().lstrip(".")
        content_type = CONTENT_TYPES.get(file_extension)
        if content_type is None:
            raise ValueError(f"Unsupported image type: .{file_extension}")

        s3_key = self.generate_key(folder or settings.PHOTO_FOLDER, file_extension)

        try:
            s3_start = time.time()
            # boto3 is synchronous, so run it in a worker thread
            await asyncio.to_thread(
                self.s3_client.put_object,
                Bucket=self.bucket_name,
                Key=s3_key,
                Body=file_content,
                ContentType=content_type,
            )
            s3_duration = (time.time() - s3_start) * 1000
            logger.info(
                "Put object '%s' to bucket '%s' (%d bytes) in %.2fms.",
                s3_key,
                self.bucket_name,
                len(file_content),
                s3_duration
            )
            return f"{self.base_url}/{s3_key}"

        except ClientError:
            # Don't convert ClientError to ValueError: S3 failures are server
            # errors (HTTP 500), not client errors (HTTP 400)
            logger.exception(
                "Couldn't put object '%s' to bucket '%s'.",
                s3_key,
                self.bucket_name
            )
            raise

    async def delete_photo(self, url: str) -> bool:
        """
        Delete a photo from S3 by its public URL.

        Returns:
            True if deleted, False if the URL is not in this bucket or S3 refused
        """
        if not url.startswith(f"{self.base_url}/"):
            logger.warning(f"URL does not match base URL: {url}")
            return False

        s3_key = url[len(self.base_url) + 1:]
        try:
            await asyncio.to_thread(
                self.s3_client.delete_object,
                Bucket=self.bucket_name,
                Key=s3_key
            )
            logger.info(f"Deleted photo from S3: {s3_key}")
            return True
        except ClientError as e:
            logger.error(f"Failed to delete photo from S3: {e}", exc_info=True)
            return False
