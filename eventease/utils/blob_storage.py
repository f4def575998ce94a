import logging
import os
import uuid
from functools import lru_cache
from typing import BinaryIO, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from eventease.core.config import settings
from eventease.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


class BlobStorage:
    """
    Stores uploaded images in an S3 bucket and hands back their public URL.
    No retries: a failed call surfaces as StorageError.
    """
    
    def __init__(self, client, bucket: str, public_base_url: Optional[str] = None):
        self.client = client
        self.bucket = bucket
        self.public_base_url = (
            public_base_url or f"https://{bucket}.s3.amazonaws.com"
        ).rstrip("/")
    
    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"
    
    def key_for(self, url: str) -> Optional[str]:
        """Return the object key for a URL this storage produced, else None."""
        if not url or not url.startswith(self.public_base_url + "/"):
            return None
        key = url[len(self.public_base_url) + 1:]
        return key or None
    
    def upload(
        self,
        fileobj: BinaryIO,
        filename: str,
        content_type: str,
        prefix: str
    ) -> str:
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise ValidationError([
                f"Invalid image type '{content_type}'. Allowed: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}"
            ])
        
        extension = os.path.splitext(filename or "")[1].lower()
        key = f"{prefix}/{uuid.uuid4()}{extension}"
        
        try:
            self.client.upload_fileobj(
                fileobj,
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type}
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {filename} to bucket {self.bucket}: {str(e)}")
            raise StorageError("Could not store the uploaded image")
        
        logger.info(f"Uploaded image {key} to bucket {self.bucket}")
        return self.url_for(key)
    
    def delete(self, url: str) -> bool:
        key = self.key_for(url)
        if key is None:
            return False
        
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete {key} from bucket {self.bucket}: {str(e)}")
            raise StorageError("Could not delete the stored image")
        
        logger.info(f"Deleted image {key} from bucket {self.bucket}")
        return True


def get_s3_client():
    """
    Build an S3 client from settings. AWS_S3_ENDPOINT_URL points it at an
    S3-compatible server (MinIO) for local development.
    """
    client_kwargs = {
        "aws_access_key_id": settings.AWS_ACCESS_KEY_ID,
        "aws_secret_access_key": settings.AWS_SECRET_ACCESS_KEY,
        "region_name": settings.AWS_S3_REGION,
    }
    if settings.AWS_S3_ENDPOINT_URL:
        client_kwargs["endpoint_url"] = settings.AWS_S3_ENDPOINT_URL
    return boto3.client("s3", **client_kwargs)


@lru_cache
def get_blob_storage() -> BlobStorage:
    public_url = settings.AWS_S3_PUBLIC_URL
    if not public_url and settings.AWS_S3_ENDPOINT_URL:
        public_url = f"{settings.AWS_S3_ENDPOINT_URL.rstrip('/')}/{settings.AWS_S3_BUCKET_NAME}"
    return BlobStorage(
        client=get_s3_client(),
        bucket=settings.AWS_S3_BUCKET_NAME,
        public_base_url=public_url
    )


def discard_image(storage: Optional[BlobStorage], url: Optional[str]) -> bool:
    """Delete a stored image without failing the caller; returns True if removed."""
    if storage is None or not url:
        return False
    try:
        return storage.delete(url)
    except StorageError as e:
        logger.warning(f"Leaving orphaned image {url}: {e.message}")
        return False
