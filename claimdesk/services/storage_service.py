import logging
import time

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError

from claimdesk.core.config import Settings
from claimdesk.core.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


def object_key(filename: str) -> str:
    return f"{int(time.time() * 1000)}-{filename}"


class StorageService:
    """
    Uploads go straight to the bucket through presigned PUT URLs.
    No retries: any failure surfaces as StorageError.
    """

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.settings.STORAGE_REGION)
        return self._client

    def public_url(self, key: str) -> str:
        base = self.settings.STORAGE_PUBLIC_BASE_URL or (
            f"https://{self.settings.STORAGE_BUCKET}.s3.{self.settings.STORAGE_REGION}.amazonaws.com"
        )
        return f"{base.rstrip('/')}/{key}"

    def create_upload(self, key: str, content_type: str) -> dict:
        if not key or not content_type:
            raise ValidationError("Key and content type are required")
        try:
            upload_url = self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.settings.STORAGE_BUCKET, "Key": key, "ContentType": content_type},
                ExpiresIn=self.settings.STORAGE_URL_EXPIRES,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Could not presign upload for {key}: {e}")
            raise StorageError("Could not create upload URL")
        return {"upload_url": upload_url, "public_url": self.public_url(key)}

    def upload_bytes(self, data: bytes, filename: str, content_type: str) -> dict:
        if not filename:
            raise ValidationError("No file provided")
        key = object_key(filename)
        target = self.create_upload(key, content_type)
        try:
            response = requests.put(
                target["upload_url"], data=data, headers={"Content-Type": content_type}, timeout=30
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Upload of {key} failed: {e}")
            raise StorageError(f"Failed to upload file: {e}")

        logger.info(f"Uploaded {key} ({len(data)} bytes)")
        return {"url": target["public_url"], "name": filename, "key": key}
