"""
Ann Investment Portal - Media Upload Service
Uploads identity document images to Cloudinary and returns a durable URL
"""
import asyncio
import io
import logging
import time
from typing import Optional

import cloudinary
import cloudinary.uploader

from core.config import settings
from core.exceptions import UploadFailedError

logger = logging.getLogger(__name__)


def make_logical_name(field_name: str) -> str:
    """e.g. idFront_1718000000000"""
    return f"{field_name}_{int(time.time() * 1000)}"


class MediaStorage:
    """
    Cloudinary-backed image storage.
    Buffer in, secure URL out. No retries: a failed upload surfaces
    immediately as UploadFailedError.
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret or settings.CLOUDINARY_API_SECRET
        self.timeout = timeout or settings.UPLOAD_TIMEOUT_SECONDS
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _ensure_configured(self) -> None:
        if not self.is_configured:
            raise UploadFailedError("Image storage is not configured")
        if not self._configured:
            cloudinary.config(
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                secure=True
            )
            self._configured = True

    def _upload_sync(self, buffer: bytes, logical_name: str, folder: str) -> dict:
        return cloudinary.uploader.upload(
            io.BytesIO(buffer),
            folder=folder,
            public_id=logical_name,
            resource_type="image",
            timeout=self.timeout
        )

    async def upload(self, buffer: bytes, logical_name: str, folder: Optional[str] = None) -> str:
        """
        Upload raw bytes and return the secure URL.

        Raises:
            UploadFailedError: missing credentials, transport or remote
                error, timeout, or a response without secure_url
        """
        self._ensure_configured()
        folder = folder or settings.UPLOAD_FOLDER

        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self._upload_sync, buffer, logical_name, folder),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Upload of {logical_name} timed out after {self.timeout}s")
            raise UploadFailedError("Upload timed out", cause=e)
        except Exception as e:
            logger.error(f"Upload of {logical_name} failed: {e}")
            raise UploadFailedError("Upload failed", cause=e)

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            raise UploadFailedError("Upload returned no URL")

        logger.info(f"Uploaded {logical_name} to {folder} ({len(buffer)} bytes)")
        return secure_url


# Global media storage instance
media_storage = MediaStorage()
