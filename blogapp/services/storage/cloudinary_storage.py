"""
Cloudinary storage implementation.

Blog images are resized to fit 1200x800 and delivered in an automatic
format and quality through Cloudinary's CDN.
"""

import asyncio
from functools import partial
from typing import Any

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from blogapp.configs.settings import settings
from blogapp.errors.upload import StorageError
from blogapp.monitoring import get_logger

logger = get_logger(__name__)

BLOG_IMAGE_TRANSFORMATION: list[dict[str, Any]] = [
    {"width": 1200, "height": 800, "crop": "limit"},
    {"quality": "auto:good", "fetch_format": "auto"},
]


class CloudinaryStorage:
    """Cloudinary storage for blog images."""

    def __init__(self) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            secure=True,
        )
        self.folder = settings.UPLOAD_FOLDER
        self.allowed_formats = settings.UPLOAD_ALLOWED_FORMATS

    async def upload_image(self, file_data: bytes, public_id: str) -> tuple[str, str]:
        """
        Upload a blog image to Cloudinary.

        Args:
            file_data: Raw image bytes
            public_id: Public ID inside the upload folder

        Returns:
            tuple[str, str]: Secure URL and the full Cloudinary public ID

        Raises:
            StorageError: If Cloudinary rejects the upload or is unreachable
        """
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(
                None,
                partial(
                    cloudinary.uploader.upload,
                    file_data,
                    folder=self.folder,
                    public_id=public_id,
                    resource_type="image",
                    allowed_formats=self.allowed_formats,
                    transformation=BLOG_IMAGE_TRANSFORMATION,
                ),
            )
        except (cloudinary.exceptions.Error, OSError) as e:
            logger.exception("Cloudinary upload failed", public_id=public_id)
            raise StorageError from e

        logger.info("Image uploaded", public_id=result["public_id"])
        return result["secure_url"], result["public_id"]
