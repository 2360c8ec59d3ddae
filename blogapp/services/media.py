"""
Media upload service.

Validates blog images before handing them to the storage backend.
"""

from io import BytesIO
from secrets import token_hex
from time import time

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from blogapp.configs.settings import settings
from blogapp.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    MissingImageError,
    UnsupportedImageTypeError,
)
from blogapp.monitoring import get_logger
from blogapp.services.storage import StorageService, get_storage_service

logger = get_logger(__name__)


def make_public_id() -> str:
    """Build a unique public ID like ``blog_1718000000000_3fa2c1``."""
    return f"blog_{int(time() * 1000)}_{token_hex(3)}"


class MediaService:
    """Service for validating and storing blog images."""

    def __init__(self, storage: StorageService | None = None) -> None:
        """
        Initialize the media service.

        Args:
            storage: Optional storage backend. Cloudinary is used when omitted.
        """
        self._storage = storage
        self.max_size_bytes = settings.UPLOAD_MAX_SIZE_MB * 1024 * 1024

    @property
    def storage(self) -> StorageService:
        if self._storage is None:
            self._storage = get_storage_service()
        return self._storage

    def _validate_type(self, content_type: str | None) -> None:
        if not content_type or not content_type.startswith("image/"):
            raise UnsupportedImageTypeError(content_type=content_type or "unknown")

    def _validate_size(self, file_data: bytes) -> None:
        actual_size = len(file_data)
        if actual_size > self.max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.UPLOAD_MAX_SIZE_MB,
                actual_size_mb=round(actual_size / (1024 * 1024), 2),
            )

    def _validate_content(self, file_data: bytes) -> None:
        """Check that the bytes decode as an image."""
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise InvalidImageError from e

    async def upload_blog_image(self, file: UploadFile | None) -> tuple[str, str]:
        """
        Validate an uploaded image and store it.

        Args:
            file: Multipart file from the ``image`` field

        Returns:
            tuple[str, str]: Image URL and public ID

        Raises:
            MissingImageError: If no file was sent
            UnsupportedImageTypeError: If the MIME type is not ``image/*``
            ImageTooLargeError: If the file exceeds the size limit
            InvalidImageError: If the content is not a decodable image
            StorageError: If the storage backend fails
        """
        if file is None or not file.filename:
            raise MissingImageError

        self._validate_type(file.content_type)
        file_data = await file.read()
        if not file_data:
            raise MissingImageError
        self._validate_size(file_data)
        self._validate_content(file_data)

        public_id = make_public_id()
        logger.info("Uploading blog image", public_id=public_id, size=len(file_data))
        return await self.storage.upload_image(file_data, public_id)
