"""
Upload-related error classes.

This module defines custom exceptions for the image upload endpoint,
covering request validation and media host failures.
"""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from blogapp.errors.base import BaseAppError, create_exception_handler
from blogapp.monitoring import get_logger

logger = get_logger(__name__)


class UploadError(BaseAppError):
    """Base exception for upload-related errors."""

    def __init__(
        self,
        detail: str = "Failed to upload image",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class MissingImageError(UploadError):
    """Exception raised when the multipart request carries no image field."""

    def __init__(self) -> None:
        super().__init__(detail="No image file provided", status_code=HTTP_400_BAD_REQUEST)


class ImageTooLargeError(UploadError):
    """Exception raised when uploaded image exceeds size limit."""

    def __init__(
        self,
        max_size_mb: int = 5,
        actual_size_mb: float | None = None,
    ) -> None:
        detail = f"File size too large. Maximum size is {max_size_mb}MB."
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.max_size_mb = max_size_mb
        self.actual_size_mb = actual_size_mb


class UnsupportedImageTypeError(UploadError):
    """Exception raised when the upload is not an image."""

    def __init__(self, content_type: str) -> None:
        super().__init__(detail="Only image files are allowed!", status_code=HTTP_400_BAD_REQUEST)
        self.content_type = content_type


class InvalidImageError(UploadError):
    """Exception raised when uploaded file is not a valid image."""

    def __init__(
        self,
        detail: str = "This file doesn't appear to be a valid image. Please try a different file.",
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)


class StorageError(UploadError):
    """Exception raised when the media host rejects or fails an upload."""

    def __init__(self, detail: str = "Failed to upload image") -> None:
        super().__init__(detail=detail, status_code=HTTP_500_INTERNAL_SERVER_ERROR)


upload_exception_handler = create_exception_handler(logger)
