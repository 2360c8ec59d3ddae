"""
Storage services package.

Cloudinary is the only image host; the protocol keeps the media service
independent of it so tests can pass a fake backend.
"""

from blogapp.services.storage.base import StorageService
from blogapp.services.storage.cloudinary_storage import CloudinaryStorage


def get_storage_service() -> StorageService:
    """
    Get the configured storage service.

    Returns:
        StorageService: Cloudinary storage instance
    """
    return CloudinaryStorage()


__all__ = [
    "CloudinaryStorage",
    "StorageService",
    "get_storage_service",
]
