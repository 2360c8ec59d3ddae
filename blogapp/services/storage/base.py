"""
Base storage protocol for image hosting.

Backends receive already validated image bytes and return where the image
can be fetched from.
"""

from abc import abstractmethod
from typing import Protocol


class StorageService(Protocol):
    """Protocol every image storage backend implements."""

    @abstractmethod
    async def upload_image(self, file_data: bytes, public_id: str) -> tuple[str, str]:
        """
        Upload an image.

        Args:
            file_data: Raw image bytes
            public_id: Identifier to store the image under

        Returns:
            tuple[str, str]: Public HTTPS URL and the stored public ID
        """
        ...
