# tests/services/test_cloudinary_storage.py
"""Tests for the Cloudinary storage backend."""

import cloudinary.exceptions
import pytest

from blogapp.errors import StorageError
from blogapp.services.storage import CloudinaryStorage
from blogapp.services.storage.cloudinary_storage import BLOG_IMAGE_TRANSFORMATION

UPLOAD = "blogapp.services.storage.cloudinary_storage.cloudinary.uploader.upload"


class TestCloudinaryStorage:
    @pytest.mark.asyncio
    async def test_upload_image(self, mocker) -> None:
        upload = mocker.patch(
            UPLOAD,
            return_value={
                "secure_url": "https://res.cloudinary.com/demo/image/upload/blog-images/blog_1.jpg",
                "public_id": "blog-images/blog_1",
            },
        )

        url, public_id = await CloudinaryStorage().upload_image(b"bytes", "blog_1")

        assert url.startswith("https://")
        assert public_id == "blog-images/blog_1"
        args, kwargs = upload.call_args
        assert args == (b"bytes",)
        assert kwargs["folder"] == "blog-images"
        assert kwargs["public_id"] == "blog_1"
        assert kwargs["resource_type"] == "image"
        assert kwargs["transformation"] == BLOG_IMAGE_TRANSFORMATION

    @pytest.mark.asyncio
    async def test_upload_failure(self, mocker) -> None:
        mocker.patch(UPLOAD, side_effect=cloudinary.exceptions.Error("Invalid image file"))

        with pytest.raises(StorageError) as exc_info:
            await CloudinaryStorage().upload_image(b"bytes", "blog_1")

        assert exc_info.value.status_code == 500
