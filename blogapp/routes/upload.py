# blogapp/routes/upload.py

"""
Upload Routes.

Image upload for blog posts. The returned URL goes into a blog's `img`.

Summary
-------
Endpoints include:
  - Upload image

Dependencies
------------
  - `UserDBDep`: Authenticated caller.
  - `MediaServiceDep`: Image validation and Cloudinary storage.

Rate Limiting
-------------
Uploads are limited to 10 requests per minute per IP.
"""

from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from blogapp.dependencies import MediaServiceDep, UserDBDep
from blogapp.managers import limiter
from blogapp.managers.rate_limiter import UPLOAD_LIMIT
from blogapp.monitoring import get_logger
from blogapp.schemas import UploadResponse

router = APIRouter(prefix="/api/upload", tags=["🖼️ Upload"])

logger = get_logger(__name__)


@router.post(
    "/image",
    response_class=ORJSONResponse,
    response_model=UploadResponse,
    summary="Upload a blog image",
    description=(
        "Multipart upload in the `image` field. Images only, at most 5MB; "
        "stored resized to fit 1200x800."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Image uploaded successfully",
                        "imageUrl": "https://res.cloudinary.com/demo/image/upload/blog-images/blog_1718000000000_3fa2c1.jpg",
                        "publicId": "blog-images/blog_1718000000000_3fa2c1",
                    },
                },
            },
        },
        400: {
            "description": "Missing, oversized or non-image file",
            "content": {
                "application/json": {"example": {"detail": "Only image files are allowed!"}},
            },
        },
        401: {
            "description": "Missing, invalid or expired token",
            "content": {"application/json": {"example": {"detail": "Invalid token."}}},
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
        },
        500: {
            "description": "Image host failure",
            "content": {"application/json": {"example": {"detail": "Failed to upload image"}}},
        },
    },
    operation_id="upload_image",
)
@limiter.limit(UPLOAD_LIMIT)
async def upload_image(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    media: MediaServiceDep,
    image: Annotated[UploadFile | None, File(description="Image file")] = None,
) -> UploadResponse:
    """
    Upload an image and return its hosted URL.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    current_user : UserDB
        Authenticated caller.
    media : MediaService
        Media service dependency.
    image : UploadFile | None
        Uploaded file from the ``image`` field.

    Returns
    -------
    UploadResponse
        Hosted URL and public ID.
    """
    image_url, public_id = await media.upload_blog_image(image)
    logger.info("Image uploaded", user_id=str(current_user.id), public_id=public_id)
    return UploadResponse(image_url=image_url, public_id=public_id)
