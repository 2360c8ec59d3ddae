from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Result of a successful image upload."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Image uploaded successfully"
    image_url: str = Field(alias="imageUrl")
    public_id: str = Field(alias="publicId")
