"""Comment request and response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogapp.configs.settings import MAX_COMMENT_LENGTH
from blogapp.models import CommentDB, UserDB
from blogapp.schemas.common import OwnerResponse, Pagination


class CommentIn(BaseModel):
    """Payload for adding or editing a comment. Content is stored trimmed."""

    content: str | None = Field(
        default=None,
        validate_default=True,
        examples=["Great write-up, thanks for sharing!"],
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str | None) -> str:
        content = (v or "").strip()
        if not content:
            mssg = "Comment content is required"
            raise ValueError(mssg)
        if len(content) > MAX_COMMENT_LENGTH:
            mssg = f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"
            raise ValueError(mssg)
        return content


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    content: str
    author: OwnerResponse | None = None
    blog_post: UUID = Field(alias="blogPost")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


def comment_to_response(comment: CommentDB, author: UserDB | None = None) -> CommentResponse:
    """Convert a ``CommentDB`` row and its author into a ``CommentResponse``."""
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        author=OwnerResponse.model_validate(author) if author else None,
        blog_post=comment.blog_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentPagination(Pagination):
    total_comments: int = Field(alias="totalComments")


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    pagination: CommentPagination


class CommentEnvelope(BaseModel):
    message: str
    comment: CommentResponse


class CommentStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    blog_id: UUID = Field(alias="blogId")
    comment_count: int = Field(alias="commentCount")
