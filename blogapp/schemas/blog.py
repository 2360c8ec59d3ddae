"""
Blog request and response models.

Tags are normalized on the way in: trimmed, blanks dropped, lowercased and
capped at ``MAX_TAGS_COUNT``. JSON keys use camelCase aliases.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blogapp.configs.settings import MAX_TAG_LENGTH, MAX_TAGS_COUNT, MAX_TITLE_LENGTH
from blogapp.models import BlogDB, UserDB
from blogapp.schemas.common import OwnerResponse, Pagination


def split_tags(raw: str) -> list[str]:
    """Split a comma-separated tag string into trimmed, lowercase, non-empty tags."""
    return [tag.strip().lower() for tag in raw.split(",") if tag.strip()]


def normalize_tags(raw: list[Any] | str | None) -> list[str]:
    """
    Normalize user supplied tags.

    Args:
        raw: A list of tags or a comma-separated string

    Returns:
        list[str]: At most ``MAX_TAGS_COUNT`` trimmed lowercase tags

    Raises:
        ValueError: If ``raw`` is neither a list nor a string, or a tag is
            longer than ``MAX_TAG_LENGTH``
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        tags = split_tags(raw)
    elif not isinstance(raw, list):
        mssg = "Tags must be a list or a comma-separated string"
        raise ValueError(mssg)
    else:
        tags = [str(tag).strip().lower() for tag in raw if tag is not None and str(tag).strip()]

    tags = tags[:MAX_TAGS_COUNT]
    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            mssg = f"Tag cannot exceed {MAX_TAG_LENGTH} characters"
            raise ValueError(mssg)
    return tags


def _required_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        mssg = f"{label} is required"
        raise ValueError(mssg)
    return value.strip()


def _check_title(value: str | None) -> str:
    title = _required_text(value, "Title")
    if len(title) > MAX_TITLE_LENGTH:
        mssg = f"Title cannot exceed {MAX_TITLE_LENGTH} characters"
        raise ValueError(mssg)
    return title


class BlogCreate(BaseModel):
    """Blog creation payload."""

    title: str | None = Field(
        default=None,
        validate_default=True,
        description="Blog title",
        examples=["Getting Started with React"],
    )
    content: str | None = Field(
        default=None,
        validate_default=True,
        description="Blog content",
        examples=["React is a powerful JavaScript library for building user interfaces."],
    )
    img: str | None = Field(default=None, description="Hosted image URL from the upload endpoint")
    tags: list[str] = Field(
        default_factory=list,
        description="Tags, trimmed and lowercased; only the first 10 are kept",
        examples=[["react", "javascript"]],
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return _check_title(v)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str | None) -> str:
        return _required_text(v, "Content")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> list[str]:
        return normalize_tags(v)


class BlogUpdate(BaseModel):
    """
    Blog update payload.

    Title and content are always required. ``tags`` and ``img`` are only
    replaced when present in the request body; an explicit ``null`` image
    clears it.
    """

    title: str | None = Field(default=None, validate_default=True)
    content: str | None = Field(default=None, validate_default=True)
    img: str | None = None
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        return _check_title(v)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str | None) -> str:
        return _required_text(v, "Content")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> list[str] | None:
        if v is None:
            return None
        return normalize_tags(v)

    def changes(self) -> dict[str, Any]:
        """Return the column values this update writes."""
        data: dict[str, Any] = {"title": self.title, "content": self.content}
        if self.tags is not None:
            data["tags"] = self.tags
        if "img" in self.model_fields_set:
            data["img"] = self.img
        return data


class BlogResponse(BaseModel):
    """Blog with its owner embedded."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    content: str
    img: str | None = None
    tags: list[str] = Field(default_factory=list)
    user: OwnerResponse | None = None
    view_count: int = Field(default=0, alias="viewCount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


def blog_to_response(blog: BlogDB, owner: UserDB | None = None) -> BlogResponse:
    """
    Convert a ``BlogDB`` row and its owner into a ``BlogResponse``.

    Args:
        blog: Database blog entity
        owner: Owning user, when it was loaded alongside the blog

    Returns:
        BlogResponse: Validated response model
    """
    return BlogResponse(
        id=blog.id,
        title=blog.title,
        content=blog.content,
        img=blog.img,
        tags=list(blog.tags or []),
        user=OwnerResponse.model_validate(owner) if owner else None,
        view_count=blog.view_count,
        created_at=blog.created_at,
        updated_at=blog.updated_at,
    )


class BlogEnvelope(BaseModel):
    blog: BlogResponse


class BlogPagination(Pagination):
    total_blogs: int = Field(alias="totalBlogs")


class BlogListResponse(BaseModel):
    blogs: list[BlogResponse]
    pagination: BlogPagination


class TagCount(BaseModel):
    tag: str
    count: int


class TagsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tags: list[str]
    tag_counts: list[TagCount] = Field(alias="tagCounts")


class BlogStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_blogs: int = Field(alias="totalBlogs")
    total_views: int = Field(alias="totalViews")
    top_blogs: list[BlogResponse] = Field(alias="topBlogs")
    recent_blogs: list[BlogResponse] = Field(alias="recentBlogs")
