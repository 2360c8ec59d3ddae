"""User request and response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from blogapp.models import UserDB
from blogapp.schemas.blog import BlogResponse


class SignupRequest(BaseModel):
    """
    Signup payload.

    Fields are optional here so the auth service can answer incomplete
    input with a single "All fields are required" message.
    """

    name: str | None = Field(default=None, examples=["Jane Smith"])
    email: str | None = Field(default=None, examples=["jane.smith@example.com"])
    password: str | None = Field(default=None, examples=["password123"])


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, examples=["jane.smith@example.com"])
    password: str | None = Field(default=None, examples=["password123"])


class UserResponse(BaseModel):
    """User without password material."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    email: str
    blogs: list[UUID] = Field(default_factory=list, description="Owned blog IDs in creation order")
    created_at: datetime = Field(alias="createdAt")


def user_to_response(user: UserDB) -> UserResponse:
    """
    Convert a ``UserDB`` row into a ``UserResponse``.

    Args:
        user: Database user entity

    Returns:
        UserResponse: Response model without the password hash
    """
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        blogs=[UUID(blog_id) for blog_id in user.blog_ids or []],
        created_at=user.created_at,
    )


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
    message: str


class UsersListResponse(BaseModel):
    users: list[UserResponse]


class UserWithBlogs(BaseModel):
    id: UUID
    name: str
    email: str
    blogs: list[BlogResponse]


class UserBlogsResponse(BaseModel):
    user: UserWithBlogs
