from blogapp.schemas.auth import TokenData
from blogapp.schemas.blog import (
    BlogCreate,
    BlogEnvelope,
    BlogListResponse,
    BlogPagination,
    BlogResponse,
    BlogStatsResponse,
    BlogUpdate,
    TagCount,
    TagsResponse,
    blog_to_response,
    normalize_tags,
    split_tags,
)
from blogapp.schemas.comment import (
    CommentEnvelope,
    CommentIn,
    CommentListResponse,
    CommentPagination,
    CommentResponse,
    CommentStatsResponse,
    comment_to_response,
)
from blogapp.schemas.common import (
    HealthResponse,
    MessageResponse,
    OwnerResponse,
    Pagination,
    build_pagination,
)
from blogapp.schemas.upload import UploadResponse
from blogapp.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserBlogsResponse,
    UserResponse,
    UsersListResponse,
    UserWithBlogs,
    user_to_response,
)

__all__ = [
    "TokenData",
    "BlogCreate",
    "BlogUpdate",
    "BlogResponse",
    "BlogEnvelope",
    "BlogListResponse",
    "BlogPagination",
    "BlogStatsResponse",
    "TagCount",
    "TagsResponse",
    "blog_to_response",
    "normalize_tags",
    "split_tags",
    "CommentIn",
    "CommentResponse",
    "CommentEnvelope",
    "CommentListResponse",
    "CommentPagination",
    "CommentStatsResponse",
    "comment_to_response",
    "HealthResponse",
    "MessageResponse",
    "OwnerResponse",
    "Pagination",
    "build_pagination",
    "UploadResponse",
    "AuthResponse",
    "LoginRequest",
    "SignupRequest",
    "UserBlogsResponse",
    "UserResponse",
    "UsersListResponse",
    "UserWithBlogs",
    "user_to_response",
]
