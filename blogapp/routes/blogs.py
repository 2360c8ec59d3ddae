# blogapp/routes/blogs.py

"""
Blog Routes.

Listing, search, aggregation and owner-only editing of blog posts.

Summary
-------
Endpoints include:
  - List blogs (paginated, with search, tag and author filters)
  - Tag cloud with per-tag counts
  - Site statistics
  - Get blog by id (counts a view)
  - Create blog
  - Update blog
  - Delete blog
  - A user's blogs

Dependencies
------------
  - `BlogRepoDep` and `UserRepoDep`: Repositories sharing the request transaction.
  - `UserDBDep`: Authenticated caller for write operations.
  - `OptionalUserDep`: Caller identity, when a token is sent, for public reads.

Rate Limiting
-------------
Reads allow 120 requests per minute and writes 30 per minute, per IP.
"""

from logging import getLogger
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_403_FORBIDDEN, HTTP_404_NOT_FOUND

from blogapp.configs import file_logger
from blogapp.dependencies import (
    BlogQueryListDep,
    BlogRepoDep,
    OptionalUserDep,
    UserDBDep,
    UserRepoDep,
)
from blogapp.errors import body_or_empty
from blogapp.managers import limiter
from blogapp.managers.rate_limiter import READ_LIMIT, WRITE_LIMIT
from blogapp.models import BlogDB
from blogapp.schemas import (
    BlogCreate,
    BlogEnvelope,
    BlogListResponse,
    BlogPagination,
    BlogStatsResponse,
    BlogUpdate,
    MessageResponse,
    TagCount,
    TagsResponse,
    UserBlogsResponse,
    UserWithBlogs,
    blog_to_response,
    build_pagination,
)

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

UNAUTHORIZED = {
    "description": "Missing, invalid or expired token",
    "content": {
        "application/json": {
            "example": {"detail": "Access denied. No token provided or invalid format."},
        },
    },
}

BLOG_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "title": "Getting Started with React",
    "content": "React is a powerful JavaScript library for building user interfaces.",
    "img": "https://res.cloudinary.com/demo/image/upload/blog-images/blog_1718000000000_3fa2c1.jpg",
    "tags": ["react", "javascript"],
    "user": {
        "id": "123e4567-e89b-12d3-a456-426614174111",
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
    },
    "viewCount": 42,
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List blogs",
    description=(
        "Newest-first page of blogs. `search` matches title, content and tags; "
        "`tags` is a comma-separated list and matches blogs having any of them; "
        "`author` restricts to one user's blogs."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "blogs": [BLOG_EXAMPLE],
                        "pagination": {
                            "currentPage": 1,
                            "totalPages": 3,
                            "totalBlogs": 25,
                            "hasNextPage": True,
                            "hasPrevPage": False,
                        },
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_list",
)
@router.get("/", response_model=BlogListResponse, include_in_schema=False)
@limiter.limit(READ_LIMIT)
async def get_all_blogs(
    request: Request,
    response: Response,
    query: BlogQueryListDep,
    repo: BlogRepoDep,
    viewer: OptionalUserDep,
) -> BlogListResponse:
    """
    List blogs with pagination and filters.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    query : BlogListQuery
        Page, limit and filters.
    repo : BlogRepository
        Repository dependency.
    viewer : UserDB | None
        Caller, when authenticated.

    Returns
    -------
    BlogListResponse
        Page of blogs and pagination metadata.
    """
    rows, total = await repo.list_blogs(query.filters(), skip=query.skip, limit=query.limit)
    return BlogListResponse(
        blogs=[blog_to_response(blog, owner) for blog, owner in rows],
        pagination=BlogPagination(
            **build_pagination(query.page, query.limit, total),
            total_blogs=total,
        ),
    )


@router.get(
    "/tags",
    response_class=ORJSONResponse,
    response_model=TagsResponse,
    summary="List tags",
    description="All distinct tags with the number of blogs using each, most used first.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "tags": ["react", "python"],
                        "tagCounts": [
                            {"tag": "react", "count": 8},
                            {"tag": "python", "count": 5},
                        ],
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_tags",
)
@limiter.limit(READ_LIMIT)
async def get_tags(
    request: Request,
    response: Response,
    repo: BlogRepoDep,
) -> TagsResponse:
    tag_counts = await repo.get_tags()
    return TagsResponse(
        tags=[tag for tag, _ in tag_counts],
        tag_counts=[TagCount(tag=tag, count=count) for tag, count in tag_counts],
    )


@router.get(
    "/stats",
    response_class=ORJSONResponse,
    response_model=BlogStatsResponse,
    summary="Blog statistics",
    description="Total blogs and views, the five most viewed and the five newest blogs.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "totalBlogs": 25,
                        "totalViews": 1024,
                        "topBlogs": [BLOG_EXAMPLE],
                        "recentBlogs": [BLOG_EXAMPLE],
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_stats",
)
@limiter.limit(READ_LIMIT)
async def get_stats(
    request: Request,
    response: Response,
    repo: BlogRepoDep,
) -> BlogStatsResponse:
    stats = await repo.get_stats()
    return BlogStatsResponse(
        total_blogs=stats.total_blogs,
        total_views=stats.total_views,
        top_blogs=[blog_to_response(blog, owner) for blog, owner in stats.top_blogs],
        recent_blogs=[blog_to_response(blog, owner) for blog, owner in stats.recent_blogs],
    )


@router.get(
    "/user/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserBlogsResponse,
    summary="Get a user's blogs",
    description="A user with their blogs in the order they were written.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "user": {
                            "id": "123e4567-e89b-12d3-a456-426614174111",
                            "name": "Jane Smith",
                            "email": "jane.smith@example.com",
                            "blogs": [BLOG_EXAMPLE],
                        },
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "No user found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_by_user",
)
@limiter.limit(READ_LIMIT)
async def get_user_blogs(
    request: Request,
    response: Response,
    user_id: UUID,
    current_user: UserDBDep,
    users: UserRepoDep,
    repo: BlogRepoDep,
) -> UserBlogsResponse:
    """
    Get a user and their blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    user_id : UUID
        User identifier.
    current_user : UserDB
        Authenticated caller.
    users : UserRepository
        User repository.
    repo : BlogRepository
        Blog repository.

    Returns
    -------
    UserBlogsResponse
        The user with their blogs.

    Raises
    ------
    HTTPException
        If the user does not exist.
    """
    user = await users.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="No user found")

    rows = await repo.get_by_ids([UUID(blog_id) for blog_id in user.blog_ids or []])
    return UserBlogsResponse(
        user=UserWithBlogs(
            id=user.id,
            name=user.name,
            email=user.email,
            blogs=[blog_to_response(blog, owner) for blog, owner in rows],
        ),
    )


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    summary="Get blog by ID",
    description="Retrieve a blog with its owner. Every fetch increments the view count.",
    responses={
        200: {"content": {"application/json": {"example": {"blog": BLOG_EXAMPLE}}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "No blog found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_get_by_id",
)
@limiter.limit(READ_LIMIT)
async def get_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    repo: BlogRepoDep,
    viewer: OptionalUserDep,
) -> BlogEnvelope:
    """
    Get blog by ID and increment its view count.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    repo : BlogRepository
        Repository dependency.
    viewer : UserDB | None
        Caller, when authenticated.

    Returns
    -------
    BlogEnvelope
        The blog with its owner.

    Raises
    ------
    HTTPException
        If the blog does not exist.
    """
    if await repo.increment_view_count(blog_id) is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="No blog found")

    found = await repo.get_with_owner(blog_id)
    if not found:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="No blog found")
    blog, owner = found
    return BlogEnvelope(blog=blog_to_response(blog, owner))


@router.post(
    "/add",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Create a blog",
    description="Publish a new blog owned by the caller. Only the first 10 tags are kept.",
    responses={
        201: {"content": {"application/json": {"example": {"blog": BLOG_EXAMPLE}}}},
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"detail": "Title is required"}}},
        },
        401: UNAUTHORIZED,
        429: RATE_LIMITED,
    },
    operation_id="blogs_create",
)
@limiter.limit(WRITE_LIMIT)
async def add_blog(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    repo: BlogRepoDep,
    users: UserRepoDep,
    payload: Annotated[
        BlogCreate | None,
        Body(
            examples=[
                {
                    "title": "Getting Started with React",
                    "content": "React is a powerful JavaScript library...",
                    "tags": ["React", " javascript ", ""],
                },
            ],
        ),
    ] = None,
) -> BlogEnvelope:
    """
    Create a blog and record it in the owner's blog list.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    current_user : UserDB
        Authenticated caller, who becomes the owner.
    repo : BlogRepository
        Blog repository.
    users : UserRepository
        User repository.
    payload : BlogCreate or None
        Blog input payload. A missing body is validated as empty.

    Returns
    -------
    BlogEnvelope
        Created blog.
    """
    payload = body_or_empty(BlogCreate, payload)
    blog = await repo.create(
        BlogDB(
            user_id=current_user.id,
            title=payload.title,
            content=payload.content,
            img=payload.img,
            tags=payload.tags,
        ),
    )
    await users.add_blog(current_user.id, blog.id)
    logger.info(f"Blog {blog.id} created by user {current_user.id}")
    return BlogEnvelope(blog=blog_to_response(blog, current_user))


@router.put(
    "/update/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    summary="Update a blog",
    description=(
        "Replace title and content. Tags and image are replaced only when sent; "
        "`img: null` removes the image."
    ),
    responses={
        200: {"content": {"application/json": {"example": {"blog": BLOG_EXAMPLE}}}},
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"detail": "Content is required"}}},
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the owner",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only update your own blogs"},
                },
            },
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog not found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_update",
)
@limiter.limit(WRITE_LIMIT)
async def update_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    current_user: UserDBDep,
    repo: BlogRepoDep,
    payload: BlogUpdate | None = None,
) -> BlogEnvelope:
    """
    Update a blog owned by the caller.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    current_user : UserDB
        Authenticated caller.
    repo : BlogRepository
        Repository dependency.
    payload : BlogUpdate or None
        Fields to write. A missing body is validated as empty.

    Returns
    -------
    BlogEnvelope
        Updated blog.

    Raises
    ------
    HTTPException
        If the blog does not exist or belongs to someone else.
    """
    payload = body_or_empty(BlogUpdate, payload)
    blog = await repo.get_by_id(blog_id)
    if not blog:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Blog not found")
    if blog.user_id != current_user.id:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only update your own blogs",
        )

    blog = await repo.update(blog, payload.changes())
    return BlogEnvelope(blog=blog_to_response(blog, current_user))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a blog",
    description="Delete a blog owned by the caller together with its comments.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"message": "Blog deleted successfully"}},
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the owner",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only delete your own blogs"},
                },
            },
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog not found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_delete",
)
@limiter.limit(WRITE_LIMIT)
async def delete_blog(
    request: Request,
    response: Response,
    blog_id: UUID,
    current_user: UserDBDep,
    repo: BlogRepoDep,
    users: UserRepoDep,
) -> MessageResponse:
    """
    Delete a blog owned by the caller.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    current_user : UserDB
        Authenticated caller.
    repo : BlogRepository
        Blog repository.
    users : UserRepository
        User repository.

    Returns
    -------
    MessageResponse
        Confirmation message.

    Raises
    ------
    HTTPException
        If the blog does not exist or belongs to someone else.
    """
    blog = await repo.get_by_id(blog_id)
    if not blog:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Blog not found")
    if blog.user_id != current_user.id:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only delete your own blogs",
        )

    await repo.delete(blog)
    await users.remove_blog(current_user.id, blog_id)
    logger.info(f"Blog {blog_id} deleted by user {current_user.id}")
    return MessageResponse(message="Blog deleted successfully")
