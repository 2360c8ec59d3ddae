# blogapp/routes/comments.py

"""
Comment Routes.

Flat comments on blog posts, editable only by their authors.

Summary
-------
Endpoints include:
  - List a blog's comments (paginated, newest first)
  - Comment count for a blog
  - Add comment
  - Update comment
  - Delete comment

Dependencies
------------
  - `CommentRepoDep` and `BlogRepoDep`: Repositories sharing the request transaction.
  - `UserDBDep`: Authenticated caller for write operations.

Rate Limiting
-------------
Reads allow 120 requests per minute and writes 30 per minute, per IP.
"""

from logging import getLogger
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_403_FORBIDDEN, HTTP_404_NOT_FOUND

from blogapp.configs import file_logger
from blogapp.dependencies import (
    BlogRepoDep,
    CommentRepoDep,
    OptionalUserDep,
    PageQueryDep,
    UserDBDep,
)
from blogapp.errors import body_or_empty
from blogapp.managers import limiter
from blogapp.managers.rate_limiter import READ_LIMIT, WRITE_LIMIT
from blogapp.schemas import (
    CommentEnvelope,
    CommentIn,
    CommentListResponse,
    CommentPagination,
    CommentStatsResponse,
    MessageResponse,
    build_pagination,
    comment_to_response,
)

router = APIRouter(prefix="/api/comments", tags=["💬 Comments"])

logger = file_logger(getLogger(__name__))

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

UNAUTHORIZED = {
    "description": "Missing, invalid or expired token",
    "content": {"application/json": {"example": {"detail": "Invalid token."}}},
}

BLOG_NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Blog not found"}}},
}

COMMENT_NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Comment not found"}}},
}

COMMENT_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174222",
    "content": "Great write-up, thanks for sharing!",
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174111",
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
    },
    "blogPost": "123e4567-e89b-12d3-a456-426614174000",
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}


@router.get(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=CommentListResponse,
    summary="List comments on a blog",
    description="Newest-first page of a blog's comments with their authors.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "comments": [COMMENT_EXAMPLE],
                        "pagination": {
                            "currentPage": 1,
                            "totalPages": 1,
                            "totalComments": 1,
                            "hasNextPage": False,
                            "hasPrevPage": False,
                        },
                    },
                },
            },
        },
        404: BLOG_NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_list",
)
@limiter.limit(READ_LIMIT)
async def get_comments(
    request: Request,
    response: Response,
    blog_id: UUID,
    query: PageQueryDep,
    repo: CommentRepoDep,
    blogs: BlogRepoDep,
    viewer: OptionalUserDep,
) -> CommentListResponse:
    """
    List a blog's comments.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    query : PageQuery
        Page and limit.
    repo : CommentRepository
        Comment repository.
    blogs : BlogRepository
        Blog repository.
    viewer : UserDB | None
        Caller, when authenticated.

    Returns
    -------
    CommentListResponse
        Page of comments and pagination metadata.

    Raises
    ------
    HTTPException
        If the blog does not exist.
    """
    if not await blogs.exists(blog_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Blog not found")

    rows, total = await repo.list_for_blog(blog_id, skip=query.skip, limit=query.limit)
    return CommentListResponse(
        comments=[comment_to_response(comment, author) for comment, author in rows],
        pagination=CommentPagination(
            **build_pagination(query.page, query.limit, total),
            total_comments=total,
        ),
    )


@router.get(
    "/blog/{blog_id}/stats",
    response_class=ORJSONResponse,
    response_model=CommentStatsResponse,
    summary="Comment count for a blog",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "blogId": "123e4567-e89b-12d3-a456-426614174000",
                        "commentCount": 3,
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="comments_stats",
)
@limiter.limit(READ_LIMIT)
async def get_comment_stats(
    request: Request,
    response: Response,
    blog_id: UUID,
    repo: CommentRepoDep,
) -> CommentStatsResponse:
    count = await repo.count_for_blog(blog_id)
    return CommentStatsResponse(blog_id=blog_id, comment_count=count)


@router.post(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=CommentEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Add a comment",
    description="Comment on a blog. Content is trimmed and must be 1 to 1000 characters.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Comment added successfully",
                        "comment": COMMENT_EXAMPLE,
                    },
                },
            },
        },
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {"example": {"detail": "Comment content is required"}},
            },
        },
        401: UNAUTHORIZED,
        404: BLOG_NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_create",
)
@limiter.limit(WRITE_LIMIT)
async def add_comment(
    request: Request,
    response: Response,
    blog_id: UUID,
    current_user: UserDBDep,
    repo: CommentRepoDep,
    blogs: BlogRepoDep,
    payload: CommentIn | None = None,
) -> CommentEnvelope:
    """
    Add a comment to a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog identifier.
    current_user : UserDB
        Authenticated caller, who becomes the author.
    repo : CommentRepository
        Comment repository.
    blogs : BlogRepository
        Blog repository.
    payload : CommentIn or None
        Comment text. A missing body is validated as empty.

    Returns
    -------
    CommentEnvelope
        Confirmation message and the created comment.

    Raises
    ------
    HTTPException
        If the blog does not exist.
    """
    payload = body_or_empty(CommentIn, payload)
    if not await blogs.exists(blog_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Blog not found")

    comment = await repo.create(
        content=payload.content or "",
        author_id=current_user.id,
        blog_id=blog_id,
    )
    logger.info(f"Comment {comment.id} added to blog {blog_id}")
    return CommentEnvelope(
        message="Comment added successfully",
        comment=comment_to_response(comment, current_user),
    )


@router.put(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentEnvelope,
    summary="Update a comment",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Comment updated successfully",
                        "comment": COMMENT_EXAMPLE,
                    },
                },
            },
        },
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"detail": "Comment cannot exceed 1000 characters"},
                },
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only update your own comments"},
                },
            },
        },
        404: COMMENT_NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_update",
)
@limiter.limit(WRITE_LIMIT)
async def update_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    current_user: UserDBDep,
    repo: CommentRepoDep,
    payload: CommentIn | None = None,
) -> CommentEnvelope:
    """
    Edit a comment written by the caller.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    comment_id : UUID
        Comment identifier.
    current_user : UserDB
        Authenticated caller.
    repo : CommentRepository
        Comment repository.
    payload : CommentIn or None
        New comment text. A missing body is validated as empty.

    Returns
    -------
    CommentEnvelope
        Confirmation message and the updated comment.

    Raises
    ------
    HTTPException
        If the comment does not exist or was written by someone else.
    """
    payload = body_or_empty(CommentIn, payload)
    comment = await repo.get_by_id(comment_id)
    if not comment:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.author_id != current_user.id:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only update your own comments",
        )

    comment = await repo.update(comment, payload.content or "")
    return CommentEnvelope(
        message="Comment updated successfully",
        comment=comment_to_response(comment, current_user),
    )


@router.delete(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a comment",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"message": "Comment deleted successfully"}},
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {
                    "example": {"detail": "You can only delete your own comments"},
                },
            },
        },
        404: COMMENT_NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="comments_delete",
)
@limiter.limit(WRITE_LIMIT)
async def delete_comment(
    request: Request,
    response: Response,
    comment_id: UUID,
    current_user: UserDBDep,
    repo: CommentRepoDep,
) -> MessageResponse:
    comment = await repo.get_by_id(comment_id)
    if not comment:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.author_id != current_user.id:
        raise HTTPException(
            status_code=HTTP_403_FORBIDDEN,
            detail="You can only delete your own comments",
        )

    await repo.delete(comment)
    return MessageResponse(message="Comment deleted successfully")
