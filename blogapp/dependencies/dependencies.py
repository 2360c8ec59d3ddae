# blogapp/dependencies/dependencies.py

"""Application dependencies: authentication, repositories and query containers."""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blogapp.configs.settings import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from blogapp.db import get_session
from blogapp.errors.auth import (
    MissingTokenError,
    TokenUserNotFoundError,
    UserAuthenticationError,
)
from blogapp.managers.token_manager import decode_access_token
from blogapp.models import UserDB
from blogapp.monitoring import set_user_id
from blogapp.repositories import BlogFilters, BlogRepository, CommentRepository, UserRepository
from blogapp.schemas.blog import split_tags
from blogapp.services import AuthService, MediaService

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by signup or login")

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_user_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


def get_comment_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CommentRepository:
    return CommentRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]


def get_auth_service(repo: UserRepoDep) -> AuthService:
    """Dependency to get AuthService bound to the request's user repository."""
    return AuthService(repo)


def get_media_service() -> MediaService:
    return MediaService()


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]


async def get_current_user(credentials: BearerDep, repo: UserRepoDep) -> UserDB:
    """
    Get the authenticated user from the Bearer token.

    The token's user ID is re-read from the database so deleted accounts
    lose access immediately.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization: Bearer`` header.
    repo : UserRepository
        User repository.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    MissingTokenError
        If the header is absent or not a Bearer token.
    TokenExpiredError
        If the token has expired.
    InvalidTokenError
        If the token cannot be verified.
    TokenUserNotFoundError
        If the token's user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError

    token_data = decode_access_token(credentials.credentials)
    user = await repo.get_by_id(token_data.user_id)
    if not user:
        raise TokenUserNotFoundError

    set_user_id(str(user.id))
    return user


async def get_optional_user(credentials: BearerDep, repo: UserRepoDep) -> UserDB | None:
    """
    Get the caller if a valid token was sent, otherwise None.

    Never rejects the request.
    """
    try:
        return await get_current_user(credentials, repo)
    except UserAuthenticationError:
        return None


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]


@dataclass(frozen=True)
class PageQuery:
    """
    Query container for page based listing.

    Parameters
    ----------
    page : int
        One-based page number.
    limit : int
        Page size.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


PageParam = Annotated[int, Query(ge=1, description="Page number, starting at 1")]
LimitParam = Annotated[
    int,
    Query(ge=1, le=MAX_PAGE_LIMIT, description="Maximum number of records per page"),
]


def get_page_query(
    page: PageParam = DEFAULT_PAGE,
    limit: LimitParam = DEFAULT_PAGE_LIMIT,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]


@dataclass(frozen=True)
class BlogListQuery(PageQuery):
    """
    Query container for blog listing and filters.

    Parameters
    ----------
    search : str | None
        Free text search over title, content and tags.
    tags : tuple[str, ...]
        Normalized tags; blogs having any of them match.
    author_id : UUID | None
        Optional author filter.
    """

    search: str | None = None
    tags: tuple[str, ...] = ()
    author_id: UUID | None = None

    def filters(self) -> BlogFilters:
        return BlogFilters(search=self.search, tags=self.tags, author_id=self.author_id)


def get_blog_list_query(
    page: PageParam = DEFAULT_PAGE,
    limit: LimitParam = DEFAULT_PAGE_LIMIT,
    search: Annotated[
        str | None,
        Query(description="Search in title, content and tags"),
    ] = None,
    tags: Annotated[str | None, Query(description="Comma-separated tags")] = None,
    author: Annotated[UUID | None, Query(description="Optional author ID filter")] = None,
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page,
        limit=limit,
        search=search.strip() if search and search.strip() else None,
        tags=tuple(split_tags(tags)) if tags else (),
        author_id=author,
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
