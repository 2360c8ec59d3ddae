"""Blog repository for database operations."""

from collections.abc import Sequence
from dataclasses import dataclass
from logging import getLogger
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, Select, desc, func, literal_column, select, update
from sqlalchemy.dialects.postgresql import JSONB, array

from blogapp.configs import file_logger
from blogapp.configs.settings import RECENT_BLOGS_COUNT, TOP_BLOGS_COUNT
from blogapp.models import BlogDB, UserDB
from blogapp.models.blog import SEARCH_VECTOR_SQL
from blogapp.repositories.base import BaseRepository
from blogapp.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

type BlogWithOwner = tuple[BlogDB, UserDB]


@dataclass(frozen=True)
class BlogFilters:
    """
    Filters for blog listing.

    Attributes:
        search: Free text matched against title, content and tags
        tags: Lowercase tags; a blog matches when it has any of them
        author_id: Restrict to blogs owned by this user
    """

    search: str | None = None
    tags: tuple[str, ...] = ()
    author_id: UUID | None = None


@dataclass(frozen=True)
class BlogStats:
    total_blogs: int
    total_views: int
    top_blogs: list[BlogWithOwner]
    recent_blogs: list[BlogWithOwner]


def build_filter_conditions(filters: BlogFilters) -> list[ColumnElement[bool]]:
    """
    Translate ``BlogFilters`` into SQL conditions.

    Args:
        filters: Requested filters

    Returns:
        list[ColumnElement[bool]]: Conditions to AND together
    """
    conditions: list[ColumnElement[bool]] = []
    if filters.search:
        search_vector = literal_column(SEARCH_VECTOR_SQL)
        conditions.append(
            search_vector.bool_op("@@")(func.plainto_tsquery("english", filters.search)),
        )
    if filters.tags:
        # pyrefly: ignore [missing-attribute]
        conditions.append(BlogDB.tags.cast(JSONB).has_any(array(list(filters.tags))))
    if filters.author_id:
        # pyrefly: ignore [bad-argument-type]
        conditions.append(BlogDB.user_id == filters.author_id)
    return conditions


def _with_owner() -> Select[tuple[BlogDB, UserDB]]:
    # pyrefly: ignore [bad-argument-type]
    return select(BlogDB, UserDB).join(UserDB, UserDB.id == BlogDB.user_id)


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Listing queries load each blog together with its owner so responses can
    embed the owner without extra round trips.
    """

    model = BlogDB

    async def create(self, blog: BlogDB) -> BlogDB:
        """
        Insert a new blog.

        Args:
            blog: Unsaved blog entity

        Returns:
            BlogDB: Persisted blog
        """
        return await self._add_and_refresh(blog)

    async def get_with_owner(self, blog_id: UUID) -> BlogWithOwner | None:
        """
        Get a blog and its owner by blog ID.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogWithOwner | None: Blog and owner if found, None otherwise
        """
        # pyrefly: ignore [bad-argument-type]
        result = await self.session.execute(_with_owner().where(BlogDB.id == blog_id))
        row = result.one_or_none()
        return (row[0], row[1]) if row else None

    def list_statement(
        self,
        filters: BlogFilters,
        skip: int = 0,
        limit: int = 10,
    ) -> Select[tuple[BlogDB, UserDB]]:
        """
        Build the newest-first page query for ``filters``.

        Args:
            filters: Requested filters
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Select: Statement yielding ``(BlogDB, UserDB)`` rows
        """
        return (
            _with_owner()
            .where(*build_filter_conditions(filters))
            # pyrefly: ignore [bad-argument-type]
            .order_by(desc(BlogDB.created_at))
            .offset(skip)
            .limit(limit)
        )

    async def list_blogs(
        self,
        filters: BlogFilters,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[BlogWithOwner], int]:
        """
        Get one page of blogs and the total number of matches.

        Args:
            filters: Requested filters
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            tuple[list[BlogWithOwner], int]: Page rows and total match count
        """
        count_statement = (
            select(func.count()).select_from(BlogDB).where(*build_filter_conditions(filters))
        )
        total = (await self.session.execute(count_statement)).scalar() or 0

        result = await self.session.execute(self.list_statement(filters, skip, limit))
        blogs = [(blog, owner) for blog, owner in result.all()]
        logger.info(f"Listed {len(blogs)} of {total} blogs for {filters}")
        return blogs, total

    async def get_by_ids(self, blog_ids: Sequence[UUID]) -> list[BlogWithOwner]:
        """
        Get blogs by ID, keeping the order of ``blog_ids``.

        Args:
            blog_ids: Blog UUIDs in the desired order

        Returns:
            list[BlogWithOwner]: Blogs that still exist, in the given order
        """
        if not blog_ids:
            return []
        # pyrefly: ignore [missing-attribute]
        result = await self.session.execute(_with_owner().where(BlogDB.id.in_(blog_ids)))
        by_id = {blog.id: (blog, owner) for blog, owner in result.all()}
        return [by_id[blog_id] for blog_id in blog_ids if blog_id in by_id]

    async def update(self, blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        """
        Apply field changes to a blog.

        Args:
            blog: Loaded blog entity
            changes: Column values to write

        Returns:
            BlogDB: Updated blog
        """
        for key, value in changes.items():
            setattr(blog, key, value)
        blog.updated_at = utc_now()
        return await self._add_and_refresh(blog)

    async def delete(self, blog: BlogDB) -> None:
        """
        Delete a blog. Its comments go with it through the foreign key.

        Args:
            blog: Loaded blog entity
        """
        await self.delete_record(blog)

    async def increment_view_count(self, blog_id: UUID) -> int | None:
        """
        Add one to a blog's view count in a single statement.

        Args:
            blog_id: Blog UUID

        Returns:
            int | None: The new view count, or None if the blog does not exist
        """
        statement = (
            update(BlogDB)
            # pyrefly: ignore [bad-argument-type]
            .where(BlogDB.id == blog_id)
            .values(view_count=BlogDB.view_count + 1)
            .returning(BlogDB.view_count)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_tags(self) -> list[tuple[str, int]]:
        """
        Count how many blogs use each tag.

        Returns:
            list[tuple[str, int]]: ``(tag, count)`` pairs, most used first
        """
        tag = func.jsonb_array_elements_text(BlogDB.tags).column_valued("tag")
        count = func.count().label("count")
        # The lateral function needs blogs in FROM to reach blogs.tags
        statement = select(tag, count).select_from(BlogDB).group_by(tag).order_by(desc(count), tag)
        result = await self.session.execute(statement)
        return [(row[0], row[1]) for row in result.all()]

    async def get_stats(self) -> BlogStats:
        """
        Aggregate blog totals with the most viewed and newest blogs.

        Returns:
            BlogStats: Totals, top blogs by views and most recent blogs
        """
        totals = await self.session.execute(
            select(func.count(), func.coalesce(func.sum(BlogDB.view_count), 0)).select_from(
                BlogDB,
            ),
        )
        total_blogs, total_views = totals.one()

        top = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            _with_owner().order_by(desc(BlogDB.view_count), desc(BlogDB.created_at)).limit(
                TOP_BLOGS_COUNT,
            ),
        )
        recent = await self.session.execute(
            # pyrefly: ignore [bad-argument-type]
            _with_owner().order_by(desc(BlogDB.created_at)).limit(RECENT_BLOGS_COUNT),
        )

        return BlogStats(
            total_blogs=int(total_blogs),
            total_views=int(total_views),
            top_blogs=[(blog, owner) for blog, owner in top.all()],
            recent_blogs=[(blog, owner) for blog, owner in recent.all()],
        )
