"""Comment repository for database operations."""

from uuid import UUID

from sqlalchemy import desc, func, select

from blogapp.models import CommentDB, UserDB
from blogapp.repositories.base import BaseRepository
from blogapp.utils.helpers import utc_now

type CommentWithAuthor = tuple[CommentDB, UserDB]


class CommentRepository(BaseRepository[CommentDB]):
    """Repository for Comment entities."""

    model = CommentDB

    async def create(self, content: str, author_id: UUID, blog_id: UUID) -> CommentDB:
        """
        Add a comment to a blog.

        Args:
            content: Trimmed comment text
            author_id: Commenting user UUID
            blog_id: Blog UUID

        Returns:
            CommentDB: Persisted comment
        """
        comment = CommentDB(content=content, author_id=author_id, blog_id=blog_id)
        return await self._add_and_refresh(comment)

    async def update(self, comment: CommentDB, content: str) -> CommentDB:
        """
        Replace a comment's text.

        Args:
            comment: Loaded comment entity
            content: New trimmed text

        Returns:
            CommentDB: Updated comment
        """
        comment.content = content
        comment.updated_at = utc_now()
        return await self._add_and_refresh(comment)

    async def delete(self, comment: CommentDB) -> None:
        await self.delete_record(comment)

    async def list_for_blog(
        self,
        blog_id: UUID,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[CommentWithAuthor], int]:
        """
        Get one newest-first page of a blog's comments with their authors.

        Args:
            blog_id: Blog UUID
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            tuple[list[CommentWithAuthor], int]: Page rows and total comment count
        """
        total = await self.count_for_blog(blog_id)
        statement = (
            select(CommentDB, UserDB)
            # pyrefly: ignore [bad-argument-type]
            .join(UserDB, UserDB.id == CommentDB.author_id)
            .where(CommentDB.blog_id == blog_id)
            .order_by(desc(CommentDB.created_at))
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return [(comment, author) for comment, author in result.all()], total

    async def count_for_blog(self, blog_id: UUID) -> int:
        """
        Count a blog's comments.

        Args:
            blog_id: Blog UUID

        Returns:
            int: Number of comments
        """
        statement = (
            select(func.count()).select_from(CommentDB).where(CommentDB.blog_id == blog_id)
        )
        result = await self.session.execute(statement)
        return result.scalar() or 0
