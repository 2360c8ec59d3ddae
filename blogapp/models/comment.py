"""Comment database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Index
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from blogapp.configs.settings import MAX_COMMENT_LENGTH


class CommentDB(SQLModel, table=True):
    """Comment on a blog post. Removed with its blog."""

    __tablename__ = cast("declared_attr[str]", "comments")

    __table_args__ = (Index("ix_comments_blog_created", "blog_id", "created_at"),)

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Comment ID",
    )

    content: str = Field(
        sa_column=Column(String(MAX_COMMENT_LENGTH), nullable=False),
        description="Comment text",
    )

    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.id)",
    )
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        description="Blog ID (foreign key to blogs.id)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )
