"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime, Index, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from blogapp.configs.settings import MAX_TITLE_LENGTH

# Shared by the full-text index and the search filter so the planner can use the index
SEARCH_VECTOR_SQL = (
    "to_tsvector('english', "
    "coalesce(title, '') || ' ' || coalesce(content, '') || ' ' || coalesce(tags::text, ''))"
)


class BlogDB(SQLModel, table=True):
    """
    Blog database model for PostgreSQL.

    Tags are stored lowercase in a JSONB array. ``view_count`` is only ever
    changed through an atomic increment.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_tags_gin", "tags", postgresql_using="gin"),
        Index("ix_blogs_search_gin", text(SEARCH_VECTOR_SQL), postgresql_using="gin"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Owner ID (foreign key to users.id)",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )

    # Optional fields
    img: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Hosted image URL",
    )

    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False),
        description="Lowercase tags",
    )

    view_count: int = Field(
        default=0,
        nullable=False,
        description="View count",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Getting Started with React",
                "content": "React is a powerful JavaScript library...",
                "img": "https://res.cloudinary.com/demo/image/upload/blog-images/react.jpg",
                "tags": ["react", "javascript", "frontend"],
                "view_count": 0,
            },
        },
    )
