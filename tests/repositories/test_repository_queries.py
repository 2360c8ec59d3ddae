# tests/repositories/test_repository_queries.py
"""Tests for repository SQL generation and session handling."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from blogapp.errors import DatabaseError, DuplicateEntryError, RecordNotFoundError
from blogapp.repositories import (
    BlogFilters,
    BlogRepository,
    CommentRepository,
    UserRepository,
    build_filter_conditions,
)


def _sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


def _result(scalar=None, rows=None) -> MagicMock:
    result = MagicMock()
    result.scalar.return_value = scalar
    result.scalar_one_or_none.return_value = scalar
    result.all.return_value = rows or []
    return result


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    return session


def _executed_sql(session: MagicMock, call: int = 0) -> str:
    return _sql(session.execute.await_args_list[call].args[0])


class TestBlogFilters:
    def test_no_filters(self) -> None:
        assert build_filter_conditions(BlogFilters()) == []

    def test_search_uses_full_text_index_expression(self) -> None:
        (condition,) = build_filter_conditions(BlogFilters(search="react hooks"))

        sql = _sql(condition)
        assert "to_tsvector('english'" in sql
        assert "@@ plainto_tsquery(" in sql

    def test_tags_match_any(self) -> None:
        (condition,) = build_filter_conditions(BlogFilters(tags=("react", "node")))

        assert "?|" in _sql(condition)

    def test_author(self) -> None:
        (condition,) = build_filter_conditions(BlogFilters(author_id=uuid4()))

        assert "blogs.user_id =" in _sql(condition)

    def test_list_statement_is_newest_first(self, session: MagicMock) -> None:
        statement = BlogRepository(session).list_statement(
            BlogFilters(search="x", tags=("a",)),
            skip=20,
            limit=10,
        )

        sql = _sql(statement)
        assert "JOIN users ON users.id = blogs.user_id" in sql
        assert "ORDER BY blogs.created_at DESC" in sql
        assert "LIMIT" in sql
        assert "OFFSET" in sql


class TestBlogRepository:
    @pytest.mark.asyncio
    async def test_list_blogs_returns_rows_and_total(
        self,
        session: MagicMock,
        make_user,
        make_blog,
    ) -> None:
        owner = make_user()
        blog = make_blog(owner)
        session.execute.side_effect = [_result(scalar=7), _result(rows=[(blog, owner)])]

        rows, total = await BlogRepository(session).list_blogs(BlogFilters(), skip=0, limit=5)

        assert rows == [(blog, owner)]
        assert total == 7
        assert "count(*)" in _executed_sql(session, 0)

    @pytest.mark.asyncio
    async def test_increment_view_count_is_one_statement(self, session: MagicMock) -> None:
        session.execute.return_value = _result(scalar=6)

        assert await BlogRepository(session).increment_view_count(uuid4()) == 6

        session.execute.assert_awaited_once()
        sql = _executed_sql(session)
        assert "blogs.view_count + " in sql
        assert "RETURNING blogs.view_count" in sql

    @pytest.mark.asyncio
    async def test_get_tags_reads_from_blogs(self, session: MagicMock) -> None:
        session.execute.return_value = _result(rows=[("react", 3), ("node", 1)])

        assert await BlogRepository(session).get_tags() == [("react", 3), ("node", 1)]

        sql = _executed_sql(session)
        assert "FROM blogs, jsonb_array_elements_text(blogs.tags) AS tag" in sql
        assert "GROUP BY tag" in sql
        assert "ORDER BY count DESC, tag" in sql

    @pytest.mark.asyncio
    async def test_get_stats_totals(self, session: MagicMock, make_user, make_blog) -> None:
        owner = make_user()
        blog = make_blog(owner, view_count=9)
        totals = MagicMock()
        totals.one.return_value = (4, 12)
        session.execute.side_effect = [
            totals,
            _result(rows=[(blog, owner)]),
            _result(rows=[(blog, owner)]),
        ]

        stats = await BlogRepository(session).get_stats()

        assert stats.total_blogs == 4
        assert stats.total_views == 12
        assert stats.top_blogs == [(blog, owner)]
        assert "FROM blogs" in _executed_sql(session, 0)
        assert "ORDER BY blogs.view_count DESC" in _executed_sql(session, 1)
        assert "ORDER BY blogs.created_at DESC" in _executed_sql(session, 2)

    @pytest.mark.asyncio
    async def test_increment_missing_blog(self, session: MagicMock) -> None:
        session.execute.return_value = _result(scalar=None)

        assert await BlogRepository(session).increment_view_count(uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_by_ids_keeps_requested_order(
        self,
        session: MagicMock,
        make_user,
        make_blog,
    ) -> None:
        owner = make_user()
        first, second = make_blog(owner), make_blog(owner)
        session.execute.return_value = _result(rows=[(second, owner), (first, owner)])

        rows = await BlogRepository(session).get_by_ids([first.id, uuid4(), second.id])

        assert rows == [(first, owner), (second, owner)]

    @pytest.mark.asyncio
    async def test_get_by_ids_empty(self, session: MagicMock) -> None:
        assert await BlogRepository(session).get_by_ids([]) == []
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_sets_updated_at(
        self,
        session: MagicMock,
        make_user,
        make_blog,
    ) -> None:
        blog = make_blog(make_user())

        updated = await BlogRepository(session).update(blog, {"title": "New"})

        assert updated.title == "New"
        assert updated.updated_at is not None
        session.flush.assert_awaited_once()


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_add_blog_appends_in_sql(self, session: MagicMock) -> None:
        user_id = uuid4()
        session.execute.return_value = _result(scalar=user_id)

        await UserRepository(session).add_blog(user_id, uuid4())

        sql = _executed_sql(session)
        assert sql.startswith("UPDATE users SET")
        assert "users.blog_ids || jsonb_build_array(" in sql
        assert "RETURNING users.id" in sql

    @pytest.mark.asyncio
    async def test_remove_blog_removes_in_sql(self, session: MagicMock) -> None:
        user_id = uuid4()
        session.execute.return_value = _result(scalar=user_id)

        await UserRepository(session).remove_blog(user_id, uuid4())

        assert "users.blog_ids - " in _executed_sql(session)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["add_blog", "remove_blog"])
    async def test_blog_list_update_for_missing_user(self, session: MagicMock, method: str) -> None:
        session.execute.return_value = _result(scalar=None)

        with pytest.raises(RecordNotFoundError) as exc_info:
            await getattr(UserRepository(session), method)(uuid4(), uuid4())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_create_starts_with_no_blogs(self, session: MagicMock) -> None:
        user = await UserRepository(session).create("Jane", "jane@example.com", "hash")

        assert user.blog_ids == []
        session.add.assert_called_once_with(user)
        session.refresh.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_duplicate_email(self, session: MagicMock) -> None:
        session.flush.side_effect = IntegrityError(
            "INSERT INTO users",
            {},
            Exception('duplicate key value violates unique constraint "ix_users_email"'),
        )

        with pytest.raises(DuplicateEntryError):
            await UserRepository(session).create("Jane", "jane@example.com", "hash")

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_integrity_error(self, session: MagicMock) -> None:
        session.flush.side_effect = IntegrityError(
            "INSERT INTO users",
            {},
            Exception('null value in column "name" violates not-null constraint'),
        )

        with pytest.raises(DatabaseError) as exc_info:
            await UserRepository(session).create("Jane", "jane@example.com", "hash")

        assert not isinstance(exc_info.value, DuplicateEntryError)


class TestCommentRepository:
    @pytest.mark.asyncio
    async def test_list_for_blog(
        self,
        session: MagicMock,
        make_user,
        make_blog,
        make_comment,
    ) -> None:
        author = make_user()
        comment = make_comment(author, make_blog(author))
        session.execute.side_effect = [_result(scalar=1), _result(rows=[(comment, author)])]

        rows, total = await CommentRepository(session).list_for_blog(comment.blog_id, 0, 10)

        assert rows == [(comment, author)]
        assert total == 1
        assert "ORDER BY comments.created_at DESC" in _executed_sql(session, 1)
