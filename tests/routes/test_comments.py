# tests/routes/test_comments.py
"""Tests for comment endpoints."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from httpx import AsyncClient

from blogapp.models import CommentDB, UserDB


def _create_comment(content: str, author_id, blog_id) -> CommentDB:
    return CommentDB(id=uuid4(), content=content, author_id=author_id, blog_id=blog_id)


class TestListComments:
    """Tests for GET /api/comments/blog/{blog_id}."""

    @pytest.mark.asyncio
    async def test_list_comments(
        self,
        client: AsyncClient,
        blog_repo: MagicMock,
        comment_repo: MagicMock,
        sample_user: UserDB,
        other_user: UserDB,
        make_blog,
        make_comment,
    ) -> None:
        blog = make_blog(sample_user)
        comment = make_comment(other_user, blog, "Nice read")
        blog_repo.exists.return_value = True
        comment_repo.list_for_blog.return_value = ([(comment, other_user)], 11)

        response = await client.get(
            f"/api/comments/blog/{blog.id}",
            params={"page": 2, "limit": 5},
        )

        assert response.status_code == 200
        body = response.json()
        (item,) = body["comments"]
        assert item["content"] == "Nice read"
        assert item["blogPost"] == str(blog.id)
        assert item["author"]["name"] == other_user.name
        assert body["pagination"] == {
            "currentPage": 2,
            "totalPages": 3,
            "totalComments": 11,
            "hasNextPage": True,
            "hasPrevPage": True,
        }
        comment_repo.list_for_blog.assert_awaited_once_with(blog.id, skip=5, limit=5)

    @pytest.mark.asyncio
    async def test_unknown_blog(
        self,
        client: AsyncClient,
        blog_repo: MagicMock,
        comment_repo: MagicMock,
    ) -> None:
        blog_repo.exists.return_value = False

        response = await client.get(f"/api/comments/blog/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"detail": "Blog not found"}
        comment_repo.list_for_blog.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_comment_count(self, client: AsyncClient, comment_repo: MagicMock) -> None:
        blog_id = uuid4()
        comment_repo.count_for_blog.return_value = 4

        response = await client.get(f"/api/comments/blog/{blog_id}/stats")

        assert response.status_code == 200
        assert response.json() == {"blogId": str(blog_id), "commentCount": 4}


class TestAddComment:
    """Tests for POST /api/comments/blog/{blog_id}."""

    @pytest.mark.asyncio
    async def test_add_comment(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_repo: MagicMock,
        comment_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        """Content is stored trimmed and the caller becomes the author."""
        blog_id = uuid4()
        blog_repo.exists.return_value = True
        comment_repo.create.side_effect = _create_comment

        response = await client.post(
            f"/api/comments/blog/{blog_id}",
            json={"content": "  Nice post!  "},
            headers=auth_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment added successfully"
        assert body["comment"]["content"] == "Nice post!"
        assert body["comment"]["author"]["id"] == str(sample_user.id)
        comment_repo.create.assert_awaited_once_with(
            content="Nice post!",
            author_id=sample_user.id,
            blog_id=blog_id,
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "detail"),
        [
            ({}, "Comment content is required"),
            ({"content": "   "}, "Comment content is required"),
            ({"content": "x" * 1001}, "Comment cannot exceed 1000 characters"),
        ],
    )
    async def test_validation(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        comment_repo: MagicMock,
        payload: dict,
        detail: str,
    ) -> None:
        response = await client.post(
            f"/api/comments/blog/{uuid4()}",
            json=payload,
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == detail
        comment_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_without_body(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        comment_repo: MagicMock,
    ) -> None:
        response = await client.post(f"/api/comments/blog/{uuid4()}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Comment content is required"
        comment_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_login(self, client: AsyncClient) -> None:
        response = await client.post(f"/api/comments/blog/{uuid4()}", json={"content": "Hi"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_blog(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        blog_repo: MagicMock,
        comment_repo: MagicMock,
    ) -> None:
        blog_repo.exists.return_value = False

        response = await client.post(
            f"/api/comments/blog/{uuid4()}",
            json={"content": "Hello"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Blog not found"}
        comment_repo.create.assert_not_awaited()


class TestEditComment:
    """Tests for PUT and DELETE /api/comments/{comment_id}."""

    @pytest.mark.asyncio
    async def test_update_own_comment(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        comment_repo: MagicMock,
        sample_user: UserDB,
        make_blog,
        make_comment,
    ) -> None:
        comment = make_comment(sample_user, make_blog(sample_user), "Old")
        comment_repo.get_by_id.return_value = comment

        def _update(target: CommentDB, content: str) -> CommentDB:
            target.content = content
            return target

        comment_repo.update.side_effect = _update

        response = await client.put(
            f"/api/comments/{comment.id}",
            json={"content": " Edited "},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Comment updated successfully"
        assert response.json()["comment"]["content"] == "Edited"
        comment_repo.update.assert_awaited_once_with(comment, "Edited")

    @pytest.mark.asyncio
    async def test_update_someone_elses_comment(
        self,
        client: AsyncClient,
        other_auth_headers: dict[str, str],
        comment_repo: MagicMock,
        sample_user: UserDB,
        make_blog,
        make_comment,
    ) -> None:
        comment = make_comment(sample_user, make_blog(sample_user))
        comment_repo.get_by_id.return_value = comment

        response = await client.put(
            f"/api/comments/{comment.id}",
            json={"content": "Mine now"},
            headers=other_auth_headers,
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "You can only update your own comments"}
        comment_repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_missing_comment(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        comment_repo: MagicMock,
    ) -> None:
        comment_repo.get_by_id.return_value = None

        response = await client.put(
            f"/api/comments/{uuid4()}",
            json={"content": "Hello"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Comment not found"}

    @pytest.mark.asyncio
    async def test_delete_own_comment(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        comment_repo: MagicMock,
        sample_user: UserDB,
        make_blog,
        make_comment,
    ) -> None:
        comment = make_comment(sample_user, make_blog(sample_user))
        comment_repo.get_by_id.return_value = comment

        response = await client.delete(f"/api/comments/{comment.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Comment deleted successfully"}
        comment_repo.delete.assert_awaited_once_with(comment)

    @pytest.mark.asyncio
    async def test_delete_someone_elses_comment(
        self,
        client: AsyncClient,
        other_auth_headers: dict[str, str],
        comment_repo: MagicMock,
        sample_user: UserDB,
        make_blog,
        make_comment,
    ) -> None:
        comment = make_comment(sample_user, make_blog(sample_user))
        comment_repo.get_by_id.return_value = comment

        response = await client.delete(f"/api/comments/{comment.id}", headers=other_auth_headers)

        assert response.status_code == 403
        assert response.json() == {"detail": "You can only delete your own comments"}
        comment_repo.delete.assert_not_awaited()
