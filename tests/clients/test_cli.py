# tests/clients/test_cli.py
"""Tests for the command line front end."""

from argparse import Namespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from blogapp.cli import _tags, build_parser, cmd_blogs, cmd_post, run_command
from blogapp.clients import ApiError, SessionExpiredError


class TestParser:
    def test_blogs_command(self) -> None:
        args = build_parser().parse_args(["blogs", "--tags", "react,node", "--page", "2"])

        assert args.handler is cmd_blogs
        assert args.page == 2
        assert args.limit == 10

    def test_edit_image_flags_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["edit", "b1", "--title", "T", "--content", "C", "--image", "x.png", "--remove-image"],
            )

    def test_tags(self) -> None:
        assert _tags(" react, ,node ") == ["react", "node"]
        assert _tags(None) == []


class TestCommands:
    @pytest.mark.asyncio
    async def test_blogs_prints_table(self, capsys) -> None:
        api = MagicMock()
        api.list_blogs = AsyncMock(
            return_value={
                "blogs": [
                    {
                        "id": "b1",
                        "title": "Hello World",
                        "user": {"name": "Jane"},
                        "tags": ["intro"],
                        "viewCount": 3,
                        "createdAt": "2025-01-01T00:00:00Z",
                    },
                ],
                "pagination": {"currentPage": 1, "totalPages": 1, "totalBlogs": 1},
            },
        )

        await cmd_blogs(api, Namespace(page=1, limit=10, search=None, tags="intro"))

        api.list_blogs.assert_awaited_once_with(page=1, limit=10, search=None, tags=["intro"])
        assert "Hello World" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_post_requires_login(self) -> None:
        api = MagicMock()
        api.store.token = None

        with pytest.raises(SessionExpiredError):
            await cmd_post(api, Namespace(title="T", content="C", tags=None, image=None))

    @pytest.mark.asyncio
    async def test_post_uploads_image_first(self, tmp_path) -> None:
        api = MagicMock()
        api.store.token = "tok"
        api.upload_image = AsyncMock(return_value={"imageUrl": "https://cdn/x.png", "message": "ok"})
        api.create_blog = AsyncMock(return_value={"blog": {"id": "b1", "title": "T"}})

        await cmd_post(api, Namespace(title="T", content="C", tags="a,b", image="x.png"))

        api.create_blog.assert_awaited_once_with("T", "C", ["a", "b"], "https://cdn/x.png")


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_api_error_exit_code(self, mocker) -> None:
        factory = mocker.patch("blogapp.cli.BlogApiClient")
        factory.return_value.__aenter__.return_value = MagicMock()
        handler = AsyncMock(side_effect=ApiError(400, "Title is required"))

        assert await run_command(Namespace(api_url=None, handler=handler)) == 1

    @pytest.mark.asyncio
    async def test_success_exit_code(self, mocker) -> None:
        factory = mocker.patch("blogapp.cli.BlogApiClient")
        api = MagicMock()
        factory.return_value.__aenter__.return_value = api
        handler = AsyncMock()

        assert await run_command(Namespace(api_url="http://api.test", handler=handler)) == 0
        factory.assert_called_once_with(base_url="http://api.test")
        handler.assert_awaited_once()
