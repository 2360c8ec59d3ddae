# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from datetime import timedelta
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image

from blogapp.dependencies import (
    get_blog_repository,
    get_comment_repository,
    get_media_service,
    get_user_repository,
)
from blogapp.main import app
from blogapp.managers.rate_limiter import limiter
from blogapp.managers.token_manager import create_access_token
from blogapp.models import UserDB
from blogapp.repositories import BlogRepository, CommentRepository, UserRepository
from blogapp.services import MediaService

IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/blog-images/blog_1_abc123.jpg"
PUBLIC_ID = "blog-images/blog_1_abc123"


@pytest.fixture
def sample_user(make_user) -> UserDB:
    """Create a sample user for testing."""
    return make_user()


@pytest.fixture
def other_user(make_user) -> UserDB:
    """Create a second user who owns nothing the sample user touches."""
    return make_user(name="Ravi Kumar", email="ravi.kumar@example.com")


@pytest.fixture
def sample_access_token(sample_user: UserDB) -> str:
    return create_access_token(sample_user.id, sample_user.email, timedelta(minutes=30))


@pytest.fixture
def auth_headers(sample_access_token: str) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return {"Authorization": f"Bearer {sample_access_token}"}


@pytest.fixture
def other_auth_headers(other_user: UserDB) -> dict[str, str]:
    token = create_access_token(other_user.id, other_user.email, timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_repo(sample_user: UserDB, other_user: UserDB) -> MagicMock:
    """User repository that knows the sample and other users by ID."""
    repo = MagicMock(spec=UserRepository)
    known = {sample_user.id: sample_user, other_user.id: other_user}
    repo.get_by_id.side_effect = lambda user_id: known.get(user_id)
    repo.get_by_email.return_value = None
    return repo


@pytest.fixture
def blog_repo() -> MagicMock:
    repo = MagicMock(spec=BlogRepository)
    repo.create.side_effect = lambda blog: blog
    return repo


@pytest.fixture
def comment_repo() -> MagicMock:
    return MagicMock(spec=CommentRepository)


@pytest.fixture
def mock_storage() -> MagicMock:
    """Storage backend that accepts every upload."""
    storage = MagicMock()
    storage.upload_image = AsyncMock(return_value=(IMAGE_URL, PUBLIC_ID))
    return storage


@pytest.fixture
def media_service(mock_storage: MagicMock) -> MediaService:
    return MediaService(storage=mock_storage)


@pytest.fixture
def override_dependencies(
    user_repo: MagicMock,
    blog_repo: MagicMock,
    comment_repo: MagicMock,
    media_service: MediaService,
):
    """Swap the database-backed providers for mocks for the duration of a test."""
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_blog_repository] = lambda: blog_repo
    app.dependency_overrides[get_comment_repository] = lambda: comment_repo
    app.dependency_overrides[get_media_service] = lambda: media_service
    limiter.enabled = False
    yield
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_dependencies) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the app with mocked repositories."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac


@pytest.fixture
async def lenient_client(override_dependencies) -> AsyncGenerator[AsyncClient]:
    """Client that returns 500 responses instead of re-raising app errors."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as ac:
        yield ac


@pytest.fixture
def valid_jpeg_bytes() -> bytes:
    """Generate a small valid JPEG image."""
    img = Image.new("RGB", (64, 48), color="red")
    buffer = BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()
