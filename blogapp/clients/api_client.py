"""
HTTP client for the blog API.

Keeps the signed-in session on disk and attaches its token to every call.
A 401 from any endpoint ends the session, mirroring a browser redirect to
the login page.
"""

from pathlib import Path
from typing import Any, Self
from uuid import UUID

from httpx import AsyncClient, Response
from orjson import JSONDecodeError, dumps, loads

from blogapp.configs import settings
from blogapp.monitoring import get_logger

logger = get_logger(__name__)

type JSON = dict[str, Any]


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class SessionExpiredError(ApiError):
    """The server rejected the stored token; the user must log in again."""

    def __init__(self, detail: str = "Session expired. Please login again.") -> None:
        super().__init__(401, detail)


class TokenStore:
    """
    JSON file holding ``{"token": ..., "user": {...}}`` for the signed-in user.

    Args:
        path: Session file location; ``~`` is expanded.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.CLIENT_SESSION_FILE).expanduser()

    def load(self) -> JSON | None:
        """Return the saved session, or None when absent or unreadable."""
        if not self.path.is_file():
            return None
        try:
            data = loads(self.path.read_bytes())
        except (JSONDecodeError, OSError):
            logger.warning("Ignoring unreadable session file", path=str(self.path))
            return None
        return data if isinstance(data, dict) and data.get("token") else None

    def save(self, token: str, user: JSON) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(dumps({"token": token, "user": user}))
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    @property
    def token(self) -> str | None:
        session = self.load()
        return session["token"] if session else None

    @property
    def user(self) -> JSON | None:
        session = self.load()
        return session.get("user") if session else None


def _detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


class BlogApiClient:
    """
    Async client mirroring every API endpoint.

    Args:
        base_url: API origin, e.g. ``http://127.0.0.1:5001``.
        store: Session storage; a file under the home directory by default.
        client: Preconfigured ``httpx.AsyncClient``, mainly for tests.

    Example:
        >>> async with BlogApiClient() as api:
        ...     await api.login("jane@example.com", "password123")
        ...     page = await api.list_blogs(tags=["react"])
    """

    def __init__(
        self,
        base_url: str | None = None,
        store: TokenStore | None = None,
        client: AsyncClient | None = None,
    ) -> None:
        self.store = store or TokenStore()
        self._client = client or AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.CLIENT_TIMEOUT,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        token = self.store.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _send(self, method: str, url: str, **kwargs: Any) -> Response:
        # Sent once: a timed out write may already have been applied
        return await self._client.request(method, url, headers=self._headers(), **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> JSON:
        """
        Send a request and decode the JSON body.

        Raises:
            SessionExpiredError: On 401; the stored session is cleared first.
            ApiError: On any other non-2xx status.
        """
        response = await self._send(method, url, **kwargs)
        if response.status_code == 401:
            self.store.clear()
            raise SessionExpiredError(_detail(response))
        if response.is_error:
            raise ApiError(response.status_code, _detail(response))
        return response.json()

    def _remember(self, body: JSON) -> JSON:
        self.store.save(body["token"], body["user"])
        return body

    # --- Users ---

    async def signup(self, name: str, email: str, password: str) -> JSON:
        body = await self._request(
            "POST",
            "/api/users/signup",
            json={"name": name, "email": email, "password": password},
        )
        return self._remember(body)

    async def login(self, email: str, password: str) -> JSON:
        body = await self._request(
            "POST",
            "/api/users/login",
            json={"email": email, "password": password},
        )
        return self._remember(body)

    def logout(self) -> None:
        self.store.clear()

    async def list_users(self) -> JSON:
        return await self._request("GET", "/api/users")

    # --- Blogs ---

    async def list_blogs(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        tags: list[str] | None = None,
        author: UUID | str | None = None,
    ) -> JSON:
        """Fetch one page of blogs; empty filters are not sent."""
        params: dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        if tags:
            params["tags"] = ",".join(tags)
        if author:
            params["author"] = str(author)
        return await self._request("GET", "/api/blogs", params=params)

    async def get_blog(self, blog_id: UUID | str) -> JSON:
        return await self._request("GET", f"/api/blogs/{blog_id}")

    async def get_tags(self) -> JSON:
        return await self._request("GET", "/api/blogs/tags")

    async def get_stats(self) -> JSON:
        return await self._request("GET", "/api/blogs/stats")

    async def create_blog(
        self,
        title: str,
        content: str,
        tags: list[str] | None = None,
        img: str | None = None,
    ) -> JSON:
        payload: JSON = {"title": title, "content": content, "tags": tags or []}
        if img:
            payload["img"] = img
        return await self._request("POST", "/api/blogs/add", json=payload)

    async def update_blog(self, blog_id: UUID | str, **fields: Any) -> JSON:
        """
        Update a blog.

        Args:
            blog_id: Blog to update
            **fields: ``title`` and ``content`` (required by the server),
                optionally ``tags`` and ``img``
        """
        return await self._request("PUT", f"/api/blogs/update/{blog_id}", json=fields)

    async def delete_blog(self, blog_id: UUID | str) -> JSON:
        return await self._request("DELETE", f"/api/blogs/{blog_id}")

    async def get_user_blogs(self, user_id: UUID | str) -> JSON:
        return await self._request("GET", f"/api/blogs/user/{user_id}")

    # --- Comments ---

    async def list_comments(self, blog_id: UUID | str, page: int = 1, limit: int = 10) -> JSON:
        return await self._request(
            "GET",
            f"/api/comments/blog/{blog_id}",
            params={"page": page, "limit": limit},
        )

    async def comment_stats(self, blog_id: UUID | str) -> JSON:
        return await self._request("GET", f"/api/comments/blog/{blog_id}/stats")

    async def add_comment(self, blog_id: UUID | str, content: str) -> JSON:
        return await self._request(
            "POST",
            f"/api/comments/blog/{blog_id}",
            json={"content": content},
        )

    async def update_comment(self, comment_id: UUID | str, content: str) -> JSON:
        return await self._request(
            "PUT",
            f"/api/comments/{comment_id}",
            json={"content": content},
        )

    async def delete_comment(self, comment_id: UUID | str) -> JSON:
        return await self._request("DELETE", f"/api/comments/{comment_id}")

    # --- Upload ---

    async def upload_image(self, path: str | Path) -> JSON:
        """Upload an image file and return ``{"imageUrl", "publicId", ...}``."""
        file_path = Path(path)
        content_type = _guess_image_type(file_path)
        with file_path.open("rb") as fh:
            return await self._request(
                "POST",
                "/api/upload/image",
                files={"image": (file_path.name, fh.read(), content_type)},
            )


IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def _guess_image_type(path: Path) -> str:
    return IMAGE_TYPES.get(path.suffix.lower(), "application/octet-stream")
