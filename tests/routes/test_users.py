# tests/routes/test_users.py
"""Tests for signup, login and user listing endpoints."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient

from blogapp.errors import DuplicateEntryError
from blogapp.managers.password_manager import PasswordHasher
from blogapp.managers.token_manager import decode_access_token
from blogapp.models import UserDB


@pytest.fixture
def stored_user(make_user) -> UserDB:
    return make_user(password_hash=PasswordHasher(level="low").hash("password123"))


def _create_user(make_user):
    def _create(name: str, email: str, password_hash: str) -> UserDB:
        return make_user(name=name, email=email, password_hash=password_hash)

    return _create


class TestSignup:
    """Tests for POST /api/users/signup."""

    @pytest.mark.asyncio
    async def test_signup_returns_user_and_token(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        make_user,
    ) -> None:
        """Signup normalizes the email, hashes the password and issues a token."""
        user_repo.create.side_effect = _create_user(make_user)

        response = await client.post(
            "/api/users/signup",
            json={"name": "Jane Smith", "email": "  Jane.Smith@Example.com ", "password": "secret1"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["email"] == "jane.smith@example.com"
        assert body["user"]["blogs"] == []
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

        user_repo.get_by_email.assert_awaited_once_with("jane.smith@example.com")
        password_hash = user_repo.create.await_args.kwargs["password_hash"]
        assert password_hash.startswith("$argon2")
        assert str(decode_access_token(body["token"]).user_id) == body["user"]["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "jane@example.com", "password": "secret1"},
            {"name": "Jane", "password": "secret1"},
            {"name": "Jane", "email": "jane@example.com"},
            {"name": "   ", "email": "jane@example.com", "password": "secret1"},
        ],
    )
    async def test_signup_missing_fields(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        payload: dict,
    ) -> None:
        response = await client.post("/api/users/signup", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "All fields are required"
        user_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signup_without_body(self, client: AsyncClient, user_repo: MagicMock) -> None:
        response = await client.post("/api/users/signup")

        assert response.status_code == 400
        assert response.json()["detail"] == "All fields are required"
        user_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signup_rejects_short_password(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users/signup",
            json={"name": "Jane", "email": "jane@example.com", "password": "12345"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at least 6 characters long"

    @pytest.mark.asyncio
    async def test_signup_rejects_invalid_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users/signup",
            json={"name": "Jane", "email": "not-an-email", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a valid email address"

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        sample_user: UserDB,
    ) -> None:
        """An email that is already registered is a 400."""
        user_repo.get_by_email.return_value = sample_user

        response = await client.post(
            "/api/users/signup",
            json={"name": "Jane", "email": sample_user.email, "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists!"
        user_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_signup_race_on_unique_email(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
    ) -> None:
        """A unique violation during insert is reported like a duplicate."""
        user_repo.create.side_effect = DuplicateEntryError()

        response = await client.post(
            "/api/users/signup",
            json={"name": "Jane", "email": "jane@example.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists!"


class TestLogin:
    """Tests for POST /api/users/login."""

    @pytest.mark.asyncio
    async def test_login_success(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        stored_user: UserDB,
    ) -> None:
        user_repo.get_by_email.return_value = stored_user

        response = await client.post(
            "/api/users/login",
            json={"email": "JANE.SMITH@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["id"] == str(stored_user.id)
        assert decode_access_token(body["token"]).email == stored_user.email
        user_repo.get_by_email.assert_awaited_once_with("jane.smith@example.com")
        user_repo.update_password_hash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_login_wrong_password(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        stored_user: UserDB,
    ) -> None:
        user_repo.get_by_email.return_value = stored_user

        response = await client.post(
            "/api/users/login",
            json={"email": stored_user.email, "password": "wrong-password"},
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Incorrect password!"}

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/users/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client: AsyncClient) -> None:
        response = await client.post("/api/users/login", json={"email": "jane@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email and password are required"


class TestListUsers:
    """Tests for GET /api/users."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/users", "/api/users/"])
    async def test_list_users(
        self,
        client: AsyncClient,
        user_repo: MagicMock,
        sample_user: UserDB,
        other_user: UserDB,
        path: str,
    ) -> None:
        user_repo.get_all.return_value = [sample_user, other_user]

        response = await client.get(path)

        assert response.status_code == 200
        users = response.json()["users"]
        assert [user["name"] for user in users] == ["Jane Smith", "Ravi Kumar"]
        assert all("createdAt" in user for user in users)

    @pytest.mark.asyncio
    async def test_list_users_empty(self, client: AsyncClient, user_repo: MagicMock) -> None:
        user_repo.get_all.return_value = []

        response = await client.get("/api/users")

        assert response.status_code == 404
        assert response.json() == {"detail": "No users found"}
