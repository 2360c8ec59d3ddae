# tests/managers/test_password_manager.py
"""Tests for Argon2 password hashing."""

import pytest
from passlib.hash import pbkdf2_sha256

from blogapp.errors import PasswordHashingError
from blogapp.managers.password_manager import (
    PasswordHasher,
    hash_password,
    verify_and_update_password,
    verify_password,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(level="low")


class TestPasswordHasher:
    def test_hash_and_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password123")

        assert hashed.startswith("$argon2id$")
        assert hashed != "password123"
        assert hasher.verify("password123", hashed)
        assert not hasher.verify("password124", hashed)

    def test_empty_password(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    @pytest.mark.parametrize("stored", ["", "   ", "not-a-hash"])
    def test_verify_bad_hash(self, hasher: PasswordHasher, stored: str) -> None:
        assert hasher.verify("password123", stored) is False

    def test_backend_failure(self, hasher: PasswordHasher, mocker) -> None:
        mocker.patch.object(hasher.pwd_context, "hash", side_effect=ValueError("boom"))

        with pytest.raises(PasswordHashingError):
            hasher.hash("password123")

    def test_current_hash_is_not_upgraded(self, hasher: PasswordHasher) -> None:
        verified, new_hash = hasher.verify_and_update("password123", hasher.hash("password123"))

        assert verified is True
        assert new_hash is None

    def test_legacy_hash_is_upgraded(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")

        verified, new_hash = hasher.verify_and_update("password123", legacy)

        assert verified is True
        assert new_hash is not None
        assert new_hash.startswith("$argon2id$")

    def test_wrong_password_is_not_upgraded(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("password123")

        assert hasher.verify_and_update("nope", legacy) == (False, None)


class TestAsyncHelpers:
    @pytest.mark.asyncio
    async def test_hash_and_verify_off_loop(self) -> None:
        hashed = await hash_password("password123")

        assert await verify_password("password123", hashed)
        assert not await verify_password("wrong-password", hashed)
        assert await verify_and_update_password("password123", hashed) == (True, None)
