"""Authentication service for email and password accounts."""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from blogapp.configs.settings import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from blogapp.errors.auth import (
    InvalidCredentialsError,
    SignupValidationError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from blogapp.errors.database import DuplicateEntryError
from blogapp.managers.password_manager import hash_password, verify_and_update_password
from blogapp.managers.token_manager import create_access_token
from blogapp.models import UserDB
from blogapp.monitoring import get_logger
from blogapp.repositories import UserRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: UserDB
    token: str


def normalize_email(email: str) -> str:
    """
    Validate an email address and return it trimmed and lowercased.

    Args:
        email: Raw email from the request

    Returns:
        str: Normalized email

    Raises:
        SignupValidationError: If the address is malformed
    """
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise SignupValidationError("Please enter a valid email address") from e
    return email.strip().lower()


class AuthService:
    """Service for handling signup and login."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    def _issue(self, user: UserDB) -> AuthResult:
        return AuthResult(user=user, token=create_access_token(user.id, user.email))

    async def signup(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
    ) -> AuthResult:
        """
        Register a new account.

        Args:
            name: Display name
            email: Email address
            password: Plaintext password

        Returns:
            AuthResult: Created user and an access token

        Raises:
            SignupValidationError: If a field is missing or invalid
            UserAlreadyExistsError: If the email is already registered
        """
        name = (name or "").strip()
        if not name or not email or not password:
            raise SignupValidationError("All fields are required")
        if len(name) > MAX_NAME_LENGTH:
            raise SignupValidationError(f"Name cannot exceed {MAX_NAME_LENGTH} characters")

        email = normalize_email(email)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise SignupValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )

        if await self.user_repo.get_by_email(email):
            raise UserAlreadyExistsError

        password_hash = await hash_password(password)
        try:
            user = await self.user_repo.create(
                name=name,
                email=email,
                password_hash=password_hash,
            )
        except DuplicateEntryError as e:
            raise UserAlreadyExistsError from e

        logger.info("User signed up", user_id=str(user.id))
        return self._issue(user)

    async def login(self, email: str | None, password: str | None) -> AuthResult:
        """
        Authenticate with email and password.

        A stored hash that uses outdated parameters is replaced after a
        successful check.

        Args:
            email: Email address
            password: Plaintext password

        Returns:
            AuthResult: Authenticated user and an access token

        Raises:
            SignupValidationError: If email or password is missing
            UserNotFoundError: If no account uses the email
            InvalidCredentialsError: If the password is wrong
        """
        if not email or not password:
            raise SignupValidationError("Email and password are required")

        user = await self.user_repo.get_by_email(email.strip().lower())
        if not user:
            raise UserNotFoundError

        verified, new_hash = await verify_and_update_password(password, user.password_hash)
        if not verified:
            logger.warning("Login failed", user_id=str(user.id))
            raise InvalidCredentialsError

        if new_hash:
            user = await self.user_repo.update_password_hash(user, new_hash)

        logger.info("User logged in", user_id=str(user.id))
        return self._issue(user)
