"""Authentication errors."""

from logging import getLogger

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
)

from blogapp.configs import file_logger
from blogapp.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class MissingTokenError(UserAuthenticationError):
    """Raised when the Authorization header is absent or not a Bearer token."""

    def __init__(self) -> None:
        super().__init__("Access denied. No token provided or invalid format.")


class InvalidTokenError(UserAuthenticationError):
    """Raised when a token cannot be decoded or verified."""

    def __init__(self, detail: str = "Invalid token.") -> None:
        super().__init__(detail)


class TokenExpiredError(UserAuthenticationError):
    """Raised when a token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token expired. Please login again.")


class TokenUserNotFoundError(InvalidTokenError):
    """Raised when a valid token names a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("Invalid token. User not found.")


class UserNotFoundError(UserAuthenticationError):
    """Raised when logging in with an unknown email."""

    def __init__(self) -> None:
        super().__init__("User not found", HTTP_404_NOT_FOUND)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when the password does not match."""

    def __init__(self) -> None:
        super().__init__("Incorrect password!", HTTP_400_BAD_REQUEST)


class UserAlreadyExistsError(UserAuthenticationError):
    """Raised on signup with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("User already exists!", HTTP_400_BAD_REQUEST)


class SignupValidationError(UserAuthenticationError):
    """Raised when signup or login input is incomplete or malformed."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


auth_exception_handler = create_exception_handler(logger)
