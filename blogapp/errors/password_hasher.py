from logging import getLogger

from blogapp.configs import file_logger
from blogapp.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class PasswordHashingError(BaseAppError):
    """Base error for password hasher module."""

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)


password_hashing_exception_handler = create_exception_handler(logger)
