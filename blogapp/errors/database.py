"""Persistence failures raised by the repositories and startup code."""

from logging import getLogger

from starlette.status import HTTP_404_NOT_FOUND, HTTP_409_CONFLICT, HTTP_500_INTERNAL_SERVER_ERROR

from blogapp.configs import file_logger
from blogapp.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class DatabaseError(BaseAppError):
    """Root of the persistence errors; a 500 unless a subclass says otherwise."""

    def __init__(
        self,
        detail: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class DatabaseConnectionError(DatabaseError):
    """A statement could not be executed against PostgreSQL."""

    def __init__(self, detail: str = "Failed to connect to the database") -> None:
        super().__init__(detail)


class DatabaseInitializationError(DatabaseError):
    """Tables could not be created at startup."""

    def __init__(self, detail: str = "Failed to initialize database") -> None:
        super().__init__(detail)


class DuplicateEntryError(DatabaseError):
    """A unique constraint rejected the row, e.g. a second account for one email."""

    def __init__(self, detail: str = "A record with this value already exists") -> None:
        super().__init__(detail, HTTP_409_CONFLICT)


class RecordNotFoundError(DatabaseError):
    """A write targeted a row that no longer exists, e.g. a deleted blog owner."""

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


database_exception_handler = create_exception_handler(logger)
