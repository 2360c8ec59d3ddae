from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blogapp.configs.settings import DEFAULT_ERROR_MESSAGE
from blogapp.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = "Internal Server Error"

        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")
        else:
            logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Extra attributes set by subclasses travel with the response
        content = {"detail": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in ("status_code", "detail")},
        )

        return ORJSONResponse(content=content, status_code=status_code)

    return handler


def create_unhandled_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create the catch-all handler for exceptions nothing else claimed.

    Args:
        logger: Logger that receives the traceback.

    Returns:
        A callable exception handler answering 500 with a generic message.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            f"Unhandled error for ip: {host(request)} at endpoint {request.url.path}",
            exc_info=exc,
        )
        return ORJSONResponse(
            content={"detail": DEFAULT_ERROR_MESSAGE},
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return handler
