# blogapp/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from blogapp.configs import LimiterConfig, file_logger
from blogapp.utils.helpers import host

logger = file_logger(getLogger(__name__))

AUTH_LIMIT = "10/minute"
WRITE_LIMIT = "30/minute"
UPLOAD_LIMIT = "10/minute"
READ_LIMIT = "120/minute"


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Args:
        request: FastAPI request object.

    Returns:
        Client IP based identifier.
    """
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def close_limiter() -> None:
    """
    Clear rate limiter counters.

    Called during application shutdown.
    """
    try:
        limiter.reset()
        logger.info("Rate limiter shutdown complete")
    except OSError:
        logger.exception("Error during rate limiter shutdown")


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    response = _rate_limit_exceeded_handler(request, http_exc)
    logger.warning(f"Rate limit exceeded for ip: {host(request)} at {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
            "retry_after": f"{response.headers.get('retry-after', '60')} seconds",
        },
    )
