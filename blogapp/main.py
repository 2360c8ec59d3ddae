# blogapp/main.py

"""Blog API - multi-user blogging backend with comments and image uploads."""

from logging import getLogger

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.status import HTTP_404_NOT_FOUND
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blogapp.configs import file_logger, settings
from blogapp.errors import (
    DatabaseError,
    PasswordHashingError,
    UploadError,
    UserAuthenticationError,
    auth_exception_handler,
    create_unhandled_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from blogapp.managers import limiter, rate_limit_exceeded_handler
from blogapp.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blogapp.routes import blogs_router, comments_router, upload_router, users_router
from blogapp.schemas import HealthResponse
from blogapp.utils.helpers import today_str

logger = file_logger(getLogger(__name__))

app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-user blogging API with comments and image uploads",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    users_router,
    blogs_router,
    comments_router,
    upload_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (UserAuthenticationError, auth_exception_handler),
    (UploadError, upload_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, create_unhandled_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to the Blog API"},
                },
            },
        },
    },
    operation_id="root_access",
)
@limiter.exempt
async def root(request: Request) -> ORJSONResponse:
    """
    Root endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Welcome message payload.
    """
    return ORJSONResponse(content={"message": "Welcome to the Blog API"})


@app.get(
    "/api/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "OK",
                        "message": "Server is running",
                        "timestamp": "2025-01-01T00:00:00+00:00",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthResponse:
    """
    Liveness probe.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthResponse
        Static status with the current UTC timestamp.
    """
    return HealthResponse(timestamp=today_str())


@app.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
@limiter.exempt
async def api_not_found(request: Request, path: str) -> Response:
    """Answer unknown API paths with a JSON 404."""
    raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Endpoint not found")


if __name__ == "__main__":
    from uvicorn import run

    run(
        "blogapp.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )
