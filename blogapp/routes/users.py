# blogapp/routes/users.py

"""
User Routes.

Account creation, login and the public user directory.

Summary
-------
Endpoints include:
  - List users
  - Sign up
  - Log in

Dependencies
------------
  - `UserRepoDep`: User repository bound to the request transaction.
  - `AuthServiceDep`: Signup and login logic.

Rate Limiting
-------------
Signup and login are limited to 10 requests per minute per IP. Listing uses
the shared read limit.
"""

from logging import getLogger

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from blogapp.configs import file_logger
from blogapp.dependencies import AuthServiceDep, UserRepoDep
from blogapp.errors import body_or_empty
from blogapp.managers import limiter
from blogapp.managers.rate_limiter import AUTH_LIMIT, READ_LIMIT
from blogapp.schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UsersListResponse,
    user_to_response,
)
from blogapp.utils import host

router = APIRouter(prefix="/api/users", tags=["👤 Users"])

logger = file_logger(getLogger(__name__))

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "name": "Jane Smith",
    "email": "jane.smith@example.com",
    "blogs": [],
    "createdAt": "2025-01-01T00:00:00Z",
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=UsersListResponse,
    summary="List users",
    description="List every registered user without password material.",
    responses={
        200: {"content": {"application/json": {"example": {"users": [USER_EXAMPLE]}}}},
        404: {
            "description": "No users",
            "content": {"application/json": {"example": {"detail": "No users found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="users_list",
)
@router.get("/", response_model=UsersListResponse, include_in_schema=False)
@limiter.limit(READ_LIMIT)
async def get_all_users(
    request: Request,
    response: Response,
    repo: UserRepoDep,
) -> UsersListResponse:
    """
    List all users.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    repo : UserRepository
        Repository dependency.

    Returns
    -------
    UsersListResponse
        All users, oldest first.

    Raises
    ------
    HTTPException
        If there are no users.
    """
    users = await repo.get_all()
    if not users:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="No users found")
    return UsersListResponse(users=[user_to_response(user) for user in users])


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    status_code=HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account and receive an access token valid for 7 days.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "user": USER_EXAMPLE,
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "message": "User created successfully",
                    },
                },
            },
        },
        400: {
            "description": "Invalid input or email taken",
            "content": {"application/json": {"example": {"detail": "User already exists!"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="users_signup",
)
@limiter.limit(AUTH_LIMIT)
async def signup(
    request: Request,
    response: Response,
    auth: AuthServiceDep,
    payload: SignupRequest | None = None,
) -> AuthResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    auth : AuthService
        Authentication service.
    payload : SignupRequest or None
        Name, email and password. A missing body counts as empty.

    Returns
    -------
    AuthResponse
        Created user, token and confirmation message.
    """
    payload = body_or_empty(SignupRequest, payload)
    result = await auth.signup(payload.name, payload.email, payload.password)
    logger.info(f"New signup from ip: {host(request)}")
    return AuthResponse(
        user=user_to_response(result.user),
        token=result.token,
        message="User created successfully",
    )


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResponse,
    summary="Log in",
    description="Exchange email and password for an access token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "user": USER_EXAMPLE,
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "message": "Login successful",
                    },
                },
            },
        },
        400: {
            "description": "Missing fields or wrong password",
            "content": {"application/json": {"example": {"detail": "Incorrect password!"}}},
        },
        404: {
            "description": "Unknown email",
            "content": {"application/json": {"example": {"detail": "User not found"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="users_login",
)
@limiter.limit(AUTH_LIMIT)
async def login(
    request: Request,
    response: Response,
    auth: AuthServiceDep,
    payload: LoginRequest | None = None,
) -> AuthResponse:
    """
    Log a user in.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    auth : AuthService
        Authentication service.
    payload : LoginRequest or None
        Email and password. A missing body counts as empty.

    Returns
    -------
    AuthResponse
        Authenticated user, token and confirmation message.
    """
    payload = body_or_empty(LoginRequest, payload)
    result = await auth.login(payload.email, payload.password)
    return AuthResponse(
        user=user_to_response(result.user),
        token=result.token,
        message="Login successful",
    )
