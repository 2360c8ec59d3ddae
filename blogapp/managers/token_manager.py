"""Token manager for issuing and verifying JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from blogapp.configs import settings
from blogapp.errors.auth import InvalidTokenError, TokenExpiredError
from blogapp.schemas.auth import TokenData


def create_access_token(
    user_id: UUID,
    email: str,
    expires_delta: timedelta | None = None,
    secret: str | None = None,
) -> str:
    """
    Create a signed access token carrying the user's ID and email.

    Args:
        user_id: User's UUID
        email: User's email
        expires_delta: Optional lifetime; defaults to ``ACCESS_TOKEN_EXPIRE_DAYS``
        secret: Optional signing key; defaults to ``JWT_SECRET``

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))

    to_encode = {
        "userId": str(user_id),
        "email": email,
        "iat": now,
        "exp": expire,
    }

    signing_key = secret or settings.JWT_SECRET.get_secret_value()
    return jwt.encode(to_encode, signing_key, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """
    Verify an access token and extract its claims.

    Args:
        token: JWT token string

    Returns:
        TokenData: Decoded user ID and email

    Raises:
        TokenExpiredError: If the token is past its expiry
        InvalidTokenError: If the signature, format or claims are invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError from e
    except JWTError as e:
        raise InvalidTokenError from e

    user_id: str | None = payload.get("userId")
    email: str | None = payload.get("email")
    if not user_id or not email:
        raise InvalidTokenError

    try:
        return TokenData(user_id=UUID(user_id), email=email)
    except ValueError as e:
        raise InvalidTokenError from e
