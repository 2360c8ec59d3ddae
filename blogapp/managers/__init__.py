from blogapp.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_and_update_password,
    verify_password,
)
from blogapp.managers.rate_limiter import close_limiter, limiter, rate_limit_exceeded_handler
from blogapp.managers.token_manager import create_access_token, decode_access_token

__all__ = [
    "PasswordHasher",
    "get_password_hasher",
    "hash_password",
    "verify_password",
    "verify_and_update_password",
    "close_limiter",
    "limiter",
    "rate_limit_exceeded_handler",
    "create_access_token",
    "decode_access_token",
]
