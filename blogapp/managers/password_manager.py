"""
Password hashing module using Argon2 with passlib's CryptContext.

Hashing runs on a small thread pool so the event loop keeps serving other
requests while Argon2 works.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from blogapp.configs import CONFIG_MAP, settings
from blogapp.decorators.with_retry import with_retry
from blogapp.errors.password_hasher import PasswordHashingError
from blogapp.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    Password hashing and verification with Argon2id.

    pbkdf2_sha256 stays readable but is marked deprecated, so such hashes
    are upgraded on the next successful login.
    """

    def __init__(self, level: str | None = None) -> None:
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=CONFIG_MAP[self.level].memory_cost,
            argon2__time_cost=CONFIG_MAP[self.level].time_cost,
            argon2__parallelism=CONFIG_MAP[self.level].parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The hashed password in Argon2id format

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg) from None

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a hashed password.

        Args:
            password: The plaintext password to verify
            hashed_password: The hashed password to verify against

        Returns:
            bool: True if password matches, False otherwise
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except ValueError:
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def verify_and_update(self, password: str, hashed_password: str) -> tuple[bool, str | None]:
        """
        Verify a password and return a fresh hash if the stored one is outdated.

        Args:
            password: The plaintext password to verify
            hashed_password: The stored hash

        Returns:
            tuple[bool, str | None]: Whether the password matched, and a new
            hash when the stored one uses a deprecated scheme or parameters
        """
        if not self.verify(password, hashed_password):
            return False, None
        if self.pwd_context.needs_update(hashed_password):
            logger.info(f"Password hash needs update on level {self.level}")
            return True, self.hash(password)
        return True, None


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """
    Get or create the default password hasher instance.

    Returns:
        PasswordHasher: The shared password hasher
    """
    global _default_hasher
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """
    Hash a password on the hashing thread pool.

    Args:
        password: The plaintext password to hash

    Returns:
        str: The hashed password
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password on the hashing thread pool.

    Args:
        password: The plaintext password to verify
        hashed_password: The hashed password to verify against

    Returns:
        bool: True if password matches, False otherwise
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify,
        password,
        hashed_password,
    )


@with_retry(base_delay=1, max_delay=10, exec_retry=PasswordHashingError)
async def verify_and_update_password(
    password: str,
    hashed_password: str,
) -> tuple[bool, str | None]:
    """
    Verify a password and get a new hash if the stored one is outdated.

    Args:
        password: The plaintext password to verify
        hashed_password: The stored hash

    Returns:
        tuple[bool, str | None]: Verification result and new hash if needed
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
