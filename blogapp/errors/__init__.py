from blogapp.errors.auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    SignupValidationError,
    TokenExpiredError,
    TokenUserNotFoundError,
    UserAlreadyExistsError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from blogapp.errors.base import (
    BaseAppError,
    create_exception_handler,
    create_unhandled_exception_handler,
)
from blogapp.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from blogapp.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from blogapp.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    MissingImageError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from blogapp.errors.validation import body_or_empty, validation_exception_handler

__all__ = [
    "BaseAppError",
    "create_exception_handler",
    "create_unhandled_exception_handler",
    "UserAuthenticationError",
    "MissingTokenError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenUserNotFoundError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "SignupValidationError",
    "auth_exception_handler",
    "DatabaseError",
    "DatabaseConnectionError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "RecordNotFoundError",
    "database_exception_handler",
    "PasswordHashingError",
    "password_hashing_exception_handler",
    "UploadError",
    "MissingImageError",
    "ImageTooLargeError",
    "UnsupportedImageTypeError",
    "InvalidImageError",
    "StorageError",
    "upload_exception_handler",
    "body_or_empty",
    "validation_exception_handler",
]
