from quill.errors.auth import (
    DuplicateIdentityError,
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UserAuthenticationError,
)
from quill.errors.base import BaseAppError, create_exception_handler
from quill.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    PostNotFoundError,
    RecordNotFoundError,
)
from quill.errors.password_hasher import PasswordHashingError, PasswordRehashError
from quill.errors.validation import ValidationError, format_errors, validation_exception_handler
from quill.monitoring import get_logger

app_exception_handler = create_exception_handler(get_logger("quill.errors"))

__all__ = [
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "DuplicateIdentityError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "PasswordRehashError",
    "PostNotFoundError",
    "RecordNotFoundError",
    "UnauthenticatedError",
    "UserAuthenticationError",
    "ValidationError",
    "app_exception_handler",
    "create_exception_handler",
    "format_errors",
    "validation_exception_handler",
]
