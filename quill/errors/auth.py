"""Authentication and authorization errors."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
)

from quill.errors.base import BaseAppError


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail, status_code, headers)


class UnauthenticatedError(UserAuthenticationError):
    """Raised when a bearer token is missing, malformed or fails verification."""

    def __init__(self, detail: str = "Could not validate credentials") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED, {"WWW-Authenticate": "Bearer"})


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when a login fails, whatever the reason."""

    # 400 rather than 401 keeps the established login contract
    def __init__(self) -> None:
        super().__init__("Invalid email or password", HTTP_400_BAD_REQUEST)


class DuplicateIdentityError(UserAuthenticationError):
    """Raised when registering a username or email that is already taken."""

    def __init__(self, detail: str = "Username or email already exists") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class ForbiddenError(BaseAppError):
    """Raised when an authenticated principal does not own the target resource."""

    def __init__(self, detail: str = "You are not allowed to modify this resource") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)
