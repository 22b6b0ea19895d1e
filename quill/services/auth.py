"""Authentication service: registration, login and token issuance."""

from quill.errors import InvalidCredentialsError
from quill.managers.password_manager import hash_password, verify_and_update_password
from quill.managers.token_manager import create_access_token
from quill.models import UserDB
from quill.monitoring import get_logger
from quill.repositories import UserRepository
from quill.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from quill.utils.helpers import normalize_email

logger = get_logger(__name__)


class AuthService:
    """Service for handling user registration and authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register(self, payload: RegisterRequest) -> AuthResponse:
        """
        Create an account and log it in.

        Args:
            payload: Validated registration data

        Returns:
            AuthResponse: Access token and username for the new account

        Raises:
            DuplicateIdentityError: If the username or email is taken
        """
        password_hash = await hash_password(payload.password.get_secret_value())
        user = await self.user_repo.create(
            username=payload.username,
            email=str(payload.email),
            password_hash=password_hash,
        )
        logger.info("User registered", username=user.username)
        return self.issue_token(user)

    async def authenticate(self, email: str, password: str) -> UserDB:
        """
        Authenticate a user by email and password.

        Unknown emails and wrong passwords fail identically, including in
        the time they take.

        Args:
            email: Account email
            password: Plaintext password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_email(normalize_email(email))
        verified, new_hash = await verify_and_update_password(
            password,
            user.password_hash if user else None,
        )
        if not user or not verified:
            logger.info("Login rejected")
            raise InvalidCredentialsError

        if new_hash:
            await self.user_repo.update_password_hash(user, new_hash)

        return user

    async def login(self, payload: LoginRequest) -> AuthResponse:
        """Authenticate and issue a fresh token."""
        user = await self.authenticate(payload.email, payload.password.get_secret_value())
        logger.info("User logged in", username=user.username)
        return self.issue_token(user)

    @staticmethod
    def issue_token(user: UserDB) -> AuthResponse:
        """
        Create an access token for a user.

        Args:
            user: User entity

        Returns:
            AuthResponse: Token and username
        """
        token = create_access_token(user_id=user.uuid, username=user.username)
        return AuthResponse(token=token, username=user.username)
