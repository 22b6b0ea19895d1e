"""User repository for database operations."""

from quill.errors import DuplicateEntryError, DuplicateIdentityError
from quill.models.user import UserDB
from quill.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Only hashes ever reach this layer; hashing happens in the auth service.
    """

    model = UserDB
    id_field = "uuid"

    async def create(self, username: str, email: str, password_hash: str) -> UserDB:
        """
        Create a new user in the database.

        Args:
            username: Unique username
            email: Unique email address
            password_hash: Argon2id hash of the user's password

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateIdentityError: If username or email already exists
        """
        if await self.username_taken(username) or await self.email_taken(email):
            raise DuplicateIdentityError

        db_user = UserDB(username=username, email=email, password_hash=password_hash)
        try:
            return await self._add_and_refresh(db_user)
        except DuplicateEntryError as e:
            # Lost a race with a concurrent registration
            raise DuplicateIdentityError from e

    async def get_by_email(self, email: str) -> UserDB | None:
        """Get user by email."""
        return await self.get_by_field("email", email)

    async def username_taken(self, username: str) -> bool:
        return await self._check_exists_by_field("username", username)

    async def email_taken(self, email: str) -> bool:
        return await self._check_exists_by_field("email", email)

    async def update_password_hash(self, user: UserDB, password_hash: str) -> UserDB:
        """Replace a user's stored hash, used for transparent upgrades on login."""
        user.password_hash = password_hash
        return await self._add_and_refresh(user)
