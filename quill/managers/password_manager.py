"""
Password hashing module using Argon2 with passlib's CryptContext.

This module provides secure password hashing and verification using Argon2id.
Hashing is CPU and memory bound, so the async helpers run it on a thread pool
to keep the event loop responsive.
"""

from asyncio import get_running_loop
from concurrent.futures import ThreadPoolExecutor

from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from quill.configs import CONFIG_MAP, settings
from quill.decorators.with_retry import with_retry
from quill.errors import PasswordHashingError, PasswordRehashError
from quill.monitoring import get_logger

executor = ThreadPoolExecutor(max_workers=4)
logger = get_logger(__name__)


class PasswordHasher:
    """
    A password hashing and verification manager using the Argon2id algorithm.

    This class wraps passlib's CryptContext to provide:
    - Password hashing with Argon2id
    - Password verification
    - Hash deprecation checking and rehashing capabilities
    """

    def __init__(self, level: str | None = None) -> None:
        """
        Initialize the PasswordHasher with Argon2id as the primary scheme.

        Args:
            level: Security level key into ``CONFIG_MAP``; defaults to
                ``PASSWORD_SECURITY_LEVEL``.
        """
        self.level = level or settings.PASSWORD_SECURITY_LEVEL
        params = CONFIG_MAP[self.level]
        self.pwd_context = CryptContext(
            schemes=["argon2", "pbkdf2_sha256"],
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=params.memory_cost,
            argon2__time_cost=params.time_cost,
            argon2__parallelism=params.parallelism,
        )
        logger.info("PasswordHasher initialized", scheme="argon2id", level=self.level)

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
            raise ValueError(msg)

        try:
            return self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Invalid password format")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a hashed password.

        A corrupted or unrecognised hash counts as a mismatch.

        Example:
            >>> hasher = PasswordHasher()
            >>> hashed = hasher.hash("my_password")
            >>> hasher.verify("my_password", hashed)
            True
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def check_needs_rehash(self, hashed_password: str) -> bool:
        """Check whether a hash uses a deprecated scheme or outdated parameters."""
        try:
            return self.pwd_context.needs_update(hashed_password)
        except ValueError:
            logger.exception("Error checking hash currency", level=self.level)
            return False

    def verify_and_update(
        self,
        password: str,
        hashed_password: str | None,
    ) -> tuple[bool, str | None]:
        """
        Verify a password and return a new hash if the current one needs updating.

        When no hash is available a dummy verification runs instead, so an
        unknown account costs about as much time as a wrong password.

        Returns:
            tuple[bool, str | None]: whether the password matched, and the
            replacement hash when rehashing is due
        """
        if hashed_password is None:
            self.pwd_context.dummy_verify()
            return False, None

        if not self.verify(password, hashed_password):
            return False, None

        new_hash = None
        if self.check_needs_rehash(hashed_password):
            try:
                new_hash = self.hash(password)
            except PasswordHashingError as e:
                mssg = "Failed to rehash password"
                raise PasswordRehashError(mssg) from e
            logger.info("Password hash upgraded", level=self.level)

        return True, new_hash


_default_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """
    Get or create the default password hasher instance.

    Returns:
        PasswordHasher: The singleton password hasher instance
    """
    global _default_hasher  # noqa: PLW0603
    if _default_hasher is None:
        _default_hasher = PasswordHasher()
    return _default_hasher


@with_retry(base_delay=0.5, max_delay=5, exec_retry=PasswordHashingError)
async def hash_password(password: str) -> str:
    """Hash a password with the default hasher on the worker pool."""
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().hash,
        password,
    )


@with_retry(base_delay=0.5, max_delay=5, exec_retry=PasswordRehashError)
async def verify_and_update_password(
    password: str,
    hashed_password: str | None,
) -> tuple[bool, str | None]:
    """
    Verify a password and get a new hash if needed.

    Args:
        password: The plaintext password to verify
        hashed_password: The stored hash, or None for an unknown account

    Returns:
        tuple[bool, str | None]: Verification result and new hash if needed
    """
    return await get_running_loop().run_in_executor(
        executor,
        get_password_hasher().verify_and_update,
        password,
        hashed_password,
    )
