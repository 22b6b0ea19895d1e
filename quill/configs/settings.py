"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Quill blog backend.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings.main import BaseSettings, SettingsConfigDict

from quill import __version__

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 120
MIN_CONTENT_LENGTH = 50
MAX_USERNAME_LENGTH = 50
MAX_URL_LENGTH = 2048
# Post ids are 32-bit integers on every supported backend
MAX_POST_ID = 2**31 - 1

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
MAX_PAGE_NUMBER = 2**31 - 1


@dataclass(frozen=True)
class Argon2Params:
    """Argon2id cost parameters for one security level."""

    memory_cost: int
    time_cost: int
    parallelism: int


# memory_cost is in KiB
CONFIG_MAP: dict[str, Argon2Params] = {
    "low": Argon2Params(memory_cost=8192, time_cost=1, parallelism=1),
    "medium": Argon2Params(memory_cost=65536, time_cost=3, parallelism=4),
    "high": Argon2Params(memory_cost=262144, time_cost=4, parallelism=4),
}


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Quill Blog Backend"
    VERSION: str = __version__
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "testing", "staging", "production"] = "development"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    API_PREFIX: str = "/api"
    PRODUCTION_FRONTEND_URL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/quill.log"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./quill.db"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30
    POOL_RECYCLE: int = 1800

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    JWT_ISSUER: str = "quill-blog"
    JWT_AUDIENCE: str = "quill-blog-users"

    # Password hashing
    PASSWORD_SECURITY_LEVEL: Literal["low", "medium", "high"] = "medium"

    @field_validator("DATABASE_URL")
    @classmethod
    def async_database_url(cls, value: str) -> str:
        """Hosted providers hand out `postgres://` URLs; route them through asyncpg."""
        for prefix in ("postgres://", "postgresql://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value.removeprefix(prefix)
        return value

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
