from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
    field_validator,
)

from quill.configs import MAX_USERNAME_LENGTH
from quill.utils.helpers import normalize_email

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        max_length=MAX_USERNAME_LENGTH,
        pattern=r"^[A-Za-z0-9_.-]+$",
    ),
]


class RegisterRequest(BaseModel):
    """Registration payload."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "correct horse battery staple",
            },
        },
    )

    username: Username = Field(..., description="Unique username")
    email: EmailStr = Field(..., description="Unique email address")
    password: SecretStr = Field(..., min_length=1, description="Plaintext password")

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class LoginRequest(BaseModel):
    """Login payload.

    ``email`` is deliberately a plain string: a malformed address must fail
    the same way as an unknown one.
    """

    email: str = Field(..., min_length=1)
    password: SecretStr = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Token issued after a successful registration or login."""

    token: str
    username: str


class TokenData(BaseModel):
    """Verified identity extracted from an access token."""

    username: str
    user_id: UUID
    jti: str
    token_type: str = "access"
