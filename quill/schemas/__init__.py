from pydantic import BaseModel

from quill.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, TokenData
from quill.schemas.post import (
    MessageResponse,
    PostCreate,
    PostPage,
    PostResponse,
    PostUpdate,
)


class HealthCheckResponse(BaseModel):
    version: str
    status: str
    timestamp: str
    database: str


__all__ = [
    "AuthResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreate",
    "PostPage",
    "PostResponse",
    "PostUpdate",
    "RegisterRequest",
    "TokenData",
]
