"""Database models for the application."""

from quill.models.post import PostDB
from quill.models.user import UserDB

__all__ = ["PostDB", "UserDB"]
