from quill.repositories.base import BaseRepository
from quill.repositories.post import PostListResult, PostRepository
from quill.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PostListResult",
    "PostRepository",
    "UserRepository",
]
