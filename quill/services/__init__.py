from quill.services.auth import AuthService
from quill.services.post import PostService

__all__ = ["AuthService", "PostService"]
