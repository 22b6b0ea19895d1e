from quill.routes.auth import router as auth_router
from quill.routes.posts import router as posts_router

__all__ = ["auth_router", "posts_router"]
