from quill.client.api import ApiError, QuillClient
from quill.client.session import SessionContext

__all__ = ["ApiError", "QuillClient", "SessionContext"]
